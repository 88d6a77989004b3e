"""Bubble sort run in a background thread while the caller reports progress."""

from __future__ import annotations

import argparse
import concurrent.futures
import datetime
import random
import sys
from typing import Any, Callable, MutableSequence, Optional, Sequence


def bubble_sort(values: MutableSequence[Any]) -> None:
    """Sort ``values`` in place in ascending order by bubble sort."""
    size = len(values)
    for i in range(size):
        for j in range(size - i - 1):
            if values[j] > values[j + 1]:
                values[j], values[j + 1] = values[j + 1], values[j]


def sort_in_background(
    values: MutableSequence[Any],
    interval: float = 0.1,
    on_tick: Optional[Callable[[], Any]] = None,
) -> int:
    """Bubble-sort ``values`` in place in another thread, waiting for it to finish.

    ``on_tick`` is called each time ``interval`` seconds pass without the
    sort finishing.  Returns the number of such ticks; an error raised by the
    sort is raised here.
    """
    ticks = 0
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(bubble_sort, values)
        while True:
            try:
                future.result(timeout=interval)
            except concurrent.futures.TimeoutError:
                ticks += 1
                if on_tick is not None:
                    on_tick()
            else:
                return ticks


def _is_sorted(values: Sequence[Any]) -> bool:
    return all(a <= b for a, b in zip(values, values[1:]))


def _head(values: Sequence[Any], upto: int = 10) -> str:
    return "".join(f"{value}, " for value in values[:upto])


def _timestamp() -> str:
    return datetime.datetime.now().strftime("%X")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Sort random numbers in the background, printing a dot while waiting."""
    parser = argparse.ArgumentParser(
        prog="halkit-sorting", description="Bubble-sort random numbers in the background."
    )
    parser.add_argument("--size", type=int, default=50000, help="numbers to sort (default: 50000)")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--interval", type=float, default=0.1, help="tick interval in seconds")
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    values = [rng.randrange(80000) for _ in range(args.size)]
    out = sys.stdout

    def report(stage: str) -> None:
        out.write(f"Array of ({len(values)}) {stage}: {_head(values)}\n")
        out.write(f"Array is {'' if _is_sorted(values) else 'not '}sorted\n")

    report("before explicitly sorted")
    out.write("\n")
    out.write(f"Current time before run sorting is {_timestamp()}\n")
    out.write("sorting, please wait ")
    out.flush()

    def tick() -> None:
        out.write(".")
        out.flush()

    sort_in_background(values, args.interval, tick)

    out.write("\n")
    out.write(f"Current time after done sorting is {_timestamp()}\n")
    out.write("\n")
    report("after explicitly sorted")
    out.write("\n")
    out.flush()
    return 0