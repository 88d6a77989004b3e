import random

import pytest

from halkit.sorting import bubble_sort, main, sort_in_background


@pytest.mark.parametrize("size", [0, 1, 2, 7, 100])
def test_bubble_sort_matches_sorted(size):
    rng = random.Random(size)
    values = [rng.randrange(80000) for _ in range(size)]
    expected = sorted(values)
    assert bubble_sort(values) is None
    assert values == expected


def test_bubble_sort_with_duplicates_and_negatives():
    values = [3, -1, 3, 0, -1, 2]
    bubble_sort(values)
    assert values == [-1, -1, 0, 2, 3, 3]


def test_bubble_sort_strings():
    values = ["pear", "apple", "fig"]
    bubble_sort(values)
    assert values == ["apple", "fig", "pear"]


def test_sort_in_background_sorts_and_counts_ticks():
    rng = random.Random(42)
    values = [rng.randrange(80000) for _ in range(600)]
    expected = sorted(values)
    calls = []
    ticks = sort_in_background(values, 0.001, lambda: calls.append(1))
    assert values == expected
    assert ticks == len(calls)
    assert ticks >= 0


def test_sort_in_background_without_callback():
    values = [5, 4, 3, 2, 1]
    ticks = sort_in_background(values, 0.5)
    assert values == [1, 2, 3, 4, 5]
    assert ticks == 0


def test_sort_in_background_propagates_errors():
    values = [1, None, 3]
    with pytest.raises(TypeError):
        sort_in_background(values, 0.01)


def test_main_reports_sorted_array(capsys):
    assert main(["--size", "30", "--seed", "1", "--interval", "0.01"]) == 0
    out = capsys.readouterr().out
    assert "Array of (30) before explicitly sorted: " in out
    assert "Array of (30) after explicitly sorted: " in out
    assert "sorting, please wait " in out
    assert out.rstrip().endswith("Array is sorted")
    after = out.split("after explicitly sorted: ")[1].splitlines()[0]
    shown = [int(n) for n in after.split(", ") if n]
    assert len(shown) == 10
    assert shown == sorted(shown)