# halkit

Small threading building blocks for Python, using only the standard library.

## Install

```
pip install halkit
pip install "halkit[test]"   # with pytest
```

## What is inside

- `halkit.proc`: `Proc(name, fn=None)` runs a task in its own named thread.
  `exec(fn=None)` starts it, `wait()` joins it and re-raises any error the
  task raised, and `stop_exec()` asks it to stop and then waits for it. A
  `Proc` can be run again after its task ends. Stopping is cooperative. The
  stop takes effect when the task's thread reaches `checkpoint()`, either
  directly or inside a blocking call from this package. `Cancelled` is then
  raised in that thread. `state` reports a `ProcState`. A `Proc` used in a
  `with` block is stopped on exit if it is still running.
- `halkit.buffer`: `Buffer` is an unbounded FIFO queue. `push()` never
  blocks, `pop()` blocks while the queue is empty, and `pop_nowait()` returns
  `None` when it is empty. `wait_for_empty()` blocks until the queue drains
  and returns how many items have passed through it. `LimitBuffer(capacity=1)`
  also blocks `push()` while it is full, and `len()` gives its current size.
- `halkit.timer`: `Timer(interval, fn)` starts at once and calls `fn` every
  `interval`, which is given in seconds or as a `timedelta`. `start(interval,
  fn=None)` restarts it, `stop()` stops it, and `running` and `interval`
  report its state. It also works as a context manager.
- `halkit.workers`: `WorkerExecution(num_workers=1)` runs `WorkerTask(name,
  fn)` objects that are queued with `add_task()`, in the order they were
  added. `close()`, or leaving a `with` block, stops the workers once their
  current tasks end. Tasks still queued are dropped.
- `halkit.rwlock`: `ReadWriteLock(stagnant_avoidance=True)` lets many
  readers or one writer hold it, through `acquire_read`/`release_read`,
  `acquire_write`/`release_write`, or the `reading()` and `writing()` context
  managers. When avoidance is on, a waiting writer keeps new readers out.
  `run_contention(duration, num_readers, stagnant_avoidance)` pits one writer
  against many readers and returns a `ContentionResult` with the counts.
- `halkit.ringbuffer`: `RingBuffer(size=50, stepup_size=20, max_size=500)`
  is a ring of ints shared by several writers and one reader. Writers and
  readers wait until `start()` is called. When the ring is full, a writer
  grows it by `stepup_size` slots, up to `max_size`, and after that it waits
  for a free slot. `write(value, timeout=None)` and `read(timeout=None)` raise
  `TimeoutError` when the wait runs out.
- `halkit.university`: `University`, `Student` and `Course` form a small
  object graph. Students refer to their courses only weakly. A missing
  student is handled in three ways: `del_student` does nothing,
  `remove_student` raises `StudentNotFoundError`, and `pop_student` returns
  `None`.
- `halkit.idgen`: `IDGenerator(start=0, next_fn=...)` returns the next id on
  each call and then advances it. The step function defaults to adding one,
  and a single call can pass its own.
- `halkit.sorting`: `bubble_sort(values)` sorts a list in place.
  `sort_in_background(values, interval=0.1, on_tick=None)` runs that sort in
  another thread, calls `on_tick` every `interval` seconds while it waits,
  and returns the number of ticks.

## Example

```python
from halkit.buffer import Buffer
from halkit.proc import Proc

buf = Buffer()
received = []

consumer = Proc("consumer", lambda: received.extend(buf.pop() for _ in range(3)))
consumer.exec()
for n in range(3):
    buf.push(n)
consumer.wait()
print(received)             # [0, 1, 2]
print(buf.wait_for_empty())  # 3
```

## Commands

```
halkit-rwlock [--duration S] [--readers N] [--no-stagnant-avoidance]
halkit-ringbuffer [--writers N] [--writer-seconds S] [--reader-seconds S]
                  [--write-interval S] [--read-interval S] [--idle-timeout S]
                  [--size N] [--stepup N] [--max-size N]
halkit-sorting [--size N] [--seed N] [--interval S]
```

`halkit-rwlock` prints how often the writer and each reader got the lock.
`halkit-ringbuffer` prints each writer's write count and the reader's read
count. `halkit-sorting` prints a dot for each tick until the sort is done.

## What it does not do

halkit provides no pipe with its own processing thread, no publish/subscribe,
no merging of several input streams, no singleton helper, and no
signal-driven main loop or daemon command. The package offers only the
modules listed above.