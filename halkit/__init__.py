"""Thread-based building blocks: procs, buffers, timers, worker pools, locks and ring buffers."""

__version__ = "0.1.0"
__all__ = [
    "buffer",
    "idgen",
    "proc",
    "ringbuffer",
    "rwlock",
    "sorting",
    "timer",
    "university",
    "workers",
]