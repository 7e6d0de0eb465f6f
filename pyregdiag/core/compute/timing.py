"""
Wall-clock timing for backend runs.

Timings are reported through Result.timing and never stored in a
parameter payload, so refitting the same data gives equal payloads.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Overall stopwatch plus named sections.

        timer = Timer()
        timer.start()
        with timer.section('qr'):
            ...
        timer.stop()
        timer.result()   # {'total_seconds': ..., 'qr': ...}

    A section entered more than once accumulates its elapsed time.
    """

    def __init__(self):
        self._sections: dict[str, float] = {}
        self._started: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._started = time.perf_counter()
        self._total = None

    def stop(self) -> None:
        if self._started is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._started

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        began = time.perf_counter()
        try:
            yield
        finally:
            self._sections[name] = (
                self._sections.get(name, 0.0) + time.perf_counter() - began
            )

    def result(self) -> dict[str, float]:
        """
        'total_seconds' followed by each section's seconds.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._sections}


@contextmanager
def timed() -> Iterator[Timer]:
    """Run the enclosed block under a started Timer, stopping it on exit."""
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
