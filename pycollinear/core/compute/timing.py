"""
Wall-clock timing for Result envelopes.

A sequential ANOVA runs k + 1 least squares fits and a VIF runs one per
predictor, so sections are re-entered many times. The Timer sums their
durations and counts the entries.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Accumulating section timer.

    Usage:
        timer = Timer()
        timer.start()
        for i in range(1, k + 1):
            with timer.section('fit_nested'):
                rss = fit(dataset, spec.prefix(i)).rss
        timer.stop()

        timer.result()   # {'total_seconds': 0.004, 'fit_nested': 0.003}
        timer.calls()    # {'fit_nested': k}
    """

    def __init__(self):
        self._elapsed: dict[str, float] = {}
        self._entries: dict[str, int] = {}
        self._t0: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._t0 = time.perf_counter()

    def stop(self) -> None:
        if self._t0 is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._t0

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time one pass through a named stage; repeated passes add up."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self._elapsed[name] = self._elapsed.get(name, 0.0) + time.perf_counter() - t0
            self._entries[name] = self._entries.get(name, 0) + 1

    def calls(self) -> dict[str, int]:
        """How many times each section was entered."""
        return dict(self._entries)

    def result(self) -> dict[str, float]:
        """
        Seconds spent overall ('total_seconds') and in each section.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._elapsed}


@contextmanager
def timed() -> Iterator[Timer]:
    """
    Time a block without managing start/stop by hand.

    Usage:
        with timed() as timer:
            table = sequential_anova(ds, ['X1', 'X2'])
        timer.result()['total_seconds']
    """
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
