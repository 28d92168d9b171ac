"""Frame timers measured in milliseconds or whole seconds."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable


class Timer:
    """Millisecond timer driven by a clock that returns seconds."""

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock if clock is not None else time.perf_counter
        self.last_time = 0.0
        self.start_time = 0.0
        self.stop_time = 0.0
        self.last_delta = 0.0

    def time(self) -> float:
        """Current clock reading in milliseconds."""
        self.last_time = self._clock() * 1000
        return self.last_time

    def start(self) -> None:
        self.start_time = self._clock() * 1000

    def stop(self) -> None:
        self.stop_time = self._clock() * 1000

    def delta(self) -> float:
        """Milliseconds between the last start and stop."""
        self.last_delta = self.stop_time - self.start_time
        return self.last_delta


@dataclass
class HighResTimer:
    """Timer over a nanosecond clock that reports whole seconds."""

    clock: Callable[[], int] = time.monotonic_ns
    _begin: int = field(default=0, init=False)
    _end: int = field(default=0, init=False)

    def start(self) -> None:
        self._begin = self.clock()

    def stop(self) -> None:
        self._end = self.clock()

    def delta(self) -> int:
        """Whole seconds between start and stop, truncated."""
        return (self._end - self._begin) // 1_000_000_000