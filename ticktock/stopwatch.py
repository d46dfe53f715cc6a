"""Start/stop elapsed-time accumulator shared by all timer modes."""

import time
from typing import Callable, Optional

Clock = Callable[[], float]


class Stopwatch:
    """Accumulates running time on a monotonic clock.

    Elapsed time is derived on demand from timestamps, so nothing has to
    tick for it to stay correct:

        elapsed = accumulated + (now - running_since)   while running
        elapsed = accumulated                           while stopped

    A new stopwatch starts running immediately.
    """

    def __init__(
        self,
        accumulated: float = 0.0,
        running: bool = True,
        clock: Clock = time.monotonic,
    ):
        self._clock = clock
        self._accumulated = accumulated
        self._running_since: Optional[float] = clock() if running else None

    @classmethod
    def resumed_at(cls, elapsed: float, clock: Clock = time.monotonic) -> "Stopwatch":
        """Running stopwatch that continues from an already elapsed value."""
        return cls(accumulated=elapsed, running=True, clock=clock)

    def elapsed(self) -> float:
        """Seconds counted so far, including the current run."""
        if self._running_since is None:
            return self._accumulated
        return self._accumulated + max(0.0, self._clock() - self._running_since)

    def is_running(self) -> bool:
        """True unless stopped."""
        return self._running_since is not None

    def start(self) -> None:
        """Start counting; no-op if already running."""
        if self._running_since is None:
            self._running_since = self._clock()

    def stop(self) -> None:
        """Stop counting and keep the elapsed time; no-op if stopped."""
        if self._running_since is not None:
            self._accumulated = self.elapsed()
            self._running_since = None

    def toggle(self) -> None:
        """Stop if running, start if stopped."""
        if self.is_running():
            self.stop()
        else:
            self.start()

    def reset(self) -> None:
        """Restart from zero, running."""
        self._accumulated = 0.0
        self._running_since = self._clock()

    def __repr__(self) -> str:
        state = "running" if self.is_running() else "stopped"
        return f"Stopwatch({self.elapsed():.3f}s, {state})"
