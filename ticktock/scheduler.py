"""Pure logic for the Pomodoro session state machine."""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Tuple

ROUNDS_PER_LONG_BREAK = 4


class Mode(Enum):
    """Pomodoro phase types."""
    WORK = auto()
    BREAK = auto()
    LONG_BREAK = auto()


class Accumulator(Enum):
    """Which running total a phase's time is folded into."""
    WORK = auto()
    BREAK = auto()


def accumulator_for(mode: Mode) -> Accumulator:
    """Work time feeds the work total, any break feeds the break total."""
    if mode == Mode.WORK:
        return Accumulator.WORK
    return Accumulator.BREAK


@dataclass(frozen=True)
class Session:
    """Phase, round and cumulative totals of a Pomodoro session.

    ``round`` is the 1-based index of the current or upcoming work phase.
    It only grows when a break ends, and never resets.

    Sessions are values: every transition returns a new ``Session``.
    """
    mode: Mode = Mode.WORK
    round: int = 1
    work_total: float = 0.0
    break_total: float = 0.0

    @property
    def elapsed_totals(self) -> Tuple[float, float]:
        """(work_total, break_total) in seconds."""
        return (self.work_total, self.break_total)

    def fold(self, duration: float) -> "Session":
        """Add ``duration`` to the current mode's total without changing phase."""
        if accumulator_for(self.mode) == Accumulator.WORK:
            return replace(self, work_total=self.work_total + duration)
        return replace(self, break_total=self.break_total + duration)

    def advance(self, duration: float) -> "Session":
        """Leave the current phase after spending ``duration`` seconds in it.

        Work is followed by a long break every fourth round and by a short
        break otherwise. Any break is followed by work in the next round.
        """
        folded = self.fold(duration)
        if self.mode == Mode.WORK:
            if self.round % ROUNDS_PER_LONG_BREAK == 0:
                return replace(folded, mode=Mode.LONG_BREAK)
            return replace(folded, mode=Mode.BREAK)
        return replace(folded, mode=Mode.WORK, round=self.round + 1)

    def peek_next(self) -> "Session":
        """Preview the next phase without folding any time."""
        return self.advance(0.0)
