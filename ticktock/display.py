"""Presentation data derived from timer state.

Nothing here draws anything. These functions turn elapsed time, targets and
phases into the numbers and strings a renderer needs, and the result of a
redraw is described by a :class:`Frame`.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .notifications import Alerter
from .scheduler import Mode


def progress_ratio(elapsed: float, target: float) -> float:
    """Fraction of ``target`` covered by ``elapsed``, clamped to [0, 1].

    A zero target counts as already complete.
    """
    if target <= 0:
        return 1.0
    return min(max(elapsed / target, 0.0), 1.0)


def time_remaining(elapsed: float, target: float) -> float:
    return max(target - elapsed, 0.0)


def overrun(elapsed: float, target: float) -> float:
    return max(elapsed - target, 0.0)


def should_alert(elapsed: float, target: float, alerter: Alerter) -> bool:
    """True when the target has been reached and the alert has not fired yet."""
    return elapsed >= target and alerter.armed


def format_duration(seconds: float) -> str:
    """Format seconds as MM:SS, or H:MM:SS from one hour up."""
    total = int(max(seconds, 0.0))
    hours, rest = divmod(total, 3600)
    mins, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{mins:02d}:{secs:02d}"
    return f"{mins:02d}:{secs:02d}"


PHASE_NAMES = {
    Mode.WORK: "Work",
    Mode.BREAK: "Break",
    Mode.LONG_BREAK: "Long Break",
}


def phase_title(mode: Mode) -> str:
    return f"Pomodoro ({PHASE_NAMES[mode]})"


def end_title(next_mode: Mode) -> str:
    """Heading shown once a phase has run past its target."""
    if next_mode == Mode.WORK:
        return "Break has ended! Start work?"
    elif next_mode == Mode.BREAK:
        return "Work has ended! Start break?"
    else:
        return "Work has ended! Start a long break"


def alert_message(next_mode: Mode) -> Tuple[str, str]:
    """(title, message) of the notification announcing ``next_mode``."""
    if next_mode == Mode.WORK:
        return ("Your break ended!", "Time for some work")
    elif next_mode == Mode.BREAK:
        return ("Pomodoro ended!", "Time for a short break")
    else:
        return ("Pomodoro 4 sessions complete!", "Time for a long break")


def skip_prompt(next_mode: Mode) -> str:
    return f"skip to {PHASE_NAMES[next_mode].lower()}?"


@dataclass(frozen=True)
class Frame:
    """Everything a renderer needs for one redraw.

    ``tone`` is a style hint: "work", "break", "ended", "skip" or "idle".
    ``progress`` is None for modes without a target.
    """
    title: str
    clock: str
    running: bool
    tone: str
    controls: str
    progress: Optional[float] = None
    status: Tuple[str, ...] = field(default_factory=tuple)
