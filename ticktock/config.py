"""Durations that parameterize the Pomodoro cycle."""

import math
import re
from dataclasses import dataclass, replace
from typing import Callable, Dict, Optional

from .errors import DurationError
from .scheduler import Mode

_HMS_RE = re.compile(r"^(?:(\d+)h)?(?:(\d+)m)?(?:(\d+(?:\.\d+)?)s)?$")
_CLOCK_RE = re.compile(r"^(?:(\d+):)?(\d+):(\d{2})$")


def _finite(seconds: float, value: str) -> float:
    if not math.isfinite(seconds):
        raise DurationError(f"duration out of range {value!r}")
    return seconds


def parse_duration(value: str) -> float:
    """Parse a human duration into seconds.

    Accepts ``XhYmZs`` forms (``25m``, ``1h30m``, ``90s``), clock forms
    (``MM:SS`` or ``H:MM:SS``), or a bare number meaning minutes.

    Raises:
        DurationError: If the value matches none of the forms.
    """
    text = value.strip().lower()
    if not text:
        raise DurationError("empty duration")

    match = _HMS_RE.match(text)
    if match and any(match.groups()):
        hours = float(match.group(1) or 0)
        mins = float(match.group(2) or 0)
        secs = float(match.group(3) or 0)
        return _finite(hours * 3600 + mins * 60 + secs, value)

    match = _CLOCK_RE.match(text)
    if match:
        hours = float(match.group(1) or 0)
        mins = float(match.group(2))
        secs = int(match.group(3))
        if secs >= 60:
            raise DurationError(f"invalid seconds in {value!r}")
        if match.group(1) is not None and mins >= 60:
            raise DurationError(f"invalid minutes in {value!r}")
        return _finite(hours * 3600 + mins * 60 + secs, value)

    try:
        minutes = float(text)
    except ValueError:
        raise DurationError(f"invalid duration {value!r}") from None
    if minutes < 0:
        raise DurationError(f"negative duration {value!r}")
    return _finite(minutes * 60, value)


@dataclass(frozen=True)
class PomodoroConfig:
    """Work, break and long-break durations in seconds."""
    work: float = 25 * 60
    short_break: float = 5 * 60
    long_break: float = 10 * 60

    @classmethod
    def short(cls) -> "PomodoroConfig":
        return cls(work=25 * 60, short_break=5 * 60, long_break=10 * 60)

    @classmethod
    def long(cls) -> "PomodoroConfig":
        return cls(work=55 * 60, short_break=10 * 60, long_break=20 * 60)

    @classmethod
    def preset(cls, name: str) -> "PomodoroConfig":
        """Look up a named preset ("short" or "long")."""
        try:
            return PRESETS[name]()
        except KeyError:
            raise DurationError(f"unknown preset {name!r}") from None

    def with_overrides(
        self,
        work: Optional[float] = None,
        short_break: Optional[float] = None,
        long_break: Optional[float] = None,
    ) -> "PomodoroConfig":
        """Return a copy with any given durations replaced."""
        changes = {
            name: secs
            for name, secs in (
                ("work", work),
                ("short_break", short_break),
                ("long_break", long_break),
            )
            if secs is not None
        }
        return replace(self, **changes)

    def duration_for(self, mode: Mode) -> float:
        """Target duration of a phase."""
        if mode == Mode.WORK:
            return self.work
        elif mode == Mode.BREAK:
            return self.short_break
        else:
            return self.long_break


PRESETS: Dict[str, Callable[[], PomodoroConfig]] = {
    "short": PomodoroConfig.short,
    "long": PomodoroConfig.long,
}
