"""Command dispatch for the stopwatch, timer and Pomodoro modes.

Controllers own all mutable timer state. They receive already decoded
:class:`~ticktock.commands.Command` values (or ``None`` for a plain redraw
tick), update their state synchronously, and describe the result through
``view()``. Quitting returns a human readable summary.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .commands import Command
from .config import PomodoroConfig
from .display import (
    Frame,
    alert_message,
    end_title,
    format_duration,
    overrun,
    phase_title,
    progress_ratio,
    should_alert,
    skip_prompt,
    time_remaining,
)
from .notifications import Alerter
from .scheduler import Mode, Session
from .stopwatch import Clock, Stopwatch

logger = logging.getLogger(__name__)

STOPWATCH_CONTROLS = "[Q]: quit, [Space]: pause/resume, [R]: reset"
TIMER_CONTROLS = "[Q]: quit, [Space]: pause/resume, [R]: reset"
POMODORO_CONTROLS = "[Q]: quit, [Shift S]: skip, [Space]: pause/resume, [R]: reset"
ENDING_CONTROLS = "[Q]: quit, [Shift S]: skip, [Space]: pause/resume, [Enter]: next, [R]: reset"
SKIP_CONTROLS = "[Enter/Y]: yes, [N/Esc]: no, [Q]: quit"


class StopwatchController:
    """Plain stopwatch: counts up until quit."""

    def __init__(self, clock: Clock = time.monotonic):
        self.stopwatch = Stopwatch(clock=clock)
        self.finished = False

    def update(self, command: Optional[Command]) -> Optional[str]:
        """Apply one command. Returns the summary once quit."""
        if command is None or self.finished:
            return None
        if command == Command.QUIT:
            return self.quit()
        if command == Command.PAUSE:
            self.stopwatch.stop()
        elif command == Command.RESUME:
            self.stopwatch.start()
        elif command in (Command.TOGGLE, Command.ENTER):
            self.stopwatch.toggle()
        elif command == Command.RESET:
            self.stopwatch.reset()
        return None

    def quit(self) -> str:
        """Stop for good and report the elapsed time."""
        self.finished = True
        self.stopwatch.stop()
        elapsed = self.stopwatch.elapsed()
        logger.info("Stopwatch stopped at %.1fs", elapsed)
        return f"Stopwatch stopped at {format_duration(elapsed)}."

    def view(self) -> Frame:
        """Frame showing the elapsed time."""
        return Frame(
            title="Stopwatch",
            clock=format_duration(self.stopwatch.elapsed()),
            running=self.stopwatch.is_running(),
            tone="idle",
            controls=STOPWATCH_CONTROLS,
        )


class TimerController(StopwatchController):
    """Countdown towards a fixed target, then count the overrun."""

    def __init__(
        self,
        target: float,
        alerter: Optional[Alerter] = None,
        clock: Clock = time.monotonic,
    ):
        super().__init__(clock=clock)
        self.target = target
        self.alerter = alerter if alerter is not None else Alerter()

    def update(self, command: Optional[Command]) -> Optional[str]:
        """Like the stopwatch; RESET also re-arms the alert."""
        if command == Command.RESET and not self.finished:
            self.alerter.reset()
        return super().update(command)

    def quit(self) -> str:
        """Stop for good and report elapsed time against the target."""
        self.finished = True
        self.stopwatch.stop()
        elapsed = self.stopwatch.elapsed()
        logger.info("Timer stopped at %.1fs of %.1fs", elapsed, self.target)
        return (
            f"Timer stopped after {format_duration(elapsed)} "
            f"of {format_duration(self.target)}."
        )

    def poll_alert(self) -> bool:
        """Fire the end-of-timer alert once the target is reached."""
        elapsed = self.stopwatch.elapsed()
        if not should_alert(elapsed, self.target, self.alerter):
            return False
        return self.alerter.alert_once(
            "The timer has ended!",
            f"Your Timer of {format_duration(self.target)} has ended",
        )

    def view(self) -> Frame:
        """Frame showing time left, or the overrun once ended."""
        self.poll_alert()
        elapsed = self.stopwatch.elapsed()
        running = self.stopwatch.is_running()
        if elapsed < self.target:
            return Frame(
                title="Timer",
                clock=format_duration(time_remaining(elapsed, self.target)),
                running=running,
                tone="work",
                controls=TIMER_CONTROLS,
                progress=progress_ratio(elapsed, self.target),
            )
        return Frame(
            title="Timer has ended",
            clock="+" + format_duration(overrun(elapsed, self.target)),
            running=running,
            tone="ended",
            controls=TIMER_CONTROLS,
            progress=1.0,
        )


@dataclass
class Running:
    """Normal operation: the phase stopwatch is live."""
    stopwatch: Stopwatch


@dataclass(frozen=True)
class PendingSkip:
    """Waiting for the user to confirm a skip; time shown is frozen."""
    frozen: float


UIMode = Union[Running, PendingSkip]


@dataclass(frozen=True)
class PomodoroView:
    """Display quantities derived from the controller state."""
    mode: Mode
    round: int
    elapsed: float
    target: float
    remaining: float
    overrun: float
    progress: float
    running: bool
    pending_skip: bool
    skip_target: Optional[Mode]
    ended: bool
    next_mode: Mode
    end_title: str
    alert: Tuple[str, str]


class PomodoroController:
    """Drives a Pomodoro session from user commands.

    State is the immutable :class:`Session`, the current UI sub-mode
    (:class:`Running` or :class:`PendingSkip`) and the :class:`Alerter`
    that announces the end of each phase once.
    """

    def __init__(
        self,
        config: Optional[PomodoroConfig] = None,
        alerter: Optional[Alerter] = None,
        clock: Clock = time.monotonic,
    ):
        self.config = config if config is not None else PomodoroConfig.short()
        self.alerter = alerter if alerter is not None else Alerter()
        self._clock = clock
        self.session = Session()
        self.ui_mode: UIMode = Running(Stopwatch(clock=clock))
        self.finished = False
        self.summary: Optional[str] = None

    @property
    def target(self) -> float:
        """Duration of the current phase."""
        return self.config.duration_for(self.session.mode)

    def elapsed(self) -> float:
        """Elapsed time of the current phase, frozen while a skip is pending."""
        if isinstance(self.ui_mode, PendingSkip):
            return self.ui_mode.frozen
        return self.ui_mode.stopwatch.elapsed()

    def update(self, command: Optional[Command]) -> Optional[str]:
        """Apply one command. Returns the summary once the session quits."""
        if command is None or self.finished:
            return None
        if command == Command.QUIT:
            return self.quit()
        if isinstance(self.ui_mode, PendingSkip):
            self._update_pending_skip(command, self.ui_mode.frozen)
        else:
            self._update_running(command, self.ui_mode.stopwatch)
        return None

    def _update_pending_skip(self, command: Command, frozen: float) -> None:
        if command in (Command.ENTER, Command.YES):
            logger.info("Skip confirmed after %.1fs of %s", frozen, self.session.mode.name)
            self._commit(frozen)
        elif command == Command.NO:
            logger.debug("Skip cancelled, resuming at %.1fs", frozen)
            self.ui_mode = Running(Stopwatch.resumed_at(frozen, clock=self._clock))

    def _update_running(self, command: Command, stopwatch: Stopwatch) -> None:
        elapsed = stopwatch.elapsed()
        if command == Command.ENTER:
            if elapsed >= self.target:
                self._commit(elapsed)
        elif command == Command.PAUSE:
            stopwatch.stop()
        elif command == Command.RESUME:
            stopwatch.start()
        elif command == Command.TOGGLE:
            stopwatch.toggle()
        elif command == Command.SKIP:
            logger.debug("Skip requested at %.1fs", elapsed)
            self.ui_mode = PendingSkip(elapsed)
        elif command == Command.RESET:
            logger.debug("Restarting %s phase", self.session.mode.name)
            self.ui_mode = Running(Stopwatch(clock=self._clock))

    def _commit(self, elapsed: float) -> None:
        self.alerter.reset()
        previous = self.session
        self.session = previous.advance(elapsed)
        self.ui_mode = Running(Stopwatch(clock=self._clock))
        logger.info(
            "%s -> %s (round %d)",
            previous.mode.name,
            self.session.mode.name,
            self.session.round,
        )

    def quit(self) -> str:
        """Fold the current phase into the totals and end the session.

        Mode and round are left as they are; only the totals change.
        """
        if not self.finished:
            self.session = self.session.fold(self.elapsed())
            self.finished = True
            work_total, break_total = self.session.elapsed_totals
            self.summary = (
                f"You have spent {format_duration(work_total)} working and "
                f"{format_duration(break_total)} on break. Well done!"
            )
            logger.info("Session finished: work=%.1fs break=%.1fs", work_total, break_total)
        return self.summary

    def snapshot(self) -> PomodoroView:
        """Derived display quantities; fires no alerts."""
        elapsed = self.elapsed()
        target = self.target
        pending = isinstance(self.ui_mode, PendingSkip)
        next_mode = self.session.peek_next().mode
        return PomodoroView(
            mode=self.session.mode,
            round=self.session.round,
            elapsed=elapsed,
            target=target,
            remaining=time_remaining(elapsed, target),
            overrun=overrun(elapsed, target),
            progress=progress_ratio(elapsed, target),
            running=not pending and self.ui_mode.stopwatch.is_running(),
            pending_skip=pending,
            skip_target=next_mode if pending else None,
            ended=not pending and elapsed >= target,
            next_mode=next_mode,
            end_title=end_title(next_mode),
            alert=alert_message(next_mode),
        )

    def poll_alert(self) -> bool:
        """Fire the end-of-phase alert if the phase just ran out."""
        if isinstance(self.ui_mode, PendingSkip):
            return False
        if not should_alert(self.elapsed(), self.target, self.alerter):
            return False
        title, message = alert_message(self.session.peek_next().mode)
        return self.alerter.alert_once(title, message)

    def view(self) -> Frame:
        """Frame for the current phase, ended state or skip prompt."""
        self.poll_alert()
        snap = self.snapshot()
        round_line = f"Session: {snap.round}"
        if snap.pending_skip:
            return Frame(
                title=skip_prompt(snap.skip_target),
                clock="",
                running=False,
                tone="skip",
                controls=SKIP_CONTROLS,
                progress=0.0,
                status=(round_line,),
            )
        if snap.ended:
            return Frame(
                title=snap.end_title,
                clock="+" + format_duration(snap.overrun),
                running=snap.running,
                tone="ended",
                controls=ENDING_CONTROLS,
                progress=1.0,
                status=(round_line, snap.alert[1]),
            )
        return Frame(
            title=phase_title(snap.mode),
            clock=format_duration(snap.remaining),
            running=snap.running,
            tone="work" if snap.mode == Mode.WORK else "break",
            controls=POMODORO_CONTROLS,
            progress=snap.progress,
            status=(round_line,),
        )
