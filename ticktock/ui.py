"""Textual-based UI shared by the stopwatch, timer and Pomodoro modes."""

from typing import Optional, Protocol

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.timer import Timer
from textual.widgets import ProgressBar, Static

from .commands import Command
from .display import Frame
from .notifications import Alerter

# Seconds between redraws when no key is pressed.
TICK_INTERVAL = 0.25

# Big glyphs, 5 lines tall, 5 chars wide
BIG_GLYPHS = {
    "0": ["█████", "█   █", "█   █", "█   █", "█████"],
    "1": ["  █  ", " ██  ", "  █  ", "  █  ", " ███ "],
    "2": ["█████", "    █", "█████", "█    ", "█████"],
    "3": ["█████", "    █", " ████", "    █", "█████"],
    "4": ["█   █", "█   █", "█████", "    █", "    █"],
    "5": ["█████", "█    ", "█████", "    █", "█████"],
    "6": ["█████", "█    ", "█████", "█   █", "█████"],
    "7": ["█████", "    █", "   █ ", "  █  ", "  █  "],
    "8": ["█████", "█   █", "█████", "█   █", "█████"],
    "9": ["█████", "█   █", "█████", "    █", "█████"],
    ":": ["     ", "  █  ", "     ", "  █  ", "     "],
    "+": ["     ", "  █  ", "█████", "  █  ", "     "],
}
GLYPH_HEIGHT = 5


def render_big_time(text: str) -> str:
    """Render a clock string such as ``24:59`` or ``+1:02:03`` in big glyphs."""
    if not text:
        return "\n" * (GLYPH_HEIGHT - 1)
    blank = " " * 5
    lines = []
    for line_num in range(GLYPH_HEIGHT):
        parts = [BIG_GLYPHS.get(char, [blank] * GLYPH_HEIGHT)[line_num] for char in text]
        lines.append(" ".join(parts))
    return "\n".join(lines)


class Controller(Protocol):
    finished: bool

    def update(self, command: Optional[Command]) -> Optional[str]: ...

    def quit(self) -> str: ...

    def view(self) -> Frame: ...


class BigClock(Static):
    """Big ASCII clock."""

    def show_frame(self, frame: Frame) -> None:
        self.update(render_big_time(frame.clock))
        self.set_class(frame.running, "running")
        self.set_class(not frame.running, "paused")


class StatusBadge(Static):
    """Running/paused indicator."""

    def show_frame(self, frame: Frame) -> None:
        if frame.tone == "skip":
            self.update("? CONFIRM")
        elif frame.running:
            self.update("▶ RUNNING")
        else:
            self.update("⏸ PAUSED")
        self.set_class(frame.running, "running")
        self.set_class(not frame.running, "paused")


TONES = ("work", "break", "ended", "skip", "idle")


class CounterApp(App):
    """Redraws a controller's frame on a fixed interval and forwards keys.

    The app's return value is the controller's quit summary.
    """

    CSS_PATH = "ticktock.tcss"

    BINDINGS = [
        Binding("space", "command('toggle')", "Start/Pause", show=False),
        Binding("S,shift+s", "command('skip')", "Skip", show=False),
        Binding("enter", "command('enter')", "Next", show=False),
        Binding("y", "command('yes')", "Yes", show=False),
        Binding("n,escape", "command('no')", "No", show=False),
        Binding("r", "command('reset')", "Reset", show=False),
        Binding("q", "command('quit')", "Quit", show=False),
    ]

    def __init__(self, controller: Controller, alerter: Optional[Alerter] = None) -> None:
        super().__init__()
        self.controller = controller
        self._tick_timer: Optional[Timer] = None
        if alerter is not None:
            alerter.add_notifier(self.toast)

    def compose(self) -> ComposeResult:
        with Container(id="main"):
            with Vertical(id="timer-container"):
                yield Static(id="title", markup=False)
                yield BigClock(id="big-clock")
                yield StatusBadge(id="status-badge")
                yield ProgressBar(id="progress", total=100, show_eta=False)
                yield Static(id="status-lines", markup=False)
                yield Static(id="controls", markup=False)

    def on_mount(self) -> None:
        self._refresh_display()
        self._tick_timer = self.set_interval(TICK_INTERVAL, self._refresh_display)

    def toast(self, title: str, message: str) -> None:
        """In-app notification, used alongside the desktop one."""
        self.notify(message, title=title)

    def _refresh_display(self) -> None:
        frame = self.controller.view()
        self.query_one("#title", Static).update(frame.title)
        self.query_one("#big-clock", BigClock).show_frame(frame)
        self.query_one("#status-badge", StatusBadge).show_frame(frame)
        self.query_one("#status-lines", Static).update("\n".join(frame.status))
        self.query_one("#controls", Static).update(frame.controls)

        progress_bar = self.query_one("#progress", ProgressBar)
        progress_bar.display = frame.progress is not None
        if frame.progress is not None:
            progress_bar.update(total=100, progress=frame.progress * 100)

        container = self.query_one("#timer-container")
        container.remove_class(*TONES)
        container.add_class(frame.tone)

    def action_command(self, name: str) -> None:
        summary = self.controller.update(Command(name))
        if self.controller.finished:
            if self._tick_timer is not None:
                self._tick_timer.stop()
            self.exit(summary)
            return
        self._refresh_display()

    async def action_quit(self) -> None:
        self.action_command("quit")


def run_ui(controller: Controller, alerter: Optional[Alerter] = None) -> Optional[str]:
    """Run the UI until the user quits.

    Args:
        controller: The mode controller to drive.
        alerter: Alerter shared with the controller; it also gets an
            in-app toast notifier.

    Returns:
        The controller's quit summary.
    """
    app = CounterApp(controller, alerter)
    return app.run()
