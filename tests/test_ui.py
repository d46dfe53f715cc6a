"""Tests for the textual UI, driven headless through App.run_test."""

import asyncio

from ticktock.config import PomodoroConfig
from ticktock.controller import PendingSkip, PomodoroController, StopwatchController
from ticktock.notifications import Alerter
from ticktock.ui import CounterApp, render_big_time


def run_keys(app, *keys):
    async def scenario():
        async with app.run_test() as pilot:
            for key in keys:
                await pilot.press(key)
        return app.return_value

    return asyncio.run(scenario())


class TestBigTime:
    """Test big glyph rendering."""

    def test_five_lines(self):
        """Clock renders five lines tall."""
        assert len(render_big_time("25:00").splitlines()) == 5

    def test_overrun_sign(self):
        """The plus sign has its own glyph."""
        lines = render_big_time("+00:05").splitlines()
        assert lines[2].startswith("█████")

    def test_blank(self):
        """Empty clock text renders blank lines."""
        assert render_big_time("").strip() == ""


class TestCounterApp:
    """Test key handling."""

    def test_quit_returns_summary(self):
        """q exits with the controller summary."""
        controller = PomodoroController(alerter=Alerter(notifier=None))
        summary = run_keys(CounterApp(controller), "q")
        assert controller.finished
        assert summary == controller.summary
        assert summary.startswith("You have spent ")

    def test_space_pauses(self):
        """space toggles the phase stopwatch."""
        controller = PomodoroController(alerter=Alerter(notifier=None))
        run_keys(CounterApp(controller), "space")
        assert not controller.ui_mode.stopwatch.is_running()

    def test_skip_then_cancel(self):
        """S asks for confirmation and n cancels it."""
        controller = PomodoroController(alerter=Alerter(notifier=None))
        app = CounterApp(controller)
        run_keys(app, "S")
        assert isinstance(controller.ui_mode, PendingSkip)

        controller = PomodoroController(alerter=Alerter(notifier=None))
        run_keys(CounterApp(controller), "S", "n")
        assert not isinstance(controller.ui_mode, PendingSkip)

    def test_stopwatch_mode(self):
        """The same app drives the stopwatch."""
        controller = StopwatchController()
        summary = run_keys(CounterApp(controller), "q")
        assert summary.startswith("Stopwatch stopped at")

    def test_alert_toast_registered(self):
        """The app adds its toast to the alerter's notifiers."""
        alerter = Alerter(notifier=None)
        controller = PomodoroController(
            PomodoroConfig(work=0, short_break=0, long_break=0), alerter=alerter
        )
        app = CounterApp(controller, alerter)
        assert app.toast in alerter.notifiers
        run_keys(app, "q")
        assert not alerter.armed
