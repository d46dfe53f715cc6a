"""Unit tests for stopwatch.py."""

from ticktock.stopwatch import Stopwatch


class TestStopwatchBasics:
    """Test elapsed time accounting."""

    def test_starts_running_at_zero(self, clock):
        """A new stopwatch runs from zero."""
        sw = Stopwatch(clock=clock)
        assert sw.is_running()
        assert sw.elapsed() == 0.0

    def test_elapsed_follows_clock(self, clock):
        """Elapsed grows with the clock while running."""
        sw = Stopwatch(clock=clock)
        clock.advance(12.5)
        assert sw.elapsed() == 12.5
        assert sw.elapsed() == 12.5

    def test_stop_freezes_elapsed(self, clock):
        """Stopped stopwatch ignores clock movement."""
        sw = Stopwatch(clock=clock)
        clock.advance(10)
        sw.stop()
        clock.advance(100)
        assert not sw.is_running()
        assert sw.elapsed() == 10

    def test_start_resumes_from_accumulated(self, clock):
        """Start keeps previously accumulated time."""
        sw = Stopwatch(clock=clock)
        clock.advance(10)
        sw.stop()
        clock.advance(50)
        sw.start()
        clock.advance(5)
        assert sw.elapsed() == 15

    def test_created_stopped(self, clock):
        """running=False creates a paused stopwatch."""
        sw = Stopwatch(accumulated=3, running=False, clock=clock)
        clock.advance(10)
        assert sw.elapsed() == 3


class TestIdempotence:
    """Repeated start/stop do not double count."""

    def test_double_start(self, clock):
        """Second start is a no-op."""
        once = Stopwatch(running=False, clock=clock)
        twice = Stopwatch(running=False, clock=clock)
        once.start()
        twice.start()
        clock.advance(4)
        twice.start()
        clock.advance(6)
        assert once.elapsed() == twice.elapsed() == 10

    def test_double_stop(self, clock):
        """Second stop is a no-op."""
        sw = Stopwatch(clock=clock)
        clock.advance(7)
        sw.stop()
        clock.advance(3)
        sw.stop()
        assert sw.elapsed() == 7


class TestToggleAndReset:
    """Test toggle, reset and resumed_at."""

    def test_toggle(self, clock):
        """Toggle flips running state."""
        sw = Stopwatch(clock=clock)
        clock.advance(2)
        sw.toggle()
        assert not sw.is_running()
        clock.advance(2)
        sw.toggle()
        assert sw.is_running()
        clock.advance(1)
        assert sw.elapsed() == 3

    def test_reset_restarts_running(self, clock):
        """Reset zeroes and runs, even when stopped."""
        sw = Stopwatch(clock=clock)
        clock.advance(30)
        sw.stop()
        sw.reset()
        assert sw.is_running()
        assert sw.elapsed() == 0
        clock.advance(2)
        assert sw.elapsed() == 2

    def test_resumed_at(self, clock):
        """resumed_at continues from the given value."""
        sw = Stopwatch.resumed_at(400, clock=clock)
        assert sw.is_running()
        assert sw.elapsed() == 400
        clock.advance(1)
        assert sw.elapsed() == 401

    def test_clock_stepping_back_is_clamped(self, clock):
        """Elapsed never becomes negative."""
        sw = Stopwatch(clock=clock)
        clock.advance(5)
        clock.now -= 10
        assert sw.elapsed() == 0
