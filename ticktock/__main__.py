"""Entry point for python -m ticktock."""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from .config import PRESETS, PomodoroConfig, parse_duration
from .controller import PomodoroController, StopwatchController, TimerController
from .errors import DurationError
from .notifications import Alerter
from .ui import Controller, run_ui

logger = logging.getLogger(__name__)


def duration_arg(value: str) -> float:
    """argparse ``type=`` adapter for human durations."""
    try:
        return parse_duration(value)
    except DurationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="ticktock",
        description="Terminal stopwatch, countdown timer and Pomodoro cycler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Controls:
  Space    Pause/Resume
  Enter    Next phase once the current one has ended / confirm skip
  S        Skip to the next phase (asks for confirmation)
  y / n    Confirm / cancel a skip
  r        Restart the current phase
  q        Quit and print a summary

Durations:
  25m, 1h30m, 90s, 25:00 or a bare number of minutes

Examples:
  ticktock stopwatch
  ticktock timer 10m
  ticktock pomodoro                 # short preset (25/5/10)
  ticktock pomodoro long            # long preset (55/10/20)
  ticktock pomodoro --work 50m      # short preset with 50 minute work
""",
    )
    parser.add_argument(
        "--no-notify",
        action="store_true",
        help="Disable notifications (bell, system and in-app)",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write a log to PATH (logging is off otherwise)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages (with --log-file)",
    )

    modes = parser.add_subparsers(dest="mode", metavar="MODE")
    modes.required = True

    modes.add_parser("stopwatch", help="Count up until you quit")

    timer = modes.add_parser("timer", help="Count down from a duration")
    timer.add_argument("duration", type=duration_arg, help="Timer length")

    pomodoro = modes.add_parser("pomodoro", help="Cycle work and break phases")
    pomodoro.add_argument(
        "preset",
        nargs="?",
        choices=sorted(PRESETS),
        default="short",
        help="Duration preset (default: short)",
    )
    pomodoro.add_argument(
        "--work",
        type=duration_arg,
        metavar="D",
        help="Work phase duration",
    )
    pomodoro.add_argument(
        "--break",
        type=duration_arg,
        dest="short_break",
        metavar="D",
        help="Short break duration",
    )
    pomodoro.add_argument(
        "--long-break",
        type=duration_arg,
        metavar="D",
        help="Long break duration",
    )

    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    """Configure logging. The terminal belongs to the UI, so only files."""
    if not log_file:
        logging.getLogger("ticktock").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_controller(args: argparse.Namespace) -> Tuple[Controller, Optional[Alerter]]:
    """Create the controller (and its alerter) for the selected mode."""
    if args.mode == "stopwatch":
        return StopwatchController(), None

    alerter = Alerter(enabled=not args.no_notify)
    if args.mode == "timer":
        return TimerController(args.duration, alerter=alerter), alerter

    config = PomodoroConfig.preset(args.preset).with_overrides(
        work=args.work,
        short_break=args.short_break,
        long_break=args.long_break,
    )
    logger.info("Pomodoro config: %s", config)
    return PomodoroController(config, alerter=alerter), alerter


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)

    controller, alerter = build_controller(args)
    logger.info("Starting %s", args.mode)

    try:
        summary = run_ui(controller, alerter)
    except KeyboardInterrupt:
        summary = controller.quit()

    if summary:
        print(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
