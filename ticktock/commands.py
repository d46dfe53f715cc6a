"""Abstract commands understood by every timer controller."""

from enum import Enum


class Command(Enum):
    """Decoded user intent, independent of the key that produced it."""
    QUIT = "quit"
    SKIP = "skip"
    PAUSE = "pause"
    RESUME = "resume"
    TOGGLE = "toggle"
    ENTER = "enter"
    YES = "yes"
    NO = "no"
    RESET = "reset"
