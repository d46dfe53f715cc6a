"""Desktop notifications and the fire-once alerter."""

import logging
import platform
import subprocess
import sys
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]


def _send_bell() -> None:
    """Send terminal bell."""
    sys.stdout.write("\a")
    sys.stdout.flush()


def _run_notifier(argv: list) -> bool:
    try:
        subprocess.run(argv, capture_output=True, timeout=5)
        return True
    except (subprocess.SubprocessError, FileNotFoundError, OSError) as exc:
        logger.debug("Notification via %s failed: %s", argv[0], exc)
        return False


def _send_macos_notification(title: str, message: str) -> bool:
    """Send macOS notification via osascript.

    Returns:
        True if successful, False otherwise.
    """
    script = f'display notification "{message}" with title "{title}"'
    return _run_notifier(["osascript", "-e", script])


def _send_linux_notification(title: str, message: str) -> bool:
    """Send Linux notification via notify-send.

    Returns:
        True if successful, False otherwise.
    """
    return _run_notifier(["notify-send", title, message])


def notify(title: str, message: str, bell: bool = True) -> None:
    """Send a notification.

    Attempts to send both a terminal bell and a native notification.
    Fails silently if native notifications are not available.

    Args:
        title: Notification title.
        message: Notification message.
        bell: Whether to ring terminal bell.
    """
    if bell:
        _send_bell()

    system = platform.system()
    if system == "Darwin":
        _send_macos_notification(title, message)
    elif system == "Linux":
        _send_linux_notification(title, message)
    # Windows and other platforms: bell only


class Alerter:
    """Fires a notification at most once until re-armed.

    The owner calls :meth:`reset` whenever a phase transition commits; every
    :meth:`alert_once` after that delivers the first notification and drops
    the rest.
    """

    def __init__(self, notifier: Optional[Notifier] = notify, enabled: bool = True):
        self.notifiers: List[Notifier] = [notifier] if notifier is not None else []
        self.enabled = enabled
        self._fired = False

    def add_notifier(self, notifier: Notifier) -> None:
        self.notifiers.append(notifier)

    @property
    def armed(self) -> bool:
        """True while the next alert would still be delivered."""
        return not self._fired

    def reset(self) -> None:
        """Re-arm for the next phase."""
        self._fired = False

    def alert_once(self, title: str, message: str) -> bool:
        """Deliver ``(title, message)`` unless already fired.

        Returns:
            True if this call fired the alert.
        """
        if self._fired:
            return False
        self._fired = True
        logger.info("Alert: %s - %s", title, message)
        if self.enabled:
            for notifier in self.notifiers:
                notifier(title, message)
        return True
