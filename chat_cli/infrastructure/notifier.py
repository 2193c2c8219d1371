"""Desktop notifications."""

import subprocess

from loguru import logger


class Notifier:
    """Sends desktop notifications through a command such as ``notify-send``."""

    def __init__(self, command: str = "notify-send", enabled: bool = True) -> None:
        self.command = command
        self.enabled = enabled

    def notify(self, title: str) -> bool:
        """Show a notification.

        Args:
            title: Notification title

        Returns:
            True if the notification command ran successfully
        """
        if not self.enabled:
            return False
        try:
            result = subprocess.run([self.command, title], check=False)
        except OSError as e:
            logger.warning(f"Unable to send notification: {e}")
            return False
        if result.returncode != 0:
            logger.warning(f"Unable to send notification: {self.command} exited {result.returncode}")
            return False
        return True
