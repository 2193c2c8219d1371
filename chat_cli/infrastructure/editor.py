"""Launch an external editor on the transcript file."""

import subprocess
from pathlib import Path

from loguru import logger


class EditorLauncher:
    """Opens a file in an editor without waiting for it to exit."""

    def __init__(self, command: list[str]) -> None:
        """Initialize launcher.

        Args:
            command: Editor argv prefix, e.g. ``["alacritty", "-e", "nvim"]``
        """
        self.command = list(command)

    def open(self, path: Path) -> subprocess.Popen | None:
        """Spawn the editor on a file.

        Args:
            path: File to edit

        Returns:
            The editor process, or None if it could not be started
        """
        if not self.command:
            logger.debug("No editor command configured")
            return None
        try:
            process = subprocess.Popen([*self.command, str(path)], start_new_session=True)
        except OSError as e:
            logger.warning(f"Unable to launch editor {self.command[0]}: {e}")
            return None
        logger.info(f"Opened {path} in {self.command[0]}")
        return process
