"""Backing file for a session transcript."""

import os
from pathlib import Path

from loguru import logger

from chat_cli.errors import TranscriptStoreError
from chat_cli.models.message import Message
from chat_cli.transcript.codec import decode, encode_section


class TranscriptFile:
    """Append-only transcript document at a fixed path."""

    def __init__(self, path: Path) -> None:
        """Initialize transcript file.

        Args:
            path: Location of the markdown transcript
        """
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> str:
        """Read the whole document.

        Returns:
            Document text

        Raises:
            TranscriptStoreError: If the file cannot be read
        """
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TranscriptStoreError(f"Could not read transcript {self.path}: {e}") from e

    def read_messages(self) -> list[Message]:
        """Read and decode the document."""
        return decode(self.read())

    def append(self, message: Message) -> None:
        """Append one message section to the document.

        The block is rendered before the file is opened and written in a
        single call, so a rendering failure leaves the file untouched.

        Args:
            message: Message to append

        Raises:
            TranscriptError: If the content cannot be represented
            TranscriptStoreError: If the file cannot be written
        """
        block = encode_section(message)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("ab+") as f:
                if f.seek(0, os.SEEK_END) > 0:
                    f.seek(-1, os.SEEK_END)
                    if f.read(1) != b"\n":
                        block = "\n" + block
                f.write(block.encode("utf-8"))
                f.flush()
        except OSError as e:
            raise TranscriptStoreError(f"Could not append to transcript {self.path}: {e}") from e

        logger.debug(f"Appended {message.role.value} section to {self.path}")

    def reset(self) -> None:
        """Delete the document if it exists.

        Raises:
            TranscriptStoreError: If the file cannot be deleted
        """
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise TranscriptStoreError(f"Could not delete transcript {self.path}: {e}") from e

    def start(self, seed: Message) -> None:
        """Begin a fresh session: clear any old document, then write the seed.

        Args:
            seed: First message of the session (normally the system prompt)
        """
        self.reset()
        self.append(seed)
        logger.info(f"Started transcript at {self.path}")
