"""Shared test fixtures."""

from pathlib import Path

import pytest
from loguru import logger

from chat_cli.models.config import ChatConfig
from chat_cli.transcript.store import TranscriptFile
from tests.helpers import RecordingDisplay


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture
def chat_config(tmp_path: Path) -> ChatConfig:
    """ChatConfig that never touches the real environment's tools.

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        ChatConfig rooted in tmp_path
    """
    return ChatConfig(
        model="gpt-4",
        api_key="sk-test",
        system_prompt="You are helpful.",
        chat_dir=tmp_path,
        editor_command=[],
        notify=False,
    )


@pytest.fixture
def transcript_file(tmp_path: Path) -> TranscriptFile:
    return TranscriptFile(tmp_path / "chat.md")


@pytest.fixture
def warnings_logged():
    """Collect loguru records at WARNING and above.

    Returns:
        List of loguru record dicts, filled as the test runs
    """
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="WARNING")
    yield records
    logger.remove(handler_id)
