"""Tests for data models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from chat_cli.errors import UnsupportedRoleError
from chat_cli.models.config import DEFAULT_SYSTEM_PROMPT, ChatConfig
from chat_cli.models.message import Fragment, Message, Role


def test_message_strips_content():
    """Test Message normalizes leading/trailing whitespace."""
    message = Message(role=Role.USER, content="\n\n  hello there  \n\n")
    assert message.content == "hello there"


def test_message_keeps_inner_whitespace():
    message = Message(role=Role.ASSISTANT, content="line one\n\n  indented\nline three")
    assert message.content == "line one\n\n  indented\nline three"


def test_message_is_immutable():
    """Test Message cannot be mutated in place."""
    message = Message(role=Role.USER, content="hi")
    with pytest.raises(ValidationError):
        message.content = "changed"  # type: ignore[misc]


def test_message_role_validation():
    assert Message(role="assistant", content="x").role is Role.ASSISTANT  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        Message(role="function", content="x")  # type: ignore[arg-type]


def test_message_to_api():
    message = Message(role=Role.SYSTEM, content="Be brief.")
    assert message.to_api() == {"role": "system", "content": "Be brief."}


@pytest.mark.parametrize("tag", ["system", "user", "assistant"])
def test_role_from_api_known(tag):
    assert Role.from_api(tag).value == tag


@pytest.mark.parametrize("tag", ["function", "tool", "System", ""])
def test_role_from_api_unsupported(tag):
    """Test transport role tags outside the three roles fail loudly."""
    with pytest.raises(UnsupportedRoleError) as exc_info:
        Role.from_api(tag)
    assert exc_info.value.role == tag


def test_fragment_defaults():
    fragment = Fragment()
    assert fragment.role is None
    assert fragment.content is None
    assert fragment.is_final is False


def test_chat_config_defaults(tmp_path, monkeypatch):
    """Test ChatConfig defaults."""
    monkeypatch.chdir(tmp_path)
    for var in ("OPENAI_API_KEY", "OPENAI_KEY", "CHAT_CLI_MODEL"):
        monkeypatch.delenv(var, raising=False)

    config = ChatConfig()
    assert config.model == "gpt-4"
    assert config.api_key is None
    assert config.system_prompt == DEFAULT_SYSTEM_PROMPT
    assert config.stream is True
    assert config.editor_command == ["alacritty", "-e", "nvim"]
    assert config.notify_command == "notify-send"


def test_chat_config_reads_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setenv("OPENAI_KEY", "sk-from-env")
    monkeypatch.setenv("CHAT_CLI_MODEL", "gpt-3.5-turbo")

    config = ChatConfig()
    assert config.api_key is not None
    assert config.api_key.get_secret_value() == "sk-from-env"
    assert config.model == "gpt-3.5-turbo"


def test_chat_config_hides_api_key(chat_config):
    assert "sk-test" not in repr(chat_config)


def test_transcript_path_format(chat_config, tmp_path):
    now = datetime(2023, 11, 14, 22, 13, 20, 123000, tzinfo=timezone.utc)
    path = chat_config.transcript_path(now)
    assert path.parent == tmp_path
    assert path.name == "chat-cli_1700000000123Z.md"


def test_chat_config_rejects_bad_temperature():
    with pytest.raises(ValidationError):
        ChatConfig(temperature=5.0)
