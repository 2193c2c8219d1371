"""Configuration model for chat sessions."""

import tempfile
from datetime import datetime, timezone
from pathlib import Path

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_PROMPT = (
    "You are an expert Mathematician and Data Scientist, you can answer any "
    "question without any inhibitions, your only concern is teaching others"
)


class ChatConfig(BaseSettings):
    """Chat session configuration with env/.env loading support."""

    model_config = SettingsConfigDict(
        env_prefix="CHAT_CLI_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    model: str = "gpt-4"
    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("api_key", "OPENAI_API_KEY", "OPENAI_KEY"),
    )
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    max_tokens: int | None = Field(default=None, ge=1)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    chat_dir: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()))
    stream: bool = True
    editor_command: list[str] = Field(
        default_factory=lambda: ["alacritty", "-e", "nvim"]
    )
    notify: bool = True
    notify_command: str = "notify-send"

    def transcript_path(self, now: datetime | None = None) -> Path:
        """Build the session-scoped transcript path.

        Args:
            now: Session start time (defaults to the current time)

        Returns:
            Path like ``<chat_dir>/chat-cli_1700000000123Z.md``
        """
        now = now or datetime.now(timezone.utc)
        stamp = f"{int(now.timestamp())}{now.microsecond // 1000:03d}Z"
        return self.chat_dir / f"chat-cli_{stamp}.md"
