"""Message, fragment and role models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

from chat_cli.errors import UnsupportedRoleError


class Role(str, Enum):
    """Speaker of a message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"

    @classmethod
    def from_api(cls, value: str) -> "Role":
        """Map a transport role tag onto a Role.

        Args:
            value: Role tag as sent by the chat service

        Returns:
            Matching Role

        Raises:
            UnsupportedRoleError: For function/tool or any unknown tag
        """
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedRoleError(value) from None


class Message(BaseModel):
    """A single message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    @field_validator("content")
    @classmethod
    def _strip_content(cls, value: str) -> str:
        return value.strip()

    def to_api(self) -> dict[str, str]:
        """Render as a chat-completion message dict."""
        return {"role": self.role.value, "content": self.content}


class Fragment(BaseModel):
    """One incremental piece of a streamed response."""

    model_config = ConfigDict(frozen=True)

    role: Role | None = None
    content: str | None = None
    is_final: bool = False


class StreamResult(BaseModel):
    """Outcome of folding a fragment stream."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    message: Message
    complete: bool
    fragments: int
    error: Exception | None = None
