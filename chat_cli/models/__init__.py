"""Data models for chat-cli."""

from chat_cli.models.config import ChatConfig
from chat_cli.models.message import Fragment, Message, Role, StreamResult

__all__ = [
    "ChatConfig",
    "Fragment",
    "Message",
    "Role",
    "StreamResult",
]
