"""External collaborators: chat service, desktop notifications, editor."""

from chat_cli.infrastructure.editor import EditorLauncher
from chat_cli.infrastructure.llm_client import LLMClient
from chat_cli.infrastructure.notifier import Notifier

__all__ = [
    "EditorLauncher",
    "LLMClient",
    "Notifier",
]
