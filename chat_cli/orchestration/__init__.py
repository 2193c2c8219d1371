"""Turn-taking orchestration."""

from chat_cli.orchestration.session import ChatSession, TurnResult

__all__ = ["ChatSession", "TurnResult"]
