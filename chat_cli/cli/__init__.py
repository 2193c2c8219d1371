"""CLI module for chat sessions."""

from chat_cli.cli.runner import load_config, run_session

__all__ = ["load_config", "run_session"]
