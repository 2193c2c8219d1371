"""CLI runner for the interactive turn loop."""

import asyncio
from pathlib import Path
from typing import Any

import yaml  # type: ignore
from loguru import logger
from rich.console import Console
from rich.panel import Panel

from chat_cli.errors import ChatError, TranscriptStoreError
from chat_cli.infrastructure.editor import EditorLauncher
from chat_cli.infrastructure.notifier import Notifier
from chat_cli.models.config import ChatConfig
from chat_cli.orchestration.session import ChatSession, TurnResult
from chat_cli.streaming.display import ConsoleDisplay
from chat_cli.transcript.store import TranscriptFile


def load_config(config_path: str | None = None, overrides: dict[str, Any] | None = None) -> ChatConfig:
    """Build the chat configuration.

    Values come from environment/.env, then the YAML file, then overrides.

    Args:
        config_path: Optional path to a YAML configuration file
        overrides: Values set from command line flags

    Returns:
        ChatConfig
    """
    config_data: dict[str, Any] = {}
    if config_path:
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        with open(config_file) as f:
            config_data = yaml.safe_load(f) or {}

    config_data.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return ChatConfig(**config_data)


def display_turn(result: TurnResult, console: Console) -> None:
    """Print a short summary after a turn.

    Args:
        result: Completed turn
        console: Rich Console instance
    """
    lines = [
        f"[bold]Sent:[/bold] {result.sent_messages} message(s)",
        f"[bold]Reply:[/bold] {len(result.reply.content)} characters",
    ]
    if result.fragments:
        lines.append(f"[bold]Fragments:[/bold] {result.fragments}")
    if not result.complete:
        lines.append("[yellow]Stream closed without a final marker, the reply may be cut short[/yellow]")
    console.print(Panel("\n".join(lines), title="Turn complete", expand=False))


async def run_session(
    config: ChatConfig,
    console: Console,
    transcript_path: Path | None = None,
    open_editor: bool = True,
    max_turns: int | None = None,
) -> Path:
    """Run the interactive loop until interrupted.

    Args:
        config: Chat configuration
        console: Rich Console for prompts and output
        transcript_path: Existing transcript to resume; a fresh one is
            created when omitted
        open_editor: Spawn the configured editor on the transcript
        max_turns: Stop after this many loop iterations (None for no limit)

    Returns:
        Path of the transcript file

    Raises:
        TranscriptStoreError: If the transcript cannot be read or written
    """
    resume = transcript_path is not None
    transcript = TranscriptFile(transcript_path or config.transcript_path())
    session = ChatSession(
        config,
        transcript,
        display=ConsoleDisplay(console),
        notifier=Notifier(config.notify_command, enabled=config.notify),
    )

    if resume:
        logger.info(f"Resuming transcript {transcript.path}")
    else:
        session.start()

    if open_editor:
        EditorLauncher(config.editor_command).open(transcript.path)

    console.print(f"[bold]Model:[/bold] {config.model}")

    turns = 0
    while max_turns is None or turns < max_turns:
        turns += 1
        console.print(f"\n\nUpdate the log at {transcript.path} and press Enter to continue")
        try:
            await asyncio.to_thread(console.input)
        except EOFError:
            break

        try:
            result = await session.run_turn()
        except TranscriptStoreError:
            raise
        except ChatError as e:
            console.print(f"[red]Turn failed:[/red] {e}", style="bold red")
            logger.debug(f"Turn failed: {type(e).__name__}")
            continue

        if result is None:
            console.print("[yellow]No new User message yet, fill in the last # User section[/yellow]")
            continue

        display_turn(result, console)

    return transcript.path
