"""Main CLI entry point for chat sessions."""

import argparse
import asyncio
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

from chat_cli.cli.runner import load_config, run_session
from chat_cli.errors import TranscriptStoreError


def setup_logging(verbose: bool) -> None:
    """Setup loguru with Rich handler.

    Args:
        verbose: Enable debug logging if True
    """
    logger.remove()

    log_level = "DEBUG" if verbose else "INFO"
    logger.add(
        RichHandler(console=Console(stderr=True), rich_tracebacks=True),
        format="{message}",
        level=log_level,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="chat-cli",
        description="Chat with a completion model through a markdown transcript",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start a fresh transcript in the temp directory
  chat-cli

  # Resume an existing transcript
  chat-cli -f /tmp/chat-cli_1700000000123Z.md
        """,
    )

    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        help="Existing transcript to resume instead of starting a new one",
    )

    parser.add_argument(
        "--config",
        help="Path to a YAML configuration file",
    )

    parser.add_argument(
        "--model",
        help="Model identifier (overrides config)",
    )

    parser.add_argument(
        "--no-stream",
        action="store_true",
        help="Request replies in one piece instead of streaming",
    )

    parser.add_argument(
        "--no-editor",
        action="store_true",
        help="Do not spawn the editor",
    )

    parser.add_argument(
        "--no-notify",
        action="store_true",
        help="Do not send desktop notifications",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


async def async_main(argv: list[str] | None = None) -> int:
    """Async main function.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_args(argv)
    setup_logging(args.verbose)

    load_dotenv()

    console = Console()

    if args.file is not None and not args.file.exists():
        console.print("File does not exist")
        return 1

    try:
        overrides = {
            "model": args.model,
            "stream": False if args.no_stream else None,
            "notify": False if args.no_notify else None,
        }
        config = load_config(args.config, overrides)

        if config.api_key is None and not os.getenv("OPENAI_API_KEY"):
            logger.warning(
                "No API key found in environment. "
                "Set OPENAI_API_KEY (or OPENAI_KEY) in .env file."
            )

        path = await run_session(
            config,
            console,
            transcript_path=args.file,
            open_editor=not args.no_editor,
        )
        console.print(f"Transcript saved at {path}")
        return 0

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold red")
        return 1

    except TranscriptStoreError as e:
        console.print(f"[red]Transcript Error:[/red] {e}", style="bold red")
        return 1

    except Exception as e:
        console.print(f"[red]Chat Error:[/red] {e}", style="bold red")
        logger.exception("Chat session failed")
        return 1


def main() -> None:
    """Main entry point."""
    try:
        exit_code = asyncio.run(async_main())
        sys.exit(exit_code)
    except KeyboardInterrupt:
        console = Console()
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
