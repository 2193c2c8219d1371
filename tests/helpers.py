"""Test helpers shared across modules."""

from types import SimpleNamespace
from typing import AsyncIterator, Iterable

from chat_cli.models.message import Fragment, Role


class RecordingDisplay:
    """Display sink that records every event in order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def show_role(self, role: Role) -> None:
        self.events.append(("role", role))

    def show_content(self, delta: str) -> None:
        self.events.append(("content", delta))

    def show_end(self) -> None:
        self.events.append(("end", None))


async def fragment_source(
    fragments: Iterable[Fragment], error: Exception | None = None
) -> AsyncIterator[Fragment]:
    """Yield fragments, then optionally raise."""
    for fragment in fragments:
        yield fragment
    if error is not None:
        raise error


def stream_chunk(role: str | None = None, content: str | None = None, finish_reason: str | None = None):
    """Build an object shaped like a LiteLLM streaming chunk."""
    delta = SimpleNamespace(role=role, content=content)
    return SimpleNamespace(choices=[SimpleNamespace(delta=delta, finish_reason=finish_reason)])


async def chunk_stream(chunks: list) -> AsyncIterator:
    for chunk in chunks:
        yield chunk
