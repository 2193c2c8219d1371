"""Text codec between a list of messages and an editable markdown transcript.

The document is a sequence of sections, each opened by a heading line that
is exactly ``# System``, ``# User`` or ``# Assistant``. Everything up to the
next heading is the section's content. After a System or Assistant message
the document ends with an empty ``# User`` section (the priming section),
which the human fills in before the next turn.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from loguru import logger

from chat_cli.errors import TranscriptError
from chat_cli.models.message import Message, Role

HEADINGS: dict[Role, str] = {
    Role.SYSTEM: "# System",
    Role.USER: "# User",
    Role.ASSISTANT: "# Assistant",
}
ROLES_BY_HEADING: dict[str, Role] = {heading: role for role, heading in HEADINGS.items()}

_missing = set(Role) - set(HEADINGS)
if _missing:
    raise RuntimeError(f"Roles without a transcript heading: {sorted(r.value for r in _missing)}")

PRIMING_SECTION = f"{HEADINGS[Role.USER]}\n\n"
_PRIMED_AFTER = (Role.SYSTEM, Role.ASSISTANT)


def heading_for(role: Role) -> str:
    """Look up the heading line for a role."""
    return HEADINGS[role]


def _render(message: Message) -> str:
    heading = heading_for(message.role)
    for line in message.content.splitlines():
        if line in ROLES_BY_HEADING:
            raise TranscriptError(
                f"{message.role.value} content contains the heading line {line!r}, "
                "which would split it into another section"
            )
    return f"{heading}\n{message.content}\n"


def encode_section(message: Message) -> str:
    """Render one message as an appendable block.

    System and Assistant messages are followed by the priming section.

    Args:
        message: Message to render

    Returns:
        Section text ending with a newline

    Raises:
        TranscriptError: If the content contains an exact heading line
    """
    text = _render(message)
    if message.role in _PRIMED_AFTER:
        text += PRIMING_SECTION
    return text


def encode(messages: Iterable[Message]) -> str:
    """Render a whole transcript document.

    The priming section is only emitted after the last message, so that
    ``decode`` does not see an empty User message in the middle.

    Args:
        messages: Conversation in order

    Returns:
        Document text

    Raises:
        TranscriptError: If any content contains an exact heading line
    """
    messages = list(messages)
    text = "".join(_render(message) for message in messages)
    if messages and messages[-1].role in _PRIMED_AFTER:
        text += PRIMING_SECTION
    return text


class _ScanState(Enum):
    EMPTY = "empty"
    IN_SECTION = "in_section"


@dataclass
class DecodedTranscript:
    """Messages read from a document plus anything odd seen on the way."""

    messages: list[Message] = field(default_factory=list)
    anomalies: list[str] = field(default_factory=list)


class _Decoder:
    def __init__(self) -> None:
        self.state = _ScanState.EMPTY
        self.role: Role | None = None
        self.lines: list[str] = []
        self.preamble: list[str] = []
        self.result = DecodedTranscript()

    def open_section(self, role: Role) -> None:
        self.flush()
        self.role = role
        self.lines = []
        self.state = _ScanState.IN_SECTION

    def flush(self) -> None:
        if self.state is _ScanState.IN_SECTION and self.role is not None:
            content = "\n".join(self.lines).rstrip()
            self.result.messages.append(Message(role=self.role, content=content))

    def add_line(self, lineno: int, line: str) -> None:
        if line.startswith(tuple(ROLES_BY_HEADING)):
            self.result.anomalies.append(
                f"line {lineno}: {line!r} looks like a heading but is not one; kept as content"
            )
        if self.state is _ScanState.EMPTY:
            self.preamble.append(line)
        else:
            self.lines.append(line)

    def feed(self, lineno: int, line: str) -> None:
        role = ROLES_BY_HEADING.get(line)
        if role is not None:
            self.open_section(role)
        else:
            self.add_line(lineno, line)

    def close(self) -> DecodedTranscript:
        self.flush()
        if any(line.strip() for line in self.preamble):
            self.result.anomalies.append(
                f"{len(self.preamble)} line(s) before the first heading were ignored"
            )
        return self.result


def decode_document(text: str) -> DecodedTranscript:
    """Parse a document, collecting anomalies instead of logging them.

    Args:
        text: Document text

    Returns:
        DecodedTranscript with messages in document order
    """
    decoder = _Decoder()
    for lineno, line in enumerate(text.splitlines(), start=1):
        decoder.feed(lineno, line)
    return decoder.close()


def decode(text: str) -> list[Message]:
    """Parse a document into messages.

    Anomalies (near-miss headings, text before the first heading) are
    logged and never abort decoding. A trailing empty ``# User`` section
    comes back as a User message with empty content.

    Args:
        text: Document text

    Returns:
        Messages in document order
    """
    decoded = decode_document(text)
    for anomaly in decoded.anomalies:
        logger.warning(f"Transcript anomaly: {anomaly}")
    return decoded.messages


def drop_priming(messages: list[Message]) -> list[Message]:
    """Strip a trailing empty User message (the unfilled priming section)."""
    if messages and messages[-1].role is Role.USER and not messages[-1].content:
        return messages[:-1]
    return messages
