"""One chat session: read the transcript, ask the service, append the reply."""

from loguru import logger
from pydantic import BaseModel

from chat_cli.errors import PartialResponseError
from chat_cli.infrastructure.llm_client import LLMClient
from chat_cli.infrastructure.notifier import Notifier
from chat_cli.models.config import ChatConfig
from chat_cli.models.message import Message, Role
from chat_cli.streaming.accumulator import DisplaySink, StreamAccumulator
from chat_cli.transcript.codec import drop_priming
from chat_cli.transcript.store import TranscriptFile

NOTIFICATION_TITLE = "Chat CLI Finished API query"


class TurnResult(BaseModel):
    """Result of a completed turn."""

    reply: Message
    sent_messages: int
    fragments: int = 0
    complete: bool = True


class ChatSession:
    """Drives turns against a single transcript file."""

    def __init__(
        self,
        config: ChatConfig,
        transcript: TranscriptFile,
        client: LLMClient | None = None,
        display: DisplaySink | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        """Initialize session.

        Args:
            config: Chat configuration
            transcript: Backing transcript file
            client: Chat service client (built from config if omitted)
            display: Sink for progressive rendering of replies
            notifier: Desktop notifier (none if omitted)
        """
        self.config = config
        self.transcript = transcript
        self.client = client or LLMClient(config)
        self.display = display
        self.notifier = notifier

    def start(self) -> None:
        """Reset the transcript and seed it with the system prompt."""
        self.transcript.start(Message(role=Role.SYSTEM, content=self.config.system_prompt))

    def pending_messages(self) -> list[Message] | None:
        """Decode the transcript into the messages to send.

        Returns:
            Non-empty messages in order, or None if there is no new User
            turn (the last section is an unfilled priming section or is
            not a User section)
        """
        messages = self.transcript.read_messages()
        conversation = drop_priming(messages)
        if len(conversation) != len(messages):
            logger.info("Last User section is empty, no new turn yet")
            return None
        if not conversation or conversation[-1].role is not Role.USER:
            logger.info("Transcript does not end with a User section, no new turn yet")
            return None

        skipped = [m for m in conversation if not m.content]
        if skipped:
            logger.debug(f"Skipping {len(skipped)} empty section(s)")
        return [m for m in conversation if m.content]

    async def run_turn(self) -> TurnResult | None:
        """Send the transcript and append the reply.

        Returns:
            TurnResult, or None if there was nothing new to send

        Raises:
            NoResponseError: If the service produced no reply
            PartialResponseError: If the reply stream broke off
            UnsupportedRoleError: If the reply has a role with no heading
            TranscriptError: If the reply contains an exact heading line
            TranscriptStoreError: If the transcript cannot be read or written
        """
        messages = self.pending_messages()
        if messages is None:
            return None

        logger.info(f"Sending {len(messages)} message(s) to {self.config.model}")

        fragments = 0
        complete = True
        if self.config.stream:
            accumulator = StreamAccumulator(self.display)
            result = await accumulator.fold(self.client.stream(messages))
            fragments = result.fragments
            if result.error is not None:
                raise PartialResponseError(
                    f"Reply stream broke off after {result.fragments} fragment(s): {result.error}",
                    partial=result.message,
                ) from result.error
            reply = result.message
            complete = result.complete
        else:
            reply = await self.client.complete(messages)
            if self.display:
                self.display.show_role(reply.role)
                self.display.show_content(reply.content)
                self.display.show_end()

        self.transcript.append(reply)

        if self.notifier:
            self.notifier.notify(NOTIFICATION_TITLE)

        return TurnResult(
            reply=reply,
            sent_messages=len(messages),
            fragments=fragments,
            complete=complete,
        )
