"""Fold an ordered stream of fragments into a single message."""

from enum import Enum
from typing import AsyncIterable, Protocol

from loguru import logger

from chat_cli.errors import NoResponseError, UnsupportedRoleError
from chat_cli.models.message import Fragment, Message, Role, StreamResult


class DisplaySink(Protocol):
    """Receives fragments for progressive rendering, in arrival order."""

    def show_role(self, role: Role) -> None: ...

    def show_content(self, delta: str) -> None: ...

    def show_end(self) -> None: ...


class AccumulatorState(str, Enum):
    EMPTY = "empty"
    ACCUMULATING = "accumulating"


class StreamAccumulator:
    """Merges fragment deltas while echoing them to a display sink.

    The fold only ends when the source is exhausted; an ``is_final``
    fragment is displayed as a separator but does not finalize anything.
    """

    def __init__(self, display: DisplaySink | None = None) -> None:
        """Initialize accumulator.

        Args:
            display: Optional sink for progressive rendering
        """
        self.display = display
        self.state = AccumulatorState.EMPTY
        self.role: Role | None = None
        self.chunks: list[str] = []
        self.fragments = 0
        self.saw_final = False

    @property
    def content(self) -> str:
        return "".join(self.chunks)

    def feed(self, fragment: Fragment) -> None:
        """Merge one fragment and surface it on the display sink.

        Args:
            fragment: Next fragment in arrival order
        """
        self.state = AccumulatorState.ACCUMULATING
        self.fragments += 1

        if fragment.role is not None:
            if self.role is None:
                self.role = fragment.role
                if self.display:
                    self.display.show_role(fragment.role)
            elif fragment.role is not self.role:
                logger.warning(
                    f"Fragment {self.fragments} has role {fragment.role.value}, "
                    f"keeping first role {self.role.value}"
                )

        if fragment.content:
            self.chunks.append(fragment.content)
            if self.display:
                self.display.show_content(fragment.content)

        if fragment.is_final:
            self.saw_final = True
            if self.display:
                self.display.show_end()

    def finish(self) -> Message:
        """Finalize the merged response.

        Returns:
            The merged message

        Raises:
            NoResponseError: If no fragment arrived or no content was merged
        """
        if self.state is AccumulatorState.EMPTY:
            raise NoResponseError("The response stream ended without any fragments")

        if not self.content.strip():
            raise NoResponseError(
                f"The response stream produced no content ({self.fragments} fragment(s))"
            )

        role = self.role
        if role is None:
            logger.warning("No fragment carried a role, assuming assistant")
            role = Role.ASSISTANT

        return Message(role=role, content=self.content)

    async def fold(self, source: AsyncIterable[Fragment]) -> StreamResult:
        """Drain a fragment source and merge everything it yields.

        If the source raises part way, whatever has been merged so far is
        finalized and returned with ``complete=False``.

        Args:
            source: Ordered async fragment source

        Returns:
            StreamResult with the merged message

        Raises:
            NoResponseError: If nothing usable was received
            UnsupportedRoleError: If the source produced a role with no heading
        """
        error: Exception | None = None
        try:
            async for fragment in source:
                self.feed(fragment)
        except UnsupportedRoleError:
            raise
        except Exception as e:
            logger.warning(f"Response stream failed after {self.fragments} fragment(s): {e}")
            error = e

        try:
            message = self.finish()
        except NoResponseError as e:
            if error is not None:
                raise NoResponseError(f"{e}: {error}") from error
            raise

        complete = error is None and self.saw_final
        if error is None and not self.saw_final:
            logger.warning("Response stream closed without a final marker")

        logger.debug(
            f"Merged {self.fragments} fragment(s) into {len(message.content)} characters"
        )
        return StreamResult(
            message=message,
            complete=complete,
            fragments=self.fragments,
            error=error,
        )
