"""Exception taxonomy for chat-cli."""


class ChatError(Exception):
    """Base exception for user-facing chat failures."""


class TranscriptError(ChatError):
    """Raised when a transcript cannot be encoded or decoded."""


class UnsupportedRoleError(TranscriptError):
    """Raised when a role tag has no transcript heading (e.g. function/tool)."""

    def __init__(self, role: object) -> None:
        self.role = role
        super().__init__(f"Unsupported role: {role!r}")


class TranscriptStoreError(ChatError):
    """Raised when reading, appending or deleting the transcript file fails."""


class StreamError(ChatError):
    """Base exception for streamed response failures."""


class NoResponseError(StreamError):
    """Raised when the service produced no assistant reply for a turn."""


class PartialResponseError(StreamError):
    """Raised when a streamed reply broke off before it completed."""

    def __init__(self, message: str, partial: object) -> None:
        super().__init__(message)
        self.partial = partial
