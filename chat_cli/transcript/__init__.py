"""Transcript document codec and backing file."""

from chat_cli.transcript.codec import (
    HEADINGS,
    DecodedTranscript,
    decode,
    decode_document,
    drop_priming,
    encode,
    encode_section,
)
from chat_cli.transcript.store import TranscriptFile

__all__ = [
    "HEADINGS",
    "DecodedTranscript",
    "TranscriptFile",
    "decode",
    "decode_document",
    "drop_priming",
    "encode",
    "encode_section",
]
