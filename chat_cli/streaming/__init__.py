"""Streaming response folding and progressive display."""

from chat_cli.streaming.accumulator import AccumulatorState, DisplaySink, StreamAccumulator
from chat_cli.streaming.display import ConsoleDisplay

__all__ = [
    "AccumulatorState",
    "ConsoleDisplay",
    "DisplaySink",
    "StreamAccumulator",
]
