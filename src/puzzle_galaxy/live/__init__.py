"""Live update stream: message decoding and the reconnecting channel."""

from .channel import LiveUpdateChannel, MessageSource, sse_source
from .messages import (
    NEW_PUZZLE,
    PLAY_RESULT,
    LiveMessage,
    NewPuzzleMessage,
    PlayResultMessage,
    apply_message,
    parse_message,
)

__all__ = [
    "LiveMessage",
    "LiveUpdateChannel",
    "MessageSource",
    "NEW_PUZZLE",
    "NewPuzzleMessage",
    "PLAY_RESULT",
    "PlayResultMessage",
    "apply_message",
    "parse_message",
    "sse_source",
]
