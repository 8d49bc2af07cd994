"""
Hi-Lo Event Channel.

Message passing between the game engine and the presentation and
persistence layers.
"""

from src.channel.bus import EventChannel
from src.channel.events import (
    EventPayload,
    GameEvent,
    draw_command,
    guess_command,
    pass_command,
)

__all__ = [
    "EventChannel",
    "EventPayload",
    "GameEvent",
    "draw_command",
    "guess_command",
    "pass_command",
]
