"""
Hi-Lo - Event Definitions

Commands flowing into the engine and notifications flowing out of it.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class GameEvent(Enum):
    """Events carried by the EventChannel."""

    # Commands (in)
    DRAW_CARD = auto()
    SUBMIT_GUESS = auto()
    PASS = auto()

    # Notifications (out)
    RENDER = auto()
    SAVE = auto()
    ERROR = auto()
    INVALID_MOVE = auto()
    GUESS_RESULT = auto()
    GAME_OVER = auto()

    @property
    def is_command(self) -> bool:
        return self in COMMAND_EVENTS


COMMAND_EVENTS: frozenset[GameEvent] = frozenset({
    GameEvent.DRAW_CARD,
    GameEvent.SUBMIT_GUESS,
    GameEvent.PASS,
})


@dataclass
class EventPayload:
    """Wrapper for a command or notification."""

    event: GameEvent
    player_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


def draw_command(player_id: str | None = None) -> EventPayload:
    return EventPayload(event=GameEvent.DRAW_CARD, player_id=player_id)


def guess_command(guess: Any, player_id: str | None = None) -> EventPayload:
    return EventPayload(
        event=GameEvent.SUBMIT_GUESS, player_id=player_id, data={"guess": guess}
    )


def pass_command(player_id: str | None = None) -> EventPayload:
    return EventPayload(event=GameEvent.PASS, player_id=player_id)
