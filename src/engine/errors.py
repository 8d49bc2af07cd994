"""
Hi-Lo - Engine Errors

All errors subclass ValueError so callers that only guard against bad
input keep working.
"""


class HiLoError(ValueError):
    """Base class for game engine errors."""


class InvalidMoveError(HiLoError):
    """A command arrived that the current turn state does not allow."""

    def __init__(self, message: str, player_id: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.player_id = player_id


class StaleOrCorruptStateError(HiLoError):
    """Persisted game state could not be parsed or breaks an invariant."""


class DeckExhaustedError(HiLoError):
    """A card was requested from an empty deck."""
