"""
Hi-Lo - Persistence Models

Pydantic models for the saved-game JSON layout and the `saved_games`
table that holds it.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from src.engine.base import Guess, Resolution, Role
from src.engine.errors import StaleOrCorruptStateError

_CAMEL = {"populate_by_name": True}


class PlayerRecord(BaseModel):
    """One entry of the `players` array."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=30)
    role: Role
    active: bool
    guess: Guess | None = None
    guess_count: int = Field(default=0, ge=0, le=3, alias="guessCount")
    score: int = Field(default=0, ge=0)

    model_config = _CAMEL


class DeckRecord(BaseModel):
    """Deck state: the undrawn cards (top first) and the discard pile."""

    remaining: int = Field(ge=0)
    cards: list[str] = Field(default_factory=list)
    active_card: str | None = Field(default=None, alias="activeCard")
    previous_card: str | None = Field(default=None, alias="previousCard")

    model_config = _CAMEL

    @model_validator(mode="after")
    def _remaining_matches_cards(self) -> "DeckRecord":
        if self.remaining != len(self.cards):
            raise ValueError(
                f"remaining is {self.remaining} but {len(self.cards)} cards are stored"
            )
        return self


class GameSnapshot(BaseModel):
    """The whole saved game."""

    pot: int = Field(ge=0)
    players: list[PlayerRecord] = Field(min_length=2, max_length=2)
    deck: DeckRecord
    game_over: bool = Field(default=False, alias="gameOver")
    pending_resolution: Resolution | None = Field(default=None, alias="pendingResolution")

    model_config = _CAMEL

    @model_validator(mode="after")
    def _check_turn_state(self) -> "GameSnapshot":
        if sum(1 for p in self.players if p.active) != 1:
            raise ValueError("exactly one player must be active")
        if {p.role for p in self.players} != {Role.DEALER, Role.GUESSER}:
            raise ValueError("players need one dealer and one guesser")
        if self.deck.active_card is None:
            if any(not p.active and p.guess is not None for p in self.players):
                raise ValueError("a guess is waiting but no card is showing")
            if self.pending_resolution is not None:
                raise ValueError("a guess is being settled but no card is showing")
        return self

    def to_state(self) -> dict[str, Any]:
        """Engine-ready dict (the same layout HiLoEngine.to_dict produces)."""
        return self.model_dump(mode="json", by_alias=True)


class SavedGame(BaseModel):
    """Mirrors the `saved_games` table."""

    slot: str
    state: str
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


def parse_snapshot(serialized: str) -> GameSnapshot:
    """
    Parse and validate a saved game.

    Raises:
        StaleOrCorruptStateError: If the text is not a valid saved game
    """
    try:
        return GameSnapshot.model_validate_json(serialized)
    except ValidationError as exc:
        raise StaleOrCorruptStateError(
            f"Saved game failed validation ({exc.error_count()} errors)."
        ) from exc
