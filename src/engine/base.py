"""
Hi-Lo - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. Cards and timing settings are immutable (frozen dataclasses);
PlayerState is the one mutable record and is only ever changed by the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class Role(Enum):
    """Role a player holds for the current pot cycle."""
    DEALER = "dealer"
    GUESSER = "guesser"

    @property
    def opposite(self) -> "Role":
        return Role.GUESSER if self is Role.DEALER else Role.DEALER


class Guess(Enum):
    """A guesser's prediction for the next card."""
    HIGHER = "higher"
    LOWER = "lower"


class TurnPhase(Enum):
    """Engine state, derived from the active player's role."""
    AWAITING_GUESS = auto()
    AWAITING_DRAW = auto()
    GAME_OVER = auto()


class Resolution(Enum):
    """Kind of deferred continuation left after a guess is checked."""
    CORRECT = "correct"
    INCORRECT = "incorrect"


SUITS: tuple[str, ...] = ("SPADES", "HEARTS", "DIAMONDS", "CLUBS")

# Card values in ascending order (aces high)
VALUES: tuple[str, ...] = (
    "2", "3", "4", "5", "6", "7", "8", "9", "10",
    "JACK", "QUEEN", "KING", "ACE",
)

_VALUE_CODES: dict[str, str] = {
    "10": "0", "JACK": "J", "QUEEN": "Q", "KING": "K", "ACE": "A",
}
_CODE_VALUES: dict[str, str] = {code: value for value, code in _VALUE_CODES.items()}


@dataclass(frozen=True)
class Card:
    """
    Immutable playing card.

    Attributes:
        value: Face value, "2" through "10", "JACK", "QUEEN", "KING" or "ACE"
        suit: One of SPADES, HEARTS, DIAMONDS, CLUBS
    """
    value: str
    suit: str

    def __post_init__(self) -> None:
        if self.value not in VALUES:
            raise ValueError(f"Invalid card value {self.value!r}.")
        if self.suit not in SUITS:
            raise ValueError(f"Invalid card suit {self.suit!r}.")

    @property
    def rank(self) -> int:
        """Numeric rank, 2 through 14."""
        return VALUES.index(self.value) + 2

    @property
    def code(self) -> str:
        """Two-character code such as "AS" or "0H" (ten of hearts)."""
        return _VALUE_CODES.get(self.value, self.value) + self.suit[0]

    @classmethod
    def from_code(cls, code: str) -> "Card":
        """Create a Card from its two-character code."""
        if not isinstance(code, str) or len(code) != 2:
            raise ValueError(f"Invalid card code {code!r}.")
        value_code, suit_code = code[0], code[1]
        value = _CODE_VALUES.get(value_code, value_code)
        suit = next((s for s in SUITS if s[0] == suit_code), None)
        if suit is None:
            raise ValueError(f"Invalid card code {code!r}.")
        return cls(value=value, suit=suit)

    def __str__(self) -> str:
        return f"{self.value.lower()} of {self.suit.lower()}"


@dataclass
class PlayerState:
    """
    Per-player state. Mutators return the instance so calls can be chained.

    Attributes:
        id: Stable player identifier ("player1", "player2")
        name: Display name
        role: Dealer or guesser
        active: Whether it is this player's turn
        guess: Pending guess, None when no guess is held
        guess_count: Consecutive guesses without a pass, 0-3
        score: Points won from incorrect guesses
    """
    id: str
    name: str
    role: Role
    active: bool = False
    guess: Guess | None = None
    guess_count: int = 0
    score: int = 0

    MAX_GUESSES_BEFORE_PASS_LOCK = 3

    @property
    def can_pass(self) -> bool:
        return self.guess_count < self.MAX_GUESSES_BEFORE_PASS_LOCK

    def set_guess(self, guess: Guess) -> "PlayerState":
        self.guess = guess
        return self

    def clear_guess(self) -> "PlayerState":
        self.guess = None
        return self

    def set_guess_count(self, count: int) -> "PlayerState":
        self.guess_count = count
        return self

    def increment_score(self, amount: int) -> "PlayerState":
        if amount < 0:
            raise ValueError(f"Score increment cannot be negative, got {amount}.")
        self.score += amount
        return self

    def toggle(self) -> "PlayerState":
        self.active = not self.active
        return self

    def switch_role(self) -> "PlayerState":
        self.role = self.role.opposite
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "active": self.active,
            "guess": self.guess.value if self.guess else None,
            "guessCount": self.guess_count,
            "score": self.score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlayerState":
        guess = data.get("guess")
        return cls(
            id=data["id"],
            name=data["name"],
            role=Role(data["role"]),
            active=bool(data.get("active", False)),
            guess=Guess(guess) if guess else None,
            guess_count=int(data.get("guessCount", 0)),
            score=int(data.get("score", 0)),
        )


@dataclass(frozen=True)
class TimingConfig:
    """
    Delays used by the guess-resolution and draw debounce logic.

    Attributes:
        result_display_seconds: How long a guess result is shown before the
            pot/score continuation runs
        correct_guess_buffer_seconds: Extra delay added on a correct guess
        draw_cooldown_seconds: Window during which a second draw is refused
    """
    result_display_seconds: float = 1.0
    correct_guess_buffer_seconds: float = 0.1
    draw_cooldown_seconds: float = 1.5

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name in (
            "result_display_seconds",
            "correct_guess_buffer_seconds",
            "draw_cooldown_seconds",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative.")
        if self.draw_cooldown_seconds <= self.longest_delay:
            raise ValueError(
                "Draw cooldown must be longer than the guess result delay "
                f"({self.draw_cooldown_seconds} <= {self.longest_delay})."
            )

    @property
    def longest_delay(self) -> float:
        return self.result_display_seconds + self.correct_guess_buffer_seconds

    def delay_for(self, resolution: Resolution) -> float:
        """Delay before the continuation for a resolved guess runs."""
        if resolution is Resolution.CORRECT:
            return self.longest_delay
        return self.result_display_seconds
