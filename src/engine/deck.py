"""
Hi-Lo - Deck

A single shuffled 52-card deck with a face-up active card. The engine
only relies on draw(), clear_active_card(), is_active_card_higher_than_prev()
and the read-only remaining/active_card attributes.
"""

from __future__ import annotations

import random
from typing import Any, Sequence

from src.engine.base import SUITS, VALUES, Card
from src.engine.errors import DeckExhaustedError


def standard_cards() -> list[Card]:
    """All 52 cards in suit then value order."""
    return [Card(value=value, suit=suit) for suit in SUITS for value in VALUES]


class Deck:
    """
    Draw pile plus the face-up discard card.

    The next card drawn is always cards[0]; the shuffled order is kept so a
    saved deck resumes exactly where it left off.
    """

    def __init__(
        self,
        cards: Sequence[Card] | None = None,
        *,
        active_card: Card | None = None,
        previous_card: Card | None = None,
        seed: int | None = None,
    ) -> None:
        if cards is None:
            cards = standard_cards()
            random.Random(seed).shuffle(cards)
        self.cards: list[Card] = list(cards)
        self.active_card = active_card
        self.previous_card = previous_card

    @property
    def remaining(self) -> int:
        return len(self.cards)

    def draw(self) -> Card:
        """Turn over the next card. The old active card becomes the previous one."""
        if not self.cards:
            raise DeckExhaustedError("No cards left to draw.")
        card = self.cards.pop(0)
        self.previous_card = self.active_card
        self.active_card = card
        return card

    def clear_active_card(self) -> None:
        """Empty the discard pile."""
        self.active_card = None
        self.previous_card = None

    def is_active_card_higher_than_prev(self) -> bool:
        """
        Compare the active card with the card it replaced.

        Equal ranks are not higher, so a tie resolves in favour of "lower".

        Raises:
            ValueError: If there is no pair of cards to compare
        """
        if self.active_card is None or self.previous_card is None:
            raise ValueError("Need an active and a previous card to compare.")
        return self.active_card.rank > self.previous_card.rank

    def to_dict(self) -> dict[str, Any]:
        return {
            "remaining": self.remaining,
            "cards": [card.code for card in self.cards],
            "activeCard": self.active_card.code if self.active_card else None,
            "previousCard": self.previous_card.code if self.previous_card else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Deck":
        """Rebuild a deck saved with to_dict()."""
        active = data.get("activeCard")
        previous = data.get("previousCard")
        return cls(
            [Card.from_code(code) for code in data.get("cards", [])],
            active_card=Card.from_code(active) if active else None,
            previous_card=Card.from_code(previous) if previous else None,
        )

    @classmethod
    def from_codes(cls, codes: Sequence[str], **kwargs: Any) -> "Deck":
        """Build an unshuffled deck from card codes, top card first."""
        return cls([Card.from_code(code) for code in codes], **kwargs)
