"""
Hi-Lo - Table Presenter

Turns engine state into the text and flags the table needs. Kept free of
Streamlit so it can be tested directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.engine.base import Role, TurnPhase
from src.engine.hilo import HiLoEngine

FULL_DECK_SIZE = 52


@dataclass(frozen=True)
class PlayerLine:
    """One scoreboard row."""
    id: str
    name: str
    role: str
    score: int
    is_active: bool


@dataclass(frozen=True)
class TableView:
    """Everything the table renders for one frame."""
    headline: str
    instruction: str
    points_value: int
    points_label: str
    cards_left: str
    active_card: str
    guess_info: str
    can_guess: bool
    can_pass: bool
    can_draw: bool
    is_resolving: bool
    is_game_over: bool
    players: tuple[PlayerLine, ...]


def points_label(points: int) -> str:
    return "point" if points == 1 else "points"


def cards_left_text(remaining: int) -> str:
    return f"{remaining} card left" if remaining == 1 else f"{remaining} cards left"


def _instruction(engine: HiLoEngine) -> str:
    card = engine.deck.active_card

    if engine.phase is TurnPhase.GAME_OVER:
        scores = ", ".join(f"{p.name} {p.score}" for p in engine.players)
        return f"The last card has been drawn. Final scores: {scores}."
    if engine.is_resolving:
        return "Checking the guess..."
    if engine.phase is TurnPhase.AWAITING_GUESS:
        if card is None:
            return "Will the next card be higher or lower?"
        return f"Will the next card be higher or lower than the {card}?"
    return "Draw a card from the pile."


def _guess_info(engine: HiLoEngine) -> str:
    """What the dealer sees while a guess is riding on the next card."""
    if engine.phase is not TurnPhase.AWAITING_DRAW or engine.deck.active_card is None:
        return ""
    guesser = engine.inactive_player
    if guesser.guess is None:
        return ""
    return f"{guesser.name} guessed {guesser.guess.value}."


def build_table_view(engine: HiLoEngine) -> TableView:
    active = engine.active_player
    phase = engine.phase
    resolving = engine.is_resolving
    card = engine.deck.active_card

    if phase is TurnPhase.GAME_OVER:
        headline = "Game over"
    else:
        headline = f"{active.name}'s turn ({active.role.value})"

    return TableView(
        headline=headline,
        instruction=_instruction(engine),
        points_value=engine.pot,
        points_label=points_label(engine.pot),
        cards_left=cards_left_text(engine.deck.remaining),
        active_card=str(card) if card else "",
        guess_info=_guess_info(engine),
        can_guess=phase is TurnPhase.AWAITING_GUESS and not resolving,
        can_pass=(
            phase is TurnPhase.AWAITING_GUESS
            and not resolving
            and active.role is Role.GUESSER
            and active.can_pass
        ),
        can_draw=phase is TurnPhase.AWAITING_DRAW and not resolving,
        is_resolving=resolving,
        is_game_over=phase is TurnPhase.GAME_OVER,
        players=tuple(
            PlayerLine(
                id=p.id,
                name=p.name,
                role=p.role.value,
                score=p.score,
                is_active=p.active,
            )
            for p in engine.players
        ),
    )
