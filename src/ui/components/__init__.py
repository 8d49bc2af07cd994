"""UI components for Hi-Lo."""

from src.ui.components.deck_area import render_deck_area
from src.ui.components.scoreboard import render_scoreboard
from src.ui.components.turn_controls import render_turn_controls

__all__ = [
    "render_deck_area",
    "render_scoreboard",
    "render_turn_controls",
]
