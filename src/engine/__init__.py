"""
Hi-Lo Game Engine.

Pure Python game logic with zero UI/database dependencies.
Handles turn alternation, guess resolution, pot accounting and the deck.
"""

from src.engine.base import (
    Card,
    Guess,
    PlayerState,
    Resolution,
    Role,
    TimingConfig,
    TurnPhase,
)
from src.engine.deck import Deck
from src.engine.errors import (
    DeckExhaustedError,
    HiLoError,
    InvalidMoveError,
    StaleOrCorruptStateError,
)
from src.engine.hilo import HiLoEngine, build_error_message, error_event, new_players
from src.engine.scheduler import ManualClock, ScheduledTask, Scheduler

__all__ = [
    # Data Classes
    "Card",
    "PlayerState",
    "TimingConfig",
    "Deck",
    # Enums
    "Guess",
    "Resolution",
    "Role",
    "TurnPhase",
    # Errors
    "DeckExhaustedError",
    "HiLoError",
    "InvalidMoveError",
    "StaleOrCorruptStateError",
    # Engine
    "HiLoEngine",
    "build_error_message",
    "error_event",
    "new_players",
    # Scheduling
    "ManualClock",
    "ScheduledTask",
    "Scheduler",
]
