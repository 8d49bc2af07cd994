"""
Hi-Lo Persistence Layer.

Saved-game models and the stores that hold the current game.
"""

from src.database.client import get_game_store, get_supabase_client
from src.database.models import (
    DeckRecord,
    GameSnapshot,
    PlayerRecord,
    SavedGame,
    parse_snapshot,
)
from src.database.store import (
    DEFAULT_SLOT,
    FileGameStore,
    GameStore,
    MemoryGameStore,
    SupabaseGameStore,
)

__all__ = [
    "get_game_store",
    "get_supabase_client",
    "DeckRecord",
    "GameSnapshot",
    "PlayerRecord",
    "SavedGame",
    "parse_snapshot",
    "DEFAULT_SLOT",
    "FileGameStore",
    "GameStore",
    "MemoryGameStore",
    "SupabaseGameStore",
]
