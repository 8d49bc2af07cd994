"""
Hi-Lo - Game Stores

Each store keeps exactly one saved game under a slot name. Stores only
move serialized text around; validation happens on restore.
"""

from __future__ import annotations

import logging
from pathlib import Path

from supabase import Client

from src.database.models import SavedGame

logger = logging.getLogger(__name__)

DEFAULT_SLOT = "current_game"


class GameStore:
    """Interface shared by all backends."""

    def __init__(self, slot: str = DEFAULT_SLOT) -> None:
        self.slot = slot

    def save_game(self, serialized: str) -> None:
        raise NotImplementedError

    def load_game(self) -> str | None:
        raise NotImplementedError

    def clear_game(self) -> None:
        raise NotImplementedError


class MemoryGameStore(GameStore):
    """Keeps the saved game in process memory."""

    def __init__(self, slot: str = DEFAULT_SLOT) -> None:
        super().__init__(slot)
        self._games: dict[str, str] = {}

    def save_game(self, serialized: str) -> None:
        self._games[self.slot] = serialized

    def load_game(self) -> str | None:
        return self._games.get(self.slot)

    def clear_game(self) -> None:
        self._games.pop(self.slot, None)


class FileGameStore(GameStore):
    """One JSON file per slot inside a directory."""

    def __init__(self, directory: str | Path, slot: str = DEFAULT_SLOT) -> None:
        super().__init__(slot)
        self.directory = Path(directory)

    @property
    def path(self) -> Path:
        return self.directory / f"{self.slot}.json"

    def save_game(self, serialized: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(serialized, encoding="utf-8")
        tmp.replace(self.path)
        logger.debug("Saved game to %s", self.path)

    def load_game(self) -> str | None:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def clear_game(self) -> None:
        self.path.unlink(missing_ok=True)


class SupabaseGameStore(GameStore):
    """Saved games in the Supabase `saved_games` table, keyed by slot."""

    def __init__(self, client: Client, slot: str = DEFAULT_SLOT) -> None:
        super().__init__(slot)
        self.client = client
        self.table = client.table("saved_games")

    def save_game(self, serialized: str) -> None:
        (
            self.table
            .upsert({"slot": self.slot, "state": serialized}, on_conflict="slot")
            .execute()
        )

    def load_game(self) -> str | None:
        data = (
            self.table
            .select("*")
            .eq("slot", self.slot)
            .execute()
        )
        if data.data:
            return SavedGame.model_validate(data.data[0]).state
        return None

    def clear_game(self) -> None:
        self.table.delete().eq("slot", self.slot).execute()
