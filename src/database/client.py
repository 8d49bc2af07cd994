"""
Hi-Lo - Supabase Client and Store Factory

Thread-safe singleton factory for the Supabase client.
"""

from functools import lru_cache

from supabase import Client, create_client

from src.config.settings import Settings, get_settings
from src.database.store import FileGameStore, GameStore, MemoryGameStore, SupabaseGameStore


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Create and cache a Supabase client instance."""
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError("SUPABASE_URL and SUPABASE_ANON_KEY must be set.")
    return create_client(settings.supabase_url, settings.supabase_anon_key)


def get_game_store(settings: Settings | None = None) -> GameStore:
    """Build the store selected by STORAGE_BACKEND."""
    settings = settings or get_settings()
    if settings.storage_backend == "supabase":
        return SupabaseGameStore(get_supabase_client(), slot=settings.save_slot)
    if settings.storage_backend == "file":
        return FileGameStore(settings.save_path, slot=settings.save_slot)
    return MemoryGameStore(slot=settings.save_slot)
