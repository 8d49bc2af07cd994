"""
Hi-Lo Session.

Wires the engine to its channel, scheduler, draw debounce and saved game.
"""

from src.session.guard import DrawGuard
from src.session.manager import GameSession

__all__ = ["DrawGuard", "GameSession"]
