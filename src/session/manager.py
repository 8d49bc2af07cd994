"""
Hi-Lo - Game Session

Ties one engine to its event channel, scheduler, draw debounce and saved
game store. The presentation layer talks to the session; the session posts
commands to the channel and lets the engine process them.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from src.channel.bus import EventChannel
from src.channel.events import (
    EventPayload,
    GameEvent,
    draw_command,
    guess_command,
    pass_command,
)
from src.database.models import parse_snapshot
from src.database.store import GameStore
from src.engine.base import Guess, TimingConfig
from src.engine.deck import Deck
from src.engine.errors import StaleOrCorruptStateError
from src.engine.hilo import HiLoEngine, build_error_message, error_event
from src.engine.scheduler import Scheduler
from src.session.guard import DrawGuard

logger = logging.getLogger(__name__)


class GameSession:
    """Owns the running game for one table.

    After start(), ``engine`` is either a playable game or None. None means
    the saved game could not be restored: an ERROR notification has been
    published and nothing is playable until confirm_reset(True).
    """

    def __init__(
        self,
        store: GameStore,
        *,
        timing: TimingConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
        channel: EventChannel | None = None,
        seed: int | None = None,
    ) -> None:
        self.store = store
        self.timing = timing or TimingConfig()
        self.channel = channel or EventChannel()
        self.scheduler = Scheduler(clock)
        self.guard = DrawGuard(self.timing.draw_cooldown_seconds, clock)
        self.seed = seed
        self.engine: HiLoEngine | None = None
        self.error_message: str | None = None

        self.channel.subscribe(GameEvent.SAVE, self._persist)
        self.channel.subscribe(GameEvent.ERROR, self._remember_error)

    # -- Lifecycle --------------------------------------------------------

    def start(self) -> HiLoEngine | None:
        """Resume the saved game, or deal a new one if nothing is saved."""
        serialized = self.store.load_game()
        if serialized is None:
            return self.new_game()

        try:
            snapshot = parse_snapshot(serialized)
            self.engine = HiLoEngine.from_dict(
                snapshot.to_state(),
                self.channel,
                scheduler=self.scheduler,
                timing=self.timing,
            )
        except StaleOrCorruptStateError as exc:
            logger.warning("Could not restore saved game: %s", exc)
            self.engine = None
            self.channel.publish(error_event(build_error_message(), str(exc)))
            return None

        logger.info("Restored saved game (pot %d)", self.engine.pot)
        self.engine.render()
        return self.engine

    def new_game(self) -> HiLoEngine:
        """Deal a fresh game and save it."""
        self.scheduler.cancel_all()
        self.guard.reset()
        self.error_message = None
        self.engine = HiLoEngine(
            self.channel,
            deck=Deck(seed=self.seed),
            scheduler=self.scheduler,
            timing=self.timing,
        )
        logger.info("Started a new game")
        self.engine.render()
        self.engine.save()
        return self.engine

    def confirm_reset(self, accepted: bool) -> HiLoEngine | None:
        """Answer the reset prompt. Accepting wipes the save and starts over."""
        if not accepted:
            return self.engine
        self.store.clear_game()
        return self.new_game()

    # -- Commands ---------------------------------------------------------

    def request_draw(self, player_id: str | None = None) -> bool:
        """Ask to draw. Repeat requests inside the cooldown are refused."""
        if not self.guard.try_acquire():
            logger.debug("Draw throttled, %.2fs left", self.guard.remaining())
            self.channel.publish(EventPayload(
                event=GameEvent.INVALID_MOVE,
                player_id=player_id,
                data={"message": "Hold on, a card is already being drawn.",
                      "command": GameEvent.DRAW_CARD.name},
            ))
            return False
        return self._run(draw_command(player_id))

    def submit_guess(self, guess: Guess | str, player_id: str | None = None) -> bool:
        return self._run(guess_command(guess, player_id))

    def pass_turn(self, player_id: str | None = None) -> bool:
        return self._run(pass_command(player_id))

    def tick(self) -> int:
        """Run continuations that have come due."""
        return self.scheduler.run_due()

    def _run(self, command: EventPayload) -> bool:
        if self.engine is None:
            self.channel.publish(EventPayload(
                event=GameEvent.INVALID_MOVE,
                player_id=command.player_id,
                data={"message": "There's no game in progress.",
                      "command": command.event.name},
            ))
            return False
        self.channel.post(command)
        return self.engine.process_commands() > 0

    # -- Subscribers ------------------------------------------------------

    def _persist(self, payload: EventPayload) -> None:
        self.store.save_game(payload.data["state"])

    def _remember_error(self, payload: EventPayload) -> None:
        self.error_message = payload.data.get("message")
