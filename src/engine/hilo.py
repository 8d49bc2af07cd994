"""
Hi-Lo - Game Engine

Two players share a deck. The dealer draws, the guesser calls whether the
next card will be higher or lower. Every inconclusive draw or correct call
adds a point to the pot; a wrong call pays the whole pot to the guesser
and empties the discard pile.

Turn state is never stored directly: it follows from which player is
active and that player's role. The only deferred work is the continuation
that runs after a guess result has been shown, and it is kept as explicit
engine state (pending_resolution) so it survives a save and restore.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Sequence

from src.channel.bus import EventChannel
from src.channel.events import EventPayload, GameEvent
from src.engine.base import (
    Guess,
    PlayerState,
    Resolution,
    Role,
    TimingConfig,
    TurnPhase,
)
from src.engine.deck import Deck
from src.engine.errors import InvalidMoveError, StaleOrCorruptStateError
from src.engine.scheduler import Scheduler
from src.engine.validators import (
    validate_guess,
    validate_guess_has_card,
    validate_players,
    validate_score,
)

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Uh oh! There was a problem with your game. Start a new game?"


def build_error_message(detail: str | None = None) -> str:
    """Text for the confirm-to-reset prompt."""
    if detail:
        return f"{detail} Start a new game?"
    return DEFAULT_ERROR_MESSAGE


def error_event(message: str, detail: str | None = None) -> EventPayload:
    """ERROR notification: the reset prompt text plus the underlying cause."""
    return EventPayload(
        event=GameEvent.ERROR,
        data={"message": message, "detail": detail},
    )


def new_players() -> list[PlayerState]:
    """Player 1 starts as the active dealer, Player 2 as the guesser."""
    return [
        PlayerState(
            id=f"player{i}",
            name=f"Player {i}",
            role=Role.DEALER if i == 1 else Role.GUESSER,
            active=i == 1,
        )
        for i in range(1, HiLoEngine.NUM_PLAYERS + 1)
    ]


class HiLoEngine:
    """
    Turn state machine for a two-player game.

    The engine owns the players, the pot and the deck. It reads commands
    from its EventChannel and publishes RENDER, SAVE, GUESS_RESULT,
    INVALID_MOVE, GAME_OVER and ERROR notifications back onto it.
    """

    NUM_PLAYERS = 2

    def __init__(
        self,
        channel: EventChannel,
        *,
        deck: Deck | None = None,
        players: Sequence[PlayerState] | None = None,
        pot: int = 0,
        scheduler: Scheduler | None = None,
        timing: TimingConfig | None = None,
        game_over: bool = False,
        pending_resolution: Resolution | None = None,
    ) -> None:
        self.channel = channel
        self.deck = deck if deck is not None else Deck()
        self.players = list(validate_players(players if players is not None else new_players()))
        self.pot = validate_score(pot)
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.timing = timing if timing is not None else TimingConfig()
        self.game_over = game_over
        self.pending_resolution: Resolution | None = None

        if pending_resolution is not None:
            self._schedule_resolution(pending_resolution)

    # -- Queries ----------------------------------------------------------

    @property
    def active_player(self) -> PlayerState:
        return next(p for p in self.players if p.active)

    @property
    def inactive_player(self) -> PlayerState:
        return next(p for p in self.players if not p.active)

    @property
    def dealer(self) -> PlayerState:
        return next(p for p in self.players if p.role is Role.DEALER)

    @property
    def guesser(self) -> PlayerState:
        return next(p for p in self.players if p.role is Role.GUESSER)

    @property
    def phase(self) -> TurnPhase:
        if self.game_over:
            return TurnPhase.GAME_OVER
        if self.active_player.role is Role.GUESSER:
            return TurnPhase.AWAITING_GUESS
        return TurnPhase.AWAITING_DRAW

    @property
    def is_resolving(self) -> bool:
        return self.pending_resolution is not None

    def get_player(self, player_id: str) -> PlayerState:
        for player in self.players:
            if player.id == player_id:
                return player
        raise KeyError(player_id)

    # -- Commands ---------------------------------------------------------

    def submit_guess(self, guess: Guess | str, player_id: str | None = None) -> None:
        """Record the active guesser's call and hand the turn to the dealer."""
        player = self._require_turn(player_id)
        if player.role is not Role.GUESSER:
            raise InvalidMoveError(
                f"{player.name}, you're the dealer. Draw a card instead.", player.id
            )
        try:
            guess = validate_guess(guess)
        except ValueError as exc:
            raise InvalidMoveError(str(exc), player.id) from exc

        # Wraps to 0 on what would be the 4th uninterrupted guess
        player.set_guess(guess).set_guess_count(
            0 if player.guess_count > 2 else player.guess_count + 1
        )
        logger.info(
            "%s guessed %s (guess count %d)", player.name, guess.value, player.guess_count
        )
        self._switch_players()

    def pass_turn(self, player_id: str | None = None) -> None:
        """The guesser gives up the call: roles swap and the turn alternates."""
        player = self._require_turn(player_id)
        if player.role is not Role.GUESSER:
            raise InvalidMoveError(
                f"{player.name}, only the guesser can pass.", player.id
            )
        if not player.can_pass:
            raise InvalidMoveError(
                f"{player.name}, you've guessed {player.guess_count} times in a row "
                "and can't pass this time.",
                player.id,
            )

        player.clear_guess()
        self._switch_roles()
        logger.info("%s passed; %s is now the guesser", player.name, self.guesser.name)
        self._switch_players()

    def request_draw(self, player_id: str | None = None) -> None:
        """Draw the next card if the active player is the dealer."""
        player = self._require_turn(player_id)
        if player.role is not Role.DEALER:
            raise InvalidMoveError(
                f"{player.name}, it's not your turn to draw yet. Take a guess instead.",
                player.id,
            )

        card = self.deck.draw()
        logger.info("%s drew the %s (%d left)", player.name, card, self.deck.remaining)
        self.on_card_drawn()

    def on_card_drawn(self) -> None:
        """
        React to a fresh card.

        The last card ends the game; a pending guess is checked; otherwise
        this was the first draw of a pot cycle and the pot grows by one.
        """
        guesser = self.inactive_player
        if self.deck.remaining == 1:
            self._on_last_card_draw()
        elif guesser.guess is not None:
            self._check_guess(guesser)
        else:
            self.pot += 1
            self._switch_players()

    # -- Guess resolution -------------------------------------------------

    def _check_guess(self, guesser: PlayerState) -> None:
        is_higher = self.deck.is_active_card_higher_than_prev()
        if is_higher:
            is_correct = guesser.guess is Guess.HIGHER
        else:
            is_correct = guesser.guess is Guess.LOWER

        if is_correct:
            self._on_correct_guess(guesser)
        else:
            self._on_incorrect_guess(guesser)

    def _on_correct_guess(self, guesser: PlayerState) -> None:
        """Show the result, then grow the pot and hand the turn back."""
        logger.info("%s guessed correctly, pot stays at %d", guesser.name, self.pot)
        self.render()
        self._show_guess_result(guesser, True)
        self._schedule_resolution(Resolution.CORRECT)
        self.save()

    def _on_incorrect_guess(self, guesser: PlayerState) -> None:
        """Show the result, pay the pot to the guesser, then clear the pile."""
        logger.info("%s guessed wrong and wins %d points", guesser.name, self.pot)
        self.render()
        self._show_guess_result(guesser, False)
        guesser.increment_score(self.pot).clear_guess()
        self._schedule_resolution(Resolution.INCORRECT)
        self._commit()

    def _schedule_resolution(self, resolution: Resolution) -> None:
        self.pending_resolution = resolution
        continuation: Callable[[], None] = (
            self._finish_correct_guess
            if resolution is Resolution.CORRECT
            else self._clear_discard_pile
        )
        self.scheduler.call_later(
            self.timing.delay_for(resolution), continuation, f"{resolution.value}-guess"
        )

    def _finish_correct_guess(self) -> None:
        self.pending_resolution = None
        self.pot += 1
        self._switch_players()

    def _clear_discard_pile(self) -> None:
        self.pending_resolution = None
        self.pot = 0
        self.deck.clear_active_card()
        self._commit()

    def _show_guess_result(self, guesser: PlayerState, is_correct: bool) -> None:
        self.channel.publish(EventPayload(
            event=GameEvent.GUESS_RESULT,
            player_id=guesser.id,
            data={
                "correct": is_correct,
                "message": "Correct!" if is_correct else "Wrong!",
                "kind": "success" if is_correct else "error",
            },
        ))

    def _on_last_card_draw(self) -> None:
        # Terminal: no winner is declared and an outstanding guess stays unresolved
        self.game_over = True
        scores = {p.id: p.score for p in self.players}
        logger.info("Last card drawn, game over. Scores: %s", scores)
        self.channel.publish(EventPayload(
            event=GameEvent.GAME_OVER,
            data={"scores": scores, "pot": self.pot},
        ))
        self._commit()

    # -- Turn bookkeeping -------------------------------------------------

    def _require_turn(self, player_id: str | None) -> PlayerState:
        """The active player, provided the engine can accept a command now."""
        player = self.active_player
        if self.game_over:
            raise InvalidMoveError("The game is over.", player_id or player.id)
        if self.is_resolving:
            raise InvalidMoveError(
                "Hold on, the last guess is still being settled.", player_id or player.id
            )
        if player_id is not None and player_id != player.id:
            raise InvalidMoveError(
                f"It's not your turn, it's {player.name}'s turn.", player_id
            )
        return player

    def _switch_players(self) -> None:
        for player in self.players:
            player.toggle()
        self._commit()

    def _switch_roles(self) -> None:
        for player in self.players:
            player.switch_role()

    def _commit(self) -> None:
        """A transition is complete: redraw, then persist."""
        self.render()
        self.save()

    # -- Notifications ----------------------------------------------------

    def render(self) -> None:
        self.channel.publish(EventPayload(
            event=GameEvent.RENDER,
            player_id=self.active_player.id,
            data={"phase": self.phase.name, "pot": self.pot},
        ))

    def save(self) -> None:
        self.channel.publish(EventPayload(
            event=GameEvent.SAVE,
            data={"state": self.serialize()},
        ))

    def error(self, detail: str | None = None) -> None:
        """Announce an unrecoverable problem; consumers offer a reset."""
        message = build_error_message(detail)
        logger.error("Game error: %s", message)
        self.channel.publish(error_event(message, detail))

    # -- Channel dispatch -------------------------------------------------

    def dispatch(self, command: EventPayload) -> bool:
        """
        Apply one command.

        Returns:
            True if the command was applied, False if it was rejected. A
            rejection publishes INVALID_MOVE and leaves the state untouched.
        """
        if not command.event.is_command:
            raise ValueError(f"{command.event.name} is not a command event.")

        try:
            if command.event is GameEvent.DRAW_CARD:
                self.request_draw(command.player_id)
            elif command.event is GameEvent.SUBMIT_GUESS:
                self.submit_guess(command.data.get("guess"), command.player_id)
            else:
                self.pass_turn(command.player_id)
        except InvalidMoveError as exc:
            logger.info("Rejected %s: %s", command.event.name, exc.message)
            self.channel.publish(EventPayload(
                event=GameEvent.INVALID_MOVE,
                player_id=exc.player_id,
                data={"message": exc.message, "command": command.event.name},
            ))
            return False
        return True

    def process_commands(self) -> int:
        """Apply every queued command. Returns how many were applied."""
        return sum(1 for command in self.channel.drain() if self.dispatch(command))

    def tick(self) -> int:
        """Run due continuations."""
        return self.scheduler.run_due()

    # -- Persistence ------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "pot": self.pot,
            "players": [player.to_dict() for player in self.players],
            "deck": self.deck.to_dict(),
            "gameOver": self.game_over,
            "pendingResolution": (
                self.pending_resolution.value if self.pending_resolution else None
            ),
        }

    def serialize(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        channel: EventChannel,
        *,
        scheduler: Scheduler | None = None,
        timing: TimingConfig | None = None,
    ) -> "HiLoEngine":
        """
        Rebuild an engine from to_dict() output.

        Raises:
            StaleOrCorruptStateError: If the data is incomplete or breaks a
                game invariant
        """
        try:
            players = [PlayerState.from_dict(p) for p in data["players"]]
            deck = Deck.from_dict(data["deck"])
            game_over = bool(data.get("gameOver", False))
            pending = data.get("pendingResolution")
            if not game_over and deck.remaining < 2:
                raise ValueError(
                    f"A game in progress needs at least 2 cards, found {deck.remaining}."
                )
            if data["deck"].get("remaining", deck.remaining) != deck.remaining:
                raise ValueError("Deck remaining count does not match its cards.")
            validate_guess_has_card(players, deck.active_card, pending or None)
            return cls(
                channel,
                deck=deck,
                players=players,
                pot=data["pot"],
                scheduler=scheduler,
                timing=timing,
                game_over=game_over,
                pending_resolution=Resolution(pending) if pending else None,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise StaleOrCorruptStateError(f"Saved game is invalid: {exc}") from exc

    @classmethod
    def restore(
        cls,
        serialized: str,
        channel: EventChannel,
        *,
        scheduler: Scheduler | None = None,
        timing: TimingConfig | None = None,
    ) -> "HiLoEngine":
        """Rebuild an engine from serialize() output."""
        try:
            data = json.loads(serialized)
        except (TypeError, json.JSONDecodeError) as exc:
            raise StaleOrCorruptStateError(f"Saved game is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise StaleOrCorruptStateError("Saved game must be a JSON object.")
        return cls.from_dict(data, channel, scheduler=scheduler, timing=timing)
