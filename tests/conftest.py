"""
Hi-Lo - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

from typing import Callable

import pytest

from src.channel.bus import EventChannel
from src.channel.events import EventPayload
from src.engine.base import PlayerState, Role, TimingConfig
from src.engine.deck import Deck
from src.engine.hilo import HiLoEngine
from src.engine.scheduler import ManualClock, Scheduler


# =============================================================================
# DECKS
# =============================================================================

# Low clubs placed under the cards a test cares about, so the pile never
# runs down to its last card by accident.
FILLER_CODES: tuple[str, ...] = ("2C", "3C", "4C", "5C", "6C", "7C", "8C", "9C")


@pytest.fixture
def stacked_deck() -> Callable[..., Deck]:
    """Build a deck that deals the given codes first, then filler cards."""
    def _make(*codes: str, **kwargs) -> Deck:
        return Deck.from_codes([*codes, *FILLER_CODES], **kwargs)
    return _make


# =============================================================================
# TIME AND CHANNEL
# =============================================================================

@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def scheduler(clock: ManualClock) -> Scheduler:
    return Scheduler(clock)


@pytest.fixture
def timing() -> TimingConfig:
    """Display 1.0s, correct-guess buffer 0.1s, draw cooldown 1.5s."""
    return TimingConfig()


@pytest.fixture
def channel() -> EventChannel:
    return EventChannel()


@pytest.fixture
def events(channel: EventChannel) -> list[EventPayload]:
    """Every notification published on the channel, in order."""
    received: list[EventPayload] = []
    channel.subscribe(None, received.append)
    return received


# =============================================================================
# ENGINES
# =============================================================================

@pytest.fixture
def make_engine(channel, scheduler, timing, stacked_deck) -> Callable[..., HiLoEngine]:
    """Engine over a stacked deck; extra keyword args go to HiLoEngine."""
    def _make(*codes: str, deck: Deck | None = None, **kwargs) -> HiLoEngine:
        return HiLoEngine(
            channel,
            deck=deck if deck is not None else stacked_deck(*codes),
            scheduler=scheduler,
            timing=timing,
            **kwargs,
        )
    return _make


@pytest.fixture
def guesser_to_move() -> Callable[..., list[PlayerState]]:
    """Players with Player 2 as the active guesser."""
    def _make(guess_count: int = 0, **guesser_fields) -> list[PlayerState]:
        return [
            PlayerState(id="player1", name="Player 1", role=Role.DEALER, active=False),
            PlayerState(
                id="player2",
                name="Player 2",
                role=Role.GUESSER,
                active=True,
                guess_count=guess_count,
                **guesser_fields,
            ),
        ]
    return _make
