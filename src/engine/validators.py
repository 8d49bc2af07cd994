"""
Hi-Lo - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
"""

from typing import Sequence

from src.engine.base import Guess, PlayerState, Role

# Short forms used by the guess buttons
_GUESS_ALIASES: dict[str, Guess] = {
    "hi": Guess.HIGHER,
    "higher": Guess.HIGHER,
    "lo": Guess.LOWER,
    "lower": Guess.LOWER,
}


def validate_guess(guess: Guess | str) -> Guess:
    """
    Normalize a guess.

    Args:
        guess: A Guess, or one of "higher", "lower", "hi", "lo"

    Returns:
        The matching Guess

    Raises:
        ValueError: If the guess is not recognized
    """
    if isinstance(guess, Guess):
        return guess
    if isinstance(guess, str) and guess.lower() in _GUESS_ALIASES:
        return _GUESS_ALIASES[guess.lower()]
    raise ValueError(f"Guess must be 'higher' or 'lower', got {guess!r}.")


def validate_score(score: int, allow_negative: bool = False) -> int:
    """
    Validate a score or pot value.

    Args:
        score: Score to validate
        allow_negative: Whether negative scores are allowed

    Returns:
        Validated score

    Raises:
        ValueError: If score is invalid
    """
    if not isinstance(score, int) or isinstance(score, bool):
        raise ValueError(f"Score must be an integer, got {type(score).__name__}.")

    if not allow_negative and score < 0:
        raise ValueError(f"Score cannot be negative, got {score}.")

    return score


def validate_guess_count(count: int) -> int:
    """Guess counts wrap back to 0 after 3, so only 0-3 is valid."""
    if not isinstance(count, int) or isinstance(count, bool):
        raise ValueError(f"Guess count must be an integer, got {type(count).__name__}.")
    if not (0 <= count <= PlayerState.MAX_GUESSES_BEFORE_PASS_LOCK):
        raise ValueError(f"Guess count must be 0-3, got {count}.")
    return count


def validate_players(players: Sequence[PlayerState]) -> tuple[PlayerState, PlayerState]:
    """
    Check the two-player invariants.

    Exactly two players, exactly one of them active, one dealer and one
    guesser, and distinct ids.

    Returns:
        The players as a pair

    Raises:
        ValueError: If any invariant is broken
    """
    if len(players) != 2:
        raise ValueError(f"Hi-Lo needs exactly 2 players, got {len(players)}.")

    first, second = players
    if first.id == second.id:
        raise ValueError(f"Player ids must be unique, got {first.id!r} twice.")

    active_count = sum(1 for p in players if p.active)
    if active_count != 1:
        raise ValueError(f"Exactly one player must be active, got {active_count}.")

    if {first.role, second.role} != {Role.DEALER, Role.GUESSER}:
        raise ValueError(
            f"Players need one dealer and one guesser, got "
            f"{first.role.value} and {second.role.value}."
        )

    for player in players:
        validate_score(player.score)
        validate_guess_count(player.guess_count)

    return first, second


def validate_guess_has_card(
    players: Sequence[PlayerState],
    active_card: object | None,
    pending_resolution: object | None = None,
) -> None:
    """
    A guess waiting on the next draw needs a face-up card to compare against.

    Raises:
        ValueError: If the inactive player holds a guess, or a guess is
            being settled, while the discard pile is empty
    """
    if active_card is not None:
        return
    for player in players:
        if not player.active and player.guess is not None:
            raise ValueError(
                f"{player.name} guessed {player.guess.value} but no card is showing."
            )
    if pending_resolution is not None:
        raise ValueError("A guess is being settled but no card is showing.")
