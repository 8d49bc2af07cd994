"""Tests for src/ui/presenter.py — what the table shows."""

import pytest

from src.engine.deck import Deck
from src.ui.presenter import build_table_view, cards_left_text, points_label


class TestLabels:
    @pytest.mark.parametrize("points,label", [(0, "points"), (1, "point"), (2, "points")])
    def test_points_label(self, points, label):
        assert points_label(points) == label

    def test_cards_left(self):
        assert cards_left_text(1) == "1 card left"
        assert cards_left_text(52) == "52 cards left"


class TestTableView:
    def test_fresh_game(self, make_engine):
        view = build_table_view(make_engine("5H", "9S"))

        assert view.headline == "Player 1's turn (dealer)"
        assert view.can_draw and not view.can_guess and not view.can_pass
        assert view.points_value == 0
        assert view.points_label == "points"
        assert view.active_card == ""
        assert [p.is_active for p in view.players] == [True, False]

    def test_guesser_turn(self, make_engine):
        engine = make_engine("5H", "9S")
        engine.request_draw()
        view = build_table_view(engine)

        assert view.headline == "Player 2's turn (guesser)"
        assert view.can_guess and view.can_pass and not view.can_draw
        assert view.active_card == "5 of hearts"
        assert view.instruction == "Will the next card be higher or lower than the 5 of hearts?"
        assert view.points_label == "point"

    def test_dealer_sees_pending_guess(self, make_engine):
        engine = make_engine("5H", "9S")
        engine.request_draw()
        engine.submit_guess("lower")
        view = build_table_view(engine)

        assert view.guess_info == "Player 2 guessed lower."
        assert view.instruction == "Draw a card from the pile."

    def test_pass_disabled_after_three_guesses(self, make_engine, guesser_to_move):
        engine = make_engine(players=guesser_to_move(guess_count=3))
        engine.deck.draw()
        view = build_table_view(engine)
        assert view.can_guess
        assert not view.can_pass

    def test_controls_locked_while_resolving(self, make_engine):
        engine = make_engine("5H", "9S")
        engine.request_draw()
        engine.submit_guess("higher")
        engine.request_draw()
        view = build_table_view(engine)

        assert view.is_resolving
        assert not (view.can_draw or view.can_guess or view.can_pass)
        assert view.instruction == "Checking the guess..."

    def test_game_over(self, make_engine):
        engine = make_engine(deck=Deck.from_codes(["5H", "9S"]))
        engine.request_draw()
        view = build_table_view(engine)

        assert view.is_game_over
        assert view.headline == "Game over"
        assert view.cards_left == "1 card left"
        assert "Final scores: Player 1 0, Player 2 0" in view.instruction
