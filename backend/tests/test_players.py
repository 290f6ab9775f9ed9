"""
Tests for the automated players.
"""

import os
import random
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import GameState, GameStatus, UP, DOWN, LEFT, RIGHT, VALID_MOVES  # noqa: E402
from players import (  # noqa: E402
    AVAILABLE_VARIANTS,
    GreedyPlayer,
    Player,
    RandomPlayer,
    get_player_class,
    list_variants,
)


def make_state(snake, direction=UP, food=(0, 0), grid_size=10):
    return GameState(
        snake_positions=snake,
        food=food,
        grid_size=grid_size,
        status=GameStatus.PLAYING,
        score=0,
        direction=direction,
    )


class TestSafeMoves:
    """Tests for Player.safe_moves()."""

    def test_open_board_excludes_only_reversal(self):
        state = make_state([(5, 5), (5, 6)], direction=UP)
        assert set(Player.safe_moves(state)) == {UP, LEFT, RIGHT}

    def test_corner(self):
        state = make_state([(0, 0), (1, 0)], direction=LEFT)
        assert Player.safe_moves(state) == [DOWN]

    def test_tail_counts_as_blocked(self):
        state = make_state([(5, 5), (6, 5), (6, 6), (5, 6)], direction=LEFT)
        assert DOWN not in Player.safe_moves(state)

    def test_base_get_move_not_implemented(self):
        with pytest.raises(NotImplementedError):
            Player().get_move(make_state([(5, 5)]))


class TestRandomPlayer:
    """Tests for the RandomPlayer class."""

    def test_returns_valid_move(self):
        player = RandomPlayer(rng=random.Random(1))
        assert player.get_move(make_state([(5, 5)])) in VALID_MOVES

    def test_avoids_walls_when_possible(self):
        player = RandomPlayer(rng=random.Random(2))
        # Snake in the top-left corner heading up - only LEFT is off the board
        state = make_state([(0, 0), (0, 1)], direction=UP)

        for _ in range(20):
            move = player.get_move(state)
            assert move == RIGHT, f"Expected RIGHT, got {move}"

    def test_never_reverses(self):
        player = RandomPlayer(rng=random.Random(3))
        state = make_state([(5, 5), (5, 6)], direction=UP)
        for _ in range(50):
            assert player.get_move(state) != DOWN

    def test_no_safe_moves_keeps_direction(self):
        player = RandomPlayer(rng=random.Random(4))
        # Boxed in at the left wall by its own body
        state = make_state([(0, 1), (1, 1), (1, 0), (0, 0), (0, 2), (1, 2)], direction=LEFT)
        assert player.get_move(state) == LEFT


class TestGreedyPlayer:
    """Tests for the GreedyPlayer class."""

    def test_moves_towards_food(self):
        player = GreedyPlayer()
        state = make_state([(5, 5), (5, 6)], direction=UP, food=(9, 5))
        assert player.get_move(state) == RIGHT

    def test_prefers_current_direction_on_tie(self):
        player = GreedyPlayer()
        state = make_state([(5, 5), (5, 6)], direction=UP, food=(7, 3))
        assert player.get_move(state) == UP

    def test_turns_when_food_is_behind(self):
        player = GreedyPlayer()
        state = make_state([(5, 5), (5, 6)], direction=UP, food=(6, 9))
        assert player.get_move(state) == RIGHT


class TestVariantRegistry:
    """Tests for player variant lookup."""

    def test_default_is_greedy(self):
        assert get_player_class() is GreedyPlayer
        assert get_player_class("  ") is GreedyPlayer

    def test_lookup_is_case_insensitive(self):
        assert get_player_class("Random") is RandomPlayer

    def test_unknown_variant_raises(self):
        with pytest.raises(ValueError, match="Unknown player variant"):
            get_player_class("telepathic")

    def test_list_variants_matches_registry(self):
        assert {v["key"] for v in list_variants()} == set(AVAILABLE_VARIANTS)
