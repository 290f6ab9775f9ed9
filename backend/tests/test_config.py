"""
Tests for config.py - environment-driven settings.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config  # noqa: E402
from config import GameConfig, load_config, DEFAULT_COMMENTARY_MODEL  # noqa: E402

ENV_VARS = [
    "SNAKE_GRID_SIZE", "SNAKE_BASE_SPEED_MS", "SNAKE_MIN_SPEED_MS", "SNAKE_SCORE_STEP",
    "SNAKE_SPEED_DECREMENT_MS", "SNAKE_FOOD_SCORE", "SNAKE_LEADERBOARD_SIZE",
    "COMMENTARY_MODEL", "SNAKE_DB_PATH",
]


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    cfg = load_config()
    assert cfg.grid_size == 20
    assert cfg.base_speed_ms == 150
    assert cfg.min_speed_ms == 50
    assert cfg.score_step == 50
    assert cfg.speed_decrement_ms == 5
    assert cfg.food_score == 10
    assert cfg.leaderboard_size == 5
    assert cfg.commentary_model == DEFAULT_COMMENTARY_MODEL
    assert cfg.db_path is None


def test_env_overrides(clean_env):
    clean_env.setenv("SNAKE_GRID_SIZE", "12")
    clean_env.setenv("SNAKE_FOOD_SCORE", " 5 ")
    clean_env.setenv("COMMENTARY_MODEL", "openai/gpt-4o-mini")
    clean_env.setenv("SNAKE_DB_PATH", "/tmp/snake-test.db")

    cfg = load_config()

    assert cfg.grid_size == 12
    assert cfg.food_score == 5
    assert cfg.commentary_model == "openai/gpt-4o-mini"
    assert cfg.db_path == "/tmp/snake-test.db"


def test_blank_env_uses_default(clean_env):
    clean_env.setenv("SNAKE_GRID_SIZE", "")
    assert load_config().grid_size == 20


def test_non_integer_env_raises(clean_env):
    clean_env.setenv("SNAKE_BASE_SPEED_MS", "fast")
    with pytest.raises(ValueError, match="SNAKE_BASE_SPEED_MS") as excinfo:
        load_config()
    assert excinfo.value.__suppress_context__
    assert excinfo.value.__cause__ is None


@pytest.mark.parametrize("kwargs", [
    {"grid_size": 4},
    {"base_speed_ms": 0},
    {"min_speed_ms": -1},
    {"score_step": 0},
    {"food_score": 0},
    {"leaderboard_size": 0},
    {"speed_decrement_ms": -5},
])
def test_invalid_values_raise(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_custom_speed_policy():
    cfg = GameConfig(base_speed_ms=200, min_speed_ms=100, score_step=10, speed_decrement_ms=20)
    assert cfg.tick_period_ms(0) == 200
    assert cfg.tick_period_ms(10) == 180
    assert cfg.tick_period_ms(30) == 140
    assert cfg.tick_period_ms(100) == 100
