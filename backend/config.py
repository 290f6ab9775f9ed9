"""
Runtime configuration for Retro Snake.

Values come from the environment (optionally a .env file loaded with
python-dotenv) and fall back to the defaults in domain.constants.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from domain import constants

DEFAULT_COMMENTARY_MODEL = "google/gemini-2.5-flash"

# The initial snake is three cells tall and centred, which needs at least 5 rows
MIN_GRID_SIZE = 5


@dataclass(frozen=True)
class GameConfig:
    grid_size: int = constants.GRID_SIZE
    base_speed_ms: int = constants.BASE_SPEED_MS
    min_speed_ms: int = constants.MIN_SPEED_MS
    score_step: int = constants.SCORE_STEP
    speed_decrement_ms: int = constants.SPEED_DECREMENT_MS
    food_score: int = constants.FOOD_SCORE
    leaderboard_size: int = constants.LEADERBOARD_SIZE
    commentary_model: str = DEFAULT_COMMENTARY_MODEL
    db_path: Optional[str] = None

    def __post_init__(self):
        if self.grid_size < MIN_GRID_SIZE:
            raise ValueError(f"grid_size must be at least {MIN_GRID_SIZE}, got {self.grid_size}")
        for name in ("base_speed_ms", "min_speed_ms", "score_step", "food_score", "leaderboard_size"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.speed_decrement_ms < 0:
            raise ValueError(f"speed_decrement_ms must not be negative, got {self.speed_decrement_ms}")

    def tick_period_ms(self, score: int) -> int:
        """
        Delay between ticks for a given score.

        Every ``score_step`` points shaves ``speed_decrement_ms`` off the base
        delay, never going below ``min_speed_ms``.
        """
        steps = max(score, 0) // self.score_step
        return max(self.min_speed_ms, self.base_speed_ms - steps * self.speed_decrement_ms)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_config() -> GameConfig:
    """Build a GameConfig from the environment."""
    load_dotenv()
    return GameConfig(
        grid_size=_int_env("SNAKE_GRID_SIZE", constants.GRID_SIZE),
        base_speed_ms=_int_env("SNAKE_BASE_SPEED_MS", constants.BASE_SPEED_MS),
        min_speed_ms=_int_env("SNAKE_MIN_SPEED_MS", constants.MIN_SPEED_MS),
        score_step=_int_env("SNAKE_SCORE_STEP", constants.SCORE_STEP),
        speed_decrement_ms=_int_env("SNAKE_SPEED_DECREMENT_MS", constants.SPEED_DECREMENT_MS),
        food_score=_int_env("SNAKE_FOOD_SCORE", constants.FOOD_SCORE),
        leaderboard_size=_int_env("SNAKE_LEADERBOARD_SIZE", constants.LEADERBOARD_SIZE),
        commentary_model=os.getenv("COMMENTARY_MODEL") or DEFAULT_COMMENTARY_MODEL,
        db_path=os.getenv("SNAKE_DB_PATH") or None,
    )
