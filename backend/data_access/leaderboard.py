"""
Leaderboard persistence.

The top scores are stored as one JSON list under a fixed key. Reads are
forgiving: a missing or unreadable record is treated as an empty board.
"""

import json
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from domain.constants import LEADERBOARD_SIZE
from .repositories import KeyValueRepository

logger = logging.getLogger(__name__)

SCORES_KEY = "snake_scores"


@dataclass
class ScoreEntry:
    score: int
    date: str
    message: Optional[str] = None

    @classmethod
    def create(cls, score: int, today: Optional[date] = None) -> "ScoreEntry":
        return cls(score=score, date=(today or date.today()).isoformat())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreEntry":
        score = data["score"]
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise ValueError(f"Invalid score in leaderboard record: {score!r}")
        message = data.get("message")
        return cls(score=score, date=str(data.get("date", "")), message=message if message else None)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"score": self.score, "date": self.date}
        if self.message:
            data["message"] = self.message
        return data


def merge_score(entries: List[ScoreEntry], entry: ScoreEntry, limit: int = LEADERBOARD_SIZE) -> List[ScoreEntry]:
    """
    Insert ``entry`` and keep the best ``limit`` scores, highest first.

    The sort is stable and the new entry goes in last, so it never pushes
    out an existing entry with the same score.
    """
    merged = sorted(list(entries) + [entry], key=lambda e: e.score, reverse=True)
    return merged[:limit]


class LeaderboardStore:
    """
    Loads and saves the leaderboard through the key/value repository.
    """

    def __init__(self, db_path: Optional[str] = None, key: str = SCORES_KEY, limit: int = LEADERBOARD_SIZE):
        self.repo = KeyValueRepository(db_path)
        self.key = key
        self.limit = limit

    def load(self) -> List[ScoreEntry]:
        try:
            raw = self.repo.get(self.key)
        except Exception as e:
            logger.warning(f"Could not read leaderboard '{self.key}': {e}")
            return []

        if raw is None:
            return []

        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise ValueError(f"expected a list, got {type(records).__name__}")
            entries = [ScoreEntry.from_dict(record) for record in records]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Ignoring corrupt leaderboard record '{self.key}': {e}")
            return []

        entries.sort(key=lambda e: e.score, reverse=True)
        return entries[:self.limit]

    def save(self, entries: List[ScoreEntry]) -> None:
        payload = json.dumps([entry.to_dict() for entry in entries[:self.limit]])
        self.repo.set(self.key, payload)
