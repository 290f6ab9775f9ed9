"""
Data access layer for Retro Snake.

Provides the leaderboard model and its SQLite-backed store.
"""

from .leaderboard import ScoreEntry, LeaderboardStore, merge_score, SCORES_KEY

__all__ = [
    'ScoreEntry',
    'LeaderboardStore',
    'merge_score',
    'SCORES_KEY',
]
