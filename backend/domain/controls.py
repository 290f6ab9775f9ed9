"""
Keyboard bindings for the input collaborator.
"""

from typing import Dict, Optional

from .constants import Direction, UP, DOWN, LEFT, RIGHT

# Arrow keys plus WASD, matched case-insensitively for letters
KEY_BINDINGS: Dict[str, Direction] = {
    "ArrowUp": UP,
    "ArrowDown": DOWN,
    "ArrowLeft": LEFT,
    "ArrowRight": RIGHT,
    "w": UP,
    "s": DOWN,
    "a": LEFT,
    "d": RIGHT,
}


def direction_for_key(key: Optional[str]) -> Optional[Direction]:
    """Map a key name to a Direction, or None for keys the game ignores."""
    if not key:
        return None
    if key in KEY_BINDINGS:
        return KEY_BINDINGS[key]
    if len(key) == 1:
        return KEY_BINDINGS.get(key.lower())
    return None


def parse_direction(value: Optional[str]) -> Optional[Direction]:
    """Parse a direction name such as "up" or "LEFT"."""
    if not value or not isinstance(value, str):
        return None
    try:
        return Direction(value.strip().upper())
    except ValueError:
        return None
