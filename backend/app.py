import os
import atexit
import logging
import threading
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv

from domain.controls import direction_for_key, parse_direction
from game_loop import SnakeGame, create_game

load_dotenv()

app = Flask(__name__)
logging.basicConfig(level=logging.INFO)

# Enable CORS for API routes so the browser front end (different origin) can call Flask
# Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
if allowed_origins_env:
    allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
else:
    # sensible defaults for local dev
    allowed_origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

CORS(app, resources={r"/api/*": {"origins": allowed_origins}})

# One game per process; created lazily so importing the app has no side effects
_game: Optional[SnakeGame] = None
_game_init_lock = threading.Lock()


def get_game() -> SnakeGame:
    global _game
    with _game_init_lock:
        if _game is None:
            _game = create_game()
        return _game


@atexit.register
def shutdown_game() -> None:
    """Stop the tick timer and commentary worker when the process exits."""
    global _game
    with _game_init_lock:
        if _game is not None:
            _game.close()
            _game = None


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})


@app.route("/api/state", methods=["GET"])
def get_state():
    """
    Current snapshot for the renderer: snake, food, grid size, status,
    score, commentary message and tick period.
    """
    return jsonify(get_game().snapshot().to_dict())


@app.route("/api/game/start", methods=["POST"])
def start_game():
    """
    Start a new game, or restart after a game over.

    Returns:
    - 200: the new game state
    - 409: a game is already running or paused
    """
    game = get_game()
    if not game.start():
        return jsonify({"error": f"Cannot start while {game.status.value}"}), 409
    return jsonify(game.snapshot().to_dict())


@app.route("/api/game/pause", methods=["POST"])
def pause_game():
    game = get_game()
    if not game.pause():
        return jsonify({"error": f"Cannot pause while {game.status.value}"}), 409
    return jsonify(game.snapshot().to_dict())


@app.route("/api/game/resume", methods=["POST"])
def resume_game():
    game = get_game()
    if not game.resume():
        return jsonify({"error": f"Cannot resume while {game.status.value}"}), 409
    return jsonify(game.snapshot().to_dict())


@app.route("/api/game/direction", methods=["POST"])
def change_direction():
    """
    Queue a direction change for the next tick.

    Body: {"direction": "UP"} or {"key": "ArrowUp"}

    Returns:
    - accepted: False when the game is not running or the move reverses the snake
    - 400: no recognizable direction in the body
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    if "direction" in payload:
        direction = parse_direction(payload.get("direction"))
    else:
        direction = direction_for_key(payload.get("key"))

    if direction is None:
        return jsonify({"error": "Expected a 'direction' (UP/DOWN/LEFT/RIGHT) or a movement 'key'"}), 400

    accepted = get_game().queue_direction(direction)
    return jsonify({"accepted": accepted, "direction": direction.value})


@app.route("/api/leaderboard", methods=["GET"])
def get_leaderboard():
    """
    Top scores, highest first.
    """
    entries = get_game().high_scores
    return jsonify({
        "scores": [entry.to_dict() for entry in entries],
        "count": len(entries)
    })


if __name__ == "__main__":
    # Run the Flask app in debug mode.
    app.run(debug=os.getenv("FLASK_DEBUG"))
