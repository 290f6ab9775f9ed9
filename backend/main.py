"""
Terminal runner: plays one headless game with an automated player and
prints the board after every tick.
"""

import argparse
import json
import random
import time
from dataclasses import replace
from typing import Any, Dict, Optional

from config import load_config
from domain.constants import GameStatus
from game_loop import SnakeGame, create_game
from players import AVAILABLE_VARIANTS, Player, get_player_class, list_variants


def wait_for_commentary(game: SnakeGame, timeout: float = 20.0, poll: float = 0.1) -> None:
    deadline = time.time() + timeout
    while game.commentary_pending and time.time() < deadline:
        time.sleep(poll)


def run_game(game: SnakeGame, player: Player, max_ticks: Optional[int] = None, delay: bool = True, quiet: bool = False) -> Dict[str, Any]:
    """
    Drive ``game`` tick by tick, asking ``player`` for a direction first.

    Returns:
        A dictionary summarizing the game (score, ticks, collision, message).
    """
    game.start()

    while game.status == GameStatus.PLAYING:
        if max_ticks is not None and game.ticks >= max_ticks:
            print(f"Stopping after {max_ticks} ticks.")
            break

        state = game.snapshot()
        game.queue_direction(player.get_move(state))
        collision = game.tick()

        if not quiet:
            print("\n" + game.snapshot().print_board() + "\n")
            if collision is not None:
                print(f"Tick {game.ticks}: {collision.value} collision, score {game.score}")

        if delay:
            time.sleep(game.tick_period_ms / 1000.0)

    if game.status == GameStatus.GAME_OVER:
        wait_for_commentary(game)

    state = game.snapshot()
    return {
        "status": state.status.value,
        "score": state.score,
        "ticks": game.ticks,
        "collision": game.last_collision.value if game.last_collision else None,
        "length": len(state.snake_positions),
        "message": state.message,
        "high_scores": [entry.to_dict() for entry in game.high_scores],
    }


def main():
    parser = argparse.ArgumentParser(
        description="Play a game of Retro Snake in the terminal with an automated player."
    )
    parser.add_argument("--player", type=str, choices=AVAILABLE_VARIANTS, default=None,
                        help="Automated player variant (default: greedy)")
    parser.add_argument("--list-players", action="store_true",
                        help="List player variants and exit")
    parser.add_argument("--grid-size", type=int, required=False, default=None,
                        help="Board size N for an N x N grid (overrides SNAKE_GRID_SIZE)")
    parser.add_argument("--max-ticks", type=int, required=False, default=None,
                        help="Stop after this many ticks even if the snake is alive")
    parser.add_argument("--seed", type=int, required=False, default=None,
                        help="Random seed for food placement and the player")
    parser.add_argument("--no-delay", action="store_true",
                        help="Do not sleep between ticks")
    parser.add_argument("--quiet", action="store_true",
                        help="Only print the final summary")

    args = parser.parse_args()

    if args.list_players:
        for variant in list_variants():
            print(f"{variant['key']:8s} {variant['description']}")
        return

    config = load_config()
    if args.grid_size is not None:
        config = replace(config, grid_size=args.grid_size)

    rng = random.Random(args.seed)
    player = get_player_class(args.player)(rng=random.Random(args.seed))

    with create_game(config, rng=rng, use_timer=False) as game:
        result = run_game(game, player, max_ticks=args.max_ticks, delay=not args.no_delay, quiet=args.quiet)

    print("\nGame Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
