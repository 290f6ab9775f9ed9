"""
Game loop controller for Retro Snake.

SnakeGame owns the whole mutable game state (snake, food, score, status)
and advances it one tick at a time. Ticks come either from the built-in
TickTimer thread or from a driver calling tick() directly (terminal runner,
tests).

Concurrency rules:
  - a tick, start, pause/resume and game over all run under one re-entrant
    lock, so no tick starts before the previous one has finished;
  - input only ever writes the pending-direction slot, guarded by its own
    small lock;
  - the game over commentary runs on a worker thread and is applied only if
    the game is still in the GAME_OVER state of the episode that asked for it.
"""

import logging
import random
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, List, Optional

from commentary_providers import (
    CommentaryProviderInterface,
    create_commentary_provider,
    generate_game_over_message,
)
from config import GameConfig, load_config
from data_access.leaderboard import LeaderboardStore, ScoreEntry, merge_score
from domain.collision import CollisionKind, check_collision
from domain.constants import Direction, GameStatus, OFFLINE_MESSAGE
from domain.controls import direction_for_key
from domain.food import FoodSpawner
from domain.game_state import GameState
from domain.grid import Grid
from domain.snake import initial_snake, is_reversal, resolve_direction

logger = logging.getLogger(__name__)


class TickTimer(threading.Thread):
    """
    Calls ``callback`` every ``period_fn()`` milliseconds until stopped.

    The period is re-read before every wait so speed changes apply on the
    next tick.
    """

    def __init__(
        self,
        period_fn: Callable[[], int],
        callback: Callable[[], None],
        on_error: Optional[Callable[[Exception], None]] = None
    ):
        super().__init__(name="snake-tick", daemon=True)
        self._period_fn = period_fn
        self._callback = callback
        self._on_error = on_error
        self._stop_event = threading.Event()

    def run(self):
        while not self._stop_event.wait(self._period_fn() / 1000.0):
            try:
                self._callback()
            except Exception as e:
                logger.exception("Tick failed, stopping the game timer")
                self._stop_event.set()
                if self._on_error is not None:
                    self._on_error(e)

    def stop(self) -> None:
        """Signal the thread to exit after the current tick."""
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()


class SnakeGame:
    """
    Manages:
      - Board (square grid)
      - Snake and food
      - Score and tick speed
      - Status lifecycle (IDLE -> PLAYING <-> PAUSED -> GAME_OVER -> PLAYING)
      - Leaderboard updates and game over commentary
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        commentary_provider: Optional[CommentaryProviderInterface] = None,
        leaderboard_store: Optional[LeaderboardStore] = None,
        rng: Optional[random.Random] = None,
        use_timer: bool = True,
        executor: Optional[Executor] = None
    ):
        self.config = config or GameConfig()
        self.grid = Grid(self.config.grid_size)
        self.spawner = FoodSpawner(self.grid, rng=rng)
        self.commentary_provider = commentary_provider
        self.leaderboard_store = leaderboard_store
        self.use_timer = use_timer

        self._lock = threading.RLock()
        self._input_lock = threading.Lock()
        self._timer: Optional[TickTimer] = None
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="snake-commentary")
        self._commentary_future: Optional[Future] = None
        self._current_entry: Optional[ScoreEntry] = None
        self._closed = False

        self.status = GameStatus.IDLE
        self.episode = 0
        self.ticks = 0
        self.score = 0
        self.snake = initial_snake(self.grid.size)
        self.food = self.spawner.spawn(self.snake.occupied())
        self.message = ""
        self.commentary_pending = False
        self.last_collision: Optional[CollisionKind] = None

        # Two views of the direction: the latest accepted request, and the
        # direction actually applied on the last tick (used for validation)
        self._pending_direction: Optional[Direction] = None
        self._last_applied = self.snake.direction

        self.high_scores: List[ScoreEntry] = self._load_high_scores()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """
        Start a new game from IDLE or restart after GAME_OVER.

        Returns False if a game is already running or paused.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("Game has been closed.")
            if self.status in (GameStatus.PLAYING, GameStatus.PAUSED):
                return False

            restarting = self.status == GameStatus.GAME_OVER
            if self._commentary_future is not None:
                self._commentary_future.cancel()
                self._commentary_future = None

            self.episode += 1
            self.ticks = 0
            self.score = 0
            self.snake = initial_snake(self.grid.size)
            with self._input_lock:
                self._pending_direction = None
                self._last_applied = self.snake.direction
            self.food = self.spawner.spawn(self.snake.occupied())
            self.message = ""
            self.commentary_pending = False
            self.last_collision = None
            self._current_entry = None

            self.status = GameStatus.PLAYING
            self._start_timer()

            logger.info(f"{'Restarted' if restarting else 'Started'} game, episode {self.episode}")
            return True

    restart = start

    def pause(self) -> bool:
        with self._lock:
            if self.status != GameStatus.PLAYING:
                return False
            self.status = GameStatus.PAUSED
            self._stop_timer()
            return True

    def resume(self) -> bool:
        with self._lock:
            if self._closed:
                raise RuntimeError("Game has been closed.")
            if self.status != GameStatus.PAUSED:
                return False
            self.status = GameStatus.PLAYING
            self._start_timer()
            return True

    def close(self) -> None:
        """Stop the timer and the commentary worker. Safe to call twice."""
        with self._lock:
            self._closed = True
            timer = self._timer
            self._stop_timer()
        # Join outside the lock: the timer thread may be waiting for it
        if timer is not None and timer is not threading.current_thread() and timer.is_alive():
            timer.join()
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def queue_direction(self, direction) -> bool:
        """
        Put a direction in the pending slot for the next tick.

        Ignored unless PLAYING. A reversal of the last applied direction is
        rejected; otherwise the slot is overwritten, so only the latest valid
        request between two ticks survives.
        """
        if self.status != GameStatus.PLAYING:
            return False
        try:
            direction = Direction(direction)
        except ValueError:
            return False

        with self._input_lock:
            if is_reversal(self._last_applied, direction):
                return False
            self._pending_direction = direction
            return True

    def handle_key(self, key: str) -> bool:
        direction = direction_for_key(key)
        if direction is None:
            return False
        return self.queue_direction(direction)

    def _consume_direction(self) -> Direction:
        with self._input_lock:
            requested = self._pending_direction
            self._pending_direction = None
            self._last_applied = resolve_direction(self._last_applied, requested)
            return self._last_applied

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    @property
    def tick_period_ms(self) -> int:
        return self.config.tick_period_ms(self.score)

    def tick(self) -> Optional[CollisionKind]:
        """
        Advance the game by one step.

        Returns:
            The collision this tick produced (FOOD, WALL or SELF), or None.
            Does nothing and returns None unless the game is PLAYING.
        """
        with self._lock:
            if self.status != GameStatus.PLAYING:
                return None

            direction = self._consume_direction()
            new_head = self.snake.next_head(direction)
            collision = check_collision(new_head, self.snake.positions, self.grid.size, self.food)

            if collision is not None and collision.is_fatal:
                # The snake keeps its last valid position
                self._game_over(collision)
                return collision

            ate_food = collision is CollisionKind.FOOD
            self.snake = self.snake.advance(direction, ate_food)
            self.ticks += 1

            if ate_food:
                self.score += self.config.food_score
                self.food = self.spawner.spawn(self.snake.occupied())

            return collision

    def _timer_tick(self, timer: TickTimer) -> None:
        with self._lock:
            # A stale timer may wake up after a pause or restart replaced it
            if timer is not self._timer or timer.stopped:
                return
            self.tick()

    def _timer_failed(self, timer: TickTimer, error: Exception) -> None:
        with self._lock:
            if timer is not self._timer:
                return
            self._timer = None
            # A failed tick leaves the game paused; resume() tries again
            if self.status == GameStatus.PLAYING:
                self.status = GameStatus.PAUSED
                logger.error(f"Paused episode {self.episode} after a failed tick: {error}")

    def _start_timer(self) -> None:
        if not self.use_timer or self._closed:
            return
        self._stop_timer()
        timer = TickTimer(
            lambda: self.tick_period_ms,
            lambda: self._timer_tick(timer),
            on_error=lambda e: self._timer_failed(timer, e),
        )
        self._timer = timer
        timer.start()

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    # ------------------------------------------------------------------
    # Game over
    # ------------------------------------------------------------------

    def _game_over(self, collision: CollisionKind) -> None:
        self._stop_timer()
        self.status = GameStatus.GAME_OVER
        self.last_collision = collision
        logger.info(f"Game over ({collision.value} collision) with score {self.score}, episode {self.episode}")

        entry = ScoreEntry.create(self.score)
        self.high_scores = merge_score(self.high_scores, entry, self.config.leaderboard_size)
        self._current_entry = entry if any(e is entry for e in self.high_scores) else None
        self._save_high_scores()

        self._request_commentary()

    def _request_commentary(self) -> None:
        self.message = ""
        self.commentary_pending = True
        episode = self.episode
        try:
            future = self._executor.submit(generate_game_over_message, self.score, self.commentary_provider)
        except RuntimeError as e:
            logger.warning(f"Commentary worker unavailable: {e}")
            self._apply_message(OFFLINE_MESSAGE)
            return
        self._commentary_future = future
        future.add_done_callback(lambda f: self._on_commentary_done(episode, f))

    def _on_commentary_done(self, episode: int, future: Future) -> None:
        if future.cancelled():
            return
        try:
            message = future.result()
        except Exception as e:
            logger.error(f"Commentary task failed: {e}")
            message = OFFLINE_MESSAGE

        with self._lock:
            if episode != self.episode or self.status != GameStatus.GAME_OVER:
                logger.debug(f"Discarding commentary for episode {episode}, current episode is {self.episode}")
                return
            self._apply_message(message)

    def _apply_message(self, message: str) -> None:
        self.message = message
        self.commentary_pending = False
        self._commentary_future = None
        if self._current_entry is not None:
            self._current_entry.message = message

    # ------------------------------------------------------------------
    # Leaderboard
    # ------------------------------------------------------------------

    def _load_high_scores(self) -> List[ScoreEntry]:
        if self.leaderboard_store is None:
            return []
        return self.leaderboard_store.load()[:self.config.leaderboard_size]

    def _save_high_scores(self) -> None:
        if self.leaderboard_store is None:
            return
        try:
            self.leaderboard_store.save(self.high_scores)
        except Exception as e:
            # The game over must complete even if the scores can't be written
            logger.error(f"Could not save leaderboard: {e}")

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def snapshot(self) -> GameState:
        """
        Return a read-only snapshot of the current board as a GameState.
        """
        with self._lock:
            return GameState(
                snake_positions=[tuple(p) for p in self.snake.positions],
                food=tuple(self.food),
                grid_size=self.grid.size,
                status=self.status,
                score=self.score,
                direction=self.snake.direction,
                message=self.message,
                commentary_pending=self.commentary_pending,
                tick_period_ms=self.tick_period_ms,
                episode=self.episode
            )

    def __repr__(self):
        return f"<SnakeGame status={self.status.value} score={self.score} episode={self.episode}>"


def create_game(config: Optional[GameConfig] = None, **kwargs) -> SnakeGame:
    """
    Build a SnakeGame wired to the configured leaderboard store and
    commentary provider.
    """
    config = config or load_config()
    kwargs.setdefault(
        "leaderboard_store",
        LeaderboardStore(config.db_path, limit=config.leaderboard_size),
    )
    kwargs.setdefault("commentary_provider", create_commentary_provider(config.commentary_model))
    return SnakeGame(config=config, **kwargs)
