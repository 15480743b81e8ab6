"""Core game state and logic."""

import logging
import random
from typing import Callable, Optional

from .constants import (
    GRID_ROWS, GRID_COLS, START_ROW, START_COL, START_LENGTH, START_DIRECTION,
    FOOD_POINTS, FOOD_PLACEMENT_ATTEMPTS, DIRECTIONS, OPPOSITES,
)
from .grid import cell_index, cell_position, in_bounds
from .levels import LEVELS, LevelConfig, get_level
from .models import GameState, Snapshot
from .ticker import ManualTicker

logger = logging.getLogger(__name__)

TickerFactory = Callable[[float, Callable[[], None]], object]


def initial_snake() -> list[int]:
    # head, head-1, head-2: the body wraps onto the end of the row above
    head = cell_index(START_ROW, START_COL)
    return [head - i for i in range(START_LENGTH)]


def new_high_scores() -> dict[str, int]:
    return {name: 0 for name in LEVELS}


def new_session(level: LevelConfig, rng=random) -> GameState:
    state = GameState(level=level, snake=initial_snake(), direction=START_DIRECTION)
    generate_food(state, rng)
    return state


def generate_food(state: GameState, rng=random) -> GameState:
    """Top up food to the level's count, best effort.

    Each missing slot gets up to FOOD_PLACEMENT_ATTEMPTS random draws; a slot
    that finds no free cell stays empty until the next call.
    """
    occupied = set(state.snake)
    occupied.update(state.food)

    target = state.level.food_count
    while len(state.food) < target:
        for _ in range(FOOD_PLACEMENT_ATTEMPTS):
            row = rng.randint(1, GRID_ROWS)
            col = rng.randint(1, GRID_COLS)
            cell = cell_index(row, col)
            if cell not in occupied:
                state.food.append(cell)
                occupied.add(cell)
                break
        else:
            break
    return state


def advance(state: GameState, rng=random) -> GameState:
    """One tick: move, check collisions, then eat or trim the tail.

    A fatal move leaves the snake on its pre-move cells.
    """
    if not state.running or state.paused:
        return state

    d_row, d_col = DIRECTIONS[state.direction]
    row, col = cell_position(state.head())
    row, col = row + d_row, col + d_col

    if not in_bounds(row, col):
        return end_session(state, "wall")
    head = cell_index(row, col)
    # the tail has not moved yet, so it still counts
    if head in state.snake:
        return end_session(state, "self")

    state.snake.insert(0, head)
    if head in state.food:
        state.food.remove(head)
        state.score += FOOD_POINTS
        generate_food(state, rng)
    else:
        state.snake.pop()
    return state


def end_session(state: GameState, cause: str) -> GameState:
    state.running = False
    state.game_over = True
    logger.info("game over (%s) on %s with score %d", cause, state.level.name, state.score)
    return state


def change_direction(state: GameState, requested: str) -> GameState:
    if requested not in DIRECTIONS:
        raise ValueError(f"unknown direction: {requested!r}")
    if OPPOSITES[requested] == state.direction:
        logger.debug("ignored reversal %s -> %s", state.direction, requested)
        return state
    state.direction = requested
    return state


def record_game_over(state: GameState, high_scores: dict[str, int]) -> bool:
    """Store the score if it beats the level's best. Returns the new-record flag."""
    best = high_scores.get(state.level.name, 0)
    state.new_high_score = state.score > best
    if state.new_high_score:
        high_scores[state.level.name] = state.score
        logger.info("new high score on %s: %d", state.level.name, state.score)
    return state.new_high_score


class SnakeGame:
    """Owns one player's session, the tick driver and the high-score table."""

    def __init__(self, ticker_factory: TickerFactory = ManualTicker, rng=None,
                 high_scores: Optional[dict[str, int]] = None):
        self.ticker_factory = ticker_factory
        self.rng = rng or random.Random()
        # may be shared between engines so bests outlive a single connection
        self.high_scores: dict[str, int] = new_high_scores() if high_scores is None else high_scores
        self.state: Optional[GameState] = None
        self.selected_level: Optional[str] = None
        self.ticker = None

    @property
    def running(self) -> bool:
        return self.state is not None and self.state.running

    def stop_ticker(self):
        if self.ticker is not None:
            self.ticker.cancel()
            self.ticker = None

    def start_level(self, level: str) -> GameState:
        config = get_level(level)
        self.stop_ticker()
        self.selected_level = config.name
        self.state = new_session(config, self.rng)
        self.ticker = self.ticker_factory(config.interval, self.tick)
        self.ticker.start()
        logger.info("started %s (%d food, %dms)", config.name, config.food_count, config.tick_ms)
        return self.state

    def restart(self) -> Optional[GameState]:
        if self.selected_level is None:
            logger.debug("restart ignored, no level selected yet")
            return None
        return self.start_level(self.selected_level)

    def return_to_menu(self):
        self.stop_ticker()
        if self.state is not None:
            self.state.running = False
            self.state.paused = False

    def toggle_pause(self) -> bool:
        if not self.running:
            return False
        self.state.paused = not self.state.paused
        return self.state.paused

    def change_direction(self, direction: str):
        if not self.running:
            logger.debug("direction %s ignored, no game running", direction)
            return
        change_direction(self.state, direction)

    def tick(self):
        if not self.running:
            return
        advance(self.state, self.rng)
        if self.state.game_over:
            self.stop_ticker()
            record_game_over(self.state, self.high_scores)

    def snapshot(self) -> Optional[Snapshot]:
        s = self.state
        if s is None:
            return None
        return Snapshot(
            snake=tuple(s.snake),
            food=tuple(s.food),
            score=s.score,
            level=s.level.name,
            theme=s.level.theme,
            direction=s.direction,
            running=s.running,
            paused=s.paused,
            game_over=s.game_over,
            new_high_score=s.new_high_score,
            high_score=self.high_scores.get(s.level.name, 0),
        )
