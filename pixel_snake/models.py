"""Data models."""

from dataclasses import dataclass, field

from .constants import START_DIRECTION
from .levels import LevelConfig


@dataclass
class GameState:
    level: LevelConfig
    snake: list[int] = field(default_factory=list)
    food: list[int] = field(default_factory=list)
    direction: str = START_DIRECTION
    score: int = 0
    running: bool = True
    paused: bool = False
    game_over: bool = False
    new_high_score: bool = False

    def head(self):
        return self.snake[0] if self.snake else None


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session handed to the page after each tick."""

    snake: tuple[int, ...]
    food: tuple[int, ...]
    score: int
    level: str
    theme: str
    direction: str
    running: bool
    paused: bool
    game_over: bool
    new_high_score: bool
    high_score: int
