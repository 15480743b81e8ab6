"""Difficulty presets."""

from dataclasses import dataclass


class InvalidLevelError(ValueError):
    """Raised for a level name that has no configuration."""


@dataclass(frozen=True)
class LevelConfig:
    name: str
    food_count: int
    tick_ms: int
    theme: str

    @property
    def interval(self) -> float:
        return self.tick_ms / 1000


LEVELS: dict[str, LevelConfig] = {
    "easy": LevelConfig("easy", food_count=2, tick_ms=150, theme="easy"),
    "medium": LevelConfig("medium", food_count=2, tick_ms=100, theme="medium"),
    "hard": LevelConfig("hard", food_count=1, tick_ms=60, theme="hard"),
}


def get_level(name: str) -> LevelConfig:
    try:
        return LEVELS[name]
    except (KeyError, TypeError):
        raise InvalidLevelError(f"unknown level: {name!r}") from None


def levels_to_list() -> list[dict]:
    return [
        {"name": c.name, "food_count": c.food_count, "tick_ms": c.tick_ms, "theme": c.theme}
        for c in LEVELS.values()
    ]
