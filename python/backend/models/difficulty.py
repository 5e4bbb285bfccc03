"""Difficulty presets."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from backend.models.errors import InvalidConfiguration


@dataclass(frozen=True)
class DifficultyConfig:
    grid_size: int
    label: str
    wrong_choice_count: int
    hint_budget: int


DIFFICULTY_CONFIG: MappingProxyType[str, DifficultyConfig] = MappingProxyType(
    {
        "easy": DifficultyConfig(
            grid_size=3, label="Easy (3x3)", wrong_choice_count=1, hint_budget=0
        ),
        "medium": DifficultyConfig(
            grid_size=4, label="Medium (4x4)", wrong_choice_count=2, hint_budget=2
        ),
        "hard": DifficultyConfig(
            grid_size=5, label="Hard (5x5)", wrong_choice_count=3, hint_budget=3
        ),
    }
)


def get_difficulty(key: str) -> DifficultyConfig:
    """Look up a preset by name, e.g. ``get_difficulty("medium")``."""
    try:
        return DIFFICULTY_CONFIG[key]
    except KeyError:
        raise InvalidConfiguration(
            f"Unknown difficulty {key!r}; expected one of "
            f"{', '.join(DIFFICULTY_CONFIG)}."
        ) from None
