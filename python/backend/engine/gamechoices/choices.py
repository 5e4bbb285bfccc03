"""Builds the multiple-choice set offered for an empty slot."""

from __future__ import annotations

import random
from typing import Protocol, Sequence, TypeVar

from backend.models.piece import Piece

T = TypeVar("T")


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


class ChoiceBuilder:
    """Stateless choice builder — all methods are static.

    Pass a seeded ``random.Random`` as *rng* for reproducible order.
    """

    @staticmethod
    def shuffle(items: Sequence[T], rng: RandomSource | None = None) -> list[T]:
        """Return a uniformly shuffled copy of *items* (Fisher–Yates)."""
        source = rng if rng is not None else random
        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = source.randrange(i + 1)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    @staticmethod
    def build_choices(
        target: Piece,
        unplaced: Sequence[Piece],
        wrong_count: int,
        rng: RandomSource | None = None,
    ) -> list[Piece]:
        """Return *target* plus up to *wrong_count* distractors, shuffled.

        Distractors are drawn from *unplaced* (excluding the target and
        anything already placed). With nothing left to draw from, the
        result is just ``[target]``.
        """
        candidates = [p for p in unplaced if p.id != target.id and not p.is_placed]
        take = min(max(wrong_count, 0), len(candidates))
        distractors = ChoiceBuilder.shuffle(candidates, rng)[:take]
        return ChoiceBuilder.shuffle([target, *distractors], rng)
