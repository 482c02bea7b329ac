"""Shuffling and the initial deal into the pile grid."""

from __future__ import annotations

import logging
import random
from typing import List, MutableSequence, TypeVar

from .models import GRID_ROWS, Card, PileGrid

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEAL_ROWS = range(1, GRID_ROWS)
HOLE_CELLS = frozenset({(2, 3), (3, 3)})
CARDS_PER_PILE = 3
CARDS_PER_HOLE = 2


def shuffle(sequence: MutableSequence[T], rng: random.Random | None = None) -> MutableSequence[T]:
    """Shuffle *sequence* in place with Fisher-Yates and return it."""

    randrange = (rng or random).randrange
    for i in range(len(sequence) - 1, 0, -1):
        j = randrange(i + 1)
        sequence[i], sequence[j] = sequence[j], sequence[i]
    return sequence


def deal_counts(grid: PileGrid) -> dict[tuple[int, int], int]:
    """Return how many cards each dealt cell receives, in deal order."""

    counts = {}
    for row in DEAL_ROWS:
        for col in range(grid.columns):
            counts[(col, row)] = CARDS_PER_HOLE if (col, row) in HOLE_CELLS else CARDS_PER_PILE
    return counts


def deal(cards: List[Card], grid: PileGrid) -> None:
    """Move every card of *cards* into *grid*, drawing from the end of the list.

    The finish row stays empty; the two hole cells get two cards and every
    other pile three.
    """

    counts = deal_counts(grid)
    expected = sum(counts.values())
    if len(cards) != expected:
        raise ValueError(f"deal needs exactly {expected} cards, got {len(cards)}")

    for (col, row), count in counts.items():
        for _ in range(count):
            grid.push_top(col, row, cards.pop())


def new_game(cards: List[Card], rng: random.Random | None = None) -> PileGrid:
    """Shuffle *cards* and deal them into a fresh grid."""

    grid = PileGrid()
    deal(shuffle(cards, rng), grid)
    logger.info("Dealt %d cards into %d piles", grid.card_count(), len(deal_counts(grid)))
    return grid
