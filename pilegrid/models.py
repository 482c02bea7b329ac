"""Game domain models for the pile grid."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Mapping, Tuple

RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
SUITS = ("♠", "♥", "♦", "♣")

GRID_COLUMNS = 6
GRID_ROWS = 4
RESERVED_CELLS = frozenset({(0, 0), (GRID_COLUMNS - 1, 0)})

Position = Tuple[float, float]
CellCoord = Tuple[int, int]


@dataclass(eq=False, slots=True)
class Card:
    """A playing card and its on-screen placement."""

    rank: int
    suit: int
    image: Any = field(default=None, repr=False)
    position: Position = (0.0, 0.0)
    return_position: Position = (0.0, 0.0)

    @property
    def key(self) -> tuple[int, int]:
        return self.rank, self.suit

    @property
    def label(self) -> str:
        return f"{RANKS[self.rank]}{SUITS[self.suit]}"

    def set_position(self, x: float, y: float) -> None:
        self.position = (float(x), float(y))

    def save_position(self) -> None:
        """Remember the current position as the place to return to."""

        self.return_position = self.position


def build_deck(images: Mapping[tuple[int, int], Any] | None = None) -> list[Card]:
    """Create the 52 cards, rank by rank, attaching images when provided."""

    images = images or {}
    return [
        Card(rank=rank, suit=suit, image=images.get((rank, suit)))
        for rank in range(len(RANKS))
        for suit in range(len(SUITS))
    ]


class PileGrid:
    """Fixed grid of card piles addressed by ``(col, row)``.

    Each pile is ordered bottom to top; the last card is the top one. Only the
    top of a pile is ever added or removed.
    """

    def __init__(self, columns: int = GRID_COLUMNS, rows: int = GRID_ROWS) -> None:
        self.columns = columns
        self.rows = rows
        self._cells: List[List[List[Card]]] = [
            [[] for _ in range(columns)] for _ in range(rows)
        ]

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.columns and 0 <= row < self.rows

    def is_reserved(self, col: int, row: int) -> bool:
        return (col, row) in RESERVED_CELLS

    def cell_at(self, col: int, row: int) -> list[Card]:
        """Return the pile at ``(col, row)``; raise ``IndexError`` outside the grid."""

        if not self.in_bounds(col, row):
            raise IndexError(f"cell ({col}, {row}) is outside the grid")
        return self._cells[row][col]

    def top(self, col: int, row: int) -> Card | None:
        pile = self.cell_at(col, row)
        return pile[-1] if pile else None

    def push_top(self, col: int, row: int, card: Card) -> None:
        if self.is_reserved(col, row):
            raise ValueError(f"cell ({col}, {row}) is not a pile")
        self.cell_at(col, row).append(card)

    def pop_top(self, col: int, row: int) -> Card | None:
        pile = self.cell_at(col, row)
        if not pile:
            return None
        return pile.pop()

    def cells(self) -> Iterator[tuple[int, int, list[Card]]]:
        """Yield ``(col, row, pile)`` in row-major order."""

        for row, cells in enumerate(self._cells):
            for col, pile in enumerate(cells):
                yield col, row, pile

    def all_cards(self) -> list[Card]:
        return [card for _, _, pile in self.cells() for card in pile]

    def card_count(self) -> int:
        return sum(len(pile) for _, _, pile in self.cells())


class RejectReason(enum.Enum):
    OUT_OF_GRID = "out of grid"
    RESERVED_CELL = "reserved cell"
    RULE = "rule"


@dataclass(frozen=True, slots=True)
class Placed:
    col: int
    row: int


@dataclass(frozen=True, slots=True)
class Rejected:
    reason: RejectReason


PlaceResult = Placed | Rejected

# Called with the card being dropped and the current top of the target pile.
PlacementRule = Callable[[Card, Card | None], bool]


def accept_any(card: Card, target_top: Card | None) -> bool:
    """Placement rule that lets any card land on any pile."""

    return True
