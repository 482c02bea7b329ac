"""Layout measurements derived from the viewport size.

Everything is computed relative to the viewport height so that the four rows
of piles always fill the window vertically; the width only centres the grid.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .models import GRID_COLUMNS, GRID_ROWS, RANKS, CellCoord, Position

# Source artwork dimensions of a single card.
CARD_WIDTH = 360
CARD_HEIGHT = 540
CARD_CORNER_RADIUS = 30
CARD_ASPECT_RATIO = CARD_WIDTH / CARD_HEIGHT

CARD_PILE_SPACING = 0.025
CARD_PILE_FAN = 0.025
CARD_RELATIVE_HEIGHT = (1 - CARD_PILE_SPACING * (GRID_ROWS + 1)) / GRID_ROWS
CARD_RELATIVE_WIDTH = CARD_RELATIVE_HEIGHT * CARD_ASPECT_RATIO


@dataclass(frozen=True, slots=True)
class GeometrySnapshot:
    """Immutable set of pixel measurements for one viewport size."""

    width: float
    height: float
    card_width: float
    card_height: float
    card_corner_radius: float
    pile_spacing: float
    cell_padding: float
    pile_fan: float
    hold_pile_fan: float
    total_fan_offset: float
    cell_width: float
    cell_height: float
    layout_left: float
    layout_top: float
    start_x: float
    start_y: float
    columns: int = GRID_COLUMNS
    rows: int = GRID_ROWS

    @property
    def card_size(self) -> tuple[int, int]:
        """Card size rounded to whole pixels for blitting."""

        return max(1, round(self.card_width)), max(1, round(self.card_height))

    def cell_at_point(self, x: float, y: float) -> CellCoord | None:
        """Return the ``(col, row)`` under a viewport point, or ``None``."""

        col = math.floor((x - self.layout_left) / self.cell_width)
        row = math.floor((y - self.layout_top) / self.cell_height)
        if 0 <= col < self.columns and 0 <= row < self.rows:
            return col, row
        return None

    def cell_origin(self, col: int, row: int) -> Position:
        """Top-left corner of the first card slot in a cell."""

        return (
            self.start_x + col * self.cell_width,
            self.start_y + row * self.cell_height,
        )

    def fan_increment(self, row: int) -> float:
        # The finish row holds up to a full suit, so its fan is tighter.
        return self.hold_pile_fan if row == 0 else self.pile_fan

    def card_position(self, col: int, row: int, index: int) -> Position:
        """Resting position of the card at ``index`` (0 = bottom) in a pile."""

        x, y = self.cell_origin(col, row)
        return x + index * self.fan_increment(row), y

    def centered_on(self, x: float, y: float) -> Position:
        """Top-left position that centres a card under ``(x, y)``."""

        return x - self.card_width / 2, y - self.card_height / 2


def compute_geometry(width: float, height: float) -> GeometrySnapshot:
    """Derive every layout measurement for a ``width`` x ``height`` viewport."""

    if height <= 0:
        raise ValueError(f"viewport height must be positive, got {height}")
    if width < 0:
        raise ValueError(f"viewport width must not be negative, got {width}")

    card_height = height * CARD_RELATIVE_HEIGHT
    card_width = height * CARD_RELATIVE_WIDTH
    pile_spacing = height * CARD_PILE_SPACING
    pile_fan = height * CARD_PILE_FAN
    total_fan_offset = pile_fan * 2
    cell_padding = pile_spacing / 2

    cell_width = card_width + total_fan_offset + pile_spacing
    cell_height = card_height + pile_spacing
    layout_left = (width - cell_width * GRID_COLUMNS) / 2
    layout_top = (height - cell_height * GRID_ROWS) / 2

    return GeometrySnapshot(
        width=float(width),
        height=float(height),
        card_width=card_width,
        card_height=card_height,
        card_corner_radius=CARD_CORNER_RADIUS / CARD_HEIGHT * card_height,
        pile_spacing=pile_spacing,
        cell_padding=cell_padding,
        pile_fan=pile_fan,
        hold_pile_fan=total_fan_offset / (len(RANKS) - 1),
        total_fan_offset=total_fan_offset,
        cell_width=cell_width,
        cell_height=cell_height,
        layout_left=layout_left,
        layout_top=layout_top,
        start_x=layout_left + cell_padding,
        start_y=layout_top + cell_padding,
    )
