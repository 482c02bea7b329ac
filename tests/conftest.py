import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from pilegrid.geometry import compute_geometry
from pilegrid.models import Card, PileGrid


def cell_center(geometry, col, row):
    """Viewport point in the middle of a grid cell."""

    return (
        geometry.layout_left + (col + 0.5) * geometry.cell_width,
        geometry.layout_top + (row + 0.5) * geometry.cell_height,
    )


@pytest.fixture
def geometry():
    return compute_geometry(1280, 720)


@pytest.fixture
def grid():
    return PileGrid()


@pytest.fixture
def make_card():
    def _make(rank, suit, image=None):
        return Card(rank=rank, suit=suit, image=image)

    return _make


@pytest.fixture
def center_of(geometry):
    def _center(col, row):
        return cell_center(geometry, col, row)

    return _center
