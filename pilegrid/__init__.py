"""Pile grid: deal a deck into a grid of piles and drag cards between them."""

from .config import AssetConfig, DisplayConfig, GameConfig
from .geometry import GeometrySnapshot, compute_geometry
from .interaction import AnimationState, InteractionController, InteractionState
from .models import Card, PileGrid, Placed, Rejected, RejectReason

__all__ = [
    "AnimationState",
    "AssetConfig",
    "Card",
    "DisplayConfig",
    "GameConfig",
    "GeometrySnapshot",
    "InteractionController",
    "InteractionState",
    "PileGrid",
    "Placed",
    "RejectReason",
    "Rejected",
    "compute_geometry",
]
