"""Asset discovery and card image loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

from .card_faces import generate_card_faces
from .config import AssetConfig
from .geometry import CARD_HEIGHT, CARD_RELATIVE_HEIGHT, CARD_RELATIVE_WIDTH, CARD_WIDTH
from .models import RANKS, SUITS

logger = logging.getLogger(__name__)

CardImages = dict[tuple[int, int], pygame.Surface]


class AssetLoadError(RuntimeError):
    """Raised when card artwork exists but cannot be used."""


def max_card_size(display_height: int) -> tuple[int, int]:
    """Largest card size needed for a display of *display_height* pixels."""

    return (
        max(1, int(display_height * CARD_RELATIVE_WIDTH)),
        max(1, int(display_height * CARD_RELATIVE_HEIGHT)),
    )


def slice_sprite_sheet(sheet: pygame.Surface, size: tuple[int, int]) -> CardImages:
    """Cut a ranks-by-suits sheet into one image per card, scaled to *size*.

    Ranks run left to right, suits top to bottom. The sheet may be any whole
    multiple of the 360 x 540 source card size.
    """

    columns, rows = len(RANKS), len(SUITS)
    sheet_width, sheet_height = sheet.get_size()
    cell_width, remainder_x = divmod(sheet_width, columns)
    cell_height, remainder_y = divmod(sheet_height, rows)
    if remainder_x or remainder_y or cell_width == 0 or cell_height == 0:
        raise AssetLoadError(
            f"Sprite sheet is {sheet_width}x{sheet_height}, "
            f"expected a {columns}x{rows} grid of cards"
        )
    if cell_width * CARD_HEIGHT != cell_height * CARD_WIDTH:
        raise AssetLoadError(
            f"Sprite sheet cells are {cell_width}x{cell_height}, "
            f"expected a {CARD_WIDTH}:{CARD_HEIGHT} aspect ratio"
        )

    if sheet.get_bitsize() < 24:
        # smoothscale only accepts 24 and 32 bit surfaces.
        converted = pygame.Surface(sheet.get_size(), pygame.SRCALPHA)
        converted.blit(sheet, (0, 0))
        sheet = converted

    images: CardImages = {}
    for rank in range(columns):
        for suit in range(rows):
            area = pygame.Rect(rank * cell_width, suit * cell_height, cell_width, cell_height)
            images[(rank, suit)] = pygame.transform.smoothscale(sheet.subsurface(area), size)
    return images


class ResourceManager:
    """Utility to locate asset files and load the card images."""

    def __init__(self, config: AssetConfig | None = None) -> None:
        self.config = config or AssetConfig()

    def resolve(self, path: Path | str) -> Path:
        """Resolve a path relative to the asset root."""

        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.config.root / candidate
        return candidate

    def require(self, path: Path | str) -> Path:
        """Ensure that the given asset exists on disk."""

        resolved = self.resolve(path)
        if not resolved.exists():
            raise FileNotFoundError(f"Asset not found: {resolved}")
        return resolved

    def load_card_images(self, display_height: int) -> CardImages:
        """Load all 52 faces sized for *display_height*.

        Falls back to generated faces when the sprite sheet is missing.
        """

        size = max_card_size(display_height)
        try:
            sheet_path = self.require(self.config.sprite_sheet_path())
        except FileNotFoundError:
            logger.info("No sprite sheet under %s, generating card faces", self.config.root)
            return generate_card_faces(size)

        try:
            sheet = pygame.image.load(str(sheet_path))
        except pygame.error as exc:
            raise AssetLoadError(f"Could not decode {sheet_path}: {exc}") from exc
        logger.info("Loaded sprite sheet %s", sheet_path)
        return slice_sprite_sheet(sheet, size)
