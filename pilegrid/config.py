"""Configuration helpers for the pile grid game."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DisplayConfig:
    """Visual settings for the pygame display."""

    width: int = 1280
    height: int = 720
    caption: str = "Pile Grid"
    frame_rate: int = 60
    fullscreen: bool = False
    resizable: bool = True


@dataclass(frozen=True)
class AssetConfig:
    """Configuration for locating local assets."""

    root: Path = Path("assets")
    images: Path = Path("images")
    sprite_sheet: str = "deck.png"

    def image_path(self, name: str) -> Path:
        """Return the path of an image asset relative to the asset root."""

        return self.images / name

    def sprite_sheet_path(self) -> Path:
        """Return the path of the card sprite sheet relative to the asset root."""

        return self.image_path(self.sprite_sheet)


@dataclass(frozen=True)
class GameConfig:
    """High-level configuration structure for the game."""

    display: DisplayConfig = DisplayConfig()
    assets: AssetConfig = AssetConfig()
    seed: int | None = None
