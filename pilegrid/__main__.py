"""Command-line entry point for the pile grid game."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pygame

from .app import PileGridApp
from .config import AssetConfig, DisplayConfig, GameConfig
from .resources import AssetLoadError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deal 52 cards into a grid of piles and move them around.")
    parser.add_argument(
        "--width",
        type=int,
        help="Override the display width.",
    )
    parser.add_argument(
        "--height",
        type=int,
        help="Override the display height.",
    )
    parser.add_argument(
        "--fps",
        type=int,
        help="Override the target frame rate.",
    )
    parser.add_argument(
        "--fullscreen",
        dest="fullscreen",
        action="store_true",
        help="Start the game in full-screen mode.",
    )
    parser.add_argument(
        "--windowed",
        dest="fullscreen",
        action="store_false",
        help="Force the game to start in a resizable window.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed the shuffle to get a reproducible deal.",
    )
    parser.add_argument(
        "--assets",
        type=Path,
        help="Directory holding images/deck.png.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging verbosity (default: %(default)s).",
    )
    parser.set_defaults(fullscreen=None)
    return parser


def parse_config(namespace: argparse.Namespace) -> GameConfig:
    config = GameConfig()
    display = config.display
    width = namespace.width or display.width
    height = namespace.height or display.height
    fps = namespace.fps or display.frame_rate
    fullscreen = (
        display.fullscreen
        if namespace.fullscreen is None
        else namespace.fullscreen
    )
    assets = config.assets if namespace.assets is None else AssetConfig(root=namespace.assets)

    return GameConfig(
        display=DisplayConfig(
            width=width,
            height=height,
            caption=display.caption,
            frame_rate=fps,
            fullscreen=fullscreen,
            resizable=display.resizable,
        ),
        assets=assets,
        seed=namespace.seed,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = parse_config(args)
    app = PileGridApp(config)
    try:
        app.setup()
    except (AssetLoadError, ValueError) as exc:
        logger.error("Could not start the game: %s", exc)
        pygame.quit()
        return 1
    app.run()
    return 0


if __name__ == "__main__":  # pragma: no cover - module use only
    raise SystemExit(main())
