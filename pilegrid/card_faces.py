"""Generated card faces used when no sprite sheet is available."""

from __future__ import annotations

from typing import Tuple

import pygame

from .geometry import CARD_CORNER_RADIUS, CARD_HEIGHT, CARD_WIDTH
from .models import RANKS, SUITS

Color = Tuple[int, int, int]

CARD_PADDING = 6

FACE_COLOR: Color = (246, 246, 246)
OUTLINE_COLOR: Color = (24, 24, 24)
SUIT_COLORS: dict[str, Color] = {
    "♠": (20, 20, 20),
    "♣": (20, 20, 20),
    "♥": (200, 16, 46),
    "♦": (200, 16, 46),
}


def _load_font(size: int, bold: bool = False) -> pygame.font.Font:
    """Load a font that supports suit glyphs with sensible fallbacks."""

    preferred_fonts = [
        "dejavusans",
        "arialunicode",
        "arial",
        "liberationsans",
    ]
    for name in preferred_fonts:
        path = pygame.font.match_font(name, bold=bold)
        if path:
            return pygame.font.Font(path, size)
    return pygame.font.Font(None, size)


def create_card_face(rank: int, suit: int, size: tuple[int, int] = (CARD_WIDTH, CARD_HEIGHT)) -> pygame.Surface:
    """Draw the face of one card at *size*, scaled from the source artwork."""

    width, height = size
    scale = height / CARD_HEIGHT
    surface = pygame.Surface((width, height), pygame.SRCALPHA)
    surface.fill((0, 0, 0, 0))

    padding = max(1, round(CARD_PADDING * scale))
    border_radius = max(1, round(CARD_CORNER_RADIUS * scale))
    card_rect = surface.get_rect().inflate(-2 * padding, -2 * padding)
    pygame.draw.rect(surface, FACE_COLOR, card_rect, border_radius=border_radius)
    pygame.draw.rect(surface, OUTLINE_COLOR, card_rect, width=max(1, round(4 * scale)), border_radius=border_radius)

    value = RANKS[rank]
    glyph = SUITS[suit]
    suit_color = SUIT_COLORS[glyph]

    value_font = _load_font(max(8, round(140 * scale)), bold=True)
    suit_font = _load_font(max(8, round(120 * scale)))
    value_surface = value_font.render(value, True, suit_color)
    suit_surface = suit_font.render(glyph, True, suit_color)

    inset = max(1, round(24 * scale))
    surface.blit(value_surface, (card_rect.left + inset, card_rect.top + inset))

    suit_rect = suit_surface.get_rect()
    suit_rect.bottomright = (
        card_rect.right - inset,
        card_rect.bottom - inset,
    )
    surface.blit(suit_surface, suit_rect)

    centre_font = _load_font(max(8, round(220 * scale)))
    centre = centre_font.render(glyph, True, suit_color)
    surface.blit(centre, centre.get_rect(center=card_rect.center))
    return surface


def generate_card_faces(size: tuple[int, int]) -> dict[tuple[int, int], pygame.Surface]:
    """Return a face for every ``(rank, suit)`` at *size*."""

    return {
        (rank, suit): create_card_face(rank, suit, size)
        for rank in range(len(RANKS))
        for suit in range(len(SUITS))
    }
