"""Static and dynamic layer painting for the pile grid."""

from __future__ import annotations

from typing import Tuple

import pygame

from .geometry import GeometrySnapshot
from .interaction import ActiveCard
from .models import Card, PileGrid

Color = Tuple[int, int, int]

TABLE_COLOR: Color = (32, 96, 64)
FINISH_OUTLINE_COLOR: Color = (220, 30, 30)
HOLE_OUTLINE_COLOR: Color = (255, 165, 0)
OUTLINE_WIDTH = 2
PILE_SHADE = (0, 0, 0, 102)
SHADOW_ALPHA = 26
SHADOW_BLUR = 10


class RepaintScheduler:
    """Collects repaint requests so each layer is painted at most once per frame."""

    def __init__(self) -> None:
        self.static_pending = False
        self.dynamic_pending = False

    def request_static(self) -> None:
        self.static_pending = True

    def request_dynamic(self) -> None:
        self.dynamic_pending = True

    def request_all(self) -> None:
        self.request_static()
        self.request_dynamic()

    @property
    def pending(self) -> bool:
        return self.static_pending or self.dynamic_pending

    def flush(self) -> tuple[bool, bool]:
        """Return and clear the ``(static, dynamic)`` pending flags."""

        pending = self.static_pending, self.dynamic_pending
        self.static_pending = self.dynamic_pending = False
        return pending


class Renderer:
    """Paints the grid onto the static layer and the active card onto the dynamic one."""

    def __init__(self) -> None:
        self._scaled: dict[int, pygame.Surface] = {}
        self._shadows: dict[int, pygame.Surface] = {}
        self._cache_size: tuple[int, int] | None = None
        self._shade: pygame.Surface | None = None
        self._shade_key: tuple[tuple[int, int], GeometrySnapshot] | None = None

    # Image cache ------------------------------------------------------

    def _sync_cache(self, size: tuple[int, int]) -> None:
        if size != self._cache_size:
            self._scaled.clear()
            self._shadows.clear()
            self._cache_size = size

    def card_image(self, card: Card, size: tuple[int, int]) -> pygame.Surface | None:
        """Return *card*'s image scaled to *size*, cached until the size changes."""

        if card.image is None:
            return None
        self._sync_cache(size)
        key = id(card.image)
        cached = self._scaled.get(key)
        if cached is None:
            if card.image.get_size() == size:
                cached = card.image
            else:
                cached = pygame.transform.smoothscale(card.image, size)
            self._scaled[key] = cached
        return cached

    def shadow_image(self, card: Card, size: tuple[int, int]) -> pygame.Surface | None:
        """Return a darkened, translucent silhouette of the card for its drop shadow."""

        image = self.card_image(card, size)
        if image is None:
            return None
        key = id(card.image)
        cached = self._shadows.get(key)
        if cached is None:
            cached = pygame.Surface(image.get_size(), pygame.SRCALPHA)
            cached.blit(image, (0, 0))
            cached.fill((0, 0, 0, 255), special_flags=pygame.BLEND_RGBA_MIN)
            cached.fill((255, 255, 255, SHADOW_ALPHA), special_flags=pygame.BLEND_RGBA_MULT)
            self._shadows[key] = cached
        return cached

    # Layers -----------------------------------------------------------

    def shade_layer(
        self, size: tuple[int, int], geometry: GeometrySnapshot, grid: PileGrid
    ) -> pygame.Surface:
        """Return the translucent pile backdrops, rebuilt only when the layout changes."""

        key = (size, geometry)
        if self._shade is not None and self._shade_key == key:
            return self._shade

        radius = round(geometry.card_corner_radius)
        shade = pygame.Surface(size, pygame.SRCALPHA)
        for col, row, _ in grid.cells():
            if grid.is_reserved(col, row):
                continue
            x, y = geometry.cell_origin(col, row)
            area = pygame.Rect(
                round(x),
                round(y),
                round(geometry.cell_width - geometry.pile_spacing),
                round(geometry.card_height),
            )
            pygame.draw.rect(shade, PILE_SHADE, area, border_radius=radius)
        self._shade = shade
        self._shade_key = key
        return shade

    def draw_static(self, surface: pygame.Surface, geometry: GeometrySnapshot, grid: PileGrid) -> None:
        """Repaint the pile outlines, pile shading and every resting card."""

        surface.fill(TABLE_COLOR)
        radius = round(geometry.card_corner_radius)

        finish = pygame.Rect(
            round(geometry.start_x + geometry.cell_width - geometry.cell_padding),
            round(geometry.start_y - geometry.cell_padding),
            round(geometry.cell_width * 4),
            round(geometry.cell_height),
        )
        pygame.draw.rect(surface, FINISH_OUTLINE_COLOR, finish, width=OUTLINE_WIDTH, border_radius=radius)

        hole = pygame.Rect(
            round(geometry.start_x + geometry.cell_width * 2 - geometry.cell_padding),
            round(geometry.start_y + geometry.cell_height * 3 - geometry.cell_padding),
            round(geometry.cell_width * 2),
            round(geometry.cell_height),
        )
        pygame.draw.rect(surface, HOLE_OUTLINE_COLOR, hole, width=OUTLINE_WIDTH, border_radius=radius)

        surface.blit(self.shade_layer(surface.get_size(), geometry, grid), (0, 0))

        size = geometry.card_size
        for _, _, pile in grid.cells():
            for card in pile:
                self._blit_card(surface, card, size)

    def draw_dynamic(
        self, surface: pygame.Surface, geometry: GeometrySnapshot, active: ActiveCard | None
    ) -> None:
        """Repaint the card being dragged or animated, if any."""

        surface.fill((0, 0, 0, 0))
        if active is None:
            return
        size = geometry.card_size
        shadow = self.shadow_image(active.card, size)
        if shadow is not None:
            x, y = active.card.position
            offset = SHADOW_BLUR // 2
            for dx, dy in ((offset, offset), (offset // 2, offset), (offset, offset // 2)):
                surface.blit(shadow, (round(x) + dx, round(y) + dy))
        self._blit_card(surface, active.card, size)

    def _blit_card(self, surface: pygame.Surface, card: Card, size: tuple[int, int]) -> None:
        image = self.card_image(card, size)
        if image is None:
            return
        x, y = card.position
        surface.blit(image, (round(x), round(y)))
