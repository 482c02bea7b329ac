"""Pygame application bootstrap for the pile grid game."""

from __future__ import annotations

import logging
import random

import pygame

from .config import GameConfig
from .dealing import new_game
from .geometry import GeometrySnapshot, compute_geometry
from .interaction import AnimationState, InteractionController, InteractionState
from .models import Placed, build_deck
from .rendering import Renderer, RepaintScheduler
from .resources import CardImages, ResourceManager

logger = logging.getLogger(__name__)


class PileGridApp:
    """Window, event dispatch and frame loop around an :class:`InteractionController`."""

    NEW_GAME_KEYS = (pygame.K_F2, pygame.K_n)

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config or GameConfig()
        self.resources = ResourceManager(self.config.assets)
        self.rng = random.Random(self.config.seed)
        self.screen: pygame.Surface | None = None
        self.clock: pygame.time.Clock | None = None
        self.running = False
        self.images: CardImages = {}
        self.geometry: GeometrySnapshot | None = None
        self.controller: InteractionController | None = None
        self.renderer = Renderer()
        self.scheduler = RepaintScheduler()
        self.static_layer: pygame.Surface | None = None
        self.dynamic_layer: pygame.Surface | None = None

    def setup(self) -> None:
        """Initialise pygame, the display surface and the first deal."""

        pygame.init()
        display = self.config.display
        flags = 0
        size = (display.width, display.height)

        if display.fullscreen:
            flags |= pygame.FULLSCREEN
            if display.width <= 0 or display.height <= 0:
                info = pygame.display.Info()
                size = (info.current_w, info.current_h)
        elif display.resizable:
            flags |= pygame.RESIZABLE

        self.screen = pygame.display.set_mode(size, flags)
        pygame.display.set_caption(display.caption)
        self.clock = pygame.time.Clock()

        # Faces are pre-scaled for the tallest window the desktop allows.
        desktop_heights = [height for _, height in pygame.display.get_desktop_sizes()]
        max_height = max(desktop_heights + [self.screen.get_height()])
        self.images = self.resources.load_card_images(max_height)

        self.geometry = compute_geometry(*self.screen.get_size())
        self.deal_new_game()
        self._create_layers()
        self.running = True
        logger.info("Started with a %dx%d window", *self.screen.get_size())

    def deal_new_game(self) -> None:
        """Shuffle a fresh deck into a new grid."""

        assert self.geometry is not None
        grid = new_game(build_deck(self.images), self.rng)
        self.controller = InteractionController(grid, self.geometry)
        self.scheduler.request_all()

    def handle_events(self) -> None:
        """Consume pygame events."""

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key in self.NEW_GAME_KEYS:
                    self._handle_new_game_key()
            elif event.type == pygame.VIDEORESIZE:
                self.resize(event.w, event.h)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.on_press(*event.pos)
            elif event.type == pygame.MOUSEMOTION:
                self.on_move(*event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.on_release(*event.pos)

    # Input handlers only request repaints; painting happens in draw().

    def on_press(self, x: float, y: float) -> None:
        assert self.controller is not None
        if self.controller.press(x, y):
            self.scheduler.request_all()

    def on_move(self, x: float, y: float) -> None:
        assert self.controller is not None
        if self.controller.move(x, y):
            self.scheduler.request_dynamic()

    def on_release(self, x: float, y: float) -> None:
        assert self.controller is not None
        result = self.controller.release(x, y)
        if isinstance(result, Placed):
            self.scheduler.request_all()
        elif result is not None:
            self.scheduler.request_dynamic()

    def _handle_new_game_key(self) -> None:
        assert self.controller is not None
        if self.controller.state is not InteractionState.IDLE:
            return
        self.deal_new_game()

    def resize(self, width: int, height: int) -> None:
        """Recompute the layout for a new window size."""

        if width <= 0 or height <= 0:
            return
        assert self.controller is not None
        self.geometry = compute_geometry(width, height)
        self.controller.set_geometry(self.geometry)
        self._create_layers()
        logger.info("Resized to %dx%d", width, height)

    def _create_layers(self) -> None:
        assert self.geometry is not None
        size = (round(self.geometry.width), round(self.geometry.height))
        self.static_layer = pygame.Surface(size)
        self.dynamic_layer = pygame.Surface(size, pygame.SRCALPHA)
        self.scheduler.request_all()

    def update(self, dt: float) -> None:
        """Advance the return animation by *dt* seconds."""

        assert self.controller is not None
        if self.controller.state is not InteractionState.RETURNING:
            return
        if self.controller.advance(dt * 1000.0) is AnimationState.DONE:
            self.scheduler.request_all()
        else:
            self.scheduler.request_dynamic()

    def draw(self) -> None:
        """Repaint whichever layers changed and present the frame."""

        if not self.scheduler.pending:
            return
        assert self.screen is not None
        assert self.geometry is not None and self.controller is not None
        assert self.static_layer is not None and self.dynamic_layer is not None

        repaint_static, repaint_dynamic = self.scheduler.flush()
        if repaint_static:
            self.renderer.draw_static(self.static_layer, self.geometry, self.controller.grid)
        if repaint_dynamic:
            self.renderer.draw_dynamic(self.dynamic_layer, self.geometry, self.controller.active)

        self.screen.blit(self.static_layer, (0, 0))
        self.screen.blit(self.dynamic_layer, (0, 0))
        pygame.display.flip()

    def run(self) -> None:
        """Run the main loop until the app stops."""

        if not self.running:
            self.setup()

        assert self.clock is not None
        display = self.config.display

        while self.running:
            self.handle_events()
            dt = self.clock.tick(display.frame_rate) / 1000.0
            self.update(dt)
            self.draw()

        pygame.quit()
