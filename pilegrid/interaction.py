"""Pick-up, drag, drop and snap-back handling for the active card."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from .geometry import GeometrySnapshot
from .models import (
    Card,
    CellCoord,
    PileGrid,
    Placed,
    PlacementRule,
    PlaceResult,
    Position,
    Rejected,
    RejectReason,
    accept_any,
)

logger = logging.getLogger(__name__)


class InteractionState(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    RETURNING = "returning"


class AnimationState(enum.Enum):
    ONGOING = "ongoing"
    DONE = "done"


@dataclass(slots=True)
class ActiveCard:
    """The card detached from the grid and the pile it came from."""

    card: Card
    origin: CellCoord
    animating: bool = False


class ReturnAnimation:
    """Linear move from the drop point back to the card's return position.

    The animation runs in fixed steps of ``STEP_MS``; time passed to
    :meth:`advance` that does not fill a whole step is kept for the next call.
    """

    DURATION_MS = 200
    STEP_MS = 10

    def __init__(self, start: Position, target: Position) -> None:
        self.start = start
        self.target = target
        self.total_steps = self.DURATION_MS // self.STEP_MS
        self.steps_done = 0
        self._budget = 0.0

    @property
    def finished(self) -> bool:
        return self.steps_done >= self.total_steps

    @property
    def position(self) -> Position:
        if self.finished:
            return self.target
        t = self.steps_done / self.total_steps
        sx, sy = self.start
        tx, ty = self.target
        return sx + (tx - sx) * t, sy + (ty - sy) * t

    def retarget(self, target: Position) -> None:
        self.target = target

    def advance(self, elapsed_ms: float) -> AnimationState:
        self._budget += max(0.0, elapsed_ms)
        steps = int(self._budget // self.STEP_MS)
        if steps:
            self._budget -= steps * self.STEP_MS
            self.steps_done = min(self.total_steps, self.steps_done + steps)
        return AnimationState.DONE if self.finished else AnimationState.ONGOING


class InteractionController:
    """Owns the active card and moves cards between piles of a :class:`PileGrid`.

    At most one card is ever detached from the grid. While it is animating
    back to its pile, pointer moves and releases are ignored.
    """

    def __init__(
        self,
        grid: PileGrid,
        geometry: GeometrySnapshot,
        can_place: PlacementRule = accept_any,
    ) -> None:
        self.grid = grid
        self.geometry = geometry
        self.can_place = can_place
        self.active: ActiveCard | None = None
        self.animation: ReturnAnimation | None = None
        self.layout_cards()

    @property
    def state(self) -> InteractionState:
        if self.active is None:
            return InteractionState.IDLE
        if self.active.animating:
            return InteractionState.RETURNING
        return InteractionState.DRAGGING

    # Layout -----------------------------------------------------------

    def set_geometry(self, geometry: GeometrySnapshot) -> None:
        """Adopt a new snapshot and move every card to match it."""

        self.geometry = geometry
        self.layout_cards()
        if self.active is None:
            return
        card = self.active.card
        col, row = self.active.origin
        slot = len(self.grid.cell_at(col, row))
        card.return_position = geometry.card_position(col, row, slot)
        if self.animation is not None:
            self.animation.retarget(card.return_position)

    def layout_cards(self) -> None:
        for col, row, _ in self.grid.cells():
            self.layout_pile(col, row)

    def layout_pile(self, col: int, row: int) -> None:
        for index, card in enumerate(self.grid.cell_at(col, row)):
            card.set_position(*self.geometry.card_position(col, row, index))

    # Pointer input ----------------------------------------------------

    def press(self, x: float, y: float) -> bool:
        """Pick up the top card of the pile under the pointer."""

        if self.active is not None:
            return False
        cell = self.geometry.cell_at_point(x, y)
        if cell is None or self.grid.is_reserved(*cell):
            return False
        card = self.grid.pop_top(*cell)
        if card is None:
            logger.debug("Ignoring press on empty pile %s", cell)
            return False

        card.save_position()
        card.set_position(*self.geometry.centered_on(x, y))
        self.active = ActiveCard(card=card, origin=cell)
        logger.debug("Picked up %s from %s", card.label, cell)
        return True

    def move(self, x: float, y: float) -> bool:
        if self.state is not InteractionState.DRAGGING:
            return False
        assert self.active is not None
        self.active.card.set_position(*self.geometry.centered_on(x, y))
        return True

    def release(self, x: float, y: float) -> PlaceResult | None:
        """Drop the active card, or send it back when the target is invalid."""

        if self.state is not InteractionState.DRAGGING:
            return None
        assert self.active is not None
        card = self.active.card

        cell = self.geometry.cell_at_point(x, y)
        if cell is None:
            result: PlaceResult = Rejected(RejectReason.OUT_OF_GRID)
        else:
            result = self.place_card(cell[0], cell[1], card)

        if isinstance(result, Placed):
            self.active = None
        else:
            logger.debug("Rejected %s (%s), returning to %s", card.label, result.reason.value, self.active.origin)
            self._start_return()
        return result

    def place_card(self, col: int, row: int, card: Card) -> PlaceResult:
        """Push *card* onto a pile if the cell and placement rule allow it."""

        if self.grid.is_reserved(col, row):
            return Rejected(RejectReason.RESERVED_CELL)
        if not self.can_place(card, self.grid.top(col, row)):
            return Rejected(RejectReason.RULE)
        self.grid.push_top(col, row, card)
        self.layout_pile(col, row)
        logger.debug("Placed %s on %s", card.label, (col, row))
        return Placed(col, row)

    # Animation --------------------------------------------------------

    def _start_return(self) -> None:
        assert self.active is not None
        card = self.active.card
        self.active.animating = True
        self.animation = ReturnAnimation(card.position, card.return_position)

    def advance(self, elapsed_ms: float) -> AnimationState:
        """Step the return animation by *elapsed_ms* of frame time."""

        if self.animation is None or self.active is None:
            return AnimationState.DONE

        state = self.animation.advance(elapsed_ms)
        card = self.active.card
        card.set_position(*self.animation.position)
        if state is AnimationState.DONE:
            col, row = self.active.origin
            self.grid.push_top(col, row, card)
            self.layout_pile(col, row)
            self.active = None
            self.animation = None
            logger.debug("Returned %s to %s", card.label, (col, row))
        return state
