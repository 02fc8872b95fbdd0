"""
Position search and collision detection.

PositionSearch keeps the boxes placed so far in a numpy array and scans a
fixed grid for the first collision-free position of a new box:

  z (height) outermost, then y (width), then x (length)
  x runs from the back wall (x = 0) towards the opening, so boxes are
  loaded from the back.

Feasibility is tested against the nominal boot box; the efficiency factor
plays no part here.  Overlap is strict on all three axes, so boxes that
only touch are accepted.

Usage:
    search = PositionSearch(space, grid_step=50)
    pos = search.find_position(Dimensions(400, 300, 200))
    if pos is not None:
        search.place(pos, Dimensions(400, 300, 200))
"""

import logging
import time
from typing import Optional

import numpy as np

from bootfit.models import Dimensions, EffectiveSpace, Position

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Search budget
# ─────────────────────────────────────────────────────────────────────────────

class SearchBudget:
    """
    Optional wall-clock and work limit for one packing call.

    The position search charges one unit per examined grid position.  Once
    either limit is hit the budget stays exhausted and every further search
    returns None.
    """

    __slots__ = ("max_seconds", "max_position_checks", "position_checks",
                 "_started", "_exhausted")

    def __init__(
        self,
        max_seconds: Optional[float] = None,
        max_position_checks: Optional[int] = None,
    ) -> None:
        self.max_seconds = max_seconds
        self.max_position_checks = max_position_checks
        self.position_checks = 0
        self._started = time.perf_counter()
        self._exhausted = False

    @property
    def exhausted(self) -> bool:
        if self._exhausted:
            return True
        if (self.max_position_checks is not None
                and self.position_checks >= self.max_position_checks):
            self._exhausted = True
        elif (self.max_seconds is not None
                and time.perf_counter() - self._started >= self.max_seconds):
            self._exhausted = True
        return self._exhausted

    def charge(self, checks: int) -> None:
        self.position_checks += checks

    def __repr__(self) -> str:
        return (
            f"SearchBudget(checks={self.position_checks}/"
            f"{self.max_position_checks}, seconds={self.max_seconds}, "
            f"exhausted={self._exhausted})"
        )


# ─────────────────────────────────────────────────────────────────────────────
# Position search
# ─────────────────────────────────────────────────────────────────────────────

def _axis_overlap(start, size, starts, sizes):
    """Strict overlap of ``[start, start + size)`` with each placed interval."""
    return (start < starts + sizes) & (start + size > starts)


class PositionSearch:
    """
    First-fit grid search over a boot's nominal box.

    The placed boxes are stored as rows ``[x, y, z, l, w, h]`` so that the
    overlap test against all of them is a single vectorised expression per
    grid row.
    """

    __slots__ = ("length", "width", "height", "grid_step", "budget", "_boxes")

    def __init__(
        self,
        space: EffectiveSpace,
        grid_step: int = 50,
        budget: Optional[SearchBudget] = None,
    ) -> None:
        self.length = space.length
        self.width = space.width
        self.height = space.height
        self.grid_step = grid_step
        self.budget = budget if budget is not None else SearchBudget()
        self._boxes = np.empty((0, 6), dtype=np.int64)

    @property
    def placed_count(self) -> int:
        return int(self._boxes.shape[0])

    @property
    def occupied_volume(self) -> int:
        if self._boxes.shape[0] == 0:
            return 0
        return int(np.sum(self._boxes[:, 3] * self._boxes[:, 4] * self._boxes[:, 5]))

    def find_position(self, dims: Dimensions) -> Optional[Position]:
        """
        Return the first collision-free grid position for *dims*, or None.

        None is also returned once the search budget is exhausted.
        """
        l, w, h = dims.as_tuple()
        if l > self.length or w > self.width or h > self.height:
            return None
        if self.budget.exhausted:
            return None

        step = self.grid_step
        xs = np.arange(0, self.length - l + 1, step, dtype=np.int64)
        boxes = self._boxes

        for z in range(0, self.height - h + 1, step):
            # Only boxes sharing a z range with the candidate can collide.
            if boxes.shape[0]:
                layer = boxes[_axis_overlap(z, h, boxes[:, 2], boxes[:, 5])]
            else:
                layer = boxes

            for y in range(0, self.width - w + 1, step):
                if self.budget.exhausted:
                    logger.debug("Search budget exhausted at z=%d y=%d", z, y)
                    return None
                self.budget.charge(len(xs))

                if layer.shape[0]:
                    row = layer[_axis_overlap(y, w, layer[:, 1], layer[:, 4])]
                else:
                    row = layer

                if row.shape[0] == 0:
                    return Position(int(xs[0]), y, z)

                # (len(xs), n) collision matrix along the length axis.
                hits = _axis_overlap(xs[:, None], l, row[None, :, 0], row[None, :, 3])
                free = ~hits.any(axis=1)
                if free.any():
                    return Position(int(xs[int(np.argmax(free))]), y, z)

        return None

    def has_collision(self, position: Position, dims: Dimensions) -> bool:
        """True if a box at *position* would overlap any placed box."""
        if self._boxes.shape[0] == 0:
            return False
        b = self._boxes
        x, y, z = position.as_tuple()
        l, w, h = dims.as_tuple()
        hits = (
            _axis_overlap(x, l, b[:, 0], b[:, 3])
            & _axis_overlap(y, w, b[:, 1], b[:, 4])
            & _axis_overlap(z, h, b[:, 2], b[:, 5])
        )
        return bool(hits.any())

    def place(self, position: Position, dims: Dimensions) -> None:
        """Record a box as occupied.  Callers pass positions from find_position."""
        row = np.array([[*position.as_tuple(), *dims.as_tuple()]], dtype=np.int64)
        self._boxes = np.vstack([self._boxes, row])

    def __repr__(self) -> str:
        return (
            f"PositionSearch({self.length}x{self.width}x{self.height}mm, "
            f"step={self.grid_step}, boxes={self.placed_count})"
        )
