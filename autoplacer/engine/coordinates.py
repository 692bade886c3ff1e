"""Mapping grid tiles into the target composition's coordinate space."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..core.constants import (
    FRENZY_ALIGN_STEP,
    FRENZY_END_OFFSET,
    FRENZY_SLOTS,
    FRENZY_START_OFFSET,
    GRID_PARENT_BASELINE,
    SEGMENT_EPSILON,
    Orientation,
    Point,
)
from ..core.models import Cell


@dataclass(frozen=True)
class ReferenceFrame:
    """Translation of the grid's parent layer and the baseline it was tuned at."""

    parent: Optional[Point] = None
    baseline: Point = GRID_PARENT_BASELINE

    @property
    def translation(self) -> Point:
        return self.parent if self.parent is not None else (0.0, 0.0)

    @property
    def delta(self) -> Point:
        # No parent reported means nothing has drifted.
        if self.parent is None:
            return (0.0, 0.0)
        return (self.parent[0] - self.baseline[0], self.parent[1] - self.baseline[1])


class CoordinateMapper:
    """Converts tile positions into anchor points for answers and frenzy masks.

    Frenzy end points only receive the *delta* between the current parent
    translation and the baseline; adding the absolute translation again would
    double-offset placements that were already correct.
    """

    def __init__(
        self,
        frame: ReferenceFrame,
        grid_size: Tuple[float, float],
        target_size: Tuple[float, float],
        end_offset: Point = FRENZY_END_OFFSET,
    ) -> None:
        self.frame = frame
        self.end_offset = end_offset
        gw, gh = grid_size
        tw, th = target_size
        self.scale: Point = (tw / gw if gw else 1.0, th / gh if gh else 1.0)

    def grid_point(self, cell: Cell) -> Point:
        """Tile position in grid-composition space."""
        px, py = self.frame.translation
        return (cell.position[0] + px, cell.position[1] + py)

    def answer_anchor(self, cell: Cell) -> Point:
        return self.grid_point(cell)

    def frenzy_end(self, cell: Cell) -> Point:
        gx, gy = self.grid_point(cell)
        dx, dy = self.frame.delta
        return (
            (gx + dx - self.end_offset[0]) * self.scale[0],
            (gy + dy - self.end_offset[1]) * self.scale[1],
        )


def frenzy_starts(anchor: Point, orientation: Orientation, count: int = FRENZY_SLOTS) -> List[Point]:
    """Start points of the frenzy masks, stepped along the answer's orientation."""

    base_x = anchor[0] + FRENZY_START_OFFSET[0]
    base_y = anchor[1] + FRENZY_START_OFFSET[1]
    starts: List[Point] = []
    for k in range(count):
        dx = k * FRENZY_ALIGN_STEP if orientation is Orientation.ACROSS else 0.0
        dy = k * FRENZY_ALIGN_STEP if orientation is Orientation.DOWN else 0.0
        starts.append((base_x + dx, base_y + dy))
    return starts


def collapsed_end(start: Point) -> Point:
    """End point of a cleared mask: a hair to the right of its start."""
    return (start[0] + SEGMENT_EPSILON, start[1])


def segment(start: Point, end: Point) -> Tuple[Point, Point]:
    """Return ``(start, end)``, nudging a degenerate segment so the host can draw it."""

    if abs(end[0] - start[0]) < SEGMENT_EPSILON and abs(end[1] - start[1]) < SEGMENT_EPSILON:
        end = collapsed_end(start)
    return start, end
