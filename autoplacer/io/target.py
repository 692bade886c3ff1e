"""The narrow capability through which the placer talks to a composition host.

The placement core never knows how the host represents scenes, layers or
keyframes. It reads grid topology and current anchor state, and writes answer
and frenzy anchors, through :class:`PlacementTarget`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Tuple

from ..core.constants import MAX_WORD_LENGTH, Point


@dataclass(frozen=True)
class CellInfo:
    enabled: bool = True
    number: int = 0
    position: Point = (0.0, 0.0)


@dataclass
class AnswerState:
    """What the host currently shows for an answer row."""

    anchor: Point = (0.0, 0.0)
    orientation_flag: float = 0.0
    letter_refs: List[int] = field(default_factory=lambda: [0] * MAX_WORD_LENGTH)


@dataclass
class FrenzySlotState:
    label: str = ""
    start: Point = (0.0, 0.0)
    end: Point = (0.0, 0.0)


class PlacementTarget(Protocol):
    def grid_shape(self) -> Tuple[int, int]:
        """Return ``(rows, cols)`` of the grid."""

    def read_cell(self, linear_index: int) -> CellInfo:
        """Return the tile at ``linear_index`` in row-major reading order."""

    def read_parent_translation(self) -> Optional[Point]:
        """Current translation of the grid's reference frame, if the host has one."""

    def grid_size(self) -> Tuple[float, float]:
        ...

    def target_size(self) -> Tuple[float, float]:
        ...

    def read_qa_text(self, index: int) -> Tuple[str, str]:
        """Return ``(question, answer)`` text for the 1-based row ``index``."""

    def write_qa_text(self, index: int, question: str, answer: str) -> None:
        ...

    def read_answer(self, index: int) -> AnswerState:
        ...

    def write_answer_anchor(
        self,
        index: int,
        position: Point,
        orientation_flag: int,
        letter_refs: Sequence[int],
    ) -> None:
        ...

    def read_frenzy_slot(self, row: int, slot: int) -> FrenzySlotState:
        ...

    def write_frenzy_anchor(
        self,
        row: int,
        slot: int,
        start: Point,
        end: Point,
        label: str,
    ) -> None:
        ...
