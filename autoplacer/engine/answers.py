"""Answer anchoring: position, orientation and per-letter tile references."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..core.constants import MAX_WORD_LENGTH, Point
from ..core.exceptions import NotFoundError
from ..core.models import Answer
from ..io.target import PlacementTarget
from ..utils.logger import get_logger
from .coordinates import CoordinateMapper
from .grid import GridIndex, PathBuilder


LOGGER = get_logger(__name__)


@dataclass
class AnswerPlacement:
    index: int
    anchor: Point
    orientation_flag: int
    letter_refs: List[int]


class AnswerPlacer:
    """Resolves answers against the grid and writes their anchors to the target."""

    def __init__(self, grid: GridIndex, mapper: CoordinateMapper) -> None:
        self.grid = grid
        self.mapper = mapper
        self.paths = PathBuilder(grid)

    def resolve(self, answer: Answer) -> AnswerPlacement:
        if answer.block is None:
            raise NotFoundError(f"Answer {answer.index} has no block")
        start = self.grid.find_by_number(answer.block.start_number)
        if start is None:
            raise NotFoundError(f"Num={answer.block.start_number} not found.")

        if not answer.path:
            answer.path = self.paths.build_path(answer.block, len(answer.text))

        letter_refs: List[int] = []
        for k in range(MAX_WORD_LENGTH):
            number = 0
            if k < len(answer.text) and k < len(answer.path):
                number = answer.path[k].number
            letter_refs.append(number)

        return AnswerPlacement(
            index=answer.index,
            anchor=self.mapper.answer_anchor(start),
            orientation_flag=answer.block.orientation.flag,
            letter_refs=letter_refs,
        )

    def place(self, answer: Answer, target: PlacementTarget) -> AnswerPlacement:
        placement = self.resolve(answer)
        target.write_answer_anchor(
            placement.index,
            placement.anchor,
            placement.orientation_flag,
            placement.letter_refs,
        )
        LOGGER.info("Placed answer %s '%s' at %s", answer.index, answer.text, answer.block)
        return placement
