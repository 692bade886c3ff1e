"""Run orchestration: validate the six rows, place answers, realign and regenerate frenzy.

One run is synchronous and strictly ordered. Frenzy row ``i`` depends on
answer ``i + 1``'s path and on the reservations made by rows before it, so
rows are processed in ascending order against a single :class:`OccupiedSet`
created fresh for the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..core.constants import (
    FRENZY_ROWS,
    FRENZY_SLOTS,
    NUM_ROWS,
    AnswerStatus,
    Orientation,
    Point,
    SlotStatus,
)
from ..core.exceptions import NotFoundError, PlacerError, ValidationError
from ..core.models import Answer, BlockDescriptor, FrenzyRow, PlacementJob
from ..data.normalization import clean_word, is_blank, parse_trailing_number
from ..io.target import AnswerState, PlacementTarget
from ..utils.logger import get_logger
from .answers import AnswerPlacer
from .coordinates import CoordinateMapper, ReferenceFrame, collapsed_end, frenzy_starts, segment
from .frenzy import FrenzyContext, FrenzyRowBuilder
from .grid import GridIndex, PathBuilder, parse_block
from .occupancy import RC, OccupiedSet
from .random_placer import answer_rcs


LOGGER = get_logger(__name__)

MSG_MISSING_BLOCK = "please add tile number with orientation"
MSG_MISSING_FRENZY = "please add frenzy for this answer {index}"


class RunnerState(str, Enum):
    IDLE = "IDLE"
    VALIDATING = "VALIDATING"
    PLACING = "PLACING"
    DONE = "DONE"
    ABORTED = "ABORTED"


@dataclass
class MergedRow:
    """A row's form values merged over what the target currently holds."""

    index: int
    question: str
    answer: str
    block_text: str
    frenzy_typed: bool
    changed_answer: bool = False
    changed_block: bool = False
    current_question: str = ""
    current_answer: str = ""

    @property
    def block(self) -> Optional[BlockDescriptor]:
        return parse_block(self.block_text)


@dataclass
class AnswerReport:
    index: int
    status: AnswerStatus
    message: str = ""


@dataclass
class RunReport:
    answers: List[AnswerReport] = field(default_factory=list)
    frenzy: List[FrenzyRow] = field(default_factory=list)

    @property
    def log(self) -> str:
        parts = [
            f"[{report.index}] {report.status.value}"
            for report in self.answers
            if report.status is not AnswerStatus.SKIPPED
        ]
        parts.extend(f"[F{row.index}:ok]" for row in self.frenzy)
        return " ".join(parts) if parts else "Done."

    def frenzy_row(self, index: int) -> Optional[FrenzyRow]:
        for row in self.frenzy:
            if row.index == index:
                return row
        return None


def derive_block(state: AnswerState) -> Optional[str]:
    """Block text implied by an answer's stored state: first letter's tile + orientation."""

    refs = state.letter_refs or []
    first = int(refs[0]) if refs else 0
    if first <= 0:
        return None
    return f"{first}{Orientation.from_flag(state.orientation_flag).value}"


class PlacementRunner:
    """Drives one placement run against a :class:`PlacementTarget`."""

    def __init__(self, target: PlacementTarget) -> None:
        self.target = target
        self.state = RunnerState.IDLE
        self.current_row: Optional[int] = None

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def run(self, job: PlacementJob) -> RunReport:
        self.state = RunnerState.VALIDATING
        self.current_row = None
        try:
            merged = self.validate(job)
        except ValidationError as exc:
            self.state = RunnerState.ABORTED
            LOGGER.error("Run aborted at row %s: %s", exc.row, exc)
            raise

        self.state = RunnerState.PLACING
        try:
            report = self._place(job, merged)
        except PlacerError as exc:
            self.state = RunnerState.ABORTED
            LOGGER.error("Run aborted at row %s: %s", self.current_row, exc)
            raise
        self.state = RunnerState.DONE
        self.current_row = None
        LOGGER.info("Run complete: %s", report.log)
        return report

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def validate(self, job: PlacementJob) -> List[MergedRow]:
        merged: List[MergedRow] = []
        for index0 in range(NUM_ROWS):
            index = index0 + 1
            self.current_row = index
            merged.append(self._merge_row(index, job))

        if not job.config.auto_frenzy:
            for index0 in range(1, NUM_ROWS):
                row = merged[index0]
                if (row.changed_answer or row.changed_block) and not merged[index0 - 1].frenzy_typed:
                    raise ValidationError(MSG_MISSING_FRENZY.format(index=row.index), row=row.index)
        return merged

    def _merge_row(self, index: int, job: PlacementJob) -> MergedRow:
        form = job.row(index - 1)
        current_question, current_answer_raw = self.target.read_qa_text(index)
        current_answer = clean_word(current_answer_raw)
        existing_block = derive_block(self.target.read_answer(index)) or f"{index}{Orientation.ACROSS.value}"

        typed_block = not is_blank(form.block)
        typed_answer = not is_blank(form.answer)
        parsed = parse_block(form.block) if typed_block else None
        if (typed_answer or typed_block) and parsed is None:
            raise ValidationError(MSG_MISSING_BLOCK, row=index)

        block_text = str(parsed) if parsed is not None else existing_block
        question = current_question
        if not is_blank(form.question):
            question = f"{block_text}. {form.question}"
        answer = clean_word(form.answer) if typed_answer else current_answer

        return MergedRow(
            index=index,
            question=question,
            answer=answer,
            block_text=block_text,
            frenzy_typed=not is_blank(form.frenzy),
            changed_answer=typed_answer and answer != current_answer,
            changed_block=typed_block and block_text != existing_block,
            current_question=current_question,
            current_answer=current_answer_raw,
        )

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def _place(self, job: PlacementJob, merged: List[MergedRow]) -> RunReport:
        config = job.config
        report = RunReport()

        for row in merged:
            if row.question != row.current_question or row.answer != row.current_answer:
                self.target.write_qa_text(row.index, row.question, row.answer)

        grid = GridIndex.from_target(self.target)
        frame = ReferenceFrame(self.target.read_parent_translation())
        mapper = CoordinateMapper(frame, self.target.grid_size(), self.target.target_size())
        paths = PathBuilder(grid)
        placer = AnswerPlacer(grid, mapper)

        answers = [
            Answer(row.index, row.answer, row.block, paths.build_path(row.block, len(row.answer)))
            for row in merged
        ]
        # Answers are re-placed on every run: the grid numbering may have shifted.
        for answer in answers:
            self.current_row = answer.index
            report.answers.append(self._place_answer(answer, placer))

        ordered_cells, forbidden = answer_rcs([answer.path for answer in answers])
        pool = grid.enabled_cells(excluding=forbidden)

        occupied = OccupiedSet()
        for index in range(1, NUM_ROWS + 1):
            occupied = occupied.reserve(self._label_cells(grid, index))

        self._realign(grid, mapper)

        builder = FrenzyRowBuilder(
            FrenzyContext(
                answers_text=[answer.text for answer in answers],
                paths=[answer.path for answer in answers],
                pool=pool,
                answer_cells=ordered_cells,
                config=config,
            )
        )
        for index0 in range(FRENZY_ROWS):
            if not (config.auto_frenzy or merged[index0].frenzy_typed):
                continue
            index = index0 + 1
            self.current_row = index
            previous = self._label_cells(grid, index)
            frenzy_row, occupied = builder.build(index0, job.row(index0), occupied, previous)
            self._write_frenzy(frenzy_row, mapper)
            report.frenzy.append(frenzy_row)
        return report

    def _place_answer(self, answer: Answer, placer: AnswerPlacer) -> AnswerReport:
        if answer.block is None or not answer.text:
            return AnswerReport(answer.index, AnswerStatus.SKIPPED)
        try:
            placer.place(answer, self.target)
        except NotFoundError as exc:
            LOGGER.warning("Answer %s: %s", answer.index, exc)
            return AnswerReport(answer.index, AnswerStatus.MISSING, str(exc))
        except PlacerError as exc:
            LOGGER.error("Answer %s failed: %s", answer.index, exc)
            return AnswerReport(answer.index, AnswerStatus.ERROR, str(exc))
        return AnswerReport(answer.index, AnswerStatus.OK, f"Placed {answer.block}")

    def _label_cells(self, grid: GridIndex, index: int) -> List[RC]:
        cells: List[RC] = []
        for slot in range(1, FRENZY_SLOTS + 1):
            number = parse_trailing_number(self.target.read_frenzy_slot(index, slot).label)
            cell = grid.find_by_number(number)
            if cell is not None:
                cells.append(cell.rc)
        return cells

    def _starts_for(self, index: int) -> List[Point]:
        state = self.target.read_answer(index)
        return frenzy_starts(state.anchor, Orientation.from_flag(state.orientation_flag))

    def _realign(self, grid: GridIndex, mapper: CoordinateMapper) -> None:
        """Refresh every frenzy mask from current anchors, keeping letters and tiles."""

        for index in range(1, NUM_ROWS + 1):
            starts = self._starts_for(index)
            for slot in range(1, FRENZY_SLOTS + 1):
                current = self.target.read_frenzy_slot(index, slot)
                end = current.end
                cell = grid.find_by_number(parse_trailing_number(current.label))
                if cell is not None:
                    end = mapper.frenzy_end(cell)
                start, end = segment(starts[slot - 1], end)
                self.target.write_frenzy_anchor(index, slot, start, end, current.label)

    def _write_frenzy(self, frenzy_row: FrenzyRow, mapper: CoordinateMapper) -> None:
        starts = self._starts_for(frenzy_row.index)
        for slot_no, slot in enumerate(frenzy_row.padded_slots(), start=1):
            start = starts[slot_no - 1]
            if slot.status is SlotStatus.PLACED and slot.cell is not None:
                end = mapper.frenzy_end(slot.cell)
            else:
                end = collapsed_end(start)
            start, end = segment(start, end)
            self.target.write_frenzy_anchor(frenzy_row.index, slot_no, start, end, slot.label)
