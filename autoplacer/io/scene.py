"""JSON-backed placement target and job documents.

A scene document mirrors what a composition host exposes to the placer::

    {
      "grid": {
        "rows": 5, "cols": 5,
        "parent": [445.5, 782.5],
        "size": [1000, 1000],
        "cells": [{"enabled": true, "number": 1, "position": [50, 50]}, ...]
      },
      "target_size": [1000, 1000],
      "rows": [
        {"question": "", "answer": "CAT",
         "anchor": [0, 0], "orientation": 0, "letters": [1, 2, 3, 0, 0, 0, 0, 0, 0],
         "frenzy": [{"label": "", "start": [0, 0], "end": [0, 0]}, ...]},
        ...
      ]
    }

Missing rows, answers and frenzy slots are filled with empty defaults so a
fresh scene only needs its grid.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.constants import (
    FRENZY_SLOTS,
    GRID_PARENT_BASELINE,
    MAX_WORD_LENGTH,
    NUM_ROWS,
    Point,
)
from ..core.exceptions import SceneFormatError
from ..core.models import PlacementJob, RowInput, RunConfig
from ..utils.logger import get_logger
from .target import AnswerState, CellInfo, FrenzySlotState


LOGGER = get_logger(__name__)


def _point(value: Any, what: str) -> Point:
    try:
        x, y = value[0], value[1]
        return (float(x), float(y))
    except (TypeError, ValueError, IndexError, KeyError) as exc:
        raise SceneFormatError(f"Invalid point for {what}: {value!r}") from exc


@dataclass
class SceneRow:
    question: str = ""
    answer: str = ""
    state: AnswerState = field(default_factory=AnswerState)
    frenzy: List[FrenzySlotState] = field(
        default_factory=lambda: [FrenzySlotState() for _ in range(FRENZY_SLOTS)]
    )


class SceneTarget:
    """In-memory :class:`~autoplacer.io.target.PlacementTarget` with JSON persistence."""

    def __init__(
        self,
        rows: int,
        cols: int,
        cells: Sequence[CellInfo],
        parent: Optional[Point] = GRID_PARENT_BASELINE,
        grid_size: Tuple[float, float] = (1000.0, 1000.0),
        target_size: Tuple[float, float] = (1000.0, 1000.0),
        scene_rows: Optional[Sequence[SceneRow]] = None,
    ) -> None:
        self.rows = rows
        self.cols = cols
        self.cells: List[CellInfo] = list(cells)
        self.parent = parent
        self._grid_size = grid_size
        self._target_size = target_size
        self.scene_rows: List[SceneRow] = list(scene_rows or [])
        while len(self.scene_rows) < NUM_ROWS:
            self.scene_rows.append(SceneRow())

    # ------------------------------------------------------------------
    # PlacementTarget
    # ------------------------------------------------------------------
    def grid_shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def read_cell(self, linear_index: int) -> CellInfo:
        return self.cells[linear_index]

    def read_parent_translation(self) -> Optional[Point]:
        return self.parent

    def grid_size(self) -> Tuple[float, float]:
        return self._grid_size

    def target_size(self) -> Tuple[float, float]:
        return self._target_size

    def read_qa_text(self, index: int) -> Tuple[str, str]:
        row = self._row(index)
        return row.question, row.answer

    def write_qa_text(self, index: int, question: str, answer: str) -> None:
        row = self._row(index)
        row.question = question
        row.answer = answer

    def read_answer(self, index: int) -> AnswerState:
        return self._row(index).state

    def write_answer_anchor(
        self,
        index: int,
        position: Point,
        orientation_flag: int,
        letter_refs: Sequence[int],
    ) -> None:
        self._row(index).state = AnswerState(
            anchor=(float(position[0]), float(position[1])),
            orientation_flag=float(orientation_flag),
            letter_refs=list(letter_refs),
        )

    def read_frenzy_slot(self, row: int, slot: int) -> FrenzySlotState:
        return self._slot(row, slot)

    def write_frenzy_anchor(self, row: int, slot: int, start: Point, end: Point, label: str) -> None:
        self._row(row).frenzy[slot - 1] = FrenzySlotState(label=label, start=start, end=end)

    def _row(self, index: int) -> SceneRow:
        if not 1 <= index <= len(self.scene_rows):
            raise SceneFormatError(f"No row {index} in scene")
        return self.scene_rows[index - 1]

    def _slot(self, row: int, slot: int) -> FrenzySlotState:
        slots = self._row(row).frenzy
        if not 1 <= slot <= len(slots):
            raise SceneFormatError(f"No frenzy slot {slot} in row {row}")
        return slots[slot - 1]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, doc: Dict[str, Any]) -> "SceneTarget":
        if not isinstance(doc, dict):
            raise SceneFormatError("Scene must be a JSON object")
        grid = doc.get("grid")
        if not isinstance(grid, dict):
            raise SceneFormatError("Scene grid must be an object")
        try:
            rows = int(grid["rows"])
            cols = int(grid["cols"])
            raw_cells = list(grid["cells"])
        except (KeyError, TypeError, ValueError) as exc:
            raise SceneFormatError(f"Scene grid is incomplete: {exc}") from exc

        cells = [cls._cell_from_dict(raw, i) for i, raw in enumerate(raw_cells)]
        parent_raw = grid.get("parent")
        parent = _point(parent_raw, "grid parent") if parent_raw is not None else None
        raw_rows = doc.get("rows", []) or []
        if not isinstance(raw_rows, list):
            raise SceneFormatError("Scene rows must be a list")
        scene_rows = [cls._row_from_dict(raw, i + 1) for i, raw in enumerate(raw_rows)]
        return cls(
            rows=rows,
            cols=cols,
            cells=cells,
            parent=parent,
            grid_size=_point(grid.get("size", (1000, 1000)), "grid size"),
            target_size=_point(doc.get("target_size", (1000, 1000)), "target size"),
            scene_rows=scene_rows,
        )

    @staticmethod
    def _cell_from_dict(raw: Any, i: int) -> CellInfo:
        if not isinstance(raw, dict):
            raise SceneFormatError(f"Cell {i} must be an object, got {raw!r}")
        try:
            number = int(raw.get("number", 0) or 0)
        except (TypeError, ValueError) as exc:
            raise SceneFormatError(f"Invalid number for cell {i}: {raw.get('number')!r}") from exc
        return CellInfo(
            enabled=bool(raw.get("enabled", True)),
            number=number,
            position=_point(raw.get("position", (0, 0)), f"cell {i}"),
        )

    @staticmethod
    def _row_from_dict(raw: Any, index: int) -> SceneRow:
        if not isinstance(raw, dict):
            raise SceneFormatError(f"Row {index} must be an object, got {raw!r}")
        try:
            letters = [int(n or 0) for n in raw.get("letters", []) or []][:MAX_WORD_LENGTH]
            orientation = float(raw.get("orientation", 0) or 0)
        except (TypeError, ValueError, AttributeError) as exc:
            raise SceneFormatError(f"Invalid answer state for row {index}: {exc}") from exc
        letters += [0] * (MAX_WORD_LENGTH - len(letters))

        raw_frenzy = raw.get("frenzy", []) or []
        if not isinstance(raw_frenzy, list):
            raise SceneFormatError(f"Frenzy slots of row {index} must be a list")
        frenzy: List[FrenzySlotState] = []
        for slot in raw_frenzy[:FRENZY_SLOTS]:
            if not isinstance(slot, dict):
                raise SceneFormatError(f"Frenzy slot in row {index} must be an object, got {slot!r}")
            frenzy.append(
                FrenzySlotState(
                    label=str(slot.get("label", "")),
                    start=_point(slot.get("start", (0, 0)), f"row {index} frenzy start"),
                    end=_point(slot.get("end", (0, 0)), f"row {index} frenzy end"),
                )
            )
        while len(frenzy) < FRENZY_SLOTS:
            frenzy.append(FrenzySlotState())
        return SceneRow(
            question=str(raw.get("question", "")),
            answer=str(raw.get("answer", "")),
            state=AnswerState(
                anchor=_point(raw.get("anchor", (0, 0)), f"row {index} anchor"),
                orientation_flag=orientation,
                letter_refs=letters,
            ),
            frenzy=frenzy,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid": {
                "rows": self.rows,
                "cols": self.cols,
                "parent": list(self.parent) if self.parent is not None else None,
                "size": list(self._grid_size),
                "cells": [
                    {"enabled": c.enabled, "number": c.number, "position": list(c.position)}
                    for c in self.cells
                ],
            },
            "target_size": list(self._target_size),
            "rows": [
                {
                    "question": row.question,
                    "answer": row.answer,
                    "anchor": list(row.state.anchor),
                    "orientation": row.state.orientation_flag,
                    "letters": list(row.state.letter_refs),
                    "frenzy": [
                        {"label": s.label, "start": list(s.start), "end": list(s.end)}
                        for s in row.frenzy
                    ],
                }
                for row in self.scene_rows
            ],
        }

    @classmethod
    def from_file(cls, path: Path | str) -> "SceneTarget":
        path = Path(path)
        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            raise SceneFormatError(f"Cannot read scene {path}: {exc}") from exc
        LOGGER.debug("Loaded scene %s", path)
        return cls.from_dict(doc)

    def to_file(self, path: Path | str) -> None:
        path = Path(path)
        path.write_text(json.dumps(self.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
        LOGGER.info("Scene saved: %s", path)


def build_scene(
    rows: int,
    cols: int,
    cell_size: float = 100.0,
    disabled: Iterable[Tuple[int, int]] = (),
    numbers: Optional[Dict[Tuple[int, int], int]] = None,
    parent: Optional[Point] = GRID_PARENT_BASELINE,
    target_size: Tuple[float, float] = (1000.0, 1000.0),
) -> SceneTarget:
    """Synthetic scene with tiles laid out on a regular lattice.

    Without ``numbers`` every enabled tile is labeled sequentially in reading
    order starting at 1; disabled tiles stay unlabeled.
    """

    blocked = set(disabled)
    cells: List[CellInfo] = []
    counter = 0
    for r in range(rows):
        for c in range(cols):
            enabled = (r, c) not in blocked
            if numbers is not None:
                number = numbers.get((r, c), 0)
            elif enabled:
                counter += 1
                number = counter
            else:
                number = 0
            position = (c * cell_size + cell_size / 2, r * cell_size + cell_size / 2)
            cells.append(CellInfo(enabled=enabled, number=number, position=position))
    return SceneTarget(
        rows=rows,
        cols=cols,
        cells=cells,
        parent=parent,
        grid_size=(cols * cell_size, rows * cell_size),
        target_size=target_size,
    )


def job_from_dict(doc: Dict[str, Any]) -> PlacementJob:
    """Build a :class:`PlacementJob` from ``{"config": {...}, "rows": [...]}``."""

    raw_config = doc.get("config", {}) or {}
    if not isinstance(raw_config, dict):
        raise SceneFormatError("Job config must be an object")
    config = RunConfig.from_raw(
        min_gap=raw_config.get("min_gap"),
        seed=raw_config.get("seed"),
        auto_frenzy=raw_config.get("auto_frenzy", False),
        strict_placement=bool(raw_config.get("strict_placement", False)),
        diagnose_relaxation=bool(raw_config.get("diagnose_relaxation", True)),
    )
    rows: List[RowInput] = []
    for raw in (doc.get("rows", []) or [])[:NUM_ROWS]:
        if not isinstance(raw, dict):
            raise SceneFormatError(f"Job row must be an object, got {raw!r}")
        rows.append(
            RowInput(
                block=str(raw.get("block", "") or ""),
                question=str(raw.get("question", "") or ""),
                answer=str(raw.get("answer", "") or ""),
                frenzy=str(raw.get("frenzy", "") or ""),
                match_count=raw.get("match"),
                af_count=raw.get("af"),
            )
        )
    while len(rows) < NUM_ROWS:
        rows.append(RowInput())
    return PlacementJob(rows=rows, config=config)


def load_job(path: Path | str) -> PlacementJob:
    path = Path(path)
    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise SceneFormatError(f"Cannot read job {path}: {exc}") from exc
    if not isinstance(doc, dict):
        raise SceneFormatError(f"Job {path} must be a JSON object")
    return job_from_dict(doc)
