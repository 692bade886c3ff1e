"""Pretty-print helpers for placement results."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Dict, Optional, Tuple

if TYPE_CHECKING:
    from ..engine.grid import GridIndex
    from ..engine.runner import RunReport
    from ..io.scene import SceneTarget


DISABLED = "#"
EMPTY = "."


def answer_letters(scene: SceneTarget, grid: GridIndex) -> Dict[Tuple[int, int], str]:
    """Map ``(row, col)`` to answer letters using the stored tile references."""

    letters: Dict[Tuple[int, int], str] = {}
    for index in range(1, len(scene.scene_rows) + 1):
        _, answer = scene.read_qa_text(index)
        refs = scene.read_answer(index).letter_refs
        for letter, number in zip(answer, refs):
            cell = grid.find_by_number(int(number))
            if cell is not None:
                letters[cell.rc] = letter.upper()
    return letters


def frenzy_letters(report: RunReport) -> Dict[Tuple[int, int], str]:
    """Map ``(row, col)`` to the randomly placed (off-path) frenzy letters."""

    letters: Dict[Tuple[int, int], str] = {}
    for row in report.frenzy:
        for slot in row.placed:
            if not slot.matched and slot.cell is not None:
                letters[slot.cell.rc] = slot.letter.lower()
    return letters


def format_grid(
    grid: GridIndex,
    answers: Optional[Dict[Tuple[int, int], str]] = None,
    frenzy: Optional[Dict[Tuple[int, int], str]] = None,
) -> str:
    answers = answers or {}
    frenzy = frenzy or {}
    width = grid.cols
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(grid.rows):
        row_cells = []
        for c in range(width):
            cell = grid.cell_at(r, c)
            if cell is None or not cell.enabled:
                symbol = DISABLED
            else:
                symbol = answers.get((r, c)) or frenzy.get((r, c)) or EMPTY
            row_cells.append(symbol)
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def print_run_summary(
    scene: SceneTarget,
    grid: GridIndex,
    report: RunReport,
    *,
    stream=None,
) -> None:
    """Print the grid (answers upper-case, random frenzy letters lower-case) and per-row details."""

    stream = stream or sys.stdout
    print(format_grid(grid, answer_letters(scene, grid), frenzy_letters(report)), file=stream)

    print(file=stream)
    print("--- Answers ---", file=stream)
    for item in report.answers:
        _, text = scene.read_qa_text(item.index)
        suffix = f" ({item.message})" if item.message else ""
        print(f"  [{item.index}] {text or '-':<10} {item.status.value}{suffix}", file=stream)

    if report.frenzy:
        print(file=stream)
        print("--- Frenzy ---", file=stream)
    for row in report.frenzy:
        labels = [slot.label or "-" for slot in row.padded_slots()]
        gap = "n/a" if row.gap_used is None else str(row.gap_used)
        print(
            f"  F{row.index} -> [{row.target_answer_index}] {' '.join(labels):<28} gap={gap}",
            file=stream,
        )
        if row.unplaced:
            missing = "".join(slot.letter for slot in row.unplaced)
            print(f"      unplaced: {missing}", file=stream)
        if row.strict_gap_feasible is not None:
            verdict = "feasible" if row.strict_gap_feasible else "infeasible"
            print(f"      requested gap was {verdict}", file=stream)

    print(file=stream)
    print(f"Log: {report.log}", file=stream)
