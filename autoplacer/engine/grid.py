"""Grid indexing and answer path resolution."""

from __future__ import annotations

import re
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from ..core.constants import Bounds, Orientation
from ..core.exceptions import GridError
from ..core.models import BlockDescriptor, Cell
from ..io.target import CellInfo, PlacementTarget
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

BLOCK_RE = re.compile(r"^(\d+)([ad])$")


def parse_block(text: Optional[str]) -> Optional[BlockDescriptor]:
    """Parse ``"4a"`` / ``" 12 D "`` into a :class:`BlockDescriptor`.

    Returns ``None`` for anything that is not a number followed by ``a`` or ``d``.
    """

    compact = re.sub(r"\s+", "", str(text or "")).lower()
    match = BLOCK_RE.match(compact)
    if not match:
        return None
    return BlockDescriptor(int(match.group(1)), Orientation(match.group(2)))


class GridIndex:
    """Row-major view over the grid's tiles."""

    def __init__(self, rows: int, cols: int, cells: Sequence[CellInfo]) -> None:
        if rows < 0 or cols < 0:
            raise GridError(f"Invalid grid shape {rows}x{cols}")
        if len(cells) != rows * cols:
            raise GridError(
                f"Grid has {len(cells)} cells, expected {rows}x{cols}={rows * cols}"
            )
        self.bounds = Bounds(rows=rows, cols=cols)
        self.cells: List[Cell] = []
        self._by_number: Dict[int, Cell] = {}
        for linear, info in enumerate(cells):
            row, col = divmod(linear, cols)
            cell = Cell(
                row=row,
                col=col,
                enabled=bool(info.enabled),
                number=int(info.number or 0),
                position=(float(info.position[0]), float(info.position[1])),
            )
            self.cells.append(cell)
            # First tile in reading order wins when labels repeat.
            if cell.number > 0 and cell.number not in self._by_number:
                self._by_number[cell.number] = cell

    @classmethod
    def from_target(cls, target: PlacementTarget) -> "GridIndex":
        rows, cols = target.grid_shape()
        infos = [target.read_cell(i) for i in range(rows * cols)]
        LOGGER.debug("Read %sx%s grid from target", rows, cols)
        return cls(rows, cols, infos)

    @property
    def rows(self) -> int:
        return self.bounds.rows

    @property
    def cols(self) -> int:
        return self.bounds.cols

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def rc_from_index(self, linear_index: int) -> Optional[Tuple[int, int]]:
        if not 0 <= linear_index < len(self.cells):
            return None
        return divmod(linear_index, self.cols)

    def index_from_rc(self, row: int, col: int) -> Optional[int]:
        if not self.bounds.contains(row, col):
            return None
        return row * self.cols + col

    def cell_at(self, row: int, col: int) -> Optional[Cell]:
        linear = self.index_from_rc(row, col)
        return None if linear is None else self.cells[linear]

    def find_by_number(self, number: int) -> Optional[Cell]:
        if number <= 0:
            return None
        return self._by_number.get(number)

    def enabled_cells(self, excluding: Iterable[Tuple[int, int]] = ()) -> List[Cell]:
        """Enabled tiles in reading order, skipping the given ``(row, col)`` keys."""

        skip: Set[Tuple[int, int]] = set(excluding)
        return [cell for cell in self.cells if cell.enabled and cell.rc not in skip]


class PathBuilder:
    """Walks a block descriptor across the grid."""

    def __init__(self, grid: GridIndex) -> None:
        self.grid = grid

    def build_path(self, block: Optional[BlockDescriptor], length: int) -> List[Cell]:
        """Cells a word of ``length`` letters occupies, truncated at the grid edge.

        An unknown start number yields an empty path.
        """

        if block is None or length <= 0:
            return []
        start = self.grid.find_by_number(block.start_number)
        if start is None:
            return []
        dr, dc = block.orientation.step
        path: List[Cell] = []
        for k in range(length):
            cell = self.grid.cell_at(start.row + dr * k, start.col + dc * k)
            if cell is None:
                break
            path.append(cell)
        return path
