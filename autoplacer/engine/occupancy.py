"""Reserved-cell bookkeeping shared across the frenzy rows of one run."""

from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator, Tuple

RC = Tuple[int, int]


def chebyshev(a: RC, b: RC) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


class OccupiedSet:
    """Immutable set of reserved ``(row, col)`` keys.

    Each frenzy row receives the set, and returns a new one with its own
    reservations applied; a failed attempt therefore cannot leak into it.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Iterable[RC] = ()) -> None:
        self._cells: FrozenSet[RC] = frozenset(cells)

    def __contains__(self, rc: object) -> bool:
        return rc in self._cells

    def __iter__(self) -> Iterator[RC]:
        return iter(sorted(self._cells))

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OccupiedSet):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(self._cells)

    def __repr__(self) -> str:
        return f"OccupiedSet({sorted(self._cells)!r})"

    def reserve(self, cells: Iterable[RC]) -> "OccupiedSet":
        return OccupiedSet(self._cells.union(cells))

    def release(self, cells: Iterable[RC]) -> "OccupiedSet":
        return OccupiedSet(self._cells.difference(cells))

    def is_clear(self, rc: RC, gap: int) -> bool:
        """True when ``rc`` is farther than ``gap`` from every reserved cell."""
        return all(chebyshev(rc, other) > gap for other in self._cells)
