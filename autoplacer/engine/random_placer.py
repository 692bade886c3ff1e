"""Off-path placement of unmatched frenzy letters under a minimum gap."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple

from ..core.constants import RANDOM_DRAWS_PER_LETTER
from ..core.models import Cell
from ..utils.logger import get_logger
from .occupancy import RC, OccupiedSet, chebyshev
from .rng import SeededRng


LOGGER = get_logger(__name__)


@dataclass
class RandomPlacement:
    """Result of the relaxation loop.

    ``cells`` pairs with the leading letters; ``unplaced`` holds the letters
    nothing could be found for. ``gap_used`` is ``None`` when the loop gave up.
    """

    letters: List[str]
    cells: List[Cell] = field(default_factory=list)
    gap_used: Optional[int] = None

    @property
    def ok(self) -> bool:
        return len(self.cells) == len(self.letters)

    @property
    def unplaced(self) -> List[str]:
        return self.letters[len(self.cells):]

    @property
    def reserved(self) -> List[RC]:
        return [cell.rc for cell in self.cells]


def respects_gap(
    rc: RC,
    gap: int,
    answer_cells: Sequence[RC],
    occupied: OccupiedSet,
    staged: Set[RC],
) -> bool:
    if any(chebyshev(rc, other) <= gap for other in answer_cells):
        return False
    if not occupied.is_clear(rc, gap):
        return False
    return all(chebyshev(rc, other) > gap for other in staged)


def attempt_placement(
    letters: Sequence[str],
    pool: Sequence[Cell],
    answer_cells: Sequence[RC],
    occupied: OccupiedSet,
    gap: int,
    rng: SeededRng,
    draws_per_letter: int = RANDOM_DRAWS_PER_LETTER,
) -> Optional[List[Cell]]:
    """Try to give every letter its own pool cell at separation ``> gap``.

    Pure with respect to ``occupied``: staged picks live in a local set and are
    simply dropped when a letter runs out of draws.
    """

    if not letters:
        return []
    if not pool:
        return None
    staged: Set[RC] = set()
    picks: List[Cell] = []
    for letter in letters:
        pick: Optional[Cell] = None
        for _ in range(draws_per_letter):
            candidate = pool[rng.next_index(len(pool))]
            rc = candidate.rc
            if rc in staged or rc in occupied:
                continue
            if respects_gap(rc, gap, answer_cells, occupied, staged):
                pick = candidate
                break
        if pick is None:
            LOGGER.debug("No cell for '%s' at gap %s after %s draws", letter, gap, draws_per_letter)
            return None
        staged.add(pick.rc)
        picks.append(pick)
    return picks


def place_random_letters(
    letters: Sequence[str],
    pool: Sequence[Cell],
    answer_cells: Sequence[RC],
    occupied: OccupiedSet,
    min_gap: int,
    rng: SeededRng,
) -> RandomPlacement:
    """Relax the gap from ``min_gap`` down to 0 until every letter fits."""

    result = RandomPlacement(letters=list(letters))
    if not letters:
        return result
    for gap in range(min_gap, -1, -1):
        picks = attempt_placement(letters, pool, answer_cells, occupied, gap, rng)
        if picks is not None:
            result.cells = picks
            result.gap_used = gap
            if gap < min_gap:
                LOGGER.info("Random letters relaxed from gap %s to %s", min_gap, gap)
            return result
    LOGGER.warning(
        "Could not place %s random letter(s) %s even at gap 0",
        len(letters),
        "".join(letters),
    )
    return result


def answer_rcs(paths: Sequence[Sequence[Cell]]) -> Tuple[List[RC], Set[RC]]:
    """Flatten answer paths into an ordered list and a lookup set of ``(row, col)``."""

    ordered: List[RC] = []
    seen: Set[RC] = set()
    for path in paths:
        for cell in path:
            ordered.append(cell.rc)
            seen.add(cell.rc)
    return ordered, seen
