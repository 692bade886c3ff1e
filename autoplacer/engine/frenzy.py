"""Per-row frenzy letter generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..core.constants import DEFAULT_AF, DEFAULT_MATCH, FRENZY_SLOTS, SlotStatus
from ..core.exceptions import PlacementInfeasible
from ..core.models import Cell, FrenzyRow, FrenzySlot, RowInput, RunConfig
from ..data.normalization import clamp_int, clean_word
from ..utils.logger import get_logger
from .feasibility import gap_is_feasible
from .letters import LetterPool
from .matching import MatchedLetter, MatchSelector
from .occupancy import RC, OccupiedSet
from .random_placer import RandomPlacement, place_random_letters
from .rng import SeededRng


LOGGER = get_logger(__name__)


def _default_for(table: Sequence[int], index0: int) -> int:
    return table[index0] if 0 <= index0 < len(table) else 0


@dataclass
class FrenzyContext:
    """Run-wide inputs shared by every frenzy row."""

    answers_text: List[str]
    paths: List[List[Cell]]
    pool: List[Cell]
    answer_cells: List[RC]
    config: RunConfig


class FrenzyRowBuilder:
    """Builds frenzy row ``i`` (0-based), which targets answer ``i + 1``."""

    def __init__(self, context: FrenzyContext) -> None:
        self.context = context

    def counts(self, index0: int, row: RowInput) -> Tuple[int, int, str]:
        """Return ``(total, match, typed_letters)`` for a row."""

        config = self.context.config
        target_text = self._target_text(index0)
        match = clamp_int(row.match_count, 0, FRENZY_SLOTS, _default_for(DEFAULT_MATCH, index0))
        typed = ""
        if config.auto_frenzy:
            total = clamp_int(row.af_count, 0, FRENZY_SLOTS, _default_for(DEFAULT_AF, index0))
        else:
            typed = clean_word(row.frenzy)[:FRENZY_SLOTS]
            total = len(typed)
        match = min(match, total, len(target_text))
        return total, match, typed

    def _target_text(self, index0: int) -> str:
        texts = self.context.answers_text
        target = index0 + 1
        return texts[target] if target < len(texts) else ""

    def _target_path(self, index0: int) -> List[Cell]:
        paths = self.context.paths
        target = index0 + 1
        return paths[target] if target < len(paths) else []

    def build(
        self,
        index0: int,
        row: RowInput,
        occupied: OccupiedSet,
        previous: Iterable[RC] = (),
    ) -> Tuple[FrenzyRow, OccupiedSet]:
        """Regenerate one row; returns the row and the updated reservations.

        ``previous`` are the cells this row held before the run. They are
        released first so the row does not collide with its own old letters.
        """

        config = self.context.config
        rng = SeededRng.for_row(config.seed, index0)
        occupied = occupied.release(previous)

        total, match, typed = self.counts(index0, row)
        target_text = self._target_text(index0)
        target_path = self._target_path(index0)
        selector = MatchSelector(target_text, target_path, occupied)

        matched: List[MatchedLetter]
        if config.auto_frenzy:
            matched = selector.select(match, rng)
            pool = LetterPool(self.context.answers_text, index0 + 1, {m.letter for m in matched})
            random_letters = pool.draw(total - len(matched), rng)
        else:
            assignment = selector.select_typed(typed, match, rng)
            matched = assignment.matched
            random_letters = assignment.unmatched

        slots: List[FrenzySlot] = []
        for item in matched:
            cell = target_path[item.index]
            slots.append(FrenzySlot(item.letter, cell, matched=True, status=SlotStatus.PLACED))
        occupied = occupied.reserve(slot.cell.rc for slot in slots if slot.cell is not None)

        placement = place_random_letters(
            random_letters,
            self.context.pool,
            self.context.answer_cells,
            occupied,
            config.min_gap,
            rng,
        )
        feasible = self._diagnose(placement, occupied)
        occupied = occupied.reserve(placement.reserved)

        for letter, cell in zip(placement.letters, placement.cells):
            slots.append(FrenzySlot(letter, cell, matched=False, status=SlotStatus.PLACED))
        for letter in placement.unplaced:
            slots.append(FrenzySlot(letter, None, matched=False, status=SlotStatus.UNPLACED))

        frenzy_row = FrenzyRow(
            index=index0 + 1,
            total_count=total,
            match_count=match,
            slots=slots,
            gap_used=placement.gap_used,
            strict_gap_feasible=feasible,
        )
        LOGGER.info(
            "Frenzy %s -> answer %s: %s matched, %s random, %s unplaced",
            frenzy_row.index,
            frenzy_row.target_answer_index,
            len(matched),
            len(placement.cells),
            len(placement.unplaced),
        )
        if placement.unplaced and config.strict_placement:
            raise PlacementInfeasible(
                f"Frenzy {frenzy_row.index}: cannot place {''.join(placement.unplaced)}"
            )
        return frenzy_row, occupied

    def _diagnose(self, placement: RandomPlacement, occupied: OccupiedSet) -> Optional[bool]:
        config = self.context.config
        if not config.diagnose_relaxation or not placement.letters:
            return None
        if placement.gap_used is not None and placement.gap_used >= config.min_gap:
            return None
        blocked = list(self.context.answer_cells) + list(occupied)
        feasible = gap_is_feasible(
            self.context.pool,
            blocked,
            len(placement.letters),
            config.min_gap,
            timeout=config.feasibility_timeout,
        )
        if feasible:
            LOGGER.warning(
                "Gap %s was feasible for %s letter(s) but the random search missed it",
                config.min_gap,
                len(placement.letters),
            )
        return feasible
