"""Selection of frenzy letters that sit on the next answer's tiles.

Matched letters should look naturally spread out: the selector prefers one to
three empty tiles between consecutive matches and only packs them tighter when
the word leaves no room.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Container, Dict, List, Sequence, Set, Tuple

from ..core.constants import MATCH_ATTEMPTS
from ..core.models import Cell
from ..utils.logger import get_logger
from .rng import SeededRng


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class MatchedLetter:
    index: int
    letter: str


@dataclass
class ManualAssignment:
    matched: List[MatchedLetter] = field(default_factory=list)
    unmatched: List[str] = field(default_factory=list)


class MatchSelector:
    """Chooses indices of ``word`` (laid on ``path``) for matched frenzy letters.

    Disabled tiles and tiles already in ``reserved`` never qualify.
    """

    def __init__(
        self,
        word: str,
        path: Sequence[Cell],
        reserved: Container[Tuple[int, int]] = (),
    ) -> None:
        self.word = word
        self.path = list(path)
        self.reserved = reserved
        self.limit = min(len(word), len(self.path))

    def _usable(self, index: int) -> bool:
        if not 0 <= index < self.limit:
            return False
        cell = self.path[index]
        return cell.enabled and cell.rc not in self.reserved

    # ------------------------------------------------------------------
    # Auto mode
    # ------------------------------------------------------------------
    def choose_mixed_gaps(self, match_count: int, rng: SeededRng) -> List[int]:
        """Randomized start and step (2..4 index units, i.e. 1..3 tile gap).

        Keeps the longest candidate over a bounded number of attempts.
        """

        if match_count <= 0:
            return []
        best: List[int] = []
        for _ in range(MATCH_ATTEMPTS):
            picked: List[int] = []
            index = rng.next_index(max(1, len(self.word)))
            while index < self.limit and len(picked) < match_count:
                if self._usable(index):
                    picked.append(index)
                index += 2 + rng.next_index(3)
            if len(picked) > len(best):
                best = picked
            if len(best) >= match_count:
                return best
        return best

    def choose_with_min_diff(self, match_count: int, min_diff: int) -> List[int]:
        """Greedy left-to-right pick keeping index differences of at least ``min_diff``."""

        picked: List[int] = []
        if match_count <= 0:
            return picked
        for index in range(self.limit):
            if not self._usable(index):
                continue
            if all(abs(other - index) >= min_diff for other in picked):
                picked.append(index)
            if len(picked) >= match_count:
                break
        return picked

    def select(self, match_count: int, rng: SeededRng) -> List[MatchedLetter]:
        indices = self.choose_mixed_gaps(match_count, rng)
        if len(indices) < match_count:
            LOGGER.debug("Mixed-gap match short (%s/%s), enforcing 1-tile gap", len(indices), match_count)
            indices = self.choose_with_min_diff(match_count, 2)
        if len(indices) < match_count:
            indices = self.choose_with_min_diff(match_count, 1)
        return [MatchedLetter(index, self.word[index]) for index in indices]

    # ------------------------------------------------------------------
    # Manual mode
    # ------------------------------------------------------------------
    def _index_map(self) -> Dict[str, List[int]]:
        mapping: Dict[str, List[int]] = {}
        for index in range(self.limit):
            if self._usable(index):
                mapping.setdefault(self.word[index], []).append(index)
        return mapping

    def assign_typed(self, typed: str, match_count: int, min_index_gap: int) -> ManualAssignment:
        """Match typed letters onto equal letters of the word.

        A candidate index is rejected when it lies within ``min_index_gap`` of
        an already matched index. Letters that cannot be matched stay, in typed
        order, as unmatched letters.
        """

        index_map = self._index_map()
        used: Set[int] = set()
        result = ManualAssignment()
        for letter in typed:
            if len(result.matched) >= match_count:
                result.unmatched.append(letter)
                continue
            picked = -1
            for candidate in index_map.get(letter, []):
                if candidate in used:
                    continue
                if all(abs(m.index - candidate) > min_index_gap for m in result.matched):
                    picked = candidate
                    break
            if picked >= 0:
                used.add(picked)
                result.matched.append(MatchedLetter(picked, letter))
            else:
                result.unmatched.append(letter)
        return result

    def select_typed(self, typed: str, match_count: int, rng: SeededRng) -> ManualAssignment:
        gap = 1 + rng.next_index(3)
        assignment = self.assign_typed(typed, match_count, gap)
        for relaxed in (1, 0):
            if len(assignment.matched) >= match_count:
                break
            assignment = self.assign_typed(typed, match_count, relaxed)
        return assignment
