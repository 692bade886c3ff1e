"""Candidate letters for randomly placed frenzy slots."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from ..core.constants import ALPHABET
from .rng import SeededRng


class LetterPool:
    """Letters of every answer except the target, minus already matched letters."""

    def __init__(
        self,
        answers_text: Sequence[str],
        target_index: int,
        matched_letters: Iterable[str] = (),
    ) -> None:
        excluded = set(matched_letters)
        self.letters: List[str] = [
            ch
            for i, text in enumerate(answers_text)
            if i != target_index
            for ch in (text or "")
            if ch not in excluded
        ]

    def __len__(self) -> int:
        return len(self.letters)

    def pick(self, rng: SeededRng) -> str:
        source = self.letters or ALPHABET
        return source[rng.next_index(len(source))]

    def draw(self, count: int, rng: SeededRng) -> List[str]:
        return [self.pick(rng) for _ in range(count)]
