"""Deterministic per-row pseudo-random generator."""

from __future__ import annotations

from ..core.constants import ROW_SEED_STRIDE

_MODULUS = 2 ** 32
_MULTIPLIER = 1664525
_INCREMENT = 1013904223


class SeededRng:
    """Linear-congruential generator producing floats in ``[0, 1)``.

    The sequence is part of the placement contract: identical seeds must give
    identical grids across runs and machines.
    """

    def __init__(self, seed: int) -> None:
        self.state = int(seed) % _MODULUS

    @classmethod
    def for_row(cls, base_seed: int, row_index: int) -> "SeededRng":
        """Generator for the 0-based frenzy row ``row_index``."""
        return cls(base_seed + row_index * ROW_SEED_STRIDE)

    def next_float(self) -> float:
        self.state = (self.state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self.state / _MODULUS

    def __call__(self) -> float:
        return self.next_float()

    def next_index(self, size: int) -> int:
        """Uniform index into a sequence of ``size`` items (``size`` must be positive)."""
        return int(self.next_float() * size)
