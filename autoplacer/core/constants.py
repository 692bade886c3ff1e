"""Shared constants and enumerations for the auto placer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Orientation(str, Enum):
    """Word orientations supported by the grid."""

    ACROSS = "a"
    DOWN = "d"

    @property
    def flag(self) -> int:
        """Rotation value stored on the host's answer layer."""
        return 1 if self is Orientation.DOWN else 0

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Orientation.ACROSS else (1, 0)

    @classmethod
    def from_flag(cls, value: float) -> "Orientation":
        return cls.DOWN if value > 0.5 else cls.ACROSS


class SlotStatus(str, Enum):
    """Outcome of a single frenzy slot."""

    PLACED = "PLACED"
    UNPLACED = "UNPLACED"
    EMPTY = "EMPTY"


class AnswerStatus(str, Enum):
    """Per-row outcome of the answer placement step."""

    OK = "ok"
    MISSING = "missing"
    ERROR = "error"
    SKIPPED = "skipped"


NUM_ROWS = 6
FRENZY_ROWS = NUM_ROWS - 1
FRENZY_SLOTS = 5
MAX_WORD_LENGTH = 9

DEFAULT_AF: Tuple[int, ...] = (5, 3, 3, 3, 3, 0)
DEFAULT_MATCH: Tuple[int, ...] = (3, 2, 2, 2, 2, 0)
DEFAULT_MIN_GAP = 1
DEFAULT_SEED = 12345
MAX_MIN_GAP = 99
MAX_SEED = 2147483647

ROW_SEED_STRIDE = 131
MATCH_ATTEMPTS = 6
RANDOM_DRAWS_PER_LETTER = 2200
ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Geometry of the frenzy masks, in target composition units.
FRENZY_START_OFFSET: Tuple[float, float] = (40.0, 30.0)
FRENZY_ALIGN_STEP = 50.0
SEGMENT_EPSILON = 0.001
FRENZY_END_OFFSET: Tuple[float, float] = (-445.7, -781.9)
GRID_PARENT_BASELINE: Tuple[float, float] = (445.5, 782.5)

Point = Tuple[float, float]


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
