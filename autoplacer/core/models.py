"""Data models supporting the auto placer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from .constants import (
    DEFAULT_MIN_GAP,
    DEFAULT_SEED,
    FRENZY_SLOTS,
    MAX_MIN_GAP,
    MAX_SEED,
    NUM_ROWS,
    Orientation,
    Point,
    SlotStatus,
)
from ..data.normalization import clamp_int


@dataclass(frozen=True)
class Cell:
    """One addressable grid tile."""

    row: int
    col: int
    enabled: bool = True
    number: int = 0
    position: Point = (0.0, 0.0)

    @property
    def rc(self) -> Tuple[int, int]:
        return (self.row, self.col)


@dataclass(frozen=True)
class BlockDescriptor:
    """Where and how a word is laid onto the grid, e.g. ``4a``."""

    start_number: int
    orientation: Orientation

    def __str__(self) -> str:
        return f"{self.start_number}{self.orientation.value}"


@dataclass
class Answer:
    """An answer row with its resolved cell path."""

    index: int
    text: str
    block: Optional[BlockDescriptor]
    path: List[Cell] = field(default_factory=list)


@dataclass
class FrenzySlot:
    letter: str = ""
    cell: Optional[Cell] = None
    matched: bool = False
    status: SlotStatus = SlotStatus.EMPTY

    @property
    def label(self) -> str:
        """Text written to the host: letter followed by the tile number."""
        if self.status is not SlotStatus.PLACED or self.cell is None:
            return ""
        return self.letter + (str(self.cell.number) if self.cell.number > 0 else "")


@dataclass
class FrenzyRow:
    """Bonus letters shown ahead of the next answer's reveal."""

    index: int
    total_count: int = 0
    match_count: int = 0
    slots: List[FrenzySlot] = field(default_factory=list)
    gap_used: Optional[int] = None
    strict_gap_feasible: Optional[bool] = None

    @property
    def target_answer_index(self) -> int:
        return self.index + 1

    @property
    def unplaced(self) -> List[FrenzySlot]:
        return [slot for slot in self.slots if slot.status is SlotStatus.UNPLACED]

    @property
    def placed(self) -> List[FrenzySlot]:
        return [slot for slot in self.slots if slot.status is SlotStatus.PLACED]

    def padded_slots(self) -> List[FrenzySlot]:
        slots = list(self.slots[:FRENZY_SLOTS])
        while len(slots) < FRENZY_SLOTS:
            slots.append(FrenzySlot())
        return slots


@dataclass
class RunConfig:
    """Global knobs of a single placement run."""

    min_gap: int = DEFAULT_MIN_GAP
    seed: int = DEFAULT_SEED
    auto_frenzy: bool = False
    strict_placement: bool = False
    diagnose_relaxation: bool = True
    feasibility_timeout: float = 5.0

    @classmethod
    def from_raw(
        cls,
        min_gap: Any = None,
        seed: Any = None,
        auto_frenzy: Any = False,
        **extra: Any,
    ) -> "RunConfig":
        """Build a config from loosely typed form values, clamping out-of-range input."""

        return cls(
            min_gap=clamp_int(min_gap, 0, MAX_MIN_GAP, DEFAULT_MIN_GAP),
            seed=clamp_int(seed, 0, MAX_SEED, DEFAULT_SEED),
            auto_frenzy=bool(auto_frenzy),
            **extra,
        )


@dataclass
class RowInput:
    """Form values for one question/answer row. Empty fields keep the current value."""

    block: str = ""
    question: str = ""
    answer: str = ""
    frenzy: str = ""
    match_count: Any = None
    af_count: Any = None


@dataclass
class PlacementJob:
    rows: List[RowInput] = field(default_factory=lambda: [RowInput() for _ in range(NUM_ROWS)])
    config: RunConfig = field(default_factory=RunConfig)

    def row(self, index0: int) -> RowInput:
        if 0 <= index0 < len(self.rows):
            return self.rows[index0]
        return RowInput()
