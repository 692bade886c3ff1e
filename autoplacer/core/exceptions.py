"""Custom exception hierarchy for the auto placer."""

from typing import Optional


class PlacerError(Exception):
    """Base exception for placement failures."""


class GridError(PlacerError):
    """Raised when the grid topology read from the target is malformed."""


class ValidationError(PlacerError):
    """Raised when the run inputs fail validation; aborts the whole run."""

    def __init__(self, message: str, row: Optional[int] = None) -> None:
        super().__init__(message)
        self.row = row


class NotFoundError(PlacerError):
    """Raised when a block's start cell number does not exist in the grid."""


class PlacementInfeasible(PlacerError):
    """Raised in strict mode when random letters cannot be placed at gap 0."""


class SceneFormatError(PlacerError):
    """Raised when a scene or job document cannot be parsed."""
