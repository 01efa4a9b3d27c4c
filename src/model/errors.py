"""Contains the exception classes raised by the WFC engine."""

from __future__ import annotations


class WFCError(Exception):
    """Base class for all errors raised by the WFC engine."""


class ContradictionError(WFCError):
    """Raised when a generation attempt fails because a cell has no candidate tile left.

    The grid is left partially collapsed after a contradiction and has to be reset before it can be used again.

    Attributes:
        coords: The (row, col) coords of the cell that ran out of candidates, or None if unknown.
    """

    coords: tuple[int, int] | None

    def __init__(self, coords: tuple[int, int] | None) -> None:
        self.coords = coords
        if coords is None:
            super().__init__("Contradiction: a cell has no candidate tile left")
        else:
            super().__init__(f"Contradiction: cell {coords} has no candidate tile left")


class InvalidCollapseError(WFCError):
    """Raised when a collapse is requested for a cell that cannot be collapsed.

    This signals a programming error (e.g. collapsing an already resolved cell, a cell outside of the grid or forcing a
    tile that is no longer a candidate) and is never the result of an unlucky generation attempt.
    """


class UnresolvedCellError(WFCError):
    """Raised when the single value of a cell is requested while the cell is not resolved."""
