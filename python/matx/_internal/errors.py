"""Exception hierarchy for matx.

Every library error derives from MatxError. The concrete classes also
derive from the matching builtin (ValueError / IndexError) so callers that
only know the builtin contract keep working.
"""
from __future__ import annotations


class MatxError(Exception):
    """Base exception for all matx errors."""


class ShapeError(MatxError, ValueError):
    """Two operands have incompatible shapes.

    Attributes:
        left: Shape of the left operand.
        right: Shape of the right operand.
    """

    def __init__(
        self,
        message: str,
        left: tuple[int, int] | None = None,
        right: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.left = left
        self.right = right


class MatrixIndexError(MatxError, IndexError):
    """A (row, col) pair points outside the matrix buffer."""

    def __init__(self, row: int, col: int, shape: tuple[int, int]):
        super().__init__(f"Index ({row}, {col}) out of range for matrix of shape {shape}")
        self.row = row
        self.col = col
        self.shape = shape


class RaggedRowsError(MatxError, ValueError):
    """Nested construction input does not describe a rectangle."""
