from __future__ import annotations

import copy
import operator
from collections.abc import Sequence as _SequenceABC
from decimal import Decimal
from fractions import Fraction
from typing import Any

import numpy as np

from .errors import RaggedRowsError

# Values of these types are immutable, so a "copy" is the value itself.
_IMMUTABLE_SCALARS = (bool, int, float, complex, str, bytes, Fraction, Decimal, np.generic)


def is_sequence_like(value: Any) -> bool:
    return isinstance(value, _SequenceABC) and not isinstance(value, (str, bytes, bytearray))


def clone_value(value: Any) -> Any:
    """Return an independent copy of a cell value."""
    if value is None or isinstance(value, _IMMUTABLE_SCALARS):
        return value
    return copy.deepcopy(value)


def coerce_dims(rows: Any, cols: Any) -> tuple[int, int]:
    try:
        r = operator.index(rows)
        c = operator.index(cols)
    except TypeError as e:
        raise TypeError("Matrix dimensions must be integers.") from e
    if r < 0 or c < 0:
        raise ValueError("Matrix dimensions must be non-negative.")
    return r, c


def coerce_index(value: Any) -> int:
    try:
        return operator.index(value)
    except TypeError as e:
        raise TypeError("Matrix indices must be integers.") from e


def coerce_rows(candidate: Any) -> tuple[int, int, list[Any]]:
    """Flatten a nested rows-of-cells structure into (rows, cols, data).

    Accepts a sequence of sequences or a 2D NumPy array. Every row must hold
    the same number of cells; anything else is a malformed literal and raises
    RaggedRowsError.
    """
    if isinstance(candidate, np.ndarray):
        if candidate.ndim != 2:
            raise TypeError(f"Matrix input must be 2D, got an array with ndim={candidate.ndim}.")
        rows, cols = candidate.shape
        return int(rows), int(cols), candidate.reshape(-1).tolist()

    if not is_sequence_like(candidate):
        raise TypeError("Matrix data must be provided as a nested sequence or a 2D NumPy array.")

    if len(candidate) == 0:
        return 0, 0, []

    data: list[Any] = []
    cols: int | None = None
    for i, row in enumerate(candidate):
        if not is_sequence_like(row):
            raise TypeError("Each matrix row must be a sequence of entries.")
        if cols is None:
            cols = len(row)
        elif len(row) != cols:
            raise RaggedRowsError(
                f"All rows must have the same length: row {i} has {len(row)} cells, expected {cols}."
            )
        data.extend(row)

    return len(candidate), cols or 0, data
