from __future__ import annotations

from functools import lru_cache
from typing import Any

from . import coercion as _coercion
from .errors import RaggedRowsError, ShapeError
from .matrix_api import Matrix
from .sampling import UniformSampler


class FixedMatrix(Matrix):
    """Matrix whose shape is part of its class.

    ``FixedMatrix[2, 3]`` is a (cached) subclass with ``ROWS = 2`` and
    ``COLS = 3``. Python cannot reject mismatched shapes before running, so
    every shape rule is still checked when an operator is called; operator
    results are FixedMatrix classes of the result shape.

        >>> M23 = FixedMatrix[2, 3]
        >>> M23().shape
        (2, 3)
    """

    ROWS: int | None = None
    COLS: int | None = None

    def __class_getitem__(cls, shape: Any) -> type["FixedMatrix"]:
        if not (isinstance(shape, tuple) and len(shape) == 2):
            raise TypeError("FixedMatrix shape must be given as FixedMatrix[rows, cols].")
        rows, cols = _coercion.coerce_dims(*shape)
        return _fixed_class(rows, cols)

    @classmethod
    def _require_shape(cls) -> tuple[int, int]:
        if cls.ROWS is None or cls.COLS is None:
            raise TypeError("FixedMatrix needs a shape: use FixedMatrix[rows, cols].")
        return cls.ROWS, cls.COLS

    def __init__(self, dtype: Any = float):
        rows, cols = self._require_shape()
        super().__init__(rows, cols, dtype)

    def _new(self, data: list[Any], rows: int, cols: int) -> Matrix:
        return _fixed_class(rows, cols)._wrap(data, rows, cols)

    @classmethod
    def from_rows(cls, source: Any) -> "FixedMatrix":
        """Build from nested rows that must be exactly ROWS x COLS."""
        want_rows, want_cols = cls._require_shape()
        rows, cols, data = _coercion.coerce_rows(source)
        if rows != want_rows or (rows and cols != want_cols):
            raise RaggedRowsError(
                f"{cls.__name__} expects {want_rows} rows of {want_cols} cells, "
                f"got {rows} rows of {cols} cells."
            )
        return cls._wrap(data, want_rows, want_cols)

    @classmethod
    def from_matrix(cls, matrix: Matrix) -> "FixedMatrix":
        """Copy a same-shape matrix into this fixed shape."""
        shape = cls._require_shape()
        if matrix.shape != shape:
            raise ShapeError(
                f"Cannot convert a matrix of shape {matrix.shape} to {cls.__name__}",
                left=shape,
                right=matrix.shape,
            )
        data = [_coercion.clone_value(v) for v in matrix._data]
        return cls._wrap(data, shape[0], shape[1])

    @classmethod
    def zeros(cls, dtype: Any = float) -> "FixedMatrix":  # type: ignore[override]
        rows, cols = cls._require_shape()
        return super().zeros(rows, cols, dtype)

    @classmethod
    def _zero_cell(cls) -> "FixedMatrix":
        return cls.zeros()

    @classmethod
    def rand(  # type: ignore[override]
        cls,
        low: Any,
        high: Any,
        *,
        sampler: UniformSampler | None = None,
    ) -> "FixedMatrix":
        """Fill a new ROWS x COLS matrix with draws from [low, high)."""
        rows, cols = cls._require_shape()
        return super().rand(rows, cols, low, high, sampler=sampler)


@lru_cache(maxsize=None)
def _fixed_class(rows: int, cols: int) -> type[FixedMatrix]:
    name = f"FixedMatrix[{rows}, {cols}]"
    return type(name, (FixedMatrix,), {"ROWS": rows, "COLS": cols, "__module__": FixedMatrix.__module__})
