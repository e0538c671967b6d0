from __future__ import annotations

import operator
from functools import partial
from typing import Any, Callable, Iterator, TextIO

from . import coercion as _coercion
from . import formatting as _formatting
from . import ops as _ops
from . import sampling as _sampling
from .dtypes import normalize_dtype as _normalize_dtype
from .errors import MatrixIndexError
from .iterators import Cells, Columns, Rows


class Matrix:
    """Dense row-major matrix over arbitrary Python values.

    Cells live in one flat list; cell (r, c) is stored at offset
    ``r * cols + c`` and ``len(data) == rows * cols`` always holds.
    Nothing here assumes the cells are numbers: a cell may itself be a
    Matrix. Arithmetic only requires the cells to support the operator
    being applied.

    Operators never modify their operands and always return a new matrix.
    Shape mismatches raise ShapeError; there is no broadcasting.

    Examples:
        >>> a = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        >>> b = Matrix.from_rows([[7, 8], [9, 10], [11, 12]])
        >>> (a @ b).tolist()
        [[58, 64], [139, 154]]
    """

    def __init__(self, rows: int = 0, cols: int = 0, dtype: Any = float):
        r, c = _coercion.coerce_dims(rows, cols)
        ctor = _normalize_dtype(dtype)
        self._data: list[Any] = [ctor() for _ in range(r * c)]
        self._rows = r
        self._cols = c

    @classmethod
    def _wrap(cls, data: list[Any], rows: int, cols: int) -> "Matrix":
        obj = cls.__new__(cls)
        obj._data = data
        obj._rows = rows
        obj._cols = cols
        return obj

    def _new(self, data: list[Any], rows: int, cols: int) -> "Matrix":
        """Build an operator result; subclasses pick the result class."""
        return Matrix._wrap(data, rows, cols)

    # --- construction ---

    @classmethod
    def from_rows(cls, source: Any) -> "Matrix":
        """Build a matrix from a sequence of equally long rows (or a 2D array)."""
        rows, cols, data = _coercion.coerce_rows(source)
        return cls._wrap(data, rows, cols)

    @classmethod
    def zeros(cls, rows: int, cols: int, dtype: Any = float) -> "Matrix":
        r, c = _coercion.coerce_dims(rows, cols)
        ctor = _normalize_dtype(dtype)
        if isinstance(ctor, type) and issubclass(ctor, Matrix):
            make = ctor._zero_cell
        else:
            make = partial(ctor, 0)
        return cls._wrap([make() for _ in range(r * c)], r, c)

    @classmethod
    def _zero_cell(cls) -> "Matrix":
        """Zero value of this class when used as a cell dtype: an empty matrix."""
        return cls()

    @classmethod
    def rand(
        cls,
        rows: int,
        cols: int,
        low: Any,
        high: Any,
        *,
        sampler: _sampling.UniformSampler | None = None,
    ) -> "Matrix":
        """Fill a new rows x cols matrix with draws from [low, high).

        One sampler call per cell, in row-major order, so a seeded sampler
        reproduces the same matrix.
        """
        r, c = _coercion.coerce_dims(rows, cols)
        return cls._wrap(_sampling.draw(r * c, low, high, sampler), r, c)

    def randomize(
        self,
        low: Any,
        high: Any,
        *,
        sampler: _sampling.UniformSampler | None = None,
    ) -> None:
        """Refill every cell in place with draws from [low, high)."""
        self._data[:] = _sampling.draw(len(self._data), low, high, sampler)

    # --- shape ---

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    def __len__(self) -> int:
        return self._rows

    # --- storage & indexing ---

    def _offset(self, row: Any, col: Any) -> int | None:
        r = _coercion.coerce_index(row)
        c = _coercion.coerce_index(col)
        if r < 0 or c < 0:
            return None
        index = r * self._cols + c
        if index >= len(self._data):
            return None
        return index

    def get(self, row: int, col: int) -> Any | None:
        """Return a copy of cell (row, col), or None when it is out of range."""
        index = self._offset(row, col)
        if index is None:
            return None
        return _coercion.clone_value(self._data[index])

    def set(self, value: Any, row: int, col: int) -> None:
        """Store ``value`` at (row, col); raise MatrixIndexError when out of range."""
        index = self._offset(row, col)
        if index is None:
            raise MatrixIndexError(row, col, self.shape)
        self._data[index] = value

    def __getitem__(self, key: Any) -> Any:
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("matrix indices must be provided as [row, col].")
        i, j = key
        index = self._offset(i, j)
        if index is None:
            raise MatrixIndexError(i, j, self.shape)
        return _coercion.clone_value(self._data[index])

    def __setitem__(self, key: Any, value: Any) -> None:
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("matrix indices must be provided as [row, col].")
        i, j = key
        self.set(value, i, j)

    # --- iteration ---

    def iter_rows(self) -> Rows:
        return Rows(self)

    def iter_cols(self) -> Columns:
        return Columns(self)

    def cells(self) -> Cells:
        return Cells(self)

    def __iter__(self) -> Iterator[list[Any]]:
        return Rows(self)

    # --- conversion ---

    def tolist(self) -> list[list[Any]]:
        return list(Rows(self))

    def copy(self) -> "Matrix":
        return self._new([_coercion.clone_value(v) for v in self._data], self._rows, self._cols)

    def __copy__(self) -> "Matrix":
        return self.copy()

    def apply(self, fn: Callable[[Any], Any]) -> "Matrix":
        """Return a same-shape matrix with ``fn`` applied to every cell."""
        return self._new([fn(v) for v in self._data], self._rows, self._cols)

    def reverse(self) -> "Matrix":
        """Return a same-shape matrix whose flat buffer is reversed end to end.

        This is neither a transpose nor a per-row reversal: cell (r, c) moves
        to (rows - 1 - r, cols - 1 - c).
        """
        return self._new(self._data[::-1], self._rows, self._cols)

    def sum(self) -> Any:
        """Fold every cell through ``+``, left to right in row-major order."""
        return _ops.total(self)

    # --- display ---

    def dump(self, sep: str = "\t") -> str:
        return _formatting.dump(self, sep)

    def print(self, sep: str | None = None, file: TextIO | None = None) -> None:
        _formatting.print_matrix(self, sep, file)

    def __str__(self) -> str:
        return _formatting.dump(self)

    def __repr__(self) -> str:
        return _formatting.matrix_repr(self)

    # --- comparison ---

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    # --- operators ---

    def __add__(self, other: Any) -> "Matrix":
        if isinstance(other, Matrix):
            data = _ops.elementwise(self, other, operator.add, verb="added")
        else:
            data = _ops.scalar_map(self, other, operator.add)
        return self._new(data, self._rows, self._cols)

    def __radd__(self, other: Any) -> "Matrix":
        return self._new(_ops.scalar_map(self, other, lambda x, s: s + x), self._rows, self._cols)

    def __sub__(self, other: Any) -> "Matrix":
        if isinstance(other, Matrix):
            data = _ops.elementwise(self, other, operator.sub, verb="subtracted")
        else:
            data = _ops.scalar_map(self, other, operator.sub)
        return self._new(data, self._rows, self._cols)

    def __rsub__(self, other: Any) -> "Matrix":
        return self._new(_ops.scalar_map(self, other, lambda x, s: s - x), self._rows, self._cols)

    def __mul__(self, other: Any) -> "Matrix":
        if isinstance(other, Matrix):
            return self.__matmul__(other)
        return self._new(_ops.scalar_map(self, other, operator.mul), self._rows, self._cols)

    def __rmul__(self, other: Any) -> "Matrix":
        return self._new(_ops.scalar_map(self, other, lambda x, s: s * x), self._rows, self._cols)

    def __matmul__(self, other: Any) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._new(_ops.matmul(self, other), self._rows, other.cols)

    def __truediv__(self, other: Any) -> "Matrix":
        if isinstance(other, Matrix):
            return self._new(_ops.matdiv(self, other), self._rows, other.cols)
        return self._new(_ops.scalar_map(self, other, operator.truediv), self._rows, self._cols)

    def __rtruediv__(self, other: Any) -> "Matrix":
        return self._new(_ops.scalar_map(self, other, lambda x, s: s / x), self._rows, self._cols)

    def __neg__(self) -> "Matrix":
        return self._new(_ops.negate(self), self._rows, self._cols)

    def __pow__(self, base: Any) -> "Matrix":
        """Return a matrix with ``pow(base, cell)`` in every cell.

        The scalar operand is the base and each cell is the exponent.
        """
        return self._new(_ops.power(self, base), self._rows, self._cols)
