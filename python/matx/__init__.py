"""Dense row-major matrices with elementwise and product operators."""
from __future__ import annotations

from importlib.metadata import PackageNotFoundError as _PackageNotFoundError
from importlib.metadata import version as _dist_version

try:
    __version__ = _dist_version("matx")
except _PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "unknown"

from pathlib import Path
from typing import Any

from ._internal import formatting as _formatting
from ._internal import interop as _interop
from ._internal import ops as _ops
from ._internal import persistence as _persistence
from ._internal import runtime as _runtime_mod
from ._internal.errors import MatrixIndexError, MatxError, RaggedRowsError, ShapeError
from ._internal.fixed import FixedMatrix
from ._internal.iterators import Cells, Columns, Rows
from ._internal.matrix_api import Matrix
from ._internal.sampling import NumpySampler, UniformSampler
from ._internal.warnings import MatxDTypeWarning, MatxPerformanceWarning, MatxWarning

_runtime = _runtime_mod.Runtime()

# Default seed for the default sampler; None draws fresh OS entropy.
seed: int | None = _runtime.initial_seed()

_ops.configure(slow_ops_threshold=_runtime.slow_ops_threshold())

_interop.patch_interop(Matrix)


def configure(*, slow_ops_threshold: int | None = None, edge_items: int | None = None) -> None:
    """Adjust process-wide defaults.

    Args:
        slow_ops_threshold: Scalar operations above which a product or
            product-shaped division warns with MatxPerformanceWarning. 0 disables it.
        edge_items: Leading/trailing cells shown by repr() before eliding.
    """
    if slow_ops_threshold is not None:
        if slow_ops_threshold < 0:
            raise ValueError("slow_ops_threshold must be non-negative")
        _ops.configure(slow_ops_threshold=slow_ops_threshold)
    if edge_items is not None:
        _formatting.configure(edge_items=edge_items)


def matrix(source: Any) -> Matrix:
    """Create a matrix from nested rows (or a 2D NumPy array).

    All rows must have the same length; ragged input raises RaggedRowsError.
    """
    if isinstance(source, Matrix):
        return source.copy()
    return Matrix.from_rows(source)


def zeros(rows: int, cols: int, dtype: Any = float) -> Matrix:
    """rows x cols matrix filled with ``dtype(0)``."""
    return Matrix.zeros(rows, cols, dtype)


def empty(rows: int, cols: int, dtype: Any = float) -> Matrix:
    """rows x cols matrix filled with the default ``dtype()`` value."""
    return Matrix(rows, cols, dtype)


def rand(
    rows: int,
    cols: int,
    low: Any,
    high: Any,
    *,
    sampler: UniformSampler | None = None,
) -> Matrix:
    """rows x cols matrix of independent uniform draws from [low, high).

    Without a sampler, a NumpySampler seeded from ``matx.seed`` is used.
    """
    return Matrix.rand(rows, cols, low, high, sampler=sampler)


def matmul(a: Matrix, b: Matrix) -> Matrix:
    """
    Perform matrix multiplication.

    Raises ShapeError unless ``a.cols == b.rows``.
    """
    return a @ b


def divide(a: Matrix, b: Matrix) -> Matrix:
    """Product-shaped division: cell (i, j) is sum_k a[i, k] / b[k, j].

    With a scalar ``b`` this divides every cell instead.
    """
    return a / b


def to_numpy(m: Matrix, dtype: Any = None) -> Any:
    return _interop.to_numpy(m, dtype=dtype)


def to_dict(m: Matrix) -> dict[str, Any]:
    """The serialization record ``{"data": [...], "rows": R, "cols": C}``."""
    return _persistence.to_record(m)


def from_dict(record: dict[str, Any]) -> Matrix:
    return _persistence.from_record(record)


def dumps(m: Matrix) -> str:
    return _persistence.dumps(m)


def loads(text: str | bytes) -> Matrix:
    return _persistence.loads(text)


def save(m: Matrix, path: str | Path) -> None:
    return _persistence.save(m, path)


def load(path: str | Path) -> Matrix:
    return _persistence.load(path)


__all__ = [
    "Matrix",
    "FixedMatrix",
    "Rows",
    "Columns",
    "Cells",
    "UniformSampler",
    "NumpySampler",
    "MatxError",
    "ShapeError",
    "MatrixIndexError",
    "RaggedRowsError",
    "MatxWarning",
    "MatxDTypeWarning",
    "MatxPerformanceWarning",
    "seed",
    "configure",
    "matrix",
    "zeros",
    "empty",
    "rand",
    "matmul",
    "divide",
    "to_numpy",
    "to_dict",
    "from_dict",
    "dumps",
    "loads",
    "save",
    "load",
]
