from __future__ import annotations

import operator
from functools import reduce
from typing import Any, Callable

from .errors import ShapeError
from .warnings import MatxPerformanceWarning, warn


_SLOW_OPS_THRESHOLD: int = 50_000_000


def configure(*, slow_ops_threshold: int) -> None:
    global _SLOW_OPS_THRESHOLD
    _SLOW_OPS_THRESHOLD = int(slow_ops_threshold)


def _warn_if_slow(a: Any, b: Any, name: str) -> None:
    work = a.rows * b.cols * a.cols
    if _SLOW_OPS_THRESHOLD and work > _SLOW_OPS_THRESHOLD:
        warn(
            f"{name} of {a.shape} and {b.shape} needs {work} scalar operations "
            "in pure Python; consider converting to NumPy with to_numpy().",
            MatxPerformanceWarning,
        )


def elementwise(a: Any, b: Any, fn: Callable[[Any, Any], Any], *, verb: str) -> list[Any]:
    """C[i] = fn(A[i], B[i]) for same-shape operands."""
    if a.shape != b.shape:
        raise ShapeError(
            f"Matrices must be the same size to be {verb}: {a.shape} vs {b.shape}",
            left=a.shape,
            right=b.shape,
        )
    return [fn(x, y) for x, y in zip(a._data, b._data)]


def scalar_map(a: Any, scalar: Any, fn: Callable[[Any, Any], Any]) -> list[Any]:
    return [fn(x, scalar) for x in a._data]


def negate(a: Any) -> list[Any]:
    return [-x for x in a._data]


def power(a: Any, base: Any) -> list[Any]:
    """result[i] = pow(base, A[i]); the cell is the exponent."""
    return [pow(base, x) for x in a._data]


def _product(a: Any, b: Any, inner: Callable[[Any, Any], Any], *, verb: str, name: str) -> list[Any]:
    if a.cols != b.rows:
        raise ShapeError(
            f"Matrices must have the same inner size to be {verb}: {a.shape} vs {b.shape}",
            left=a.shape,
            right=b.shape,
        )
    _warn_if_slow(a, b, name)

    rows, cols, k = a.rows, b.cols, a.cols
    lhs, rhs = a._data, b._data
    out: list[Any] = []
    for i in range(rows):
        base = i * k
        for j in range(cols):
            acc: Any = None
            for kk in range(k):
                term = inner(lhs[base + kk], rhs[kk * cols + j])
                acc = term if acc is None else (acc + term)
            out.append(0 if acc is None else acc)
    return out


def matmul(a: Any, b: Any) -> list[Any]:
    """Triple-loop product; each cell is sum_k A[i,k] * B[k,j]."""
    return _product(a, b, operator.mul, verb="multiplied", name="matmul")


def matdiv(a: Any, b: Any) -> list[Any]:
    """Product-shaped division; each cell is sum_k A[i,k] / B[k,j].

    This is the product loop with ``/`` substituted for ``*``, not a
    multiplication by an inverse.
    """
    return _product(a, b, operator.truediv, verb="divided", name="divide")


def total(a: Any) -> Any:
    if not a._data:
        return 0
    return reduce(operator.add, a._data)
