from __future__ import annotations

from typing import Any

import numpy as np

from .matrix_api import Matrix

# ufunc -> (forward, reflected) operator names
_BINARY_UFUNCS = {
    np.add: ("__add__", "__radd__"),
    np.subtract: ("__sub__", "__rsub__"),
    np.multiply: ("__mul__", "__rmul__"),
    np.divide: ("__truediv__", "__rtruediv__"),
    np.matmul: ("__matmul__", None),
}


def to_numpy(matrix: Any, dtype: Any = None) -> np.ndarray:
    """Return a (rows, cols) NumPy array holding the matrix cells."""
    out = np.array(matrix._data, dtype=dtype)
    return out.reshape(matrix.rows, matrix.cols)


def _array(self: Any, dtype: Any = None, copy: Any = None) -> np.ndarray:
    return to_numpy(self, dtype=dtype)


def _array_ufunc(self: Any, ufunc: Any, method: str, *inputs: Any, **kwargs: Any) -> Any:
    """
    NumPy ufunc protocol implementation for matx matrices.
    Routes np.add(A, 1), np.negative(A), ... to the matrix operators so the
    result stays a Matrix.
    """
    if method != "__call__" or kwargs:
        return NotImplemented

    if len(inputs) == 1 and ufunc is np.negative:
        return -inputs[0]

    if len(inputs) == 2 and ufunc in _BINARY_UFUNCS:
        forward, reflected = _BINARY_UFUNCS[ufunc]
        left, right = inputs
        if isinstance(left, Matrix):
            return getattr(left, forward)(right)
        if reflected is not None:
            return getattr(right, reflected)(left)

    return NotImplemented


def patch_interop(cls: Any) -> None:
    """Patch __array__ and __array_ufunc__ onto the given class."""
    cls.__array__ = _array
    cls.__array_ufunc__ = _array_ufunc
