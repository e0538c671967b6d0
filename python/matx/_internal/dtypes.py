from __future__ import annotations

from typing import Any, Callable

import numpy as np


_BUILTIN_ALIASES: dict[str, Callable[..., Any]] = {
    "int": int,
    "float": float,
    "double": float,
    "complex": complex,
    "bool": bool,
}

_NUMPY_ALIASES = {
    "i8": "int8",
    "i16": "int16",
    "i32": "int32",
    "i64": "int64",
    "u8": "uint8",
    "u16": "uint16",
    "u32": "uint32",
    "u64": "uint64",
    "f16": "float16",
    "half": "float16",
    "f32": "float32",
    "single": "float32",
    "f64": "float64",
    "c64": "complex64",
    "c128": "complex128",
}


def normalize_dtype(dtype: Any) -> Callable[..., Any]:
    """Normalize user-provided dtype tokens into a cell constructor.

    The returned callable builds the default cell when called with no
    arguments and the zero cell when called with ``0``.

    Accepted inputs include:
    - None (float)
    - Python builtins and any other callable: int, float, Fraction, Matrix, ...
    - Case-insensitive strings: "int", "float", "f32", "int16", ...
    - NumPy dtypes/scalar types: np.int16, np.dtype("float32"), ...
    """

    if dtype is None:
        return float

    if isinstance(dtype, str):
        s = dtype.strip().lower()
        if s in _BUILTIN_ALIASES:
            return _BUILTIN_ALIASES[s]
        s = _NUMPY_ALIASES.get(s, s)
        try:
            return np.dtype(s).type
        except TypeError as e:
            raise TypeError(f"Unsupported dtype {dtype!r}") from e

    if isinstance(dtype, np.dtype):
        return dtype.type

    if callable(dtype):
        return dtype

    raise TypeError(f"Unsupported dtype {dtype!r}")
