from __future__ import annotations

import sys
from typing import Any, TextIO

import numpy as np


_EDGE_ITEMS: int = 4


def configure(*, edge_items: int = 4) -> None:
    global _EDGE_ITEMS
    edge_items = int(edge_items)
    if edge_items < 1:
        raise ValueError("edge_items must be at least 1")
    _EDGE_ITEMS = edge_items


def _edge_indices(length: int) -> tuple[list[int], list[int], bool]:
    if length <= _EDGE_ITEMS * 2:
        return list(range(length)), [], False
    head = list(range(_EDGE_ITEMS))
    tail = list(range(length - _EDGE_ITEMS, length))
    return head, tail, True


def _format_value(value: Any) -> str:
    if isinstance(value, np.generic):
        value = value.item()
    return repr(value)


def dump(matrix: Any, sep: str = "\t") -> str:
    """One line per row; every cell is preceded by ``sep``."""
    rows, cols = matrix.shape
    data = matrix._data
    lines: list[str] = []
    for i in range(rows):
        lines.append("".join(sep + _format_value(data[i * cols + j]) for j in range(cols)))
    return "\n".join(lines)


def print_matrix(matrix: Any, sep: str | None = None, file: TextIO | None = None) -> None:
    out = sys.stdout if file is None else file
    text = dump(matrix, "\t" if sep is None else sep)
    if text:
        print(text, file=out)


def matrix_repr(matrix: Any) -> str:
    rows, cols = matrix.shape
    data = matrix._data
    head, tail, truncated = _edge_indices(len(data))
    entries = [_format_value(data[i]) for i in head]
    if truncated:
        entries.append("...")
        entries.extend(_format_value(data[i]) for i in tail)
    return f"{type(matrix).__name__}(data=[{', '.join(entries)}], rows={rows}, cols={cols})"
