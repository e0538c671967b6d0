from __future__ import annotations

import json
import zipfile
from pathlib import Path
from typing import Any

import numpy as np

from .errors import MatxError
from .matrix_api import Matrix


FORMAT_NAME = "matx"
FORMAT_VERSION = 1

_RECORD_KEYS = ("data", "rows", "cols")


def _encode_cell(value: Any) -> Any:
    if isinstance(value, Matrix):
        return to_record(value)
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, dict) and set(value) == set(_RECORD_KEYS):
        # Would decode as a nested Matrix.
        raise MatxError(
            "Cannot encode a dict cell with exactly the keys 'data', 'rows' and 'cols'; "
            "it is indistinguishable from a nested matrix record"
        )
    return value


def _decode_cell(value: Any) -> Any:
    if isinstance(value, dict) and set(value) == set(_RECORD_KEYS):
        return from_record(value)
    return value


def to_record(matrix: Matrix) -> dict[str, Any]:
    """Return ``{"data": [...], "rows": R, "cols": C}`` with data in row-major order.

    Matrix cells become nested records. A plain dict cell shaped like a
    record is rejected with MatxError, since it would load back as a Matrix.
    """
    return {
        "data": [_encode_cell(v) for v in matrix._data],
        "rows": matrix.rows,
        "cols": matrix.cols,
    }


def from_record(record: Any) -> Matrix:
    if not isinstance(record, dict):
        raise MatxError(f"Matrix record must be a mapping, got {type(record).__name__}")
    missing = [k for k in _RECORD_KEYS if k not in record]
    if missing:
        raise MatxError(f"Matrix record is missing field(s): {', '.join(missing)}")

    data, rows, cols = record["data"], record["rows"], record["cols"]
    if not isinstance(data, list):
        raise MatxError("Matrix record field 'data' must be a list")
    for name, value in (("rows", rows), ("cols", cols)):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise MatxError(f"Matrix record field '{name}' must be a non-negative integer")
    if len(data) != rows * cols:
        raise MatxError(
            f"Matrix record holds {len(data)} cells but rows*cols is {rows * cols}"
        )
    return Matrix._wrap([_decode_cell(v) for v in data], rows, cols)


def dumps(matrix: Matrix) -> str:
    """Encode as compact JSON: ``{"data":[...],"rows":R,"cols":C}``.

    NaN and infinite cells have no standard JSON form and raise MatxError.
    """
    try:
        return json.dumps(to_record(matrix), separators=(",", ":"), allow_nan=False)
    except ValueError as e:
        raise MatxError(f"Matrix cannot be encoded as JSON: {e}") from e


def loads(text: str | bytes) -> Matrix:
    try:
        record = json.loads(text)
    except ValueError as e:
        raise MatxError(f"Invalid matrix JSON: {e}") from e
    return from_record(record)


def _element_kind(matrix: Matrix) -> str:
    if not matrix._data:
        return "empty"
    kinds = {type(v).__name__ for v in matrix._data}
    if len(kinds) == 1:
        return kinds.pop()
    return "mixed"


def save(matrix: Matrix, path: str | Path) -> None:
    """Save a matrix to a file (ZIP format)."""
    if not isinstance(matrix, Matrix):
        raise TypeError(f"save expects a Matrix, got {type(matrix).__name__}")

    payload = dumps(matrix)

    path = Path(path).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)

    metadata: dict[str, Any] = {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "rows": matrix.rows,
        "cols": matrix.cols,
        "element_kind": _element_kind(matrix),
    }

    with zipfile.ZipFile(path, "w", zipfile.ZIP_STORED) as zf:
        zf.writestr("metadata.json", json.dumps(metadata, indent=2))
        zf.writestr("matrix.json", payload)


def load(path: str | Path) -> Matrix:
    """Load a matrix written by save()."""
    path = Path(path)
    try:
        with zipfile.ZipFile(path, "r") as zf:
            names = set(zf.namelist())
            for member in ("metadata.json", "matrix.json"):
                if member not in names:
                    raise MatxError(f"{path} is not a matx file (missing {member})")
            raw_metadata = zf.read("metadata.json")
            payload = zf.read("matrix.json")
    except zipfile.BadZipFile as e:
        raise MatxError(f"{path} is not a matx file: {e}") from e

    try:
        metadata = json.loads(raw_metadata)
    except ValueError as e:
        raise MatxError(f"{path} has unreadable metadata: {e}") from e
    if not isinstance(metadata, dict):
        raise MatxError(f"{path} metadata must be a JSON object, got {type(metadata).__name__}")

    if metadata.get("format") != FORMAT_NAME:
        raise MatxError(f"{path} has unknown format {metadata.get('format')!r}")
    if metadata.get("version") != FORMAT_VERSION:
        raise MatxError(f"{path} has unsupported format version {metadata.get('version')!r}")

    matrix = loads(payload)
    if matrix.shape != (metadata.get("rows"), metadata.get("cols")):
        raise MatxError(
            f"{path} metadata shape ({metadata.get('rows')}, {metadata.get('cols')}) "
            f"does not match payload shape {matrix.shape}"
        )
    return matrix
