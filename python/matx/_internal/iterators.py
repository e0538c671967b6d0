from __future__ import annotations

from typing import Any, Iterator

from .coercion import clone_value


class _DoubleEndedView:
    """Lazy view over a matrix that can be drained from both ends.

    The front cursor counts items taken with ``next()``; the back cursor
    counts items taken with ``next_back()``. The view is exhausted once
    ``front + back`` reaches the item count, so interleaved draining never
    yields the middle item twice.

    Views read the matrix buffer directly. Mutating the matrix while a view
    is alive is not supported.
    """

    def __init__(self, matrix: Any):
        self._matrix = matrix
        self._front = 0
        self._back = 0

    def _total(self) -> int:
        raise NotImplementedError

    def _item(self, index: int) -> Any:
        raise NotImplementedError

    def _exhausted(self) -> bool:
        return self._front + self._back >= self._total()

    def __iter__(self) -> "_DoubleEndedView":
        return self

    def __len__(self) -> int:
        return self._total() - self._front - self._back

    def __next__(self) -> Any:
        if self._exhausted():
            raise StopIteration
        item = self._item(self._front)
        self._front += 1
        return item

    def next_back(self) -> Any:
        """Take the next item from the back; raise StopIteration when exhausted."""
        if self._exhausted():
            raise StopIteration
        item = self._item(self._total() - self._back - 1)
        self._back += 1
        return item

    def __reversed__(self) -> Iterator[Any]:
        while not self._exhausted():
            yield self.next_back()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} remaining={len(self)} of {self._total()}>"


class Rows(_DoubleEndedView):
    """Iterator over the rows of a matrix, each a list of ``cols`` copied cells."""

    def _total(self) -> int:
        return self._matrix.rows

    def _item(self, index: int) -> list[Any]:
        cols = self._matrix.cols
        start = index * cols
        return [clone_value(v) for v in self._matrix._data[start:start + cols]]


class Columns(_DoubleEndedView):
    """Iterator over the columns of a matrix.

    Each column is gathered from every row at yield time, O(rows) per item.
    """

    def _total(self) -> int:
        return self._matrix.cols

    def _item(self, index: int) -> list[Any]:
        cols = self._matrix.cols
        data = self._matrix._data
        return [clone_value(data[i * cols + index]) for i in range(self._matrix.rows)]


class Cells(_DoubleEndedView):
    """Row-major walk over the flat buffer; yields the stored cells themselves."""

    def _total(self) -> int:
        return len(self._matrix._data)

    def _item(self, index: int) -> Any:
        return self._matrix._data[index]
