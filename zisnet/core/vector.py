"""Dense float64 vectors used as right-hand sides of linear systems."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .errors import DimensionMismatchError, IndexOutOfBoundsError, InvalidDimensionError
from .matrix import Matrix
from .types import Array


class Vector:
    """A flat sequence of ``size`` floats, semantically a column."""

    def __init__(self, size: int) -> None:
        if size < 0 or size != int(size):
            raise InvalidDimensionError(f"Vector size must be a non-negative integer, got {size}")
        self._data: Array = np.zeros(int(size), dtype=np.float64)

    @classmethod
    def from_array(cls, values: Sequence[float]) -> "Vector":
        data = np.array(list(values), dtype=np.float64)
        if data.ndim != 1:
            raise DimensionMismatchError(
                f"A vector needs a flat sequence of floats, got shape {data.shape}",
                expected=1,
                actual=data.ndim,
            )
        out = cls(0)
        out._data = data
        return out

    @classmethod
    def from_matrix(cls, m: Matrix) -> "Vector":
        """Return the single column of ``m`` as a vector."""

        if m.cols != 1:
            raise DimensionMismatchError(
                f"Only a single-column matrix converts to a vector, got {m.rows}x{m.cols}",
                expected=(m.rows, 1),
                actual=m.shape,
            )
        return cls.from_array(m.data[:, 0])

    @property
    def size(self) -> int:
        return self._data.shape[0]

    @property
    def data(self) -> Array:
        return self._data

    def get(self, index: int) -> float:
        self._check_index(index)
        return float(self._data[index])

    def set(self, index: int, value: float) -> "Vector":
        self._check_index(index)
        self._data[index] = value
        return self

    def copy(self) -> "Vector":
        return Vector.from_array(self._data)

    def to_array(self) -> List[float]:
        return self._data.tolist()

    def to_matrix(self) -> Matrix:
        column = Matrix(self.size, 1)
        column.data[:, 0] = self._data
        return column

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.size:
            raise IndexOutOfBoundsError(
                f"Index {index} out of bounds for a vector of size {self.size}"
            )

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self._data, other._data))

    def __repr__(self) -> str:
        return f"Vector({self.to_array()!r})"

    def __str__(self) -> str:
        rule = "-" * 49
        body = "\t".join(str(value) for value in self.to_array())
        return "\n".join([rule, f"({body})^T", rule])


__all__ = ["Vector"]
