"""Dense float64 matrices.

Every arithmetic operation exists twice: as a :class:`Matrix` method that
mutates the receiver and returns it for chaining, and as a module level
function that leaves its operands untouched and returns a new matrix::

    a.add(b)        # a is modified
    c = add(a, b)   # a and b are not

Comparisons against zero (singularity) and equality are exact.
"""

from __future__ import annotations

from typing import Callable, List, Sequence

import numpy as np

from .errors import (
    DimensionMismatchError,
    IndexOutOfBoundsError,
    InvalidDimensionError,
    NotSquareError,
    RaggedInputError,
    SingularMatrixError,
)
from .types import Array, Grid

MapFn = Callable[[float, int, int], float]


class Matrix:
    """A ``rows x cols`` grid of 64-bit floats."""

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 0 or cols < 0 or rows != int(rows) or cols != int(cols):
            raise InvalidDimensionError(
                f"Matrix dimensions must be non-negative integers, got {rows}x{cols}"
            )
        self._data: Array = np.zeros((int(rows), int(cols)), dtype=np.float64)

    # ------------------------------------------------------------------
    # Construction

    @classmethod
    def from_grid(cls, grid: Grid) -> "Matrix":
        """Return a matrix holding a deep copy of ``grid``."""

        rows = [list(row) for row in grid]
        width = len(rows[0]) if rows else 0
        for idx, row in enumerate(rows):
            if len(row) != width:
                raise RaggedInputError(
                    f"Row {idx} has {len(row)} entries, expected {width}"
                )
        return cls._wrap(np.array(rows, dtype=np.float64).reshape(len(rows), width))

    @classmethod
    def _wrap(cls, data: Array) -> "Matrix":
        out = cls.__new__(cls)
        out._data = data
        return out

    # ------------------------------------------------------------------
    # Shape and access

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    @property
    def data(self) -> Array:
        """The live backing array; writes to it change the matrix."""

        return self._data

    def get(self, row: int, col: int) -> float:
        self._check_index(row, col)
        return float(self._data[row, col])

    def set(self, row: int, col: int, value: float) -> "Matrix":
        self._check_index(row, col)
        self._data[row, col] = value
        return self

    def set_row(self, row: int, values: Sequence[float]) -> "Matrix":
        if not 0 <= row < self.rows:
            raise IndexOutOfBoundsError(f"Row {row} does not exist in a {self.rows}x{self.cols} matrix")
        if len(values) != self.cols:
            raise DimensionMismatchError(
                f"Row needs {self.cols} values, got {len(values)}",
                expected=self.cols,
                actual=len(values),
            )
        self._data[row, :] = values
        return self

    def set_column(self, col: int, values: Sequence[float]) -> "Matrix":
        if not 0 <= col < self.cols:
            raise IndexOutOfBoundsError(f"Column {col} does not exist in a {self.rows}x{self.cols} matrix")
        if len(values) != self.rows:
            raise DimensionMismatchError(
                f"Column needs {self.rows} values, got {len(values)}",
                expected=self.rows,
                actual=len(values),
            )
        self._data[:, col] = values
        return self

    def to_array(self) -> List[List[float]]:
        """Return an independent nested-list copy of the entries."""

        return self._data.tolist()

    def copy(self) -> "Matrix":
        return Matrix._wrap(self._data.copy())

    def _check_index(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexOutOfBoundsError(
                f"Index ({row}, {col}) out of bounds for a {self.rows}x{self.cols} matrix"
            )

    # ------------------------------------------------------------------
    # In-place operations

    def fill(self, value: float) -> "Matrix":
        self._data[...] = value
        return self

    def map(self, fn: MapFn) -> "Matrix":
        """Replace every entry with ``fn(value, row, col)``."""

        for row in range(self.rows):
            for col in range(self.cols):
                self._data[row, col] = fn(float(self._data[row, col]), row, col)
        return self

    def randomize(
        self,
        low: float = 0.0,
        high: float = 1.0,
        rng: np.random.Generator | None = None,
    ) -> "Matrix":
        """Fill with uniform values in ``[low, high)``."""

        rng = rng if rng is not None else np.random.default_rng()
        self._data[...] = rng.uniform(low, high, size=self._data.shape)
        return self

    def add(self, other: "Matrix") -> "Matrix":
        _require_same_shape(self, other, "add")
        self._data += other._data
        return self

    def sub(self, other: "Matrix") -> "Matrix":
        _require_same_shape(self, other, "sub")
        self._data -= other._data
        return self

    def mult(self, scalar: float) -> "Matrix":
        self._data *= scalar
        return self

    def hadamard(self, other: "Matrix") -> "Matrix":
        _require_same_shape(self, other, "hadamard")
        self._data *= other._data
        return self

    def matmul(self, other: "Matrix") -> "Matrix":
        self._data = matmul(self, other)._data
        return self

    def transpose(self) -> "Matrix":
        self._data = self._data.T.copy()
        return self

    def inverse(self) -> "Matrix":
        self._data = inverse(self)._data
        return self

    # ------------------------------------------------------------------
    # Queries

    def minor(self, row: int, col: int) -> "Matrix":
        """Return the matrix without ``row`` and ``col``."""

        self._check_index(row, col)
        return Matrix._wrap(_minor(self._data, row, col))

    def determinant(self) -> float:
        """Determinant by cofactor expansion along the first row.

        The cost grows factorially with the order of the matrix.
        """

        _require_square(self, "determinant")
        return _cofactor_det(self._data)

    det = determinant

    # ------------------------------------------------------------------
    # Dunder helpers

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return equals(self, other)

    def __add__(self, other: "Matrix") -> "Matrix":
        return add(self, other)

    def __sub__(self, other: "Matrix") -> "Matrix":
        return sub(self, other)

    def __matmul__(self, other: "Matrix") -> "Matrix":
        return matmul(self, other)

    def __mul__(self, scalar: float) -> "Matrix":
        return scale(self, scalar)

    __rmul__ = __mul__

    def __repr__(self) -> str:
        return f"Matrix({self.to_array()!r})"

    def __str__(self) -> str:
        rule = "-" * 49
        body = ["\t".join(str(value) for value in row) for row in self.to_array()]
        return "\n".join([rule, *body, rule])


# ----------------------------------------------------------------------
# Pure operations


def transpose(m: Matrix) -> Matrix:
    return Matrix._wrap(m.data.T.copy())


def matmul(a: Matrix, b: Matrix) -> Matrix:
    if a.cols != b.rows:
        raise DimensionMismatchError(
            f"matmul needs a.cols == b.rows, got {a.shape} and {b.shape}",
            expected=(a.cols, b.cols),
            actual=b.shape,
        )
    return Matrix._wrap(a.data @ b.data)


def add(a: Matrix, b: Matrix) -> Matrix:
    _require_same_shape(a, b, "add")
    return Matrix._wrap(a.data + b.data)


def sub(a: Matrix, b: Matrix) -> Matrix:
    _require_same_shape(a, b, "sub")
    return Matrix._wrap(a.data - b.data)


def scalar_sub(value: float, m: Matrix) -> Matrix:
    """Return ``value - m`` entrywise."""

    return Matrix._wrap(value - m.data)


def scale(m: Matrix, scalar: float) -> Matrix:
    return Matrix._wrap(m.data * scalar)


def hadamard(a: Matrix, b: Matrix) -> Matrix:
    _require_same_shape(a, b, "hadamard")
    return Matrix._wrap(a.data * b.data)


def determinant(m: Matrix) -> float:
    return m.determinant()


def inverse(m: Matrix) -> Matrix:
    """Inverse through the adjugate: ``transpose(cofactors) / det``.

    Raises :class:`SingularMatrixError` when the determinant is exactly zero.
    """

    det = m.determinant()
    if det == 0:
        raise SingularMatrixError("The determinant of the matrix is 0", determinant=det)

    data = m.data
    n = data.shape[0]
    cofactors = np.empty((n, n), dtype=np.float64)
    for row in range(n):
        for col in range(n):
            cofactors[row, col] = (-1.0) ** (row + col) * _cofactor_det(_minor(data, row, col))
    return Matrix._wrap(cofactors.T * (1.0 / det))


def equals(a: Matrix, b: Matrix) -> bool:
    return a.shape == b.shape and bool(np.array_equal(a.data, b.data))


# ----------------------------------------------------------------------
# Helpers


def _require_same_shape(a: Matrix, b: Matrix, op: str) -> None:
    if a.shape != b.shape:
        raise DimensionMismatchError(
            f"{op} needs equal shapes, got {a.shape} and {b.shape}",
            expected=a.shape,
            actual=b.shape,
        )


def _require_square(m: Matrix, op: str) -> None:
    if m.rows != m.cols:
        raise NotSquareError(f"{op} needs a square matrix, got {m.rows}x{m.cols}")


def _minor(data: Array, row: int, col: int) -> Array:
    return np.delete(np.delete(data, row, axis=0), col, axis=1)


def _cofactor_det(data: Array) -> float:
    n = data.shape[0]
    if n == 0:
        return 1.0
    if n == 1:
        return float(data[0, 0])
    if n == 2:
        return float(data[0, 0] * data[1, 1] - data[0, 1] * data[1, 0])
    total = 0.0
    for col in range(n):
        total += data[0, col] * (-1.0) ** col * _cofactor_det(_minor(data, 0, col))
    return float(total)


__all__ = [
    "Matrix",
    "transpose",
    "matmul",
    "add",
    "sub",
    "scalar_sub",
    "scale",
    "hadamard",
    "determinant",
    "inverse",
    "equals",
]
