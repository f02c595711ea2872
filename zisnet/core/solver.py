"""Gauss-Jordan solver for linear systems ``M x = v``.

Pivots are chosen as the first non-zero entry in scan order, not by
magnitude, and zero tests are exact. The caller's matrix and vector are
never modified; elimination runs on copies.
"""

from __future__ import annotations

from .errors import DimensionMismatchError, NoSolutionError, NotUniquelySolvableError
from .matrix import Matrix
from .types import Array
from .vector import Vector


def solve(matrix: Matrix, vector: Vector) -> Vector:
    """Return the solution of ``matrix @ x = vector``.

    The result has ``matrix.rows`` entries; for a square system that is the
    solution itself, for an overdetermined consistent system the first
    ``matrix.cols`` entries are.

    Raises:
        DimensionMismatchError: ``vector`` does not have one entry per row.
        NotUniquelySolvableError: fewer rows than columns, or a zero row
            leaves a free variable.
        NoSolutionError: a zero row meets a non-zero right-hand side.
    """

    if vector.size != matrix.rows:
        raise DimensionMismatchError(
            f"Vector of size {vector.size} does not match {matrix.rows} matrix rows",
            expected=matrix.rows,
            actual=vector.size,
        )
    work = matrix.data.copy()
    rhs = vector.data.copy()
    n_rows, n_cols = work.shape
    if n_rows < n_cols:
        raise NotUniquelySolvableError(
            f"System with {n_rows} equations and {n_cols} unknowns is not uniquely solvable"
        )

    for line in range(n_rows):
        pivot_col = _find_pivot_column(work, line)

        if pivot_col is None:
            if rhs[line] != 0:
                raise NoSolutionError("System has no solution", row=line)
            if n_cols - 1 >= line:
                raise NotUniquelySolvableError("System is not uniquely solvable", row=line)
            break

        if work[line, pivot_col] == 0:
            for row in range(line + 1, n_rows):
                if work[row, pivot_col] != 0:
                    _swap_rows(work, rhs, line, row)
                    break

        if work[line, pivot_col] != 0:
            _divide_row(work, rhs, line, float(work[line, pivot_col]))

        for row in range(line + 1, n_rows):
            _eliminate(work, rhs, float(work[row, pivot_col]), line, row)

    # back substitution: clear everything above the diagonal
    for column in range(n_cols - 1, 0, -1):
        for row in range(column, 0, -1):
            _eliminate(work, rhs, float(work[row - 1, column]), column, row - 1)

    return Vector.from_array(rhs)


def _find_pivot_column(work: Array, line: int) -> int | None:
    n_rows, n_cols = work.shape
    for column in range(n_cols):
        for row in range(line, n_rows):
            if work[row, column] != 0:
                return column
    return None


def _swap_rows(work: Array, rhs: Array, first: int, second: int) -> None:
    work[[first, second]] = work[[second, first]]
    rhs[first], rhs[second] = rhs[second], rhs[first]


def _divide_row(work: Array, rhs: Array, row: int, divisor: float) -> None:
    work[row, :] = work[row, :] / divisor
    rhs[row] = rhs[row] / divisor


def _eliminate(work: Array, rhs: Array, factor: float, root: int, row: int) -> None:
    work[row, :] = work[row, :] - factor * work[root, :]
    rhs[row] = rhs[row] - factor * rhs[root]


__all__ = ["solve"]
