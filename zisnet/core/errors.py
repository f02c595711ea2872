"""Exception hierarchy for zisnet.

All library errors inherit from :class:`ZisNetError`. Errors are raised at
the point where a precondition is violated and carry the offending values
as attributes where that helps the caller.
"""

from __future__ import annotations

from typing import Tuple


class ZisNetError(Exception):
    """Base exception for all zisnet errors."""


class ValidationError(ZisNetError, ValueError):
    """User supplied values failed a precondition check."""


class InvalidDimensionError(ValidationError):
    """A size that must be non-negative (or positive) was not."""


class RaggedInputError(ValidationError):
    """A nested grid does not have rows of equal length."""


class DimensionMismatchError(ValidationError):
    """Two operands have shapes that are incompatible for an operation.

    Attributes:
        expected: Shape (or length) the operation required.
        actual: Shape (or length) that was supplied.
    """

    def __init__(
        self,
        message: str,
        expected: Tuple[int, ...] | int | None = None,
        actual: Tuple[int, ...] | int | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class NotSquareError(ValidationError):
    """Determinant or inverse requested for a non-square matrix."""


class InvalidTopologyError(ValidationError):
    """Layer sizes or parameter shapes do not describe a valid network."""


class IndexOutOfBoundsError(ValidationError, IndexError):
    """An accessor index lies outside the container."""


class UnknownActivationError(ValidationError, KeyError):
    """No activation is registered under the requested name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class NumericalError(ZisNetError):
    """A computation cannot produce a result for the given values."""


class SingularMatrixError(NumericalError):
    """The matrix has a determinant of exactly zero.

    Attributes:
        determinant: The determinant that was computed.
    """

    def __init__(self, message: str, determinant: float = 0.0):
        super().__init__(message)
        self.determinant = determinant


class SolverError(NumericalError):
    """Base class for failures of the linear system solver.

    Attributes:
        row: Row of the working matrix at which the failure was detected.
    """

    def __init__(self, message: str, row: int | None = None):
        super().__init__(message)
        self.row = row


class NoSolutionError(SolverError):
    """The linear system is inconsistent."""


class NotUniquelySolvableError(SolverError):
    """The linear system has no unique solution."""


__all__ = [
    "ZisNetError",
    "ValidationError",
    "InvalidDimensionError",
    "RaggedInputError",
    "DimensionMismatchError",
    "NotSquareError",
    "InvalidTopologyError",
    "IndexOutOfBoundsError",
    "UnknownActivationError",
    "NumericalError",
    "SingularMatrixError",
    "SolverError",
    "NoSolutionError",
    "NotUniquelySolvableError",
]
