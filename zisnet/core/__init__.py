"""Core numerical primitives for zisnet."""

from . import activations, errors, matrix, solver, types, vector
from .matrix import Matrix
from .solver import solve
from .vector import Vector

__all__ = ["activations", "errors", "matrix", "solver", "types", "vector", "Matrix", "Vector", "solve"]
