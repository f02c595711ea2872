"""zisnet public API."""

from .core import activations, errors, types  # noqa: F401
from .core.activations import SIGMOID, TANH, Activation
from .core.matrix import Matrix
from .core.solver import solve
from .core.vector import Vector
from .nn import FeedForwardNetwork, UniformMutation, load_network, save_network
from .training import Trainer, load_preset, presets, run_pipeline

__all__ = [
    "Activation",
    "FeedForwardNetwork",
    "Matrix",
    "SIGMOID",
    "TANH",
    "Trainer",
    "UniformMutation",
    "Vector",
    "activations",
    "errors",
    "load_network",
    "load_preset",
    "presets",
    "run_pipeline",
    "save_network",
    "solve",
    "types",
]
