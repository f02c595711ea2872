"""Neural network built on :mod:`zisnet.core`."""

from .genetic import MutationStrategy, UniformMutation, mutated_copy
from .network import FeedForwardNetwork
from .persistence import load_network, save_network

__all__ = [
    "FeedForwardNetwork",
    "MutationStrategy",
    "UniformMutation",
    "mutated_copy",
    "save_network",
    "load_network",
]
