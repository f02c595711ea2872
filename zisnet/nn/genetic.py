"""Mutation strategies for evolving networks without gradient information."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from ..core.errors import ValidationError
from ..core.matrix import Matrix
from .network import INIT_HIGH, INIT_LOW, FeedForwardNetwork


class MutationStrategy(Protocol):
    """Protocol implemented by network mutation operators."""

    def apply(self, network: FeedForwardNetwork) -> FeedForwardNetwork:
        """Mutate ``network`` in place and return it."""


@dataclass
class UniformMutation:
    """Replace each parameter with a fresh uniform draw with probability ``rate``."""

    rate: float
    rng: np.random.Generator
    low: float = INIT_LOW
    high: float = INIT_HIGH

    def __post_init__(self) -> None:
        if not 0.0 <= self.rate <= 1.0:
            raise ValidationError(f"Mutation rate must lie in [0, 1], got {self.rate}")

    def apply(self, network: FeedForwardNetwork) -> FeedForwardNetwork:
        for weight in network.weights:
            self._mutate(weight)
        for bias in network.biases:
            self._mutate(bias)
        return network

    __call__ = apply

    def _mutate(self, m: Matrix) -> None:
        rng = self.rng
        m.map(
            lambda value, row, col: rng.uniform(self.low, self.high)
            if rng.random() < self.rate
            else value
        )


def mutated_copy(network: FeedForwardNetwork, strategy: MutationStrategy) -> FeedForwardNetwork:
    """Return a mutated deep copy, leaving ``network`` untouched."""

    return strategy.apply(network.copy())


__all__ = ["MutationStrategy", "UniformMutation", "mutated_copy"]
