"""Core typing contracts for zisnet."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

Array = np.ndarray
Grid = Sequence[Sequence[float]]

SNAPSHOT_VERSION = 1


@dataclass(frozen=True)
class Sample:
    """A single input/target pair used for training."""

    inputs: List[float]
    targets: List[float]


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :meth:`zisnet.training.trainer.Trainer.run`."""

    epochs: int
    final_loss: float
    best_loss: float
    metrics_path: str = ""
    checkpoint_path: str = ""


@dataclass(frozen=True)
class NetworkSnapshot:
    """Plain-data capture of a network's topology and parameters.

    ``weights[i]`` and ``biases[i]`` are nested row lists with the shapes
    ``layer_sizes[i + 1] x layer_sizes[i]`` and ``layer_sizes[i + 1] x 1``.
    """

    layer_sizes: List[int]
    learning_rate: float
    activation: str
    weights: List[List[List[float]]] = field(default_factory=list)
    biases: List[List[List[float]]] = field(default_factory=list)
    version: int = SNAPSHOT_VERSION
