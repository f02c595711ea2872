"""Fully connected feed-forward network trained by backpropagation."""

from __future__ import annotations

from typing import List, Sequence, Tuple, Union

import numpy as np

from ..core import matrix as mx
from ..core.activations import SIGMOID, Activation, get_activation
from ..core.errors import DimensionMismatchError, InvalidTopologyError, ValidationError
from ..core.matrix import Matrix
from ..core.types import SNAPSHOT_VERSION, NetworkSnapshot
from ..core.vector import Vector

InputLike = Union[Matrix, Vector, Sequence[float], Sequence[Sequence[float]]]

INIT_LOW = -0.5
INIT_HIGH = 0.5


class FeedForwardNetwork:
    """Multi-layer perceptron with one activation shared by all layers.

    ``weights[i]`` maps layer ``i`` to layer ``i + 1`` and has the shape
    ``layer_sizes[i + 1] x layer_sizes[i]``; ``biases[i]`` is a column of
    ``layer_sizes[i + 1]`` entries. The topology never changes after
    construction.

    Example, two inputs, two hidden layers of two nodes and one output::

        nn = FeedForwardNetwork(0.1, 2, 1, 2, 2)
    """

    def __init__(
        self,
        learning_rate: float,
        input_size: int,
        output_size: int,
        *hidden_sizes: int,
        activation: Activation = SIGMOID,
        rng: np.random.Generator | None = None,
    ) -> None:
        if input_size < 1:
            raise InvalidTopologyError("Input layer must have at least one node")
        if output_size < 1:
            raise InvalidTopologyError("Output layer must have at least one node")
        if not hidden_sizes:
            raise InvalidTopologyError("At least one hidden layer must be provided")
        for idx, size in enumerate(hidden_sizes):
            if size < 1:
                raise InvalidTopologyError(
                    f"Hidden layer #{idx + 1} must have at least one node, got {size}"
                )

        self._layer_sizes: Tuple[int, ...] = (
            int(input_size),
            *(int(size) for size in hidden_sizes),
            int(output_size),
        )
        self.learning_rate = float(learning_rate)
        self.activation = activation

        rng = rng if rng is not None else np.random.default_rng()
        self.weights: List[Matrix] = []
        self.biases: List[Matrix] = []
        for in_dim, out_dim in zip(self._layer_sizes[:-1], self._layer_sizes[1:]):
            self.weights.append(Matrix(out_dim, in_dim).randomize(INIT_LOW, INIT_HIGH, rng))
            self.biases.append(Matrix(out_dim, 1).randomize(INIT_LOW, INIT_HIGH, rng))

    # ------------------------------------------------------------------
    # Alternate constructors

    @classmethod
    def from_parameters(
        cls,
        learning_rate: float,
        weights: Sequence[Matrix],
        biases: Sequence[Matrix],
        activation: Activation = SIGMOID,
    ) -> "FeedForwardNetwork":
        """Build a network around copies of existing weight and bias matrices."""

        layer_sizes = _infer_layer_sizes(weights, biases)
        network = cls(
            learning_rate,
            layer_sizes[0],
            layer_sizes[-1],
            *layer_sizes[1:-1],
            activation=activation,
            rng=np.random.default_rng(0),
        )
        network.weights = [w.copy() for w in weights]
        network.biases = [b.copy() for b in biases]
        return network

    @classmethod
    def from_snapshot(cls, snapshot: NetworkSnapshot) -> "FeedForwardNetwork":
        if snapshot.version != SNAPSHOT_VERSION:
            raise ValidationError(
                f"Unsupported snapshot version {snapshot.version}, expected {SNAPSHOT_VERSION}"
            )
        weights = [Matrix.from_grid(grid) for grid in snapshot.weights]
        biases = [Matrix.from_grid(grid) for grid in snapshot.biases]
        network = cls.from_parameters(
            snapshot.learning_rate,
            weights,
            biases,
            activation=get_activation(snapshot.activation),
        )
        if list(network.layer_sizes) != list(snapshot.layer_sizes):
            raise InvalidTopologyError(
                f"Snapshot declares layers {list(snapshot.layer_sizes)} but its "
                f"parameters describe {list(network.layer_sizes)}"
            )
        return network

    # ------------------------------------------------------------------
    # Properties

    @property
    def layer_sizes(self) -> Tuple[int, ...]:
        return self._layer_sizes

    @property
    def input_size(self) -> int:
        return self._layer_sizes[0]

    @property
    def output_size(self) -> int:
        return self._layer_sizes[-1]

    def parameter_count(self) -> int:
        return int(sum(w.data.size + b.data.size for w, b in zip(self.weights, self.biases)))

    # ------------------------------------------------------------------
    # Inference and training

    def query(self, inputs: InputLike) -> Matrix:
        """Return the network's output column for a single input row."""

        column = mx.transpose(_as_row(inputs, self.input_size, "inputs"))
        return self._forward(column)[-1]

    def train(self, inputs: InputLike, targets: InputLike) -> None:
        """Run one backpropagation step on a single input/target pair."""

        results = self._forward(mx.transpose(_as_row(inputs, self.input_size, "inputs")))
        target = mx.transpose(_as_row(targets, self.output_size, "targets"))

        error = mx.sub(target, results[-1])
        for layer in reversed(range(len(self.weights))):
            gradient = self._gradient(results[layer + 1], error)
            if layer > 0:
                # propagate through the weights as they were before this step
                next_error = mx.matmul(mx.transpose(self.weights[layer]), error)
            self.weights[layer].add(mx.matmul(gradient, mx.transpose(results[layer])))
            self.biases[layer].add(gradient)
            if layer > 0:
                error = next_error

    def _forward(self, column: Matrix) -> List[Matrix]:
        activate = self.activation.activate
        results = [column]
        for weight, bias in zip(self.weights, self.biases):
            layer = mx.matmul(weight, results[-1]).add(bias)
            layer.map(lambda value, row, col: activate(value))
            results.append(layer)
        return results

    def _gradient(self, output: Matrix, error: Matrix) -> Matrix:
        deactivate = self.activation.deactivate
        gradient = output.copy().map(lambda value, row, col: deactivate(value))
        return gradient.hadamard(error).mult(self.learning_rate)

    # ------------------------------------------------------------------
    # Copies and snapshots

    def copy(self) -> "FeedForwardNetwork":
        """Return a deep copy that shares nothing mutable with this network."""

        return FeedForwardNetwork.from_parameters(
            self.learning_rate, self.weights, self.biases, activation=self.activation
        )

    def snapshot(self) -> NetworkSnapshot:
        return NetworkSnapshot(
            layer_sizes=list(self._layer_sizes),
            learning_rate=self.learning_rate,
            activation=self.activation.name,
            weights=[w.to_array() for w in self.weights],
            biases=[b.to_array() for b in self.biases],
        )

    def __repr__(self) -> str:
        return (
            f"FeedForwardNetwork(layer_sizes={list(self._layer_sizes)}, "
            f"learning_rate={self.learning_rate}, activation={self.activation.name!r})"
        )


def _infer_layer_sizes(weights: Sequence[Matrix], biases: Sequence[Matrix]) -> List[int]:
    if len(weights) < 2:
        raise InvalidTopologyError("At least one hidden layer (two weight matrices) is required")
    if len(weights) != len(biases):
        raise InvalidTopologyError(
            f"Got {len(weights)} weight matrices but {len(biases)} bias matrices"
        )
    sizes = [weights[0].cols]
    for idx, (weight, bias) in enumerate(zip(weights, biases)):
        if weight.cols != sizes[-1]:
            raise InvalidTopologyError(
                f"Weight {idx} expects {weight.cols} inputs but layer {idx} has {sizes[-1]} nodes"
            )
        if bias.shape != (weight.rows, 1):
            raise InvalidTopologyError(
                f"Bias {idx} has shape {bias.shape}, expected {(weight.rows, 1)}"
            )
        sizes.append(weight.rows)
    return sizes


def _as_row(values: InputLike, size: int, name: str) -> Matrix:
    if isinstance(values, Matrix):
        row = values
    elif isinstance(values, Vector):
        row = Matrix.from_grid([values.to_array()])
    else:
        values = list(values)
        if values and np.ndim(values[0]) == 0:
            values = [values]
        row = Matrix.from_grid(values)
    if row.shape != (1, size):
        raise DimensionMismatchError(
            f"{name} must be a single row of {size} values, got shape {row.shape}",
            expected=(1, size),
            actual=row.shape,
        )
    return row


__all__ = ["FeedForwardNetwork", "INIT_LOW", "INIT_HIGH"]
