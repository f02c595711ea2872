"""Activation functions whose derivative is expressed in the forward output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

import numpy as np

from .errors import UnknownActivationError


@dataclass(frozen=True)
class Activation:
    """Pair of ``activate(x)`` and ``deactivate(y)`` where ``y = activate(x)``.

    ``deactivate`` returns the derivative of ``activate`` at ``x`` written
    in terms of ``y`` only, so backpropagation never needs the
    pre-activation values.
    """

    name: str
    activate: Callable[[float], float]
    deactivate: Callable[[float], float]


def sigmoid(x: float) -> float:
    """Return the logistic function ``1 / (1 + e^-x)``."""

    return float(1.0 / (1.0 + np.exp(-x)))


def sigmoid_deriv(y: float) -> float:
    return y * (1.0 - y)


def tanh(x: float) -> float:
    return float(np.tanh(x))


def tanh_deriv(y: float) -> float:
    return 1.0 - y * y


SIGMOID = Activation("sigmoid", sigmoid, sigmoid_deriv)
TANH = Activation("tanh", tanh, tanh_deriv)

_REGISTRY: Dict[str, Activation] = {SIGMOID.name: SIGMOID, TANH.name: TANH}


def register_activation(activation: Activation) -> Activation:
    """Make ``activation`` resolvable by name, e.g. from snapshots or configs."""

    _REGISTRY[activation.name] = activation
    return activation


def get_activation(name: str) -> Activation:
    try:
        return _REGISTRY[name]
    except KeyError as exc:
        available = ", ".join(sorted(_REGISTRY))
        raise UnknownActivationError(f"Unknown activation {name!r}. Available activations: {available}") from exc


__all__ = [
    "Activation",
    "SIGMOID",
    "TANH",
    "sigmoid",
    "sigmoid_deriv",
    "tanh",
    "tanh_deriv",
    "register_activation",
    "get_activation",
]
