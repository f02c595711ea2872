"""Metric helpers evaluated over a dataset after each epoch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Sequence

import numpy as np

from ..core.types import Array, Sample
from ..nn.network import FeedForwardNetwork


@dataclass(frozen=True)
class MetricResult:
    name: str
    value: float


def default_metrics(task_type: str) -> List[str]:
    if task_type == "regression":
        return ["mae", "rmse"]
    if task_type == "binary":
        return ["accuracy"]
    raise ValueError(f"Unknown task type: {task_type}")


def predict(network: FeedForwardNetwork, samples: Sequence[Sample]) -> tuple[Array, Array]:
    """Return ``(predictions, targets)`` as ``n_samples x d_out`` arrays."""

    preds = np.array([network.query(s.inputs).data[:, 0] for s in samples], dtype=np.float64)
    targs = np.array([s.targets for s in samples], dtype=np.float64)
    return preds, targs


def compute_metric(name: str, predictions: Array, targets: Array) -> MetricResult:
    key = name.lower()
    diff = predictions - targets
    if key == "mse":
        value = float(np.mean(np.square(diff)))
    elif key == "mae":
        value = float(np.mean(np.abs(diff)))
    elif key == "rmse":
        value = float(np.sqrt(np.mean(np.square(diff))))
    elif key == "accuracy":
        value = float(np.mean((predictions >= 0.5) == (targets >= 0.5)))
    else:
        raise KeyError(f"Unknown metric: {name}")
    return MetricResult(name=key, value=value)


def compute_metrics(names: Iterable[str], predictions: Array, targets: Array) -> Mapping[str, float]:
    results: Dict[str, float] = {}
    for name in names:
        metric = compute_metric(name, predictions, targets)
        results[metric.name] = metric.value
    return results


__all__ = ["MetricResult", "default_metrics", "predict", "compute_metric", "compute_metrics"]
