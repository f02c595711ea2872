"""Save and load networks as compressed ``.npz`` archives."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

import numpy as np

from ..core.errors import ValidationError
from ..core.types import SNAPSHOT_VERSION, NetworkSnapshot
from .network import FeedForwardNetwork

_META_KEY = "meta"


def save_network(path: str | Path, network: FeedForwardNetwork) -> Path:
    """Write ``network`` to ``path`` and return the path."""

    snapshot = network.snapshot()
    meta = {key: value for key, value in asdict(snapshot).items() if key not in {"weights", "biases"}}
    payload = {_META_KEY: np.array(json.dumps(meta))}
    for idx, (weight, bias) in enumerate(zip(network.weights, network.biases)):
        payload[f"W{idx}"] = weight.data
        payload[f"b{idx}"] = bias.data

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as handle:
        np.savez_compressed(handle, **payload)
    return path


def load_network(path: str | Path) -> FeedForwardNetwork:
    """Rebuild a network written by :func:`save_network`."""

    with np.load(Path(path), allow_pickle=False) as archive:
        meta = json.loads(str(archive[_META_KEY]))
        if meta.get("version") != SNAPSHOT_VERSION:
            raise ValidationError(
                f"Unsupported network file version {meta.get('version')}, expected {SNAPSHOT_VERSION}"
            )
        n_layers = len(meta["layer_sizes"]) - 1
        weights = []
        biases = []
        for idx in range(n_layers):
            for key in (f"W{idx}", f"b{idx}"):
                if key not in archive.files:
                    raise KeyError(f"Missing parameter {key} in {path}")
            weights.append(archive[f"W{idx}"].tolist())
            biases.append(archive[f"b{idx}"].tolist())

    snapshot = NetworkSnapshot(
        layer_sizes=list(meta["layer_sizes"]),
        learning_rate=float(meta["learning_rate"]),
        activation=str(meta["activation"]),
        weights=weights,
        biases=biases,
        version=int(meta["version"]),
    )
    return FeedForwardNetwork.from_snapshot(snapshot)


__all__ = ["save_network", "load_network"]
