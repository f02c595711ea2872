"""Pipeline assembly: presets, config resolution and single training runs."""

from __future__ import annotations

import json
import time
from copy import deepcopy
from pathlib import Path
from typing import Dict, List, Mapping

import numpy as np

from ..core.activations import get_activation
from ..core.types import RunResult
from ..data import get_dataset
from ..nn.network import FeedForwardNetwork
from ..nn.persistence import save_network
from ..reporting.metrics import CsvSink, JsonlSink, MetricsCapture
from ..reporting.plots import PlotAdapter, render_topology
from .metrics import default_metrics
from .trainer import Trainer

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor-sigmoid": {
        "data": {"name": "xor", "options": {}},
        "model": {"hidden": [4], "activation": "sigmoid", "lr": 0.5},
        "train": {
            "epochs": 2000,
            "seed": 7,
            "metrics": "default",
            "run_dir": "runs/xor-sigmoid",
            "enable_plots": False,
        },
    },
    "xor-tanh": {
        "data": {"name": "xor", "options": {}},
        "model": {"hidden": [4], "activation": "tanh", "lr": 0.1},
        "train": {
            "epochs": 1000,
            "seed": 7,
            "metrics": "default",
            "run_dir": "runs/xor-tanh",
            "enable_plots": False,
        },
    },
    "and-sigmoid": {
        "data": {"name": "and", "options": {}},
        "model": {"hidden": [2], "activation": "sigmoid", "lr": 0.5},
        "train": {
            "epochs": 500,
            "seed": 1,
            "metrics": "default",
            "run_dir": "runs/and-sigmoid",
            "enable_plots": False,
        },
    },
    "sine-tanh": {
        "data": {"name": "sine", "options": {"n_points": 32, "freq": 1.0, "seed": 0}},
        "model": {"hidden": [8, 8], "activation": "tanh", "lr": 0.05},
        "train": {
            "epochs": 300,
            "seed": 3,
            "metrics": ["mae", "rmse"],
            "run_dir": "runs/sine-tanh",
            "enable_plots": False,
        },
    },
}


def presets() -> Mapping[str, Mapping[str, object]]:
    return {name: deepcopy(cfg) for name, cfg in _PRESETS.items()}


def load_preset(name: str) -> Mapping[str, object]:
    try:
        return deepcopy(_PRESETS[name])
    except KeyError as exc:
        raise KeyError(f"Unknown preset: {name}") from exc


def read_config(path: str | Path) -> dict:
    """Load a JSON or YAML config file into a dictionary."""

    path = Path(path)
    text = path.read_text()
    if path.suffix.lower() in {".yml", ".yaml"}:
        import yaml

        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text or "{}")
    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return dict(data)


def merge_config(base: dict, override: Mapping[str, object]) -> dict:
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            base[key] = merge_config(dict(base[key]), value)
        else:
            base[key] = value
    return base


def build_network(
    model_cfg: Mapping[str, object], d_in: int, d_out: int, seed: int
) -> FeedForwardNetwork:
    hidden = [int(size) for size in model_cfg.get("hidden", [4])]  # type: ignore[union-attr]
    return FeedForwardNetwork(
        float(model_cfg.get("lr", 0.1)),
        d_in,
        d_out,
        *hidden,
        activation=get_activation(str(model_cfg.get("activation", "sigmoid"))),
        rng=np.random.default_rng(seed),
    )


def run_pipeline(config: Mapping[str, object]) -> RunResult:
    missing = {"data", "model", "train"} - set(config)
    if missing:
        raise KeyError(f"Config is missing required sections: {', '.join(sorted(missing))}")
    data_cfg = dict(config["data"])  # type: ignore[arg-type]
    model_cfg = dict(config["model"])  # type: ignore[arg-type]
    train_cfg = dict(config["train"])  # type: ignore[arg-type]

    dataset = get_dataset(str(data_cfg["name"]), **dict(data_cfg.get("options", {})))
    seed = int(train_cfg.get("seed", 0))
    epochs = int(train_cfg.get("epochs", 1))
    metric_names = _resolve_metrics(train_cfg.get("metrics", "default"), dataset.task_type)
    early_stopping = train_cfg.get("early_stopping_patience")

    network = build_network(model_cfg, dataset.d_in, dataset.d_out, seed)
    run_dir = _resolve_run_dir(train_cfg, dataset.name)
    run_dir.mkdir(parents=True, exist_ok=True)

    _print_startup_summary(
        dataset_name=dataset.name,
        dims=list(network.layer_sizes),
        activation=network.activation.name,
        learning_rate=network.learning_rate,
        metrics=metric_names,
        param_count=network.parameter_count(),
    )

    train_jsonl = JsonlSink(run_dir / "metrics_train.jsonl", split="train", seed=seed)
    train_csv = CsvSink(run_dir / "metrics_train.csv", split="train")
    capture = MetricsCapture()
    plots = PlotAdapter(run_dir, enable_plots=bool(train_cfg.get("enable_plots", False)))

    trainer = Trainer(network)
    result = trainer.run(
        dataset.samples,
        epochs,
        seed=seed,
        shuffle=bool(train_cfg.get("shuffle", True)),
        metric_names=metric_names,
        split_loggers={"train": [train_jsonl, train_csv, capture, plots]},
        early_stopping_patience=int(early_stopping) if early_stopping is not None else None,
        checkpoint_dir=run_dir / "checkpoints",
    )

    plots.close()
    if plots.enable_plots:
        render_topology(network, run_dir / "topology.png")
    network_path = save_network(run_dir / "network.npz", network)
    resolved = json.loads(json.dumps(config))
    resolved["provenance"] = dataset.provenance
    (run_dir / "config.json").write_text(json.dumps(resolved, indent=2))

    return RunResult(
        epochs=result.epochs,
        final_loss=result.final_loss,
        best_loss=result.best_loss,
        metrics_path=str(train_jsonl.path),
        checkpoint_path=str(network_path),
    )


def _resolve_metrics(metrics_cfg: object, task_type: str) -> List[str]:
    if isinstance(metrics_cfg, str):
        if metrics_cfg.strip() in {"", "default"}:
            return default_metrics(task_type)
        return [m.strip() for m in metrics_cfg.split(",") if m.strip()]
    return [str(m) for m in metrics_cfg]  # type: ignore[union-attr]


def _resolve_run_dir(train_cfg: Mapping[str, object], dataset: str) -> Path:
    if "run_dir" in train_cfg:
        return Path(str(train_cfg["run_dir"]))
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    return Path("runs") / timestamp / dataset


def _print_startup_summary(
    *,
    dataset_name: str,
    dims: List[int],
    activation: str,
    learning_rate: float,
    metrics: List[str],
    param_count: int,
) -> None:
    print("=== zisnet run ===")
    print(f"Dataset       : {dataset_name}")
    print(f"Layers        : {dims}")
    print(f"Activation    : {activation}")
    print(f"Learning rate : {learning_rate}")
    print(f"Metrics       : {','.join(metrics)}")
    print(f"Parameters    : {param_count}")
    print("==================")


__all__ = [
    "presets",
    "load_preset",
    "read_config",
    "merge_config",
    "build_network",
    "run_pipeline",
]
