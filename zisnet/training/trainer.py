"""Deterministic per-sample training loop for :class:`FeedForwardNetwork`."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Sequence

import numpy as np

from ..core.types import RunResult, Sample
from ..nn.network import FeedForwardNetwork
from ..nn.persistence import save_network
from .metrics import compute_metrics, predict


class Trainer:
    """Run epochs of single-sample backpropagation with metric callbacks.

    Callbacks are objects with an ``on_epoch(epoch, metrics)`` method or
    plain callables taking the same arguments.
    """

    def __init__(
        self,
        network: FeedForwardNetwork,
        callbacks: Sequence[object] | None = None,
    ) -> None:
        self.network = network
        self.callbacks = list(callbacks or [])

    def run(
        self,
        samples: Sequence[Sample],
        epochs: int,
        *,
        seed: int = 0,
        shuffle: bool = True,
        metric_names: Sequence[str] = (),
        split_loggers: Mapping[str, Sequence[object]] | None = None,
        early_stopping_patience: int | None = None,
        checkpoint_dir: str | Path | None = None,
    ) -> RunResult:
        if epochs < 1:
            raise ValueError(f"epochs must be at least 1, got {epochs}")
        if not samples:
            raise ValueError("Cannot train on an empty sample list")

        rng = np.random.default_rng(seed)
        split_loggers = split_loggers or {}
        checkpoint_path = Path(checkpoint_dir) if checkpoint_dir is not None else None
        if checkpoint_path is not None:
            checkpoint_path.mkdir(parents=True, exist_ok=True)

        best_loss = float("inf")
        epochs_no_improve = 0
        metrics: Mapping[str, float] = {}
        epoch = 0
        for epoch in range(1, epochs + 1):
            order = rng.permutation(len(samples)) if shuffle else range(len(samples))
            for idx in order:
                sample = samples[int(idx)]
                self.network.train(sample.inputs, sample.targets)

            metrics = self.evaluate(samples, metric_names)
            self._emit_epoch("train", epoch, metrics, split_loggers)

            current_loss = float(metrics["loss"])
            if current_loss < best_loss - 1e-12:
                best_loss = current_loss
                epochs_no_improve = 0
                if checkpoint_path is not None:
                    save_network(checkpoint_path / "best.npz", self.network)
            else:
                epochs_no_improve += 1
                if early_stopping_patience and epochs_no_improve >= early_stopping_patience:
                    break

        last_path = ""
        if checkpoint_path is not None:
            last_path = str(save_network(checkpoint_path / "last.npz", self.network))
        return RunResult(
            epochs=epoch,
            final_loss=float(metrics.get("loss", 0.0)),
            best_loss=best_loss,
            checkpoint_path=last_path,
        )

    def evaluate(self, samples: Sequence[Sample], metric_names: Sequence[str] = ()) -> Mapping[str, float]:
        """Return ``{"loss": mse, **metrics}`` over ``samples`` without training."""

        predictions, targets = predict(self.network, samples)
        metrics = {"loss": float(np.mean(np.square(predictions - targets)))}
        metrics.update(compute_metrics(metric_names, predictions, targets))
        return metrics

    # ------------------------------------------------------------------
    # Internal helpers

    def _emit_epoch(
        self,
        split: str,
        epoch: int,
        metrics: Mapping[str, float],
        loggers: Mapping[str, Sequence[object]],
    ) -> None:
        for callback in [*self.callbacks, *loggers.get(split, [])]:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(epoch, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(epoch, metrics)


__all__ = ["Trainer"]
