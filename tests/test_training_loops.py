from __future__ import annotations

import csv
import json
from typing import Mapping

import numpy as np
import pytest

from zisnet.data import get_dataset
from zisnet.nn import FeedForwardNetwork, load_network
from zisnet.reporting import CsvSink, JsonlSink, MetricsCapture
from zisnet.training.trainer import Trainer


def _network(lr: float = 0.5, seed: int = 0) -> FeedForwardNetwork:
    return FeedForwardNetwork(lr, 2, 1, 3, rng=np.random.default_rng(seed))


def test_training_reduces_loss_on_and_gate() -> None:
    dataset = get_dataset("and")
    capture = MetricsCapture()
    trainer = Trainer(_network(), callbacks=[capture])
    result = trainer.run(dataset.samples, 400, seed=0, metric_names=["accuracy"])

    assert result.epochs == 400
    assert len(capture.history) == 400
    first = capture.history[0][1]["loss"]
    assert result.final_loss < first
    assert result.best_loss <= result.final_loss
    assert set(capture.last) == {"loss", "accuracy"}


def test_sinks_and_plain_callables(tmp_path) -> None:
    dataset = get_dataset("xor")
    jsonl = JsonlSink(tmp_path / "metrics.jsonl", split="train", seed=11)
    csv_sink = CsvSink(tmp_path / "metrics.csv", split="train")
    seen: list[int] = []

    def _record(epoch: int, metrics: Mapping[str, float]) -> None:
        seen.append(epoch)

    Trainer(_network(), callbacks=[_record]).run(
        dataset.samples,
        3,
        metric_names=["accuracy", "mae"],
        split_loggers={"train": [jsonl, csv_sink]},
    )

    assert seen == [1, 2, 3]
    records = [json.loads(line) for line in jsonl.path.read_text().splitlines()]
    assert [r["epoch"] for r in records] == [1, 2, 3]
    assert records[0]["seed"] == 11
    assert {"loss", "accuracy", "mae", "split"} <= set(records[0])

    with csv_sink.path.open(newline="") as handle:
        rows = list(csv.DictReader(handle))
    assert len(rows) == 3
    assert rows[-1]["epoch"] == "3"


def test_early_stopping_and_checkpoints(tmp_path) -> None:
    dataset = get_dataset("xor")
    frozen = _network(lr=0.0)
    result = Trainer(frozen).run(
        dataset.samples,
        50,
        early_stopping_patience=3,
        checkpoint_dir=tmp_path / "ckpt",
    )
    assert result.epochs == 4
    assert result.final_loss == pytest.approx(result.best_loss)
    assert (tmp_path / "ckpt" / "best.npz").exists()
    assert result.checkpoint_path.endswith("last.npz")
    restored = load_network(result.checkpoint_path)
    assert restored.query([1, 1]) == frozen.query([1, 1])


def test_unshuffled_runs_are_deterministic() -> None:
    dataset = get_dataset("or")
    a = Trainer(_network(seed=2)).run(dataset.samples, 20, shuffle=False)
    b = Trainer(_network(seed=2)).run(dataset.samples, 20, shuffle=False)
    assert a.final_loss == b.final_loss


def test_invalid_run_arguments() -> None:
    trainer = Trainer(_network())
    with pytest.raises(ValueError):
        trainer.run([], 5)
    with pytest.raises(ValueError):
        trainer.run(get_dataset("xor").samples, 0)
