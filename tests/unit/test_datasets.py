import numpy as np
import pytest

from zisnet.data import available_datasets, get_dataset
from zisnet.data.registry import DatasetSpec, register_dataset
from zisnet.core.types import Sample


def test_builtin_datasets_are_registered():
    names = list(available_datasets())
    for name in ("xor", "and", "or", "sine"):
        assert name in names


def test_truth_tables():
    xor = get_dataset("xor")
    assert len(xor) == 4
    assert [s.targets[0] for s in xor.samples] == [0.0, 1.0, 1.0, 0.0]
    assert xor.task_type == "binary"
    assert (xor.d_in, xor.d_out) == (2, 1)

    assert [s.targets[0] for s in get_dataset("and").samples] == [0.0, 0.0, 0.0, 1.0]
    assert [s.targets[0] for s in get_dataset("or").samples] == [0.0, 1.0, 1.0, 1.0]
    assert len(get_dataset("xor", repeats=3)) == 12


def test_sine_is_deterministic_and_bounded():
    a = get_dataset("sine", n_points=16, noise=0.01, seed=3)
    b = get_dataset("sine", n_points=16, noise=0.01, seed=3)
    assert [s.targets for s in a.samples] == [s.targets for s in b.samples]
    clean = get_dataset("sine", n_points=16)
    targets = np.array([s.targets[0] for s in clean.samples])
    assert targets.min() >= 0.1 - 1e-12 and targets.max() <= 0.9 + 1e-12
    assert clean.task_type == "regression"
    assert clean.provenance["n_points"] == 16


def test_unknown_dataset():
    with pytest.raises(KeyError):
        get_dataset("mnist")


def test_registry_validates_samples():
    @register_dataset("broken-test")
    def _broken(**_):
        return DatasetSpec(
            name="broken-test",
            samples=[Sample(inputs=[1.0], targets=[0.0])],
            d_in=2,
            d_out=1,
            task_type="binary",
        )

    with pytest.raises(ValueError):
        get_dataset("broken-test")
