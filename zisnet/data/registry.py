"""Dataset registry and metadata contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, MutableMapping

from ..core.types import Sample

TASK_TYPES = {"regression", "binary"}


@dataclass(frozen=True)
class DatasetSpec:
    """A small in-memory dataset.

    Attributes
    ----------
    name:
        Registry identifier the dataset was built from.
    samples:
        Every input/target pair, in a fixed order.
    d_in, d_out:
        Lengths of each sample's inputs and targets.
    task_type:
        ``"binary"`` for 0/1 targets, ``"regression"`` otherwise.
    provenance:
        Options used to build the dataset, kept for run reproducibility.
    """

    name: str
    samples: List[Sample]
    d_in: int
    d_out: int
    task_type: str
    provenance: Dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.samples)


DatasetFactory = Callable[..., DatasetSpec]


_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(name: str) -> Callable[[DatasetFactory], DatasetFactory]:
    """Register a dataset factory under ``name``::

        @register_dataset("xor")
        def make_xor(**kwargs):
            ...
    """

    def _decorator(func: DatasetFactory) -> DatasetFactory:
        _REGISTRY[name] = func
        return func

    return _decorator


def get_dataset(name: str, **options: Any) -> DatasetSpec:
    """Return the :class:`DatasetSpec` for ``name``."""

    if name not in _REGISTRY:
        raise KeyError(f"Unknown dataset: {name}")
    spec = _REGISTRY[name](**options)
    _validate_spec(spec)
    return spec


def available_datasets() -> Iterable[str]:
    """Return the sorted list of available dataset identifiers."""

    return sorted(_REGISTRY)


def _validate_spec(spec: DatasetSpec) -> None:
    if spec.task_type not in TASK_TYPES:
        raise ValueError(f"Invalid task type: {spec.task_type}")
    if not spec.samples:
        raise ValueError(f"Dataset {spec.name!r} has no samples")
    for idx, sample in enumerate(spec.samples):
        if len(sample.inputs) != spec.d_in or len(sample.targets) != spec.d_out:
            raise ValueError(
                f"Sample {idx} of {spec.name!r} has shape "
                f"({len(sample.inputs)}, {len(sample.targets)}), expected ({spec.d_in}, {spec.d_out})"
            )


__all__ = ["DatasetSpec", "available_datasets", "get_dataset", "register_dataset"]
