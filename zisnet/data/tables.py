"""Built-in toy datasets: boolean truth tables and a sampled sine curve."""

from __future__ import annotations

from typing import Callable

import numpy as np

from ..core.types import Sample
from .registry import DatasetSpec, register_dataset

_GATES: dict[str, Callable[[int, int], int]] = {
    "xor": lambda a, b: a ^ b,
    "and": lambda a, b: a & b,
    "or": lambda a, b: a | b,
}


def truth_table(gate: str, repeats: int = 1) -> DatasetSpec:
    """Return the four-row truth table of ``gate``, repeated ``repeats`` times."""

    fn = _GATES[gate]
    rows = [
        Sample(inputs=[float(a), float(b)], targets=[float(fn(a, b))])
        for a in (0, 1)
        for b in (0, 1)
    ]
    return DatasetSpec(
        name=gate,
        samples=rows * max(1, int(repeats)),
        d_in=2,
        d_out=1,
        task_type="binary",
        provenance={"type": "truth_table", "gate": gate, "repeats": int(repeats)},
    )


@register_dataset("xor")
def make_xor(repeats: int = 1, **_: object) -> DatasetSpec:
    return truth_table("xor", repeats)


@register_dataset("and")
def make_and(repeats: int = 1, **_: object) -> DatasetSpec:
    return truth_table("and", repeats)


@register_dataset("or")
def make_or(repeats: int = 1, **_: object) -> DatasetSpec:
    return truth_table("or", repeats)


@register_dataset("sine")
def make_sine(
    n_points: int = 32,
    freq: float = 1.0,
    noise: float = 0.0,
    seed: int = 0,
    **_: object,
) -> DatasetSpec:
    """Samples of ``sin(freq * pi * x)`` on ``[-1, 1]`` rescaled into ``[0, 1]``."""

    rng = np.random.default_rng(seed)
    x = np.linspace(-1.0, 1.0, int(n_points))
    y = 0.5 + 0.4 * np.sin(freq * np.pi * x)
    if noise > 0:
        y = y + noise * rng.standard_normal(size=y.shape)
    samples = [Sample(inputs=[float(xi)], targets=[float(yi)]) for xi, yi in zip(x, y)]
    return DatasetSpec(
        name="sine",
        samples=samples,
        d_in=1,
        d_out=1,
        task_type="regression",
        provenance={"type": "sine", "n_points": int(n_points), "freq": freq, "noise": noise, "seed": seed},
    )


__all__ = ["truth_table", "make_xor", "make_and", "make_or", "make_sine"]
