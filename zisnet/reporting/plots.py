"""Headless-safe plotting adapters."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Tuple

from ..nn.network import FeedForwardNetwork

MAX_NODES = 25


def _pyplot():
    import matplotlib

    matplotlib.use("Agg", force=True)
    import matplotlib.pyplot as plt  # imported lazily for headless safety

    return plt


def _weight_color(value: float) -> Tuple[float, float, float, float]:
    """Red for negative, green for positive, opacity by magnitude."""

    strength = min(abs(value), 1.0)
    return (strength if value < 0 else 0.0, strength if value > 0 else 0.0, 0.0, strength)


class PlotAdapter:
    """Collect per-epoch loss and optionally emit a matplotlib figure."""

    def __init__(self, run_dir: str | Path, enable_plots: bool = False):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self._history: List[Tuple[int, float]] = []
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        if not self.enable_plots:
            return
        self._history.append((epoch, float(metrics.get("loss", 0.0))))

    def close(self) -> Path | None:
        if not self.enable_plots or not self._history:
            return None
        plt = _pyplot()
        epochs, losses = zip(*self._history)
        fig, ax = plt.subplots()
        ax.plot(epochs, losses)
        ax.set_xlabel("Epoch")
        ax.set_ylabel("MSE")
        ax.set_title("Training Curve")
        plot_path = self.run_dir / "loss.png"
        fig.savefig(plot_path)
        plt.close(fig)
        return plot_path

    __call__ = on_epoch


def render_topology(
    network: FeedForwardNetwork,
    path: str | Path,
    *,
    width: int = 640,
    height: int = 480,
    background: str | None = None,
) -> Path:
    """Draw nodes and weighted edges of ``network`` to an image file.

    Edges are coloured by weight and nodes by bias; input nodes are blue.
    Layers wider than ``MAX_NODES`` are truncated.
    """

    plt = _pyplot()
    dpi = 100
    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(0.0, 1.0)
    ax.axis("off")
    transparent = background is None
    if not transparent:
        fig.patch.set_facecolor(background)

    sizes = network.layer_sizes
    margin = 0.02
    x_step = (1.0 - 2 * margin) / (len(sizes) - 1)

    def _positions(layer: int) -> List[Tuple[float, float]]:
        shown = min(sizes[layer], MAX_NODES)
        spacer = (1.0 - 2 * margin) / (shown + 1)
        x = margin + layer * x_step
        return [(x, 1.0 - margin - (node + 1) * spacer) for node in range(shown)]

    for layer, weight in enumerate(network.weights):
        left = _positions(layer)
        right = _positions(layer + 1)
        for i, (x0, y0) in enumerate(left):
            for j, (x1, y1) in enumerate(right):
                ax.plot([x0, x1], [y0, y1], color=_weight_color(weight.get(j, i)), linewidth=1.0)

    for layer in range(len(sizes)):
        for node, (x, y) in enumerate(_positions(layer)):
            color = "blue" if layer == 0 else _weight_color(network.biases[layer - 1].get(node, 0))
            ax.scatter([x], [y], s=60, color=[color], zorder=3)

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out, transparent=transparent)
    plt.close(fig)
    return out


__all__ = ["PlotAdapter", "render_topology"]
