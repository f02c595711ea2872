"""Command line entry point for zisnet training runs and linear algebra."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable

from zisnet.core.errors import ZisNetError
from zisnet.core.matrix import Matrix, inverse
from zisnet.core.solver import solve
from zisnet.core.vector import Vector
from zisnet.training import pipelines


def _format_result(result) -> str:
    payload = {
        "epochs": result.epochs,
        "final_loss": result.final_loss,
        "best_loss": result.best_loss,
        "metrics": result.metrics_path,
        "network": result.checkpoint_path,
    }
    return json.dumps(payload, sort_keys=True)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="xor-sigmoid",
        help="Preset configuration to execute",
    )
    parser.add_argument(
        "--config", type=Path, help="Optional JSON/YAML config override"
    )
    parser.add_argument(
        "--enable-plots", action="store_true", help="Write loss and topology plots"
    )
    parser.add_argument("--seed", type=int, help="Seed used for initialisation and shuffling")
    parser.add_argument("--epochs", type=int, help="Override the number of epochs")
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    parser.add_argument(
        "--solve",
        type=Path,
        metavar="SYSTEM_JSON",
        help='Solve {"matrix": [[...]], "vector": [...]} and print the solution',
    )
    parser.add_argument(
        "--inverse",
        type=Path,
        metavar="MATRIX_JSON",
        help='Invert {"matrix": [[...]]} and print the inverse and determinant',
    )
    return parser.parse_args(argv)


def _read_json(path: Path, *keys: str) -> dict:
    data = json.loads(path.read_text())
    missing = [key for key in keys if not isinstance(data, dict) or key not in data]
    if missing:
        names = ", ".join(f"'{key}'" for key in missing)
        raise SystemExit(f"{path} must contain a JSON object with {names} entries")
    return data


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    if args.solve:
        system = _read_json(args.solve, "matrix", "vector")
        try:
            solution = solve(Matrix.from_grid(system["matrix"]), Vector.from_array(system["vector"]))
        except ZisNetError as exc:
            raise SystemExit(f"Cannot solve {args.solve}: {exc}") from None
        print(json.dumps({"solution": solution.to_array()}))
        return

    if args.inverse:
        try:
            m = Matrix.from_grid(_read_json(args.inverse, "matrix")["matrix"])
            det = m.determinant()
            inv = inverse(m)
        except ZisNetError as exc:
            raise SystemExit(f"Cannot invert {args.inverse}: {exc}") from None
        print(json.dumps({"determinant": det, "inverse": inv.to_array()}))
        return

    config = json.loads(json.dumps(pipelines.load_preset(args.preset)))
    if args.config:
        override = pipelines.read_config(args.config)
        if {"data", "model", "train"} <= set(override.keys()):
            config = json.loads(json.dumps(override))
        else:
            config = pipelines.merge_config(config, override)

    train_cfg = config.setdefault("train", {})
    if args.enable_plots:
        train_cfg["enable_plots"] = True
    if args.seed is not None:
        train_cfg["seed"] = int(args.seed)
    if args.epochs is not None:
        train_cfg["epochs"] = int(args.epochs)

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    result = pipelines.run_pipeline(config)
    print(_format_result(result))


if __name__ == "__main__":
    main()
