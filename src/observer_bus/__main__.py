"""CLI entrypoint for the observer bus demo."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from importlib import metadata
from pathlib import Path

from rich.console import Console

from .config import ensure_config_dir, load_config
from .demo import SCENARIOS, run_scenario
from .events.bus import EventBus
from .logging_utils import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="observer-bus",
        description="observer-bus - run a synchronous publish/subscribe demo",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a TOML config file",
    )
    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="Skip the simulated work delay in the demo action",
    )
    parser.add_argument(
        "--scenario",
        choices=SCENARIOS,
        default="tags",
        help="Demo scenario to run (default: tags)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Load configuration, set up logging and run the selected scenario."""

    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.version:
        try:
            version = metadata.version("observer-bus")
        except metadata.PackageNotFoundError:
            version = "0.0.0"
        print(f"observer-bus {version}")
        return

    if args.config is None:
        ensure_config_dir()
    config = load_config(args.config)
    configure_logging(config["logging"])

    overrides = {"demo_delay_seconds": 0.0} if args.no_delay else {}
    bus = EventBus.from_config(config["bus"], **overrides)
    run_scenario(args.scenario, bus, Console())


if __name__ == "__main__":
    main()
