"""
Entry point for the terminal Tetris engine.

Reads one command per line from stdin (a/d = left/right, s = down,
w = rotate), drops the active piece every tick and prints the final score
when no new piece fits.

Usage:
    python main.py
    python main.py --config config/engine.yaml
    python main.py --renderer text --seed 42 --tick-ms 800
    python main.py --renderer pygame --debug
"""

from __future__ import annotations

import argparse
import logging
import pathlib

import yaml

LOG_FORMAT = "[%(levelname)s] %(asctime)s %(name)s - %(message)s"


def load_config(config_path: str | pathlib.Path) -> dict:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dict of configuration key-value pairs.

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with config, renderer, seed, tick_ms and debug attributes.
    """
    parser = argparse.ArgumentParser(
        description="Tetris in the terminal: type a/s/d/w + Enter to play.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/engine.yaml",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--renderer",
        type=str,
        action="append",
        choices=["text", "emoji", "pygame"],
        default=None,
        help="Renderer to use; repeat for several (overrides the config file).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the piece randomizer (default: from config, else random).",
    )
    parser.add_argument(
        "--tick-ms",
        type=int,
        default=None,
        help="Milliseconds between gravity ticks (overrides the config file).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log at DEBUG level.",
    )
    return parser.parse_args(argv)


def apply_overrides(config: dict, args: argparse.Namespace) -> dict:
    """Return a copy of ``config`` with command-line values applied."""
    config = dict(config)
    if args.renderer:
        config["renderers"] = args.renderer
    if args.seed is not None:
        config["seed"] = args.seed
    if args.tick_ms is not None:
        config["tick_interval_ms"] = args.tick_ms
    if args.debug:
        config["log_level"] = "DEBUG"
    return config


def main(argv: list[str] | None = None) -> None:
    """Main entry point: parse args, load config, play one game, print the score."""
    args = parse_args(argv)
    config = apply_overrides(load_config(args.config), args)

    logging.basicConfig(
        level=getattr(logging, str(config.get("log_level", "INFO")).upper()),
        format=LOG_FORMAT,
    )

    from tetris_engine.play import play
    score = play(config)
    print(f"score is: {score}")


if __name__ == "__main__":
    main()
