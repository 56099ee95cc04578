"""CLI argument parsing for the drilling simulator."""

from __future__ import annotations

import argparse

from ..core.config import DEFAULT_CONFIG_PATH


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Directional drilling path simulator.")
    parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_CONFIG_PATH),
        help="Path to drill_config.yaml.",
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["horizontal", "vertical"],
        default=None,
        help="Orientation mode (overrides simulation.mode).",
    )
    parser.add_argument(
        "--pilot",
        type=str,
        choices=["keyboard", "autopilot", "hold"],
        default=None,
        help="Steering source; keyboard opens an interactive window.",
    )
    parser.add_argument(
        "--dt",
        type=float,
        default=None,
        help="Simulation time step [s] (overrides drill_config.yaml).",
    )
    parser.add_argument(
        "--max-time",
        type=float,
        default=None,
        help="Headless time limit [s] (overrides drill_config.yaml).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the sequence of generated plans.",
    )
    parser.add_argument(
        "--no-plot",
        action="store_true",
        help="Skip the result plot after a headless run.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
