"""Config loading and normalization for the drilling simulator."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from .types import OrientationMode

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "drill_config.yaml"


@dataclass
class DrillParams:
    """Tunable constants of the drilling model.

    Defaults are the reference values; changing them changes scoring.
    """

    # World bounds (meters-ish)
    x_start: float = 0.0
    x_end: float = 800.0
    y_start: float = 0.0
    y_end: float = 800.0

    # Drill motion
    forward_speed: float = 60.0  # units/sec, constant
    turn_rate: float = 1.35  # rad/sec of heading target per unit steer
    heading_inertia: float = 8.0  # lag constant of heading toward target
    max_heading: float = 0.55  # rad (~31.5 deg), max drill-string deflection

    # Tolerance corridor
    tol_tight: float = 4.0
    tol_ok: float = 10.0
    max_outside_seconds: float = 3.5
    outside_decay_rate: float = 1.8

    # Legacy per-second score rates
    pts_tight: float = 25.0
    pts_ok: float = 10.0
    pts_outside: float = -30.0

    # Economics
    revenue_tight: float = 500.0  # $/sec
    revenue_ok: float = 200.0  # $/sec
    cost_outside: float = 800.0  # $/sec of remediation
    schedule_delay_multiplier: float = 2.0  # 1 sec outside = 2 sec delay
    schedule_recovery_rate: float = 0.5  # tight drilling recovers 0.5 sec/sec
    downstream_cost_per_sec: float = 100.0

    # Completion bonuses/penalties
    bonus_excellent: float = 5000.0  # accuracy >= 90%
    bonus_good: float = 2000.0  # accuracy >= 75%
    penalty_poor: float = -10000.0  # accuracy < 50%
    penalty_fail: float = -25000.0  # abandoned hole

    # Plan generation
    straight_section: float = 50.0

    def start_for(self, mode: OrientationMode) -> float:
        return self.y_start if mode is OrientationMode.VERTICAL else self.x_start

    def end_for(self, mode: OrientationMode) -> float:
        return self.y_end if mode is OrientationMode.VERTICAL else self.x_end


def params_from_dict(raw: Mapping[str, Any] | None, base: DrillParams | None = None) -> DrillParams:
    """Build ``DrillParams`` from a YAML mapping, rejecting unknown keys."""
    base = base or DrillParams()
    if not raw:
        return base

    known = {f.name for f in fields(DrillParams)}
    unknown = sorted(str(k) for k in raw if k not in known)
    if unknown:
        raise ValueError(f"Unknown drill parameter(s): {', '.join(unknown)}")

    return replace(base, **{str(k): float(v) for k, v in raw.items()})


@dataclass
class NormalizedRunConfig:
    """Normalized config used by the session runners."""

    config_path: Path
    mode: OrientationMode
    pilot_name: str
    dt: float
    max_time: float
    seed: int | None
    max_frame_dt: float | None
    params: DrillParams = field(default_factory=DrillParams)
    pilot_cfg: dict[str, Any] = field(default_factory=dict)
    visual_cfg: dict[str, Any] = field(default_factory=dict)
    raw_cfg: dict[str, Any] = field(default_factory=dict)


def load_run_config(path: Path) -> dict[str, Any]:
    """Load run YAML config from disk.

    Missing files are handled gracefully and return an empty config.
    """
    if not path.exists():
        return {}

    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _optional_float(value: Any) -> float | None:
    return None if value is None else float(value)


def normalize_run_config(args: argparse.Namespace) -> NormalizedRunConfig:
    """Merge CLI overrides over YAML values into one runtime object."""
    config_path = Path(args.config)
    raw_cfg = load_run_config(config_path)

    drill_cfg = dict(raw_cfg.get("drill", {}) or {})
    sim_cfg = dict(raw_cfg.get("simulation", {}) or {})
    pilot_cfg = dict(raw_cfg.get("pilot", {}) or {})
    vis_cfg = dict(raw_cfg.get("visual", {}) or {})

    mode = OrientationMode.parse(
        args.mode if args.mode is not None else sim_cfg.get("mode", "horizontal")
    )
    pilot_name = (
        str(args.pilot) if args.pilot is not None else str(sim_cfg.get("pilot", "keyboard"))
    ).strip().lower()

    dt = float(args.dt) if args.dt is not None else float(sim_cfg.get("dt", 1.0 / 60.0))
    max_time = (
        float(args.max_time) if args.max_time is not None else float(sim_cfg.get("max_time", 60.0))
    )

    seed_raw = args.seed if args.seed is not None else sim_cfg.get("seed")
    seed = None if seed_raw is None else int(seed_raw)

    return NormalizedRunConfig(
        config_path=config_path,
        mode=mode,
        pilot_name=pilot_name,
        dt=dt,
        max_time=max_time,
        seed=seed,
        max_frame_dt=_optional_float(sim_cfg.get("max_frame_dt")),
        params=params_from_dict(drill_cfg),
        pilot_cfg=pilot_cfg,
        visual_cfg=vis_cfg,
        raw_cfg=raw_cfg,
    )
