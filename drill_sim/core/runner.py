"""Headless run orchestration for non-interactive pilots."""

from __future__ import annotations

import logging
from dataclasses import replace

import numpy as np

from ..core.config import NormalizedRunConfig
from ..core.registry import create_pilot, register_builtin_pilots
from ..core.session import DrillSession
from ..core.types import OrientationMode, RunLog, RunStatus

logger = logging.getLogger(__name__)


def run_headless(cfg_norm: NormalizedRunConfig) -> RunLog:
    """Drive one run at fixed ``dt`` until it ends or ``max_time`` elapses."""
    register_builtin_pilots()

    pilot_name = str(cfg_norm.pilot_name).lower()
    pilot = create_pilot(pilot_name)
    if pilot.interactive_only:
        raise RuntimeError(
            f"Pilot '{pilot_name}' needs an interactive window; "
            "use --pilot autopilot or --pilot hold for headless runs."
        )
    pilot.configure(cfg_norm.pilot_cfg)

    params = cfg_norm.params
    session = DrillSession(
        params=params,
        mode=cfg_norm.mode,
        seed=cfg_norm.seed,
        max_frame_dt=cfg_norm.max_frame_dt,
    )
    session.start()

    dt = float(cfg_norm.dt)
    max_t = float(cfg_norm.max_time)
    if cfg_norm.seed is not None:
        logger.info(f"Random seed set to {cfg_norm.seed}")
    logger.info(f"Pilot: {pilot_name.upper()}")
    logger.info(f"Mode: {cfg_norm.mode.value}, plan seed: {session.state.plan.seed}")
    logger.info(f"Time limit: {max_t:.1f} s, dt: {dt:.3f} s")

    state = session.state
    t = 0.0
    last_log_time = 0.0
    log_interval = float(cfg_norm.visual_cfg.get("log_interval", 5.0))

    while t < max_t and not state.terminal:
        session.tick(pilot, dt)
        state = session.state
        t += dt

        if t - last_log_time >= log_interval:
            econ = state.economics
            logger.info(
                f"t={t:.1f}s: pos=[{state.x:.1f}, {state.y:.1f}], heading={state.heading:+.3f} rad, "
                f"dev={state.deviation:.2f}, accuracy={econ.accuracy_percent:.1f}%, "
                f"net=${econ.net_profit:,.0f}"
            )
            last_log_time = t

    if not state.terminal:
        logger.warning(f"Time limit {max_t:.1f}s reached before the hole was finished")

    econ = replace(state.economics)
    forward_start = params.start_for(state.mode)
    forward_end = params.end_for(state.mode)
    fwd, lat = state.plan.sample(forward_start, forward_end, mode=state.mode)
    if state.mode is OrientationMode.VERTICAL:
        planned = np.column_stack([lat, fwd])
    else:
        planned = np.column_stack([fwd, lat])

    logger.info("Run completed")
    logger.info(f"Status: {state.status.value}")
    logger.info(f"Final position: [{state.x:.2f}, {state.y:.2f}]")
    logger.info(f"Accuracy: {econ.accuracy_percent:.1f}%")
    logger.info(f"Net profit: ${econ.net_profit:,.0f} (bonus {econ.completion_bonus:+,.0f})")

    return RunLog(
        trajectory=state.path_array(),
        planned_path=planned,
        mode=state.mode,
        plan_seed=int(state.plan.seed),
        status=RunStatus(state.status),
        economics=econ,
        accuracy_percent=float(econ.accuracy_percent),
        net_profit=float(econ.net_profit),
        score=float(state.score),
        final_time=float(econ.total_time),
        pilot_name=pilot_name,
    )
