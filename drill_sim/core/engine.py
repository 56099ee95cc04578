"""Per-tick drilling update: heading, advance, deviation, economics, termination."""

from __future__ import annotations

import logging
import math

import numpy as np

from .config import DrillParams
from .state import SimulationState
from .types import OrientationMode, Zone

logger = logging.getLogger(__name__)

DEFAULT_PARAMS = DrillParams()


def classify_zone(deviation: float, params: DrillParams = DEFAULT_PARAMS) -> Zone:
    if deviation <= params.tol_tight:
        return Zone.TIGHT
    if deviation <= params.tol_ok:
        return Zone.OK
    return Zone.OUTSIDE


def compute_deviation(state: SimulationState) -> float:
    """Lateral distance between the drill head and the plan at its forward coordinate."""
    planned = state.plan.lateral_offset(state.forward, state.mode)
    return abs(state.lateral - planned)


def completion_bonus(
    accuracy_percent: float,
    failed: bool,
    params: DrillParams = DEFAULT_PARAMS,
) -> float:
    if failed:
        return params.penalty_fail
    if accuracy_percent >= 90.0:
        return params.bonus_excellent
    if accuracy_percent >= 75.0:
        return params.bonus_good
    if accuracy_percent < 50.0:
        return params.penalty_poor
    return 0.0


def _settle(state: SimulationState, params: DrillParams) -> None:
    econ = state.economics
    econ.completion_bonus = completion_bonus(econ.accuracy_percent, state.failed, params)
    logger.info(
        "Run %s at forward=%.1f: accuracy=%.1f%%, completion bonus=%+.0f, net profit=%+.0f",
        state.status.value,
        state.forward,
        econ.accuracy_percent,
        econ.completion_bonus,
        econ.net_profit,
    )


def _accrue(state: SimulationState, zone: Zone, dt: float, params: DrillParams) -> None:
    econ = state.economics
    econ.total_time += dt

    if zone is Zone.TIGHT:
        state.score += params.pts_tight * dt
        econ.time_in_tight += dt
        econ.gross_revenue += params.revenue_tight * dt
        econ.schedule_variance = max(
            0.0, econ.schedule_variance - params.schedule_recovery_rate * dt
        )
    elif zone is Zone.OK:
        state.score += params.pts_ok * dt
        econ.time_in_ok += dt
        econ.gross_revenue += params.revenue_ok * dt
    else:
        state.score += params.pts_outside * dt
        econ.time_outside += dt
        econ.remediation_costs += params.cost_outside * dt
        econ.schedule_variance += params.schedule_delay_multiplier * dt
        state.outside_time += dt

    econ.downstream_penalty = econ.schedule_variance * params.downstream_cost_per_sec

    # Brief excursions are forgiven faster than they accrue.
    if zone is not Zone.OUTSIDE:
        state.outside_time = max(0.0, state.outside_time - params.outside_decay_rate * dt)


def step(
    state: SimulationState,
    steer: float,
    dt: float,
    params: DrillParams = DEFAULT_PARAMS,
) -> Zone | None:
    """Advance ``state`` by ``dt`` seconds under steering input ``steer``.

    Mutates ``state`` in place and returns the tolerance zone of this tick.
    A finished or failed state is frozen: the call returns ``None`` and
    changes nothing. Large ``dt`` is applied as-is.
    """
    dt = float(dt)
    if not math.isfinite(dt) or dt < 0.0:
        raise ValueError(f"dt must be a finite non-negative number, got {dt!r}")

    if state.terminal:
        return None

    steer = float(steer)

    # Heading target follows input, clamped to max drill-string deflection.
    state.heading_target = float(
        np.clip(state.heading_target + steer * params.turn_rate * dt, -params.max_heading, params.max_heading)
    )

    # First-order lag toward the target; exact for any dt.
    alpha = 1.0 - math.exp(-params.heading_inertia * dt)
    state.heading = (1.0 - alpha) * state.heading + alpha * state.heading_target

    forward_step = params.forward_speed * dt
    lateral_step = math.tan(state.heading) * forward_step
    if state.mode is OrientationMode.VERTICAL:
        state.x += lateral_step
        state.y += forward_step
    else:
        state.x += forward_step
        state.y += lateral_step
    state.actual_path.append((state.x, state.y))

    deviation = compute_deviation(state)
    state.deviation = deviation
    zone = classify_zone(deviation, params)
    _accrue(state, zone, dt, params)

    if state.outside_time >= params.max_outside_seconds:
        state.failed = True
        _settle(state, params)
        return zone

    if state.forward >= params.end_for(state.mode):
        state.finished = True
        _settle(state, params)

    return zone
