"""Built-in non-interactive pilots."""

from __future__ import annotations

import math
from typing import Any, Mapping

import numpy as np

from ..core.config import DrillParams
from ..core.interfaces import Pilot
from ..core.state import SimulationState
from ..steering import lateral_lqr_gain, lqr_steer


class HoldPilot(Pilot):
    """Never steers; the drill keeps whatever heading it has."""

    def steer(self, state: SimulationState, params: DrillParams) -> float:
        return 0.0


class AutoPilot(Pilot):
    """LQR tracking of the plan's lateral offset and local heading."""

    def __init__(self) -> None:
        self._weights: dict[str, float] = {
            "q_lateral": 0.05,
            "q_heading": 4.0,
            "q_target": 1.0,
            "r_steer": 1.0,
        }
        self._gain: np.ndarray | None = None
        self._gain_key: tuple[float, float, float] | None = None

    def configure(self, cfg: Mapping[str, Any]) -> None:
        auto_cfg = dict(cfg.get("autopilot", {}) or {})
        for name in self._weights:
            if name in auto_cfg:
                self._weights[name] = float(auto_cfg[name])
        self._gain = None

    def _gain_for(self, params: DrillParams) -> np.ndarray:
        key = (params.forward_speed, params.heading_inertia, params.turn_rate)
        if self._gain is None or self._gain_key != key:
            self._gain = lateral_lqr_gain(*key, **self._weights)
            self._gain_key = key
        return self._gain

    def steer(self, state: SimulationState, params: DrillParams) -> float:
        plan = state.plan
        forward = state.forward
        ref_heading = math.atan(plan.slope_at(forward, state.mode))
        lateral_error = state.lateral - plan.lateral_offset(forward, state.mode)
        return lqr_steer(
            lateral_error,
            state.heading - ref_heading,
            state.heading_target - ref_heading,
            self._gain_for(params),
        )
