"""Core datatypes for the drilling simulator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

Point = tuple[float, float]


class OrientationMode(str, Enum):
    """Which world axis the drill advances along.

    HORIZONTAL: forward is +x, lateral is y.
    VERTICAL: forward is +y (downward), lateral is x.
    """

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def parse(cls, value: Any) -> OrientationMode:
        if isinstance(value, cls):
            return value
        key = str(value).lower().strip()
        for mode in cls:
            if mode.value == key:
                return mode
        available = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown orientation mode '{value}'. Available: {available}")

    def toggled(self) -> OrientationMode:
        if self is OrientationMode.HORIZONTAL:
            return OrientationMode.VERTICAL
        return OrientationMode.HORIZONTAL


class Zone(str, Enum):
    """Tolerance corridor the drill head is in for one tick."""

    TIGHT = "tight"
    OK = "ok"
    OUTSIDE = "outside"


class RunStatus(str, Enum):
    RUNNING = "running"
    FINISHED = "finished"
    FAILED = "failed"


@dataclass
class DrillingEconomics:
    """Running money/schedule accumulators for one run."""

    gross_revenue: float = 0.0  # earned from good drilling
    remediation_costs: float = 0.0  # spent while outside tolerance
    schedule_variance: float = 0.0  # accumulated delay (seconds)
    downstream_penalty: float = 0.0  # derived from schedule_variance each tick
    time_in_tight: float = 0.0
    time_in_ok: float = 0.0
    time_outside: float = 0.0
    total_time: float = 0.0
    completion_bonus: float = 0.0  # set once at the terminal transition

    @property
    def accuracy_percent(self) -> float:
        if self.total_time == 0:
            return 100.0
        return (self.time_in_tight + self.time_in_ok) / self.total_time * 100.0

    @property
    def net_profit(self) -> float:
        return (
            self.gross_revenue
            - self.remediation_costs
            - self.downstream_penalty
            + self.completion_bonus
        )


@dataclass
class PilotCommands:
    """Edge-triggered commands for one frame."""

    toggle_mode: bool = False
    restart: bool = False


@dataclass
class RunLog:
    """Headless run outputs used for plotting/reporting."""

    trajectory: np.ndarray
    planned_path: np.ndarray
    mode: OrientationMode
    plan_seed: int
    status: RunStatus
    economics: DrillingEconomics
    accuracy_percent: float
    net_profit: float
    score: float
    final_time: float
    pilot_name: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
