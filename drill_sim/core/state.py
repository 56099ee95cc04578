"""Mutable per-run simulation state and its factory."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .config import DrillParams
from .plan import PathPlan
from .types import DrillingEconomics, OrientationMode, Point, RunStatus


@dataclass
class SimulationState:
    """Everything one run mutates. Owned by the driving loop.

    Only ``engine.step`` should write to it; presentation reads it.
    """

    plan: PathPlan
    x: float
    y: float
    heading: float
    heading_target: float
    mode: OrientationMode = OrientationMode.HORIZONTAL
    score: float = 0.0
    outside_time: float = 0.0
    deviation: float = 0.0
    finished: bool = False
    failed: bool = False
    actual_path: list[Point] = field(default_factory=list)
    economics: DrillingEconomics = field(default_factory=DrillingEconomics)

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    @property
    def forward(self) -> float:
        return self.y if self.mode is OrientationMode.VERTICAL else self.x

    @property
    def lateral(self) -> float:
        return self.x if self.mode is OrientationMode.VERTICAL else self.y

    @property
    def status(self) -> RunStatus:
        if self.failed:
            return RunStatus.FAILED
        if self.finished:
            return RunStatus.FINISHED
        return RunStatus.RUNNING

    @property
    def terminal(self) -> bool:
        return self.finished or self.failed

    @property
    def accuracy_percent(self) -> float:
        return self.economics.accuracy_percent

    @property
    def net_profit(self) -> float:
        return self.economics.net_profit

    def path_array(self) -> np.ndarray:
        """Visited points as an (N, 2) array."""
        if not self.actual_path:
            return np.zeros((0, 2), dtype=float)
        return np.asarray(self.actual_path, dtype=float)


def new_state(
    mode: OrientationMode = OrientationMode.HORIZONTAL,
    plan: PathPlan | None = None,
    params: DrillParams | None = None,
    rng: np.random.Generator | None = None,
) -> SimulationState:
    """Fresh run with the drill head on the plan at the start coordinate."""
    params = params or DrillParams()
    if plan is None:
        plan = PathPlan.random(
            rng,
            straight_section=params.straight_section,
            x_start=params.x_start,
            y_start=params.y_start,
        )

    if mode is OrientationMode.VERTICAL:
        y0 = params.y_start
        x0 = plan.x_at(y0)
    else:
        x0 = params.x_start
        y0 = plan.y_at(x0)

    # Heading 0 is straight along the forward axis in both modes.
    return SimulationState(
        plan=plan,
        x=x0,
        y=y0,
        heading=0.0,
        heading_target=0.0,
        mode=mode,
        actual_path=[(x0, y0)],
    )
