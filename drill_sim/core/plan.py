"""Procedurally generated reference path ("the plan")."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .rng import SeededRandom
from .types import OrientationMode

# Seeds are drawn from [0, MAX_SEED).
MAX_SEED = 1_000_000


@dataclass(frozen=True)
class PathPlan:
    """Reference curve: lateral offset as a function of forward distance.

    Before ``straight_section`` the curve is purely linear; after it, two
    sinusoids are added, evaluated from the end of the straight section.
    Phases are 0 or pi so the sinusoids vanish at that junction.
    """

    seed: int
    a1: float
    a2: float
    w1: float
    w2: float
    phase1: float
    phase2: float
    slope: float
    straight_section: float = 50.0
    x_start: float = 0.0
    y_start: float = 0.0

    @classmethod
    def from_seed(
        cls,
        seed: int,
        straight_section: float = 50.0,
        x_start: float = 0.0,
        y_start: float = 0.0,
    ) -> PathPlan:
        rng = SeededRandom.from_seed(seed)
        # Draw order is part of the reproducibility contract.
        a1, rng = rng.uniform(8.0, 18.0)
        a2, rng = rng.uniform(3.0, 10.0)
        w1, rng = rng.uniform(0.010, 0.018)
        w2, rng = rng.uniform(0.020, 0.035)
        phase1, rng = rng.choice((0.0, math.pi))
        phase2, rng = rng.choice((0.0, math.pi))
        slope, rng = rng.uniform(-8.0, 8.0)
        return cls(
            seed=int(seed),
            a1=a1,
            a2=a2,
            w1=w1,
            w2=w2,
            phase1=phase1,
            phase2=phase2,
            slope=slope,
            straight_section=straight_section,
            x_start=x_start,
            y_start=y_start,
        )

    @classmethod
    def random(
        cls,
        rng: np.random.Generator | None = None,
        straight_section: float = 50.0,
        x_start: float = 0.0,
        y_start: float = 0.0,
    ) -> PathPlan:
        rng = rng or np.random.default_rng()
        seed = int(rng.integers(0, MAX_SEED))
        return cls.from_seed(seed, straight_section=straight_section, x_start=x_start, y_start=y_start)

    @classmethod
    def flat(cls, x_start: float = 0.0, y_start: float = 0.0) -> PathPlan:
        """Plan that is identically zero (no slope, no waves)."""
        return cls(
            seed=0,
            a1=0.0,
            a2=0.0,
            w1=0.0,
            w2=0.0,
            phase1=0.0,
            phase2=0.0,
            slope=0.0,
            x_start=x_start,
            y_start=y_start,
        )

    def _offset(self, s: float) -> float:
        linear = self.slope * s / 200.0
        if s < self.straight_section:
            return linear
        u = s - self.straight_section
        return (
            linear
            + self.a1 * math.sin(self.w1 * u + self.phase1)
            + self.a2 * math.sin(self.w2 * u + self.phase2)
        )

    def _derivative(self, s: float) -> float:
        linear = self.slope / 200.0
        if s < self.straight_section:
            return linear
        u = s - self.straight_section
        return (
            linear
            + self.a1 * self.w1 * math.cos(self.w1 * u + self.phase1)
            + self.a2 * self.w2 * math.cos(self.w2 * u + self.phase2)
        )

    def _origin(self, mode: OrientationMode) -> float:
        return self.y_start if mode is OrientationMode.VERTICAL else self.x_start

    def y_at(self, x: float) -> float:
        """Horizontal mode: planned y for forward coordinate x."""
        return self._offset(x - self.x_start)

    def x_at(self, y: float) -> float:
        """Vertical mode: planned x for forward coordinate y."""
        return self._offset(y - self.y_start)

    def lateral_offset(
        self,
        axis_position: float,
        mode: OrientationMode = OrientationMode.HORIZONTAL,
    ) -> float:
        return self._offset(axis_position - self._origin(mode))

    def slope_at(
        self,
        axis_position: float,
        mode: OrientationMode = OrientationMode.HORIZONTAL,
    ) -> float:
        """d(lateral)/d(forward) of the plan at ``axis_position``."""
        return self._derivative(axis_position - self._origin(mode))

    def sample(
        self,
        start: float,
        end: float,
        n: int = 400,
        mode: OrientationMode = OrientationMode.HORIZONTAL,
    ) -> tuple[np.ndarray, np.ndarray]:
        """Return (forward, lateral) arrays of ``n`` samples on ``[start, end]``."""
        forward = np.linspace(float(start), float(end), max(2, int(n)))
        lateral = np.array([self.lateral_offset(float(f), mode) for f in forward], dtype=float)
        return forward, lateral
