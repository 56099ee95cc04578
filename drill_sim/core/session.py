"""Driving-loop owner: holds the current run and handles restart/toggle."""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from .config import DrillParams
from .engine import step
from .interfaces import Pilot
from .state import SimulationState, new_state
from .types import OrientationMode, Zone

logger = logging.getLogger(__name__)

ModeChangeCallback = Callable[[OrientationMode], None]


class DrillSession:
    """Owns exactly one ``SimulationState`` at a time.

    Restart and mode toggle replace the state wholesale with a new plan.
    Successive plan seeds come from a generator seeded by ``seed``.
    """

    def __init__(
        self,
        params: DrillParams | None = None,
        mode: OrientationMode = OrientationMode.HORIZONTAL,
        seed: int | None = None,
        on_mode_change: ModeChangeCallback | None = None,
        max_frame_dt: float | None = None,
    ) -> None:
        self.params = params or DrillParams()
        self.max_frame_dt = max_frame_dt
        self.running = False
        self.runs_started = 0
        self._on_mode_change = on_mode_change
        self._rng = np.random.default_rng(seed)
        self._state = self._new_run(mode)

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def mode(self) -> OrientationMode:
        return self._state.mode

    def set_mode_change_callback(self, callback: ModeChangeCallback | None) -> None:
        self._on_mode_change = callback

    def _new_run(self, mode: OrientationMode) -> SimulationState:
        state = new_state(mode, params=self.params, rng=self._rng)
        self.runs_started += 1
        logger.info(f"New run #{self.runs_started}: mode={mode.value}, plan seed={state.plan.seed}")
        return state

    def start(self) -> None:
        self.running = True

    def stop(self) -> None:
        self.running = False

    def toggle_mode(self) -> None:
        new_mode = self._state.mode.toggled()
        logger.info(f"Toggling orientation mode to {new_mode.value}")
        self._state = self._new_run(new_mode)
        if self._on_mode_change is not None:
            self._on_mode_change(new_mode)

    def restart(self) -> None:
        logger.info("Restarting run")
        self._state = self._new_run(self._state.mode)

    def frame_dt(self, dt: float) -> float:
        """Apply the optional frame-stall policy to a measured ``dt``."""
        if self.max_frame_dt is not None and dt > self.max_frame_dt:
            logger.debug(f"Clamping frame dt {dt:.3f}s to {self.max_frame_dt:.3f}s")
            return float(self.max_frame_dt)
        return float(dt)

    def tick(self, pilot: Pilot, dt: float) -> Zone | None:
        """One frame: commands, then steering, then the simulation step."""
        if not self.running:
            return None

        cmds = pilot.commands()
        if cmds.toggle_mode:
            self.toggle_mode()
        if cmds.restart:
            self.restart()

        steer = pilot.steer(self._state, self.params)
        zone = step(self._state, steer, self.frame_dt(dt), self.params)
        pilot.end_frame()
        return zone
