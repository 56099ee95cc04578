"""Abstract interface for steering input sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from .config import DrillParams
from .state import SimulationState
from .types import PilotCommands


class Pilot(ABC):
    """Supplies a steering scalar and discrete commands each frame."""

    #: Pilots that need a live window (keyboard) cannot drive headless runs.
    interactive_only: bool = False

    def configure(self, cfg: Mapping[str, Any]) -> None:
        """Apply pilot-specific tuning from the ``pilot`` config section (default no-op)."""

    @abstractmethod
    def steer(self, state: SimulationState, params: DrillParams) -> float:
        """Steering intent in ``[-1, 1]`` for the current state."""

    def commands(self) -> PilotCommands:
        """Edge-triggered commands pending this frame (default none)."""
        return PilotCommands()

    def end_frame(self) -> None:
        """Clear edge-triggered state after a frame (default no-op)."""
