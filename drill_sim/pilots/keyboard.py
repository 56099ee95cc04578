"""Keyboard pilot fed by Matplotlib key events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..core.config import DrillParams
from ..core.interfaces import Pilot
from ..core.state import SimulationState
from ..core.types import OrientationMode, PilotCommands

# (negative key, positive key) per orientation mode.
STEER_KEYS: dict[OrientationMode, tuple[str, str]] = {
    OrientationMode.HORIZONTAL: ("down", "up"),
    OrientationMode.VERTICAL: ("left", "right"),
}


@dataclass
class KeyboardPilot(Pilot):
    """Held arrow keys steer; ``t``/``r`` are edge-triggered commands."""

    interactive_only = True

    pressed: set[str] = field(default_factory=set)
    just_pressed: set[str] = field(default_factory=set)
    paused: bool = False
    running: bool = True
    toggle_key: str = "t"
    restart_key: str = "r"

    def configure(self, cfg: Mapping[str, Any]) -> None:
        kb_cfg = dict(cfg.get("keyboard", {}) or {})
        self.toggle_key = self._normalize(kb_cfg.get("toggle_key", self.toggle_key))
        self.restart_key = self._normalize(kb_cfg.get("restart_key", self.restart_key))

    def _normalize(self, key: str | None) -> str:
        if key is None:
            return ""
        raw = str(key).lower().strip()
        # Matplotlib reports combos like "shift+up"; steer on the base key.
        parts = [p.strip() for p in raw.split("+") if p.strip()]
        if not parts:
            return ""
        return parts[-1]

    def on_press(self, key: str | None) -> None:
        k = self._normalize(key)
        if not k:
            return
        if k == "escape":
            self.running = False
            return
        if k == "p":
            self.paused = not self.paused
            return
        if k not in self.pressed:
            self.just_pressed.add(k)
        self.pressed.add(k)

    def on_release(self, key: str | None) -> None:
        k = self._normalize(key)
        if k:
            self.pressed.discard(k)

    def steer(self, state: SimulationState, params: DrillParams) -> float:
        negative, positive = STEER_KEYS[state.mode]
        steer = 0.0
        if positive in self.pressed:
            steer += 1.0
        if negative in self.pressed:
            steer -= 1.0
        return steer

    def commands(self) -> PilotCommands:
        return PilotCommands(
            toggle_mode=self.toggle_key in self.just_pressed,
            restart=self.restart_key in self.just_pressed,
        )

    def end_frame(self) -> None:
        self.just_pressed.clear()
