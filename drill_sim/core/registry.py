"""Component registry for steering pilots."""

from __future__ import annotations

from collections.abc import Callable

from .interfaces import Pilot

PilotFactory = Callable[[], Pilot]

PILOTS: dict[str, PilotFactory] = {}

_BUILTINS_REGISTERED = False


def _normalize_name(name: str) -> str:
    key = str(name).lower().strip()
    if key in {"auto", "lqr"}:
        return "autopilot"
    return key


def register_pilot(name: str, factory: PilotFactory) -> None:
    PILOTS[_normalize_name(name)] = factory


def create_pilot(name: str) -> Pilot:
    key = _normalize_name(name)
    if key not in PILOTS:
        available = ", ".join(sorted(PILOTS)) or "none"
        raise ValueError(f"Unknown pilot '{name}'. Available: {available}")
    return PILOTS[key]()


def register_builtin_pilots() -> None:
    """Register built-in pilots once."""
    global _BUILTINS_REGISTERED
    if _BUILTINS_REGISTERED:
        return

    from ..pilots.basic import AutoPilot, HoldPilot
    from ..pilots.keyboard import KeyboardPilot

    register_pilot("keyboard", KeyboardPilot)
    register_pilot("hold", HoldPilot)
    register_pilot("autopilot", AutoPilot)

    _BUILTINS_REGISTERED = True
