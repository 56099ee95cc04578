"""Interactive Matplotlib mode: steer the drill with the keyboard."""

from __future__ import annotations

import logging
import time
from typing import Any

import matplotlib as mpl
import matplotlib.pyplot as plt
import numpy as np

from ..core.config import NormalizedRunConfig
from ..core.registry import create_pilot, register_builtin_pilots
from ..core.session import DrillSession
from ..core.state import SimulationState
from ..core.types import OrientationMode
from ..visualizer import draw_plan, setup_axes

logger = logging.getLogger(__name__)


def _disable_mpl_keymaps() -> dict[str, list[str]]:
    """Disable Matplotlib default keybindings that conflict with drilling keys."""
    keymap_names = [
        "keymap.back",
        "keymap.forward",
        "keymap.fullscreen",
        "keymap.grid",
        "keymap.grid_minor",
        "keymap.home",
        "keymap.pan",
        "keymap.quit",
        "keymap.quit_all",
        "keymap.save",
        "keymap.xscale",
        "keymap.yscale",
        "keymap.zoom",
    ]
    saved: dict[str, list[str]] = {}
    for name in keymap_names:
        if name not in mpl.rcParams:
            continue
        saved[name] = list(mpl.rcParams[name])
        mpl.rcParams[name] = []
    return saved


def _restore_mpl_keymaps(saved: dict[str, list[str]]) -> None:
    for name, value in saved.items():
        mpl.rcParams[name] = value


def hud_text(state: SimulationState, paused: bool = False) -> str:
    econ = state.economics
    status = state.status.value.upper()
    if paused and not state.terminal:
        status = "PAUSED"
    return (
        f"{status:<9} mode={state.mode.value:<10} t={econ.total_time:6.2f}s  "
        f"dev={state.deviation:5.2f}  outside={state.outside_time:4.2f}s  "
        f"heading={np.degrees(state.heading):+6.1f} deg\n"
        f"accuracy={econ.accuracy_percent:5.1f}%  revenue=${econ.gross_revenue:,.0f}  "
        f"remediation=-${econ.remediation_costs:,.0f}  downstream=-${econ.downstream_penalty:,.0f}  "
        f"bonus=${econ.completion_bonus:+,.0f}  net=${econ.net_profit:+,.0f}\n"
        "Keys: arrows steer, T toggle mode, R restart, P pause, Esc close"
    )


def run_interactive(cfg_norm: NormalizedRunConfig) -> None:
    """Run a keyboard-driven session in a Matplotlib window."""
    register_builtin_pilots()
    pilot = create_pilot(cfg_norm.pilot_name)
    pilot.configure(cfg_norm.pilot_cfg)

    params = cfg_norm.params
    vis_cfg = dict(cfg_norm.visual_cfg)
    lookahead = float(vis_cfg.get("lookahead", 160.0))
    lateral_span = float(vis_cfg.get("lateral_span", 60.0))
    trail_window = int(vis_cfg.get("trail_window", 600))

    session = DrillSession(
        params=params,
        mode=cfg_norm.mode,
        seed=cfg_norm.seed,
        max_frame_dt=cfg_norm.max_frame_dt,
    )
    session.set_mode_change_callback(
        lambda mode: logger.info("Orientation mode is now %s", mode.value)
    )

    interval_ms = max(1, int(float(cfg_norm.dt) * 1000.0))
    logger.info("Starting interactive session, timer interval=%dms", interval_ms)

    saved_keymaps = _disable_mpl_keymaps()
    fig, ax = plt.subplots(figsize=(12, 7))
    status_text = fig.text(
        0.01,
        0.01,
        "",
        fontsize=9,
        family="monospace",
        bbox={"facecolor": "white", "alpha": 0.85, "edgecolor": "0.7"},
    )

    scene: dict[str, Any] = {"plan": None, "mode": None, "trail": None, "head": None}

    def _build_scene(state: SimulationState) -> None:
        ax.cla()
        if state.mode is OrientationMode.HORIZONTAL and ax.yaxis_inverted():
            ax.invert_yaxis()
        setup_axes(ax, state.mode, vis_cfg)
        draw_plan(ax, state.plan, state.mode, params, vis_cfg)
        (scene["trail"],) = ax.plot(
            [state.x],
            [state.y],
            color=str(vis_cfg.get("actual_color", "#ffb46e")),
            linewidth=float(vis_cfg.get("path_linewidth", 2.0)),
            label="Drilled",
        )
        scene["head"] = ax.scatter([state.x], [state.y], color="white", s=30, zorder=6)
        ax.set_title(f"Drill path [{state.mode.value}] plan seed={state.plan.seed}")
        ax.legend(loc="upper right")
        scene["plan"] = state.plan
        scene["mode"] = state.mode

    def _refresh(state: SimulationState) -> None:
        if scene["plan"] is not state.plan or scene["mode"] is not state.mode:
            _build_scene(state)

        trail = np.asarray(state.actual_path[-trail_window:], dtype=float)
        scene["trail"].set_data(trail[:, 0], trail[:, 1])
        scene["head"].set_offsets([[state.x, state.y]])
        color = "white"
        if state.failed:
            color = "red"
        elif state.deviation > params.tol_ok:
            color = "orange"
        scene["head"].set_color(color)

        fwd = state.forward
        center = state.plan.lateral_offset(fwd, state.mode)
        if state.mode is OrientationMode.VERTICAL:
            ax.set_xlim(center - lateral_span, center + lateral_span)
            ax.set_ylim(fwd + lookahead, fwd - 40.0)
        else:
            ax.set_xlim(fwd - 40.0, fwd + lookahead)
            ax.set_ylim(center - lateral_span, center + lateral_span)

        status_text.set_text(hud_text(state, paused=getattr(pilot, "paused", False)))

    timer = fig.canvas.new_timer(interval=interval_ms)
    clock = {"last": time.perf_counter()}

    def _on_tick() -> None:
        if not plt.fignum_exists(fig.number):
            return
        if not getattr(pilot, "running", True):
            session.stop()
            plt.close(fig)
            return

        now = time.perf_counter()
        dt = now - clock["last"]
        clock["last"] = now

        if getattr(pilot, "paused", False):
            pilot.end_frame()
        else:
            session.tick(pilot, dt)

        _refresh(session.state)
        fig.canvas.draw_idle()

    timer.add_callback(_on_tick)

    def _on_key_press(event: Any) -> None:
        on_press = getattr(pilot, "on_press", None)
        if on_press is not None:
            on_press(getattr(event, "key", None))

    def _on_key_release(event: Any) -> None:
        on_release = getattr(pilot, "on_release", None)
        if on_release is not None:
            on_release(getattr(event, "key", None))

    def _on_close(_event: Any) -> None:
        session.stop()
        timer.stop()

    fig.canvas.mpl_connect("key_press_event", _on_key_press)
    fig.canvas.mpl_connect("key_release_event", _on_key_release)
    fig.canvas.mpl_connect("close_event", _on_close)

    _refresh(session.state)
    session.start()
    clock["last"] = time.perf_counter()
    timer.start()
    fig.tight_layout(rect=(0.0, 0.1, 1.0, 1.0))
    try:
        plt.show()
    finally:
        _restore_mpl_keymaps(saved_keymaps)
