"""
2D visualization utilities for the drilling simulator.

Uses matplotlib to show:
- The planned path with tight/ok tolerance corridors
- The drilled trail
"""

from __future__ import annotations

from typing import Any, Mapping

import matplotlib.pyplot as plt
import numpy as np

from .core.config import DrillParams
from .core.plan import PathPlan
from .core.types import OrientationMode, RunLog, RunStatus


def _style(visual_cfg: Mapping[str, Any] | None) -> dict[str, Any]:
    visual_cfg = visual_cfg or {}
    return {
        "plan_color": str(visual_cfg.get("plan_color", "#50c8ff")),
        "actual_color": str(visual_cfg.get("actual_color", "#ffb46e")),
        "tight_color": str(visual_cfg.get("tight_color", "#dcaa32")),
        "ok_color": str(visual_cfg.get("ok_color", "#786e5f")),
        "background": str(visual_cfg.get("background", "#101218")),
        "path_linewidth": float(visual_cfg.get("path_linewidth", 2.0)),
        "planned_linewidth": float(visual_cfg.get("planned_linewidth", 1.2)),
    }


def draw_plan(
    ax: Any,
    plan: PathPlan,
    mode: OrientationMode,
    params: DrillParams,
    visual_cfg: Mapping[str, Any] | None = None,
    n: int = 800,
) -> list[Any]:
    """Draw the plan and its corridors from start to end of hole; return the artists."""
    style = _style(visual_cfg)
    fwd, lat = plan.sample(params.start_for(mode), params.end_for(mode), n=n, mode=mode)
    artists: list[Any] = []

    vertical = mode is OrientationMode.VERTICAL
    fill = ax.fill_betweenx if vertical else ax.fill_between

    for tol, color, alpha, label in (
        (params.tol_ok, style["ok_color"], 0.35, "OK corridor"),
        (params.tol_tight, style["tight_color"], 0.45, "Tight corridor"),
    ):
        artists.append(fill(fwd, lat - tol, lat + tol, color=color, alpha=alpha, linewidth=0.0, label=label))

    # Matplotlib takes (x, y); vertical holes run forward along y.
    xs, ys = (lat, fwd) if vertical else (fwd, lat)
    (plan_line,) = ax.plot(
        xs,
        ys,
        color=style["plan_color"],
        linewidth=style["planned_linewidth"],
        linestyle="--",
        label="Plan",
    )
    artists.append(plan_line)

    end = params.end_for(mode)
    if vertical:
        artists.append(ax.axhline(end, color="white", alpha=0.4, linewidth=1.0))
    else:
        artists.append(ax.axvline(end, color="white", alpha=0.4, linewidth=1.0))
    return artists


def setup_axes(ax: Any, mode: OrientationMode, visual_cfg: Mapping[str, Any] | None = None) -> None:
    style = _style(visual_cfg)
    ax.set_facecolor(style["background"])
    ax.grid(True, color="#282c3a")
    if mode is OrientationMode.VERTICAL:
        ax.set_xlabel("Lateral x [m]")
        ax.set_ylabel("Depth y [m]")
        if not ax.yaxis_inverted():
            ax.invert_yaxis()
    else:
        ax.set_xlabel("Forward x [m]")
        ax.set_ylabel("Lateral y [m]")


def economics_summary(run_log: RunLog) -> str:
    econ = run_log.economics
    return (
        f"Status: {run_log.status.value.upper()}  ({run_log.final_time:.1f}s)\n"
        f"Accuracy: {run_log.accuracy_percent:.1f}%  "
        f"(tight {econ.time_in_tight:.1f}s / ok {econ.time_in_ok:.1f}s / outside {econ.time_outside:.1f}s)\n"
        f"Revenue ${econ.gross_revenue:,.0f}  Remediation -${econ.remediation_costs:,.0f}  "
        f"Downstream -${econ.downstream_penalty:,.0f}\n"
        f"Completion bonus ${econ.completion_bonus:+,.0f}  Net profit ${run_log.net_profit:+,.0f}"
    )


def plot_run(
    run_log: RunLog,
    params: DrillParams,
    visual_cfg: Mapping[str, Any] | None = None,
    show: bool = True,
) -> plt.Figure:
    """
    Plot a finished headless run.

    Args:
        run_log: output of ``run_headless``.
        params: drill parameters the run used (corridor widths, bounds).
        visual_cfg: optional colors/linewidths.
        show: whether to call plt.show() at the end.
    """
    style = _style(visual_cfg)
    mode = run_log.mode
    plan = PathPlan.from_seed(
        run_log.plan_seed,
        straight_section=params.straight_section,
        x_start=params.x_start,
        y_start=params.y_start,
    )

    fig, ax = plt.subplots(figsize=(11, 6))
    setup_axes(ax, mode, visual_cfg)
    draw_plan(ax, plan, mode, params, visual_cfg)

    traj = np.asarray(run_log.trajectory, dtype=float)
    if traj.size:
        ax.plot(
            traj[:, 0],
            traj[:, 1],
            color=style["actual_color"],
            linewidth=style["path_linewidth"],
            label="Drilled",
        )
        end_color = "red" if run_log.status is RunStatus.FAILED else "white"
        ax.scatter([traj[-1, 0]], [traj[-1, 1]], color=end_color, s=30, zorder=5)

    ax.set_title(
        f"Drill run [{mode.value}] seed={run_log.plan_seed} pilot={run_log.pilot_name or 'n/a'}"
    )
    ax.legend(loc="upper right")
    fig.text(
        0.01,
        0.01,
        economics_summary(run_log),
        fontsize=9,
        family="monospace",
        bbox={"facecolor": "white", "alpha": 0.85, "edgecolor": "0.7"},
    )
    fig.tight_layout(rect=(0.0, 0.12, 1.0, 1.0))

    if show:
        plt.show()
    return fig
