from __future__ import annotations

import unittest
from pathlib import Path
from unittest import mock

import matplotlib

matplotlib.use("Agg")

from drill_sim.app.main import main  # noqa: E402
from drill_sim.core.config import DrillParams, NormalizedRunConfig  # noqa: E402
from drill_sim.core.runner import run_headless  # noqa: E402
from drill_sim.core.types import OrientationMode, RunStatus  # noqa: E402
from drill_sim.visualizer import economics_summary, plot_run  # noqa: E402


class TestRunnerIntegration(unittest.TestCase):
    def _base_cfg(self, pilot_name: str, max_time: float = 30.0, mode=OrientationMode.HORIZONTAL) -> NormalizedRunConfig:
        return NormalizedRunConfig(
            config_path=Path("drill_sim/drill_config.yaml"),
            mode=mode,
            pilot_name=pilot_name,
            dt=0.05,
            max_time=max_time,
            seed=123,
            max_frame_dt=None,
            params=DrillParams(),
            pilot_cfg={"autopilot": {"q_lateral": 0.05}},
            visual_cfg={"log_interval": 5.0},
            raw_cfg={},
        )

    def test_time_limit_leaves_run_in_progress(self) -> None:
        run_log = run_headless(self._base_cfg("hold", max_time=1.0))
        self.assertEqual(run_log.status, RunStatus.RUNNING)
        self.assertGreaterEqual(run_log.trajectory.shape[0], 2)
        self.assertEqual(run_log.trajectory.shape[1], 2)
        self.assertGreaterEqual(run_log.final_time, 1.0 - 1e-9)
        self.assertLessEqual(run_log.final_time, 1.05 + 1e-9)
        self.assertEqual(run_log.economics.completion_bonus, 0.0)

    def test_hold_run_reaches_terminal_state(self) -> None:
        run_log = run_headless(self._base_cfg("hold"))
        self.assertIn(run_log.status, {RunStatus.FINISHED, RunStatus.FAILED})
        if run_log.status is RunStatus.FAILED:
            self.assertEqual(run_log.economics.completion_bonus, DrillParams().penalty_fail)
        self.assertAlmostEqual(
            run_log.net_profit,
            run_log.economics.gross_revenue
            - run_log.economics.remediation_costs
            - run_log.economics.downstream_penalty
            + run_log.economics.completion_bonus,
        )

    def test_seeded_runs_are_reproducible(self) -> None:
        a = run_headless(self._base_cfg("autopilot", mode=OrientationMode.VERTICAL))
        b = run_headless(self._base_cfg("autopilot", mode=OrientationMode.VERTICAL))
        self.assertEqual(a.plan_seed, b.plan_seed)
        self.assertEqual(a.status, b.status)
        self.assertEqual(a.trajectory.tolist(), b.trajectory.tolist())
        self.assertEqual(a.planned_path.shape[1], 2)

    def test_keyboard_pilot_rejected_headless(self) -> None:
        with self.assertRaises(RuntimeError):
            run_headless(self._base_cfg("keyboard"))

    def test_main_headless_run_without_plot(self) -> None:
        self.assertIsNone(
            main(["--pilot", "hold", "--max-time", "0.5", "--no-plot", "--config", "/nonexistent.yaml"])
        )

    def test_main_exits_on_runner_error(self) -> None:
        with mock.patch("drill_sim.app.main.run_headless", side_effect=RuntimeError("boom")):
            with self.assertRaises(SystemExit) as e:
                main(["--pilot", "hold", "--no-plot", "--config", "/nonexistent.yaml"])
        self.assertEqual(e.exception.code, 1)

    def test_plot_run_builds_figure(self) -> None:
        run_log = run_headless(self._base_cfg("autopilot", max_time=3.0))
        fig = plot_run(run_log, DrillParams(), show=False)
        self.assertEqual(len(fig.axes), 1)
        self.assertIn("Accuracy", economics_summary(run_log))


if __name__ == "__main__":
    unittest.main()
