from __future__ import annotations

import unittest

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from drill_sim.app.interactive import _disable_mpl_keymaps, _restore_mpl_keymaps, hud_text  # noqa: E402
from drill_sim.core.config import DrillParams  # noqa: E402
from drill_sim.core.plan import PathPlan  # noqa: E402
from drill_sim.core.state import new_state  # noqa: E402
from drill_sim.core.types import OrientationMode  # noqa: E402
from drill_sim.visualizer import draw_plan, setup_axes  # noqa: E402


class TestPresentationHelpers(unittest.TestCase):
    def test_hud_reports_status_and_pause(self) -> None:
        state = new_state(plan=PathPlan.flat())
        self.assertTrue(hud_text(state).startswith("RUNNING"))
        self.assertTrue(hud_text(state, paused=True).startswith("PAUSED"))
        state.failed = True
        self.assertTrue(hud_text(state, paused=True).startswith("FAILED"))

    def test_keymaps_restored(self) -> None:
        before = list(matplotlib.rcParams["keymap.save"])
        saved = _disable_mpl_keymaps()
        self.assertEqual(list(matplotlib.rcParams["keymap.save"]), [])
        _restore_mpl_keymaps(saved)
        self.assertEqual(list(matplotlib.rcParams["keymap.save"]), before)

    def test_draw_plan_does_not_touch_state(self) -> None:
        params = DrillParams()
        for mode in OrientationMode:
            state = new_state(mode, plan=PathPlan.from_seed(8))
            snapshot = (state.x, state.y, list(state.actual_path))
            fig, ax = plt.subplots()
            setup_axes(ax, mode)
            artists = draw_plan(ax, state.plan, mode, params)
            self.assertEqual(len(artists), 4)
            self.assertEqual(ax.yaxis_inverted(), mode is OrientationMode.VERTICAL)
            self.assertEqual((state.x, state.y, list(state.actual_path)), snapshot)
            plt.close(fig)


    def test_plan_line_runs_along_forward_axis(self) -> None:
        params = DrillParams()
        plan = PathPlan.from_seed(8)
        for mode in OrientationMode:
            fwd, lat = plan.sample(params.start_for(mode), params.end_for(mode), n=50, mode=mode)
            fig, ax = plt.subplots()
            plan_line = draw_plan(ax, plan, mode, params, n=50)[2]
            if mode is OrientationMode.VERTICAL:
                np.testing.assert_allclose(plan_line.get_xdata(), lat)
                np.testing.assert_allclose(plan_line.get_ydata(), fwd)
            else:
                np.testing.assert_allclose(plan_line.get_xdata(), fwd)
                np.testing.assert_allclose(plan_line.get_ydata(), lat)
            plt.close(fig)

if __name__ == "__main__":
    unittest.main()
