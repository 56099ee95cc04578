from __future__ import annotations

import unittest

from drill_sim.core.config import DrillParams
from drill_sim.core.interfaces import Pilot
from drill_sim.core.session import DrillSession
from drill_sim.core.types import OrientationMode, PilotCommands
from drill_sim.pilots.basic import HoldPilot
from drill_sim.pilots.keyboard import KeyboardPilot


class _ScriptedPilot(Pilot):
    def __init__(self, steer: float = 0.0, toggle: bool = False, restart: bool = False) -> None:
        self._steer = steer
        self._cmds = PilotCommands(toggle_mode=toggle, restart=restart)
        self.frames_ended = 0

    def steer(self, state, params) -> float:
        return self._steer

    def commands(self) -> PilotCommands:
        return self._cmds

    def end_frame(self) -> None:
        self.frames_ended += 1
        self._cmds = PilotCommands()


class TestDrillSession(unittest.TestCase):
    def test_seeded_sessions_produce_same_plans(self) -> None:
        a = DrillSession(seed=7)
        b = DrillSession(seed=7)
        self.assertEqual(a.state.plan, b.state.plan)
        a.restart()
        b.restart()
        self.assertEqual(a.state.plan.seed, b.state.plan.seed)

    def test_new_run_starts_on_plan(self) -> None:
        session = DrillSession(seed=3)
        state = session.state
        self.assertEqual(state.x, 0.0)
        self.assertEqual(state.y, state.plan.y_at(0.0))
        self.assertEqual(state.heading, 0.0)
        self.assertEqual(state.heading_target, 0.0)
        self.assertEqual(state.actual_path, [(state.x, state.y)])

    def test_restart_replaces_state_and_keeps_mode(self) -> None:
        session = DrillSession(mode=OrientationMode.VERTICAL, seed=1)
        old = session.state
        session.restart()
        self.assertIsNot(session.state, old)
        self.assertEqual(session.mode, OrientationMode.VERTICAL)
        self.assertEqual(session.runs_started, 2)

    def test_toggle_switches_mode_and_notifies(self) -> None:
        seen: list[OrientationMode] = []
        session = DrillSession(seed=1, on_mode_change=seen.append)
        old = session.state
        session.toggle_mode()
        self.assertIsNot(session.state, old)
        self.assertEqual(session.mode, OrientationMode.VERTICAL)
        self.assertEqual(seen, [OrientationMode.VERTICAL])
        state = session.state
        self.assertEqual(state.y, 0.0)
        self.assertEqual(state.x, state.plan.x_at(0.0))

        session.toggle_mode()
        self.assertEqual(seen, [OrientationMode.VERTICAL, OrientationMode.HORIZONTAL])

    def test_tick_is_noop_when_stopped(self) -> None:
        session = DrillSession(seed=2)
        self.assertIsNone(session.tick(HoldPilot(), 0.1))
        self.assertEqual(len(session.state.actual_path), 1)

        session.start()
        self.assertIsNotNone(session.tick(HoldPilot(), 0.1))
        session.stop()
        self.assertIsNone(session.tick(HoldPilot(), 0.1))
        self.assertEqual(len(session.state.actual_path), 2)

    def test_tick_applies_steering(self) -> None:
        session = DrillSession(seed=2)
        session.start()
        pilot = _ScriptedPilot(steer=1.0)
        session.tick(pilot, 0.1)
        self.assertAlmostEqual(session.state.heading_target, 0.135)
        self.assertEqual(pilot.frames_ended, 1)

    def test_commands_processed_before_step(self) -> None:
        session = DrillSession(seed=2)
        session.start()
        pilot = _ScriptedPilot(toggle=True)
        session.tick(pilot, 0.1)
        self.assertEqual(session.mode, OrientationMode.VERTICAL)
        # The fresh run took this frame's step.
        self.assertEqual(len(session.state.actual_path), 2)

        session.tick(pilot, 0.1)
        self.assertEqual(session.mode, OrientationMode.VERTICAL)

        pilot = _ScriptedPilot(restart=True)
        before = session.state
        session.tick(pilot, 0.1)
        self.assertIsNot(session.state, before)
        self.assertEqual(session.runs_started, 3)

    def test_keyboard_toggle_is_edge_triggered(self) -> None:
        session = DrillSession(seed=4)
        session.start()
        pilot = KeyboardPilot()
        pilot.on_press("t")
        session.tick(pilot, 0.05)
        session.tick(pilot, 0.05)
        self.assertEqual(session.mode, OrientationMode.VERTICAL)
        self.assertEqual(session.runs_started, 2)

    def test_frame_dt_policy(self) -> None:
        session = DrillSession(seed=5)
        self.assertEqual(session.frame_dt(7.5), 7.5)

        clamped = DrillSession(params=DrillParams(), seed=5, max_frame_dt=0.1)
        self.assertEqual(clamped.frame_dt(7.5), 0.1)
        self.assertEqual(clamped.frame_dt(0.02), 0.02)

        clamped.start()
        clamped.tick(HoldPilot(), 7.5)
        self.assertAlmostEqual(clamped.state.economics.total_time, 0.1)


if __name__ == "__main__":
    unittest.main()
