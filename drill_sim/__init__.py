"""Directional drilling path simulator.

Architecture highlights:
- Pure per-tick engine (``core.engine.step``) over an explicit ``SimulationState``
- Seeded, reproducible plan generation (``core.plan.PathPlan``)
- Plugin-style registry of steering pilots (keyboard, autopilot, hold)
- CLI entrypoint via ``python -m drill_sim.app.main`` or ``drill-sim``
"""
