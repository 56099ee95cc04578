"""Steering laws for the automatic pilot.

Lateral motion is linearized around the plan's local heading:
  e_dot  = V * h_err
  h_dot  = k * (t_err - h_err)
  t_dot  = turn_rate * u
where ``e`` is lateral error, ``h_err`` heading error and ``t_err`` heading
target error, all relative to the plan.
"""

from __future__ import annotations

import numpy as np
from scipy.linalg import solve_continuous_are


def lateral_model(forward_speed: float, heading_inertia: float, turn_rate: float) -> tuple[np.ndarray, np.ndarray]:
    """State-space (A, B) of the linearized lateral drill model."""
    A = np.array(
        [
            [0.0, forward_speed, 0.0],
            [0.0, -heading_inertia, heading_inertia],
            [0.0, 0.0, 0.0],
        ]
    )
    B = np.array([[0.0], [0.0], [turn_rate]])
    return A, B


def lqr_gain(A: np.ndarray, B: np.ndarray, Q: np.ndarray, R: np.ndarray) -> np.ndarray:
    """Continuous-time LQR gain ``K`` such that ``u = -K x``."""
    P = solve_continuous_are(A, B, Q, R)
    K = np.linalg.inv(R) @ B.T @ P
    return K


def lateral_lqr_gain(
    forward_speed: float,
    heading_inertia: float,
    turn_rate: float,
    q_lateral: float = 0.05,
    q_heading: float = 4.0,
    q_target: float = 1.0,
    r_steer: float = 1.0,
) -> np.ndarray:
    A, B = lateral_model(forward_speed, heading_inertia, turn_rate)
    Q = np.diag([q_lateral, q_heading, q_target])
    R = np.array([[r_steer]])
    return lqr_gain(A, B, Q, R)


def lqr_steer(
    lateral_error: float,
    heading_error: float,
    target_error: float,
    gain: np.ndarray,
) -> float:
    """Steering command in ``[-1, 1]`` from the error state."""
    x = np.array([lateral_error, heading_error, target_error], dtype=float)
    u = -float((np.asarray(gain, dtype=float).reshape(1, 3) @ x)[0])
    return float(np.clip(u, -1.0, 1.0))


__all__ = [
    "lateral_model",
    "lqr_gain",
    "lateral_lqr_gain",
    "lqr_steer",
]
