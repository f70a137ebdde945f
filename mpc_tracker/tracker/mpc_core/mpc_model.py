from typing import Any, List, Sequence, Tuple, Union
import logging

import casadi as ca
import numpy as np

from ...config.mpc_settings import MPCSettings
from ...core.data_types import ReferenceCoefficients, VehicleState, NUM_COEFFICIENTS
from ...core.indices import StateIdx, ActuatorIdx
from .variable_layout import VariableLayout

logger = logging.getLogger(__name__)

CoefficientsLike = Union[ReferenceCoefficients, Sequence[float], ca.SX, np.ndarray]


def _as_coefficients(coeffs: CoefficientsLike) -> ReferenceCoefficients:
    if isinstance(coeffs, ReferenceCoefficients):
        return coeffs
    if isinstance(coeffs, (ca.SX, ca.MX)):
        if coeffs.numel() != NUM_COEFFICIENTS:
            raise ValueError(
                f"Reference polynomial must have exactly {NUM_COEFFICIENTS} "
                f"coefficients, got {coeffs.numel()}")
        # Symbolic coefficients bypass the float conversion of from_array
        return ReferenceCoefficients(*(coeffs[i] for i in range(NUM_COEFFICIENTS)))
    return ReferenceCoefficients.from_array(coeffs)


class FGEvaluator:
    """
    Objective and constraint evaluator for one control cycle.

    Built fresh from the current reference coefficients. Calling it on a
    decision vector returns ``(cost, constraints)`` where constraints has
    one entry per row of the layout (N * 6). Only arithmetic, cos/sin/atan
    and polynomial evaluation are used and nothing branches on the decision
    variables, so the same code yields an exact CasADi expression graph when
    called on ``ca.SX`` symbols.

    The t=0 block returns the raw initial-state variables; the constraint
    bounds pin them to the measured state.
    """

    def __init__(self, coeffs: CoefficientsLike, layout: VariableLayout,
                 settings: MPCSettings):
        self.coeffs = _as_coefficients(coeffs)
        self.layout = layout
        self.settings = settings

    def with_coefficients(self, coeffs: CoefficientsLike) -> 'FGEvaluator':
        """Same layout and settings, different reference polynomial."""
        return FGEvaluator(coeffs, self.layout, self.settings)

    def __call__(self, z) -> Tuple[Any, List[Any]]:
        return self.cost(z), self.constraints(z)

    def cost(self, z):
        layout = self.layout
        w = self.settings.weights
        n = layout.horizon
        cte_start = layout.state_start(StateIdx.CTE)
        epsi_start = layout.state_start(StateIdx.EPSI)
        v_start = layout.state_start(StateIdx.V)
        delta_start = layout.actuator_start(ActuatorIdx.DELTA)
        a_start = layout.actuator_start(ActuatorIdx.A)

        cost = 0
        # Tracking: stay on the path, point along it, hold the target speed
        for t in range(n):
            cost += w.cte * z[cte_start + t] ** 2
            cost += w.epsi * z[epsi_start + t] ** 2
            cost += w.velocity * (z[v_start + t] - self.settings.ref_v) ** 2

        # Actuation magnitude
        for t in range(n - 1):
            cost += w.steering * z[delta_start + t] ** 2
            cost += w.accel * z[a_start + t] ** 2

        # Actuation smoothness between consecutive transitions
        for t in range(n - 2):
            cost += w.steering_rate * (z[delta_start + t + 1] - z[delta_start + t]) ** 2
            cost += w.accel_rate * (z[a_start + t + 1] - z[a_start + t]) ** 2
        return cost

    def constraints(self, z) -> List[Any]:
        layout = self.layout
        n = layout.horizon
        g: List[Any] = [0] * layout.n_constraints

        starts = [layout.state_start(field) for field in StateIdx]
        delta_start = layout.actuator_start(ActuatorIdx.DELTA)
        a_start = layout.actuator_start(ActuatorIdx.A)

        for start in starts:
            g[start] = z[start]

        for t in range(1, n):
            prev = [z[start + t - 1] for start in starts]
            nxt = [z[start + t] for start in starts]
            delta0 = z[delta_start + t - 1]
            a0 = z[a_start + t - 1]

            predicted = self.transition(prev, delta0, a0)
            for start, actual, model in zip(starts, nxt, predicted):
                g[start + t] = actual - model
        return g

    def transition(self, prev: Sequence[Any], delta0, a0) -> List[Any]:
        """Kinematic bicycle update from step t to t+1.

        ``prev`` is (x, y, psi, v, cte, epsi) at step t.
        """
        x0, y0, psi0, v0, cte0, epsi0 = prev
        dt = self.settings.dt
        # steering_sign = -1: positive delta turns toward negative psi
        yaw_step = self.settings.steering_sign * v0 * delta0 / self.settings.lf * dt

        f0 = self.coeffs.evaluate(x0)
        psides0 = ca.atan(self.coeffs.slope(x0))

        return [
            x0 + v0 * ca.cos(psi0) * dt,
            y0 + v0 * ca.sin(psi0) * dt,
            psi0 + yaw_step,
            v0 + a0 * dt,
            (f0 - y0) + v0 * ca.sin(epsi0) * dt,
            (psi0 - psides0) + yaw_step,
        ]

    def evaluate(self, z: Sequence[float]) -> Tuple[float, np.ndarray]:
        """Numeric objective value and constraint vector at ``z``."""
        z = np.asarray(z, dtype=float).ravel()
        if z.size != self.layout.n_vars:
            raise ValueError(
                f"Decision vector must have {self.layout.n_vars} elements, got {z.size}")
        sym = ca.SX.sym('z', self.layout.n_vars)
        cost, g = self(sym)
        fg = ca.Function('fg_eval', [sym], [cost, ca.vertcat(*g)])
        cost_val, g_val = fg(z)
        return float(cost_val), np.array(g_val.full()).ravel()


def kinematic_step(state: VehicleState, steering: float, accel: float,
                   coeffs: CoefficientsLike, settings: MPCSettings) -> VehicleState:
    """Advance ``state`` by one dt with the same update the constraints encode."""
    coeffs = _as_coefficients(coeffs)
    dt = settings.dt
    yaw_step = settings.steering_sign * state.v * steering / settings.lf * dt
    psides = np.arctan(coeffs.slope(state.x))
    return VehicleState(
        x=state.x + state.v * np.cos(state.psi) * dt,
        y=state.y + state.v * np.sin(state.psi) * dt,
        psi=state.psi + yaw_step,
        v=state.v + accel * dt,
        cte=(coeffs.evaluate(state.x) - state.y) + state.v * np.sin(state.epsi) * dt,
        epsi=(state.psi - psides) + yaw_step,
    )
