"""
Motion and cost model tests

Verifies:
1. Constraint residuals vanish on trajectories produced by the same kinematic update
2. Objective terms and weights
3. Steering sign convention
4. Symbolic evaluation (derivatives available through CasADi)
"""
import math

import casadi as ca
import numpy as np
import pytest

from mpc_tracker.config.mpc_settings import MPCSettings
from mpc_tracker.core.data_types import ReferenceCoefficients, VehicleState
from mpc_tracker.core.indices import StateIdx, ActuatorIdx
from mpc_tracker.tracker.mpc_core.mpc_model import FGEvaluator, kinematic_step
from mpc_tracker.tracker.mpc_core.variable_layout import VariableLayout
from mpc_tracker.tests.fixtures import (
    create_test_config,
    create_reference_coefficients,
    create_consistent_state,
    pack_decision_vector,
)


def _settings(**mpc):
    return MPCSettings.from_config(create_test_config(mpc=mpc))


def _rollout(state, actuators, coeffs, settings):
    states = [state]
    for steering, accel in actuators:
        states.append(kinematic_step(states[-1], steering, accel, coeffs, settings))
    return states


@pytest.mark.parametrize('horizon', [2, 5, 10])
def test_output_sizes(horizon):
    settings = _settings(horizon=horizon)
    layout = VariableLayout(horizon)
    evaluator = FGEvaluator(create_reference_coefficients('curve'), layout, settings)

    cost, g = evaluator.evaluate(np.zeros(layout.n_vars))
    assert isinstance(cost, float)
    assert g.shape == (horizon * 6,)


def test_residuals_vanish_on_model_rollout():
    """Residuals are zero for t >= 1 and equal the state at t = 0"""
    settings = _settings(horizon=8)
    layout = VariableLayout(8)
    coeffs = create_reference_coefficients('curve')
    state = create_consistent_state(coeffs, v=15.0, y=-0.3, psi=0.05)

    actuators = [(0.2 * math.sin(t), 0.5 - 0.1 * t) for t in range(7)]
    states = _rollout(state, actuators, coeffs, settings)
    z = pack_decision_vector(layout, states, actuators)

    _, g = FGEvaluator(coeffs, layout, settings).evaluate(z)

    for field in StateIdx:
        assert g[layout.state_index(field, 0)] == pytest.approx(state.to_array()[field])
        for t in range(1, 8):
            assert abs(g[layout.state_index(field, t)]) < 1e-9


def test_residual_detects_model_mismatch():
    settings = _settings(horizon=3)
    layout = VariableLayout(3)
    coeffs = create_reference_coefficients('flat')
    state = VehicleState(v=10.0)
    states = _rollout(state, [(0.0, 0.0), (0.0, 0.0)], coeffs, settings)
    z = pack_decision_vector(layout, states, [(0.0, 0.0), (0.0, 0.0)])
    z[layout.state_index(StateIdx.Y, 2)] += 0.25

    _, g = FGEvaluator(coeffs, layout, settings).evaluate(z)
    assert g[layout.state_index(StateIdx.Y, 2)] == pytest.approx(0.25)


def test_zero_cost_on_reference_at_target_speed():
    settings = _settings(horizon=6, ref_v=30.0)
    layout = VariableLayout(6)
    coeffs = create_reference_coefficients('flat')
    actuators = [(0.0, 0.0)] * 5
    states = _rollout(VehicleState(v=30.0), actuators, coeffs, settings)

    cost, _ = FGEvaluator(coeffs, layout, settings).evaluate(
        pack_decision_vector(layout, states, actuators))
    assert cost == pytest.approx(0.0, abs=1e-12)


def test_speed_tracking_term():
    """All-zero vector: only (v - ref_v)^2 contributes"""
    settings = _settings(horizon=10)
    layout = VariableLayout(10)
    evaluator = FGEvaluator(create_reference_coefficients('flat'), layout, settings)

    cost, _ = evaluator.evaluate(np.zeros(layout.n_vars))
    assert cost == pytest.approx(10 * settings.ref_v ** 2)


def test_actuation_magnitude_and_smoothness_terms():
    settings = _settings(horizon=5)
    layout = VariableLayout(5)
    evaluator = FGEvaluator(create_reference_coefficients('flat'), layout, settings)

    z = np.zeros(layout.n_vars)
    z[layout.state_slice(StateIdx.V)] = settings.ref_v
    z[layout.actuator_index(ActuatorIdx.DELTA, 0)] = 0.1
    z[layout.actuator_index(ActuatorIdx.A, 1)] = 0.5

    cost, _ = evaluator.evaluate(z)
    w = settings.weights
    expected = (w.steering * 0.1 ** 2 + w.steering_rate * 0.1 ** 2
                + w.accel * 0.5 ** 2 + 2 * w.accel_rate * 0.5 ** 2)
    assert cost == pytest.approx(expected)


def test_tracking_weights_are_configurable():
    layout = VariableLayout(3)
    coeffs = create_reference_coefficients('flat')
    z = np.zeros(layout.n_vars)
    z[layout.state_slice(StateIdx.V)] = 100.0
    z[layout.state_index(StateIdx.CTE, 1)] = 1.0

    low = FGEvaluator(coeffs, layout, _settings(horizon=3)).evaluate(z)[0]
    high_settings = MPCSettings.from_config(
        create_test_config(mpc={'horizon': 3, 'weights': {'cte': 30000.0}}))
    high = FGEvaluator(coeffs, layout, high_settings).evaluate(z)[0]

    assert low == pytest.approx(3000.0)
    assert high == pytest.approx(30000.0)


@pytest.mark.parametrize('sign', [-1.0, 1.0])
def test_steering_sign_convention(sign):
    """steering_sign = -1: positive steering turns toward negative psi"""
    settings = MPCSettings.from_config(create_test_config(
        mpc={'horizon': 2}, vehicle={'steering_sign': sign}))
    layout = VariableLayout(2)
    evaluator = FGEvaluator(create_reference_coefficients('flat'), layout, settings)

    z = np.zeros(layout.n_vars)
    z[layout.state_index(StateIdx.V, 0)] = 10.0
    z[layout.actuator_index(ActuatorIdx.DELTA, 0)] = 0.1

    _, g = evaluator.evaluate(z)
    yaw_step = sign * 10.0 * 0.1 / settings.lf * settings.dt
    # psi1 = 0, so the residual is the negated model step
    assert g[layout.state_index(StateIdx.PSI, 1)] == pytest.approx(-yaw_step)
    assert g[layout.state_index(StateIdx.EPSI, 1)] == pytest.approx(-yaw_step)

    next_state = kinematic_step(VehicleState(v=10.0), 0.1, 0.0,
                                create_reference_coefficients('flat'), settings)
    assert math.copysign(1.0, next_state.psi) == sign


def test_desired_heading_uses_polynomial_slope():
    settings = _settings(horizon=2)
    layout = VariableLayout(2)
    coeffs = create_reference_coefficients('line', slope=0.2)
    evaluator = FGEvaluator(coeffs, layout, settings)

    _, g = evaluator.evaluate(np.zeros(layout.n_vars))
    # epsi1 = 0 - ((psi0 - atan(0.2)) + 0)
    assert g[layout.state_index(StateIdx.EPSI, 1)] == pytest.approx(math.atan(0.2))


def test_symbolic_evaluation_has_derivatives():
    settings = _settings(horizon=4)
    layout = VariableLayout(4)
    evaluator = FGEvaluator(create_reference_coefficients('curve'), layout, settings)

    x = ca.SX.sym('x', layout.n_vars)
    cost, g = evaluator(x)
    g = ca.vertcat(*g)

    assert ca.jacobian(g, x).shape == (layout.n_constraints, layout.n_vars)
    assert ca.gradient(cost, x).shape == (layout.n_vars, 1)


def test_with_coefficients_returns_new_evaluator():
    settings = _settings(horizon=3)
    layout = VariableLayout(3)
    flat = FGEvaluator(create_reference_coefficients('flat'), layout, settings)
    offset = flat.with_coefficients([1.0, 0.0, 0.0, 0.0])

    assert offset is not flat
    assert flat.coeffs == ReferenceCoefficients(0.0, 0.0, 0.0, 0.0)
    _, g = offset.evaluate(np.zeros(layout.n_vars))
    # cte1 = 0 - (f(0) - 0)
    assert g[layout.state_index(StateIdx.CTE, 1)] == pytest.approx(-1.0)


def test_evaluate_rejects_wrong_length():
    layout = VariableLayout(3)
    evaluator = FGEvaluator([0.0, 0.0, 0.0, 0.0], layout, _settings(horizon=3))
    with pytest.raises(ValueError):
        evaluator.evaluate(np.zeros(layout.n_vars + 1))


@pytest.mark.parametrize('coeffs', [[0.0, 1.0, 2.0], [0.0] * 5, []])
def test_coefficients_must_be_cubic(coeffs):
    with pytest.raises(ValueError):
        ReferenceCoefficients.from_array(coeffs)
    with pytest.raises(ValueError):
        FGEvaluator(coeffs, VariableLayout(3), _settings(horizon=3))
