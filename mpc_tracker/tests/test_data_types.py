"""数据类型测试"""
import numpy as np
import pytest

from mpc_tracker.core.data_types import (
    VehicleState, ReferenceCoefficients, MPCResult, SolverResult
)
from mpc_tracker.core.enums import SolverStatus
from mpc_tracker.core.exceptions import MPCSolveError


def test_vehicle_state_round_trip_order():
    state = VehicleState.from_array([1, 2, 3, 4, 5, 6])
    assert (state.x, state.y, state.psi, state.v, state.cte, state.epsi) == (1, 2, 3, 4, 5, 6)
    np.testing.assert_array_equal(state.to_array(), [1, 2, 3, 4, 5, 6])


def test_vehicle_state_wrong_length():
    with pytest.raises(ValueError):
        VehicleState.from_array([0.0] * 7)


def test_reference_polynomial_evaluation():
    coeffs = ReferenceCoefficients(1.0, 2.0, 3.0, 4.0)
    assert coeffs.evaluate(2.0) == pytest.approx(1 + 4 + 12 + 32)
    assert coeffs.slope(2.0) == pytest.approx(3 * 4 * 4 + 2 * 3 * 2 + 2)


def test_mpc_result_output_sequence():
    """[steering, throttle, x0, y0, x1, y1, ...]"""
    result = MPCResult(
        steering=-0.1, throttle=0.5,
        predicted_x=np.array([0.0, 1.0, 2.0]),
        predicted_y=np.array([0.0, 0.1, 0.3]),
    )
    assert result.predicted_path() == [0.0, 0.0, 1.0, 0.1, 2.0, 0.3]
    assert result.to_list() == [-0.1, 0.5, 0.0, 0.0, 1.0, 0.1, 2.0, 0.3]


def test_solve_error_carries_status():
    result = SolverResult(status=SolverStatus.TIME_EXCEEDED,
                          return_status='Maximum_CpuTime_Exceeded')
    error = MPCSolveError(result)
    assert error.status is SolverStatus.TIME_EXCEEDED
    assert error.result is result
    assert 'TIME_EXCEEDED' in str(error)
    assert not result.success
