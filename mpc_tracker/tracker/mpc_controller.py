"""MPC 路径跟踪控制器

每个控制周期: 构建问题 (变量布局、初始猜测、边界) -> 求解 -> 提取第一组执行器指令与预测轨迹。
求解失败时抛出 MPCSolveError，不做重试，也不替换为默认指令 (回退策略由调用方决定)。
"""
from typing import Any, Dict, List, Optional, Sequence, Union
import logging
import os
import time

import numpy as np

from ..config.mpc_settings import MPCSettings
from ..core.data_types import (
    VehicleState, ReferenceCoefficients, MPCResult, SolverResult
)
from ..core.enums import ControllerState
from ..core.exceptions import MPCSolveError
from ..core.indices import StateIdx, ActuatorIdx

from .mpc_core.variable_layout import VariableLayout
from .mpc_core.mpc_model import FGEvaluator, kinematic_step
from .mpc_core.bounds_builder import BoundsBuilder
from .mpc_core.solver_manager import MPCSolverManager

logger = logging.getLogger(__name__)

StateLike = Union[VehicleState, Sequence[float], np.ndarray]
CoeffsLike = Union[ReferenceCoefficients, Sequence[float], np.ndarray]


class MPCController:
    """MPC 路径跟踪控制器

    Holds only immutable configuration across cycles. One synchronous solve
    per call; use one instance per vehicle.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 settings: Optional[MPCSettings] = None):
        # Rejects invalid N, dt, lf or time budget before any solve is attempted
        self.settings = settings if settings is not None else MPCSettings.from_config(config)

        self.layout = VariableLayout(self.settings.horizon)
        self.bounds_builder = BoundsBuilder(self.layout, self.settings)

        self._model_name_base = f"mpc_tracker_pid{os.getpid()}_id{id(self)}"
        self.solver_manager = MPCSolverManager(self.settings, self._model_name_base)

        self._state = ControllerState.IDLE
        self._state_history: List[ControllerState] = []

        self._cycle_count = 0
        self._failure_count = 0
        self._last_result: Optional[SolverResult] = None

        logger.info(
            f"MPCController initialized: horizon={self.settings.horizon}, "
            f"dt={self.settings.dt}, lf={self.settings.lf}, "
            f"max_cpu_time={self.settings.max_cpu_time}s")

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def state_history(self) -> List[ControllerState]:
        """States visited during the most recent cycle."""
        return list(self._state_history)

    def _transition(self, new_state: ControllerState) -> None:
        logger.debug(f"MPCController: {self._state.name} -> {new_state.name}")
        self._state = new_state
        self._state_history.append(new_state)

    def make_evaluator(self, coeffs: CoeffsLike) -> FGEvaluator:
        return FGEvaluator(coeffs, self.layout, self.settings)

    def solve(self, state: StateLike, coeffs: CoeffsLike) -> MPCResult:
        """
        Run one receding-horizon cycle.

        Args:
            state: (x, y, psi, v, cte, epsi)
            coeffs: cubic reference polynomial (c0, c1, c2, c3)

        Returns:
            MPCResult with the first transition's actuators and the predicted path

        Raises:
            ValueError: malformed state or coefficients
            MPCSolveError: solver did not return a usable solution
        """
        # Input validation happens before the state machine leaves IDLE
        if not isinstance(state, VehicleState):
            state = VehicleState.from_array(state)
        if not isinstance(coeffs, ReferenceCoefficients):
            coeffs = ReferenceCoefficients.from_array(coeffs)

        self._state_history = []
        self._cycle_count += 1
        start_time = time.time()

        try:
            self._transition(ControllerState.BUILDING)
            evaluator = self.make_evaluator(coeffs)
            bounds = self.bounds_builder.build(state)
            x0 = self.bounds_builder.initial_guess()

            self._transition(ControllerState.SOLVING)
            result = self.solver_manager.solve(evaluator, x0, bounds)
            self._last_result = result

            if not result.success:
                self._transition(ControllerState.FAILED)
                self._failure_count += 1
                logger.warning(
                    f"MPC solve failed with status {result.status.name} "
                    f"('{result.return_status}') after {result.solve_time_ms:.1f} ms")
                raise MPCSolveError(result)

            self._transition(ControllerState.SUCCEEDED)
            output = self._extract(result)
            output.solve_time_ms = (time.time() - start_time) * 1000
            logger.debug(
                f"MPC cycle {self._cycle_count}: steering={output.steering:.4f}, "
                f"throttle={output.throttle:.4f}, {result.iterations} iterations, "
                f"{output.solve_time_ms:.1f} ms")
            return output
        finally:
            self._transition(ControllerState.IDLE)

    def compute(self, state: StateLike, coeffs: CoeffsLike) -> List[float]:
        """[steering, throttle, x0, y0, x1, y1, ...] for the next N-1 steps."""
        return self.solve(state, coeffs).to_list()

    def _extract(self, result: SolverResult) -> MPCResult:
        layout = self.layout
        x = result.x
        n_path = layout.horizon - 1
        x_start = layout.state_start(StateIdx.X)
        y_start = layout.state_start(StateIdx.Y)

        return MPCResult(
            steering=float(x[layout.actuator_index(ActuatorIdx.DELTA, 0)]),
            throttle=float(x[layout.actuator_index(ActuatorIdx.A, 0)]),
            predicted_x=x[x_start:x_start + n_path].copy(),
            predicted_y=x[y_start:y_start + n_path].copy(),
            objective=result.objective,
            solution=x,
            extras={
                'iterations': result.iterations,
                'return_status': result.return_status,
                'nlp_solve_time_ms': result.solve_time_ms,
            },
        )

    def rollout(self, state: StateLike, coeffs: CoeffsLike,
                actuators: Sequence[Sequence[float]]) -> List[VehicleState]:
        """
        Forward-simulate (steering, accel) pairs with the prediction model.

        Returns the visited states, starting with ``state``.
        """
        if not isinstance(state, VehicleState):
            state = VehicleState.from_array(state)
        if not isinstance(coeffs, ReferenceCoefficients):
            coeffs = ReferenceCoefficients.from_array(coeffs)

        states = [state]
        for steering, accel in actuators:
            state = kinematic_step(state, steering, accel, coeffs, self.settings)
            states.append(state)
        return states

    def get_health_metrics(self) -> Dict[str, Any]:
        last = self._last_result
        return {
            'state': self._state.name,
            'horizon': self.settings.horizon,
            'cycle_count': self._cycle_count,
            'failure_count': self._failure_count,
            'last_status': last.status.name if last else None,
            'last_return_status': last.return_status if last else None,
            'last_iterations': last.iterations if last else 0,
            'last_solve_time_ms': last.solve_time_ms if last else 0.0,
            'last_objective': last.objective if last else float('nan'),
            'cached_solvers': self.solver_manager.cached_horizons,
        }

    def shutdown(self) -> None:
        self.solver_manager.clear_cache()
        self._state = ControllerState.IDLE
