from typing import Any, Dict
from collections import OrderedDict
import logging
import time

import casadi as ca
import numpy as np

from ...config.mpc_settings import MPCSettings
from ...core.constants import classify_return_status
from ...core.data_types import MPCBounds, SolverResult, NUM_COEFFICIENTS
from ...core.enums import SolverStatus
from .mpc_model import FGEvaluator

logger = logging.getLogger(__name__)


class MPCSolverManager:
    """
    Manages CasADi/IPOPT solver instances, including creation, caching, and
    the per-cycle solve call.

    The NLP graph is built once per (horizon, settings) with the coefficients
    as a symbolic parameter, so each cycle only passes new parameter values
    and bounds. CasADi derives exact gradients, Jacobians and Hessians and
    their sparsity patterns from the graph.
    """

    def __init__(self, settings: MPCSettings, model_name_base: str = 'mpc'):
        self.settings = settings
        self._model_name_base = model_name_base

        # Cache - OrderedDict for O(1) LRU
        self._solver_cache = OrderedDict()
        self._solver_cache_max_size = settings.solver_cache_max_size

    def solver_options(self) -> Dict[str, Any]:
        return {
            'ipopt.print_level': self.settings.print_level,
            'ipopt.sb': 'yes',
            'ipopt.tol': self.settings.tol,
            'ipopt.max_iter': self.settings.max_iter,
            # Hard per-cycle ceiling; exceeding it returns Maximum_CpuTime_Exceeded
            'ipopt.max_cpu_time': self.settings.max_cpu_time,
            # Return the solution inside the original bounds, not IPOPT's relaxed ones
            'ipopt.honor_original_bounds': 'yes',
            'print_time': False,
            'error_on_fail': False,
        }

    def get_solver(self, evaluator: FGEvaluator) -> Any:
        """Returns a cached solver for the evaluator's horizon and settings or creates one."""
        # Weights, dt and lf are baked into the graph, so they are part of the key
        key = (evaluator.layout.horizon, evaluator.settings)
        if key in self._solver_cache:
            self._solver_cache.move_to_end(key)
            return self._solver_cache[key]

        if len(self._solver_cache) >= self._solver_cache_max_size:
            (oldest_horizon, _), _ = self._solver_cache.popitem(last=False)
            logger.debug(f"Evicted MPC solver for horizon {oldest_horizon} from cache (LRU)")

        solver = self._create_solver(evaluator)
        self._solver_cache[key] = solver
        return solver

    def _create_solver(self, evaluator: FGEvaluator) -> Any:
        layout = evaluator.layout
        name = f'{self._model_name_base}_h{layout.horizon}'

        x = ca.SX.sym('z', layout.n_vars)
        p = ca.SX.sym('coeffs', NUM_COEFFICIENTS)
        cost, g = evaluator.with_coefficients(p)(x)

        nlp = {'x': x, 'p': p, 'f': cost, 'g': ca.vertcat(*g)}
        start = time.time()
        solver = ca.nlpsol(name, 'ipopt', nlp, self.solver_options())
        logger.info(
            f"Created IPOPT solver '{name}' ({layout.n_vars} vars, "
            f"{layout.n_constraints} constraints) in {(time.time() - start) * 1000:.1f} ms")
        return solver

    def solve(self, evaluator: FGEvaluator, x0: np.ndarray, bounds: MPCBounds) -> SolverResult:
        """
        Run one NLP solve.

        Never raises on solver failure; the outcome is reported through
        ``SolverResult.status``.
        """
        solver = self.get_solver(evaluator)
        start = time.time()
        try:
            sol = solver(
                x0=x0,
                p=evaluator.coeffs.to_array(),
                lbx=bounds.var_lower,
                ubx=bounds.var_upper,
                lbg=bounds.con_lower,
                ubg=bounds.con_upper,
            )
        except RuntimeError as e:
            # Evaluation errors (e.g. NaN in the initial point) surface as RuntimeError
            solve_time_ms = (time.time() - start) * 1000
            logger.error(f"IPOPT raised during solve: {e}")
            return SolverResult(
                status=SolverStatus.NUMERICAL_FAILURE,
                return_status=str(e),
                solve_time_ms=solve_time_ms,
            )
        solve_time_ms = (time.time() - start) * 1000

        stats = solver.stats()
        return_status = stats.get('return_status', 'Unknown')
        status = classify_return_status(return_status)
        iterations = int(stats.get('iter_count', 0))

        if not status.is_success:
            logger.debug(f"IPOPT returned '{return_status}' after {iterations} iterations")
            return SolverResult(
                status=status,
                return_status=return_status,
                iterations=iterations,
                solve_time_ms=solve_time_ms,
            )

        return SolverResult(
            status=status,
            return_status=return_status,
            x=np.array(sol['x'].full()).ravel(),
            objective=float(sol['f']),
            iterations=iterations,
            solve_time_ms=solve_time_ms,
        )

    @property
    def cached_horizons(self):
        return [horizon for horizon, _ in self._solver_cache]

    def clear_cache(self):
        """Clear the solver cache and release resources."""
        while self._solver_cache:
            self._solver_cache.popitem()
