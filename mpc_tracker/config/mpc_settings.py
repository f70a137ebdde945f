"""
Immutable MPC settings

The nested config dict is validated once and frozen into ``MPCSettings``,
which is then shared by the variable layout, the cost model, the bounds
builder and the solver manager. Nothing mutates it during a solve.
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .default_config import DEFAULT_CONFIG, get_config_value, validate_config


@dataclass(frozen=True)
class CostWeights:
    cte: float = 3000.0
    epsi: float = 2000.0
    velocity: float = 1.0
    steering: float = 5.0
    accel: float = 5.0
    steering_rate: float = 200.0
    accel_rate: float = 10.0


@dataclass(frozen=True)
class MPCSettings:
    horizon: int = 10
    dt: float = 0.1
    ref_v: float = 100.0
    lf: float = 2.67
    steering_sign: float = -1.0
    max_steering: float = 0.436332
    max_accel: float = 1.0
    max_cpu_time: float = 0.5
    print_level: int = 0
    tol: float = 1e-6
    max_iter: int = 3000
    bound_inf: float = 1.0e19
    solver_cache_max_size: int = 2
    weights: CostWeights = CostWeights()

    def __post_init__(self):
        # Settings built directly (not via from_config) get the same checks
        validate_config(self.to_config(), raise_on_error=True)

    @property
    def steering_limit(self) -> float:
        """Steering bound in the model's internal units (max_steering * lf)."""
        return self.max_steering * self.lf

    def to_config(self) -> Dict[str, Any]:
        """Nested config dict equivalent to these settings."""
        return {
            'mpc': {
                'horizon': self.horizon,
                'dt': self.dt,
                'ref_v': self.ref_v,
                'weights': asdict(self.weights),
            },
            'vehicle': {
                'lf': self.lf,
                'steering_sign': self.steering_sign,
                'max_steering': self.max_steering,
                'max_accel': self.max_accel,
            },
            'solver': {
                'max_cpu_time': self.max_cpu_time,
                'print_level': self.print_level,
                'tol': self.tol,
                'max_iter': self.max_iter,
                'bound_inf': self.bound_inf,
                'solver_cache_max_size': self.solver_cache_max_size,
            },
        }

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> 'MPCSettings':
        """Validate a (possibly partial) config dict and freeze it.

        Raises:
            ConfigValidationError: if any value is out of range.
        """
        config = config if config is not None else DEFAULT_CONFIG
        validate_config(config, raise_on_error=True)

        def get(key):
            return get_config_value(config, key, fallback_config=DEFAULT_CONFIG)

        weights = CostWeights(**{
            name: float(get(f'mpc.weights.{name}'))
            for name in CostWeights.__dataclass_fields__
        })
        return cls(
            horizon=int(get('mpc.horizon')),
            dt=float(get('mpc.dt')),
            ref_v=float(get('mpc.ref_v')),
            lf=float(get('vehicle.lf')),
            steering_sign=float(get('vehicle.steering_sign')),
            max_steering=float(get('vehicle.max_steering')),
            max_accel=float(get('vehicle.max_accel')),
            max_cpu_time=float(get('solver.max_cpu_time')),
            print_level=int(get('solver.print_level')),
            tol=float(get('solver.tol')),
            max_iter=int(get('solver.max_iter')),
            bound_inf=float(get('solver.bound_inf')),
            solver_cache_max_size=int(get('solver.solver_cache_max_size')),
            weights=weights,
        )
