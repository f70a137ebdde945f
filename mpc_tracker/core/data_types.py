"""数据类型定义"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
import numpy as np

from .enums import SolverStatus
from .indices import NUM_STATES

NUM_COEFFICIENTS = 4


@dataclass(frozen=True)
class VehicleState:
    """车辆状态 (x, y, psi, v, cte, epsi), 与参考多项式同一坐标系"""
    x: float = 0.0
    y: float = 0.0
    psi: float = 0.0
    v: float = 0.0
    cte: float = 0.0
    epsi: float = 0.0

    @classmethod
    def from_array(cls, values: Sequence[float]) -> 'VehicleState':
        values = np.asarray(values, dtype=float).ravel()
        if values.size != NUM_STATES:
            raise ValueError(
                f"Vehicle state must have {NUM_STATES} elements, got {values.size}")
        return cls(*(float(v) for v in values))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.psi, self.v, self.cte, self.epsi])


@dataclass(frozen=True)
class ReferenceCoefficients:
    """三次参考多项式系数 f(x) = c0 + c1*x + c2*x^2 + c3*x^3"""
    c0: float
    c1: float
    c2: float
    c3: float

    @classmethod
    def from_array(cls, values: Sequence[float]) -> 'ReferenceCoefficients':
        values = np.asarray(values, dtype=float).ravel()
        if values.size != NUM_COEFFICIENTS:
            raise ValueError(
                f"Reference polynomial must have exactly {NUM_COEFFICIENTS} "
                f"coefficients (cubic fit), got {values.size}")
        return cls(*(float(v) for v in values))

    def to_array(self) -> np.ndarray:
        return np.array([self.c0, self.c1, self.c2, self.c3])

    def evaluate(self, x):
        """Polynomial value at x. Works on floats and CasADi symbols alike."""
        return self.c0 + self.c1 * x + self.c2 * x * x + self.c3 * x * x * x

    def slope(self, x):
        return 3 * self.c3 * x * x + 2 * self.c2 * x + self.c1


@dataclass
class MPCBounds:
    """变量上下界与约束上下界"""
    var_lower: np.ndarray
    var_upper: np.ndarray
    con_lower: np.ndarray
    con_upper: np.ndarray


@dataclass
class SolverResult:
    """一次 NLP 求解的原始结果"""
    status: SolverStatus
    return_status: str = ''
    x: Optional[np.ndarray] = None
    objective: float = float('nan')
    iterations: int = 0
    solve_time_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.status.is_success


@dataclass
class MPCResult:
    """一个控制周期的输出

    predicted_x / predicted_y cover timesteps 0..N-2.
    """
    steering: float
    throttle: float
    predicted_x: np.ndarray
    predicted_y: np.ndarray
    objective: float = float('nan')
    solve_time_ms: float = 0.0
    solution: Optional[np.ndarray] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    def predicted_path(self) -> List[float]:
        """Interleaved (x0, y0, x1, y1, ...)."""
        path = np.empty(2 * len(self.predicted_x))
        path[0::2] = self.predicted_x
        path[1::2] = self.predicted_y
        return path.tolist()

    def to_list(self) -> List[float]:
        """[steering, throttle, x0, y0, x1, y1, ...]"""
        return [float(self.steering), float(self.throttle)] + self.predicted_path()
