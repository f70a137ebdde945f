"""枚举类型定义"""
from enum import Enum, auto


class ControllerState(Enum):
    """单个控制周期内的控制器状态"""
    IDLE = auto()
    BUILDING = auto()
    SOLVING = auto()
    SUCCEEDED = auto()
    FAILED = auto()


class SolverStatus(Enum):
    """NLP 求解结果分类"""
    SUCCESS = auto()
    INFEASIBLE = auto()
    TIME_EXCEEDED = auto()
    NUMERICAL_FAILURE = auto()
    OTHER = auto()

    @property
    def is_success(self) -> bool:
        return self is SolverStatus.SUCCESS
