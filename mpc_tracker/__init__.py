"""
MPC 路径跟踪控制器 (MPC Tracker)

版本: v1.0.0

基于非线性模型预测控制 (NMPC) 的车辆路径跟踪核心。

特性:
- 运动学自行车模型 + 三次多项式参考路径
- 代价函数: 横向误差、航向误差、速度跟踪、执行器幅值与平滑性，权重全部可配置
- CasADi 自动微分 + IPOPT 内点法求解，单周期 CPU 时间硬上限
- 失败显式上报 (MPCSolveError)，不自动重试，不替换默认指令

使用示例:
    from mpc_tracker import MPCController, merge_with_defaults

    controller = MPCController(merge_with_defaults({'mpc': {'ref_v': 40.0}}))
    steering, throttle, *path = controller.compute(
        [0.0, 0.0, 0.0, 40.0, 0.5, 0.0], [0.0, 0.0, 0.0, 0.0])
"""

__version__ = "1.0.0"

from .tracker.mpc_controller import MPCController
from .config import (
    DEFAULT_CONFIG, MPCSettings, CostWeights, ConfigValidationError,
    validate_config, get_config_value, merge_with_defaults, load_config
)
from .core.enums import ControllerState, SolverStatus
from .core.data_types import (
    VehicleState, ReferenceCoefficients, MPCBounds, SolverResult, MPCResult
)
from .core.exceptions import MPCSolveError

__all__ = [
    '__version__',
    # 控制器
    'MPCController',
    # 配置
    'DEFAULT_CONFIG', 'MPCSettings', 'CostWeights', 'ConfigValidationError',
    'validate_config', 'get_config_value', 'merge_with_defaults', 'load_config',
    # 枚举
    'ControllerState', 'SolverStatus',
    # 数据类型
    'VehicleState', 'ReferenceCoefficients', 'MPCBounds', 'SolverResult', 'MPCResult',
    # 异常
    'MPCSolveError',
]
