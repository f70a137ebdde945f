"""配置模块

提供统一的配置接口，支持：
- 默认配置 (DEFAULT_CONFIG)
- 配置验证 (validate_config)
- 不可变配置对象 (MPCSettings)
- YAML 配置加载 (load_config)

配置文件结构:
- mpc_config.py: 预测时域、时间步长、目标速度、代价权重
- vehicle_config.py: 车辆几何参数与执行器限制
- solver_config.py: IPOPT 求解器参数与时间预算
- default_config.py: 汇总配置与验证逻辑
- mpc_settings.py: 验证后冻结的配置对象

使用示例:
    from mpc_tracker.config import merge_with_defaults, MPCSettings

    config = merge_with_defaults({'mpc': {'horizon': 15}})
    settings = MPCSettings.from_config(config)
"""
from .default_config import (
    DEFAULT_CONFIG,
    CONFIG_VALIDATION_RULES,
    ConfigValidationError,
    validate_config,
    get_config_value,
    copy_default_config,
)
from .mpc_config import MPC_CONFIG
from .vehicle_config import VEHICLE_CONFIG
from .solver_config import SOLVER_CONFIG
from .mpc_settings import MPCSettings, CostWeights
from .utils import deep_update, merge_with_defaults, load_config

__all__ = [
    'DEFAULT_CONFIG',
    'CONFIG_VALIDATION_RULES',
    'ConfigValidationError',
    'validate_config',
    'get_config_value',
    'copy_default_config',
    'MPC_CONFIG',
    'VEHICLE_CONFIG',
    'SOLVER_CONFIG',
    'MPCSettings',
    'CostWeights',
    'deep_update',
    'merge_with_defaults',
    'load_config',
]
