"""默认配置与配置验证"""
from typing import Dict, Any, List, Optional, Tuple
import copy
import logging
import math

from .mpc_config import MPC_CONFIG, MPC_VALIDATION_RULES
from .vehicle_config import VEHICLE_CONFIG, VEHICLE_VALIDATION_RULES
from .solver_config import SOLVER_CONFIG, SOLVER_VALIDATION_RULES

logger = logging.getLogger(__name__)


class ConfigValidationError(ValueError):
    """配置验证错误"""
    pass


DEFAULT_CONFIG = {
    'mpc': MPC_CONFIG,
    'vehicle': VEHICLE_CONFIG,
    'solver': SOLVER_CONFIG,
}

CONFIG_VALIDATION_RULES = {
    **MPC_VALIDATION_RULES,
    **VEHICLE_VALIDATION_RULES,
    **SOLVER_VALIDATION_RULES,
}

# 必须为整数的配置项
_INTEGER_KEYS = ('mpc.horizon', 'solver.max_iter', 'solver.print_level',
                 'solver.solver_cache_max_size')

_MISSING = object()


def get_config_value(config: Dict[str, Any], key_path: str, default: Any = None,
                     fallback_config: Optional[Dict[str, Any]] = None) -> Any:
    """从配置字典中获取值，支持点分隔的路径

    缺失时依次查找 fallback_config 和 default。
    """
    value = _lookup(config, key_path)
    if value is not _MISSING:
        return value
    if fallback_config is not None:
        value = _lookup(fallback_config, key_path)
        if value is not _MISSING:
            return value
    return default


def _lookup(config: Dict[str, Any], key_path: str) -> Any:
    value = config
    for key in key_path.split('.'):
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return _MISSING
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(config: Dict[str, Any],
                    raise_on_error: bool = True) -> List[Tuple[str, str]]:
    """
    验证配置

    缺失的配置项使用 DEFAULT_CONFIG 中的值。

    Args:
        config: 配置字典
        raise_on_error: 存在错误时是否抛出 ConfigValidationError

    Returns:
        错误列表 [(key, message), ...]
    """
    if not isinstance(config, dict):
        errors = [('', f"configuration must be a dictionary, got {type(config).__name__}")]
        if raise_on_error:
            raise ConfigValidationError(errors[0][1])
        return errors

    errors: List[Tuple[str, str]] = []

    for key, (min_val, max_val, desc) in CONFIG_VALIDATION_RULES.items():
        value = get_config_value(config, key, fallback_config=DEFAULT_CONFIG)
        if not _is_number(value):
            errors.append((key, f"{desc} type error: expected number, got {type(value).__name__}"))
            continue
        # NaN 与任何数比较都为 False, 范围检查无法拦截
        if not math.isfinite(value):
            errors.append((key, f"{desc} must be finite, got {value}"))
            continue
        if key in _INTEGER_KEYS and int(value) != value:
            errors.append((key, f"{desc} must be an integer, got {value}"))
            continue
        if min_val is not None and value < min_val:
            errors.append((key, f"{desc} value {value} is below minimum {min_val}"))
        if max_val is not None and value > max_val:
            errors.append((key, f"{desc} value {value} is above maximum {max_val}"))

    errors.extend(_validate_logical_consistency(config))

    if errors:
        message = '; '.join(f"{key}: {msg}" for key, msg in errors)
        if raise_on_error:
            raise ConfigValidationError(f"Invalid configuration: {message}")
        logger.warning(f"Configuration has {len(errors)} error(s): {message}")
    else:
        logger.debug("Configuration validation passed.")
    return errors


def _validate_logical_consistency(config: Dict[str, Any]) -> List[Tuple[str, str]]:
    """严格为正的参数与符号约定检查 (范围规则只支持闭区间)"""
    errors = []
    for key in ('mpc.dt', 'vehicle.lf', 'solver.max_cpu_time', 'solver.tol'):
        value = get_config_value(config, key, fallback_config=DEFAULT_CONFIG)
        if _is_number(value) and value <= 0:
            errors.append((key, f"must be strictly positive, got {value}"))

    sign = get_config_value(config, 'vehicle.steering_sign', fallback_config=DEFAULT_CONFIG)
    if _is_number(sign) and sign not in (-1, 1):
        errors.append(('vehicle.steering_sign', f"must be -1 or 1, got {sign}"))
    return errors


def copy_default_config() -> Dict[str, Any]:
    """返回 DEFAULT_CONFIG 的深拷贝"""
    return copy.deepcopy(DEFAULT_CONFIG)
