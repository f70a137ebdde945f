"""配置工具函数"""
from typing import Dict, Any, Optional
import collections.abc
import copy
import logging

import yaml

from .default_config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)


def deep_update(source: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    深度递归更新字典

    将 overrides 中的配置合并到 source 中。
    嵌套字典递归合并，而不是直接替换。

    Args:
        source: 基础配置字典 (原地修改，同时作为返回值)
        overrides: 覆盖配置字典

    Returns:
        Dict[str, Any]: 更新后的 source 字典
    """
    for key, value in overrides.items():
        if isinstance(value, collections.abc.Mapping) and value:
            target = source.get(key, {})
            if not isinstance(target, collections.abc.Mapping):
                target = {}
            source[key] = deep_update(target, value)
        else:
            source[key] = overrides[key]
    return source


def merge_with_defaults(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """在 DEFAULT_CONFIG 的深拷贝上合并覆盖配置"""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if overrides:
        deep_update(config, copy.deepcopy(overrides))
    return config


def load_config(path: str) -> Dict[str, Any]:
    """
    从 YAML 文件加载配置

    文件中只需包含需要覆盖的项，其余使用默认值，例如:

        mpc:
          horizon: 12
          weights:
            cte: 5000.0
        solver:
          max_cpu_time: 0.1
    """
    with open(path, 'r') as f:
        overrides = yaml.safe_load(f) or {}
    if not isinstance(overrides, dict):
        raise ValueError(f"Config file {path} must contain a mapping at top level")
    logger.info(f"Loaded MPC configuration overrides from {path}")
    return merge_with_defaults(overrides)
