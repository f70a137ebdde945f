"""
测试夹具模块

包含测试数据生成器 (车辆状态、参考多项式系数、配置、决策向量)。

此模块仅用于测试，不应在生产代码中使用。
"""

from .data_generator import (
    create_test_config,
    create_test_state,
    create_reference_coefficients,
    create_consistent_state,
    pack_decision_vector,
)

__all__ = [
    'create_test_config',
    'create_test_state',
    'create_reference_coefficients',
    'create_consistent_state',
    'pack_decision_vector',
]
