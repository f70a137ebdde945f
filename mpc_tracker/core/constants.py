"""
通用常量定义

本模块只包含不应由用户配置的常量:

1. 数值常量 (Numerical Constants)
   - EPSILON: 避免除零
   - IPOPT_INF: IPOPT 视为无穷大的边界阈值

2. 求解器返回状态映射 (Solver Status Mapping)
   - IPOPT 返回字符串 -> SolverStatus

可调参数 (权重、时域、时间预算等) 在 config/*.py 中定义。
"""
from .enums import SolverStatus

EPSILON = 1e-6

# IPOPT 将绝对值 >= 1e19 的边界视为无界 (nlp_lower_bound_inf / nlp_upper_bound_inf)
IPOPT_INF = 1.0e19

# =============================================================================
# IPOPT 返回状态映射
# CasADi 通过 solver.stats()['return_status'] 暴露 IPOPT 的 ApplicationReturnStatus
# =============================================================================
IPOPT_SUCCESS_STATUSES = frozenset({
    'Solve_Succeeded',
    'Solved_To_Acceptable_Level',
})

IPOPT_INFEASIBLE_STATUSES = frozenset({
    'Infeasible_Problem_Detected',
    'Not_Enough_Degrees_Of_Freedom',
})

IPOPT_TIME_EXCEEDED_STATUSES = frozenset({
    'Maximum_CpuTime_Exceeded',
    'Maximum_WallTime_Exceeded',
})

IPOPT_NUMERICAL_FAILURE_STATUSES = frozenset({
    'Invalid_Number_Detected',
    'Restoration_Failed',
    'Error_In_Step_Computation',
    'Diverging_Iterates',
    'Search_Direction_Becomes_Too_Small',
    'Insufficient_Memory',
    'Internal_Error',
    'Unrecoverable_Exception',
    'NonIpopt_Exception_Thrown',
})


def classify_return_status(return_status: str) -> SolverStatus:
    """Map an IPOPT return string onto a SolverStatus."""
    if return_status in IPOPT_SUCCESS_STATUSES:
        return SolverStatus.SUCCESS
    if return_status in IPOPT_INFEASIBLE_STATUSES:
        return SolverStatus.INFEASIBLE
    if return_status in IPOPT_TIME_EXCEEDED_STATUSES:
        return SolverStatus.TIME_EXCEEDED
    if return_status in IPOPT_NUMERICAL_FAILURE_STATUSES:
        return SolverStatus.NUMERICAL_FAILURE
    return SolverStatus.OTHER


__all__ = [
    'EPSILON',
    'IPOPT_INF',
    'IPOPT_SUCCESS_STATUSES',
    'IPOPT_INFEASIBLE_STATUSES',
    'IPOPT_TIME_EXCEEDED_STATUSES',
    'IPOPT_NUMERICAL_FAILURE_STATUSES',
    'classify_return_status',
]
