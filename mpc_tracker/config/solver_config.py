"""求解器配置

IPOPT (通过 CasADi nlpsol 调用) 的用户可调参数。

max_cpu_time 是每个控制周期的硬性 CPU 时间上限，超时视为求解失败，
不会无限阻塞调用方。
"""

SOLVER_CONFIG = {
    'max_cpu_time': 0.5,          # 单次求解 CPU 时间预算 (秒)
    'print_level': 0,             # IPOPT 输出级别 (0 = 静默)
    'tol': 1e-6,                  # 收敛容差
    'max_iter': 3000,             # 最大迭代次数
    'bound_inf': 1.0e19,          # 状态变量 "无界" 边界值
    'solver_cache_max_size': 2,   # 求解器缓存大小
}

SOLVER_VALIDATION_RULES = {
    'solver.max_cpu_time': (0.0, None, '求解 CPU 时间预算 (秒)'),
    'solver.print_level': (0, 12, 'IPOPT 输出级别'),
    'solver.tol': (0.0, None, '收敛容差'),
    'solver.max_iter': (1, None, '最大迭代次数'),
    'solver.bound_inf': (1.0, None, '无界边界值'),
    'solver.solver_cache_max_size': (1, 100, '求解器缓存大小'),
}
