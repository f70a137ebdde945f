"""MPC 配置

模型预测控制器的配置参数：
- 预测时域 (horizon N) 与时间步长 (dt)
- 目标速度
- 代价函数权重

所有参数在进程启动时设置一次，求解过程中不可修改。
"""

MPC_CONFIG = {
    'horizon': 10,                # MPC 预测时域 N (>= 2)
    'dt': 0.1,                    # 时间步长 (秒) - 由仿真器决定
    'ref_v': 100.0,               # 目标速度

    # 代价函数权重
    'weights': {
        'cte': 3000.0,            # 横向误差权重
        'epsi': 2000.0,           # 航向误差权重
        'velocity': 1.0,          # 速度跟踪权重 (v - ref_v)^2
        # 执行器幅值权重 - 避免急转向/急加减速
        'steering': 5.0,
        'accel': 5.0,
        # 执行器变化率权重 - 相邻时间步之间的平滑性
        'steering_rate': 200.0,
        'accel_rate': 10.0,
    },
}

# MPC 配置验证规则: key -> (min, max, 描述)
MPC_VALIDATION_RULES = {
    'mpc.horizon': (2, 500, 'MPC 预测时域'),
    'mpc.dt': (0.0, None, 'MPC 时间步长 (秒)'),
    'mpc.ref_v': (None, None, '目标速度'),
    # MPC 权重 (必须为非负数)
    'mpc.weights.cte': (0.0, None, '横向误差权重'),
    'mpc.weights.epsi': (0.0, None, '航向误差权重'),
    'mpc.weights.velocity': (0.0, None, '速度跟踪权重'),
    'mpc.weights.steering': (0.0, None, '转向幅值权重'),
    'mpc.weights.accel': (0.0, None, '加速度幅值权重'),
    'mpc.weights.steering_rate': (0.0, None, '转向变化率权重'),
    'mpc.weights.accel_rate': (0.0, None, '加速度变化率权重'),
}
