"""车辆配置

运动学自行车模型的几何参数与执行器限制。

lf:
    质心到前轴的等效距离。通过在仿真器中以固定转角和速度绕圈，
    调整 lf 直到模型转弯半径与实测半径一致得到。

steering_sign:
    转向符号约定。-1.0 表示正的转向输入使航向角向负方向变化
    (仿真器中右转为正)。必须与执行器的符号约定一致，
    否则控制器会稳定地朝错误方向转向。

max_steering:
    转向角限制 (弧度)，0.436332 rad ≈ 25°。实际变量上下界为 max_steering * lf。

max_accel:
    归一化油门/刹车范围 [-max_accel, max_accel]。
"""

VEHICLE_CONFIG = {
    'lf': 2.67,
    'steering_sign': -1.0,
    'max_steering': 0.436332,
    'max_accel': 1.0,
}

VEHICLE_VALIDATION_RULES = {
    'vehicle.lf': (0.0, None, '质心到前轴距离 (m)'),
    'vehicle.steering_sign': (-1.0, 1.0, '转向符号约定'),
    'vehicle.max_steering': (0.0, 3.2, '最大转向角 (rad)'),
    'vehicle.max_accel': (0.0, None, '最大归一化加速度'),
}
