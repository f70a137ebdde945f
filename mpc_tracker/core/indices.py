"""决策向量字段索引定义

决策向量按块排列 (不是按时间步交错):
    [x_0..x_{N-1}, y_0..y_{N-1}, psi_..., v_..., cte_..., epsi_...,
     delta_0..delta_{N-2}, a_0..a_{N-2}]
"""
from enum import IntEnum


class StateIdx(IntEnum):
    """状态块顺序 (同时也是 VehicleState 的字段顺序)"""
    X = 0           # 位置 X
    Y = 1           # 位置 Y
    PSI = 2         # 航向角
    V = 3           # 速度
    CTE = 4         # 横向误差 (cross-track error)
    EPSI = 5        # 航向误差


class ActuatorIdx(IntEnum):
    """执行器块顺序, 紧接在状态块之后"""
    DELTA = 0       # 转向
    A = 1           # 加速度 (油门/刹车)


STATE_FIELDS = tuple(StateIdx)
ACTUATOR_FIELDS = tuple(ActuatorIdx)

NUM_STATES = len(STATE_FIELDS)
NUM_ACTUATORS = len(ACTUATOR_FIELDS)
