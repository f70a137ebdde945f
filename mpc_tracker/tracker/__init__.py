"""轨迹跟踪控制器"""
from .mpc_controller import MPCController
