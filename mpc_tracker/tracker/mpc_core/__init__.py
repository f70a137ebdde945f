"""MPC 问题构建与求解组件"""
from .variable_layout import VariableLayout
from .mpc_model import FGEvaluator, kinematic_step
from .bounds_builder import BoundsBuilder
from .solver_manager import MPCSolverManager
