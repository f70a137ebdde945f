"""核心模块"""
from .enums import ControllerState, SolverStatus
from .indices import StateIdx, ActuatorIdx, STATE_FIELDS, ACTUATOR_FIELDS
from .data_types import (
    VehicleState, ReferenceCoefficients, MPCBounds, SolverResult, MPCResult
)
from .exceptions import MPCSolveError
from .constants import classify_return_status
