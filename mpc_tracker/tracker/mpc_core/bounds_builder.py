from typing import Sequence, Union
import numpy as np

from ...config.mpc_settings import MPCSettings
from ...core.data_types import MPCBounds, VehicleState
from ...core.indices import StateIdx, ActuatorIdx
from .variable_layout import VariableLayout


class BoundsBuilder:
    """
    Variable and constraint bounds for one cycle.

    State variables are left effectively unbounded; the measured state is
    injected by pinning both constraint bounds of the six t=0 rows.
    """

    def __init__(self, layout: VariableLayout, settings: MPCSettings):
        self.layout = layout
        self.settings = settings

        # Variable bounds depend only on configuration
        n_vars = layout.n_vars
        self._var_lower = np.empty(n_vars)
        self._var_upper = np.empty(n_vars)

        delta_start = layout.actuator_start(ActuatorIdx.DELTA)
        a_start = layout.actuator_start(ActuatorIdx.A)

        self._var_lower[:delta_start] = -settings.bound_inf
        self._var_upper[:delta_start] = settings.bound_inf

        self._var_lower[layout.actuator_slice(ActuatorIdx.DELTA)] = -settings.steering_limit
        self._var_upper[layout.actuator_slice(ActuatorIdx.DELTA)] = settings.steering_limit

        self._var_lower[a_start:] = -settings.max_accel
        self._var_upper[a_start:] = settings.max_accel

    def build(self, state: Union[VehicleState, Sequence[float]]) -> MPCBounds:
        if not isinstance(state, VehicleState):
            state = VehicleState.from_array(state)
        measured = state.to_array()

        con_lower = np.zeros(self.layout.n_constraints)
        con_upper = np.zeros(self.layout.n_constraints)
        for field in StateIdx:
            row = self.layout.state_index(field, 0)
            con_lower[row] = measured[field]
            con_upper[row] = measured[field]

        return MPCBounds(
            var_lower=self._var_lower.copy(),
            var_upper=self._var_upper.copy(),
            con_lower=con_lower,
            con_upper=con_upper,
        )

    def initial_guess(self) -> np.ndarray:
        """All zeros; the equality rows enforce the initial state regardless."""
        return np.zeros(self.layout.n_vars)
