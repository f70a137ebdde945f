from typing import Union

from ...core.indices import StateIdx, ActuatorIdx, NUM_STATES, NUM_ACTUATORS

FieldKey = Union[StateIdx, ActuatorIdx, int, str]


class VariableLayout:
    """
    Index arithmetic for the decision vector.

    State blocks (x, y, psi, v, cte, epsi) come first, each contiguous over
    all N steps, followed by the steering and acceleration blocks of N-1
    transitions each. Constraint rows share the state-block offsets.
    """

    def __init__(self, horizon: int):
        if not isinstance(horizon, int) or isinstance(horizon, bool):
            raise TypeError(f"horizon must be an int, got {type(horizon).__name__}")
        if horizon < 2:
            raise ValueError(f"horizon must be >= 2, got {horizon}")

        self._horizon = horizon
        self._state_starts = tuple(field * horizon for field in StateIdx)
        actuator_base = NUM_STATES * horizon
        self._actuator_starts = tuple(
            actuator_base + field * (horizon - 1) for field in ActuatorIdx)

    @property
    def horizon(self) -> int:
        return self._horizon

    @property
    def n_vars(self) -> int:
        return NUM_STATES * self._horizon + NUM_ACTUATORS * (self._horizon - 1)

    @property
    def n_constraints(self) -> int:
        return NUM_STATES * self._horizon

    @property
    def n_state_vars(self) -> int:
        return NUM_STATES * self._horizon

    def state_start(self, field: FieldKey) -> int:
        return self._state_starts[_as_state(field)]

    def actuator_start(self, field: FieldKey) -> int:
        return self._actuator_starts[_as_actuator(field)]

    def state_index(self, field: FieldKey, t: int) -> int:
        if not 0 <= t < self._horizon:
            raise IndexError(f"state timestep {t} out of range [0, {self._horizon})")
        return self.state_start(field) + t

    def actuator_index(self, field: FieldKey, t: int) -> int:
        if not 0 <= t < self._horizon - 1:
            raise IndexError(
                f"actuator timestep {t} out of range [0, {self._horizon - 1})")
        return self.actuator_start(field) + t

    def state_slice(self, field: FieldKey) -> slice:
        start = self.state_start(field)
        return slice(start, start + self._horizon)

    def actuator_slice(self, field: FieldKey) -> slice:
        start = self.actuator_start(field)
        return slice(start, start + self._horizon - 1)

    def __eq__(self, other):
        return isinstance(other, VariableLayout) and other._horizon == self._horizon

    def __hash__(self):
        return hash((VariableLayout, self._horizon))

    def __repr__(self):
        return (f"VariableLayout(horizon={self._horizon}, n_vars={self.n_vars}, "
                f"n_constraints={self.n_constraints})")


def _as_state(field: FieldKey) -> StateIdx:
    if isinstance(field, str):
        return StateIdx[field.upper()]
    return StateIdx(field)


def _as_actuator(field: FieldKey) -> ActuatorIdx:
    if isinstance(field, str):
        return ActuatorIdx[field.upper()]
    return ActuatorIdx(field)
