"""Domain enums for the user-equipment Markov model.

Responsibilities:
  - Define the scheduling Action set and the random-event ParameterSymbol tags.

Invariants:
  - Action.order values are the action axis of the LP decision-variable index;
    they must remain stable and dense in 0..len(Action)-1.
"""

from __future__ import annotations

from enum import Enum


class Action(Enum):
    NoOperation = "NO_OPERATION"
    AddToCPU = "ADD_TO_CPU"
    AddToTransmissionUnit = "ADD_TO_TRANSMISSION_UNIT"
    AddToBothUnits = "ADD_TO_BOTH_UNITS"

    @property
    def order(self) -> int:
        return ACTION_ORDER[self]

    @classmethod
    def from_order(cls, order: int) -> "Action":
        for action in cls:
            if ACTION_ORDER[action] == order:
                return action
        raise ValueError(f"Unknown action order: {order}")


ACTION_ORDER: dict[Action, int] = {
    Action.NoOperation: 0,
    Action.AddToCPU: 1,
    Action.AddToTransmissionUnit: 2,
    Action.AddToBothUnits: 3,
}


# Elementary random events of one tick; numeric values are bound at evaluation time.
class ParameterSymbol(Enum):
    ALPHA = "ALPHA"
    ALPHA_C = "ALPHA_C"
    BETA = "BETA"
    BETA_C = "BETA_C"


_missing = [a for a in Action if a not in ACTION_ORDER]
if _missing:
    raise RuntimeError(f"Missing ACTION_ORDER for: {[m.value for m in _missing]}")

if sorted(ACTION_ORDER.values()) != list(range(len(Action))):
    raise RuntimeError("ACTION_ORDER must be dense in 0..len(Action)-1")
