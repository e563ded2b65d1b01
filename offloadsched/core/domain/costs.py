"""Per-tick delay and power accounting shared by the LP and the simulator."""

from __future__ import annotations

from .enums import Action
from .models import UserEquipmentState


def tasks_in_system(state: UserEquipmentState) -> int:
    return state.task_queue_length + int(not state.cpu_idle) + int(not state.tu_idle)


def busy_after_action(state: UserEquipmentState, action: Action) -> tuple[bool, bool]:
    cpu_busy = not state.cpu_idle or action in (Action.AddToCPU, Action.AddToBothUnits)
    tu_busy = not state.tu_idle or action in (Action.AddToTransmissionUnit, Action.AddToBothUnits)
    return cpu_busy, tu_busy


def tick_power(state: UserEquipmentState, action: Action, p_loc: float, p_tx: float) -> float:
    cpu_busy, tu_busy = busy_after_action(state, action)
    return p_loc * cpu_busy + p_tx * tu_busy
