"""Elementary state-transition primitives.

Each method applies exactly one physical effect to a state and returns the new
state. Preconditions are enforced; a violation is a caller bug and raises
IllegalActionError.
"""

from __future__ import annotations

from dataclasses import replace

from .config import UserEquipmentStateConfig
from .enums import Action
from .errors import IllegalActionError
from .models import UserEquipmentState


class UserEquipmentStateManager:
    def __init__(self, state_config: UserEquipmentStateConfig) -> None:
        self._config = state_config

    def add_to_cpu(self, state: UserEquipmentState) -> UserEquipmentState:
        if state.task_queue_length < 1:
            raise IllegalActionError(f"Cannot add to CPU with empty queue: {state}")
        if not state.cpu_idle:
            raise IllegalActionError(f"Cannot add to busy CPU: {state}")
        return replace(
            state,
            task_queue_length=state.task_queue_length - 1,
            cpu_state=self._config.cpu_number_of_sections,
        )

    def add_to_transmission_unit(self, state: UserEquipmentState) -> UserEquipmentState:
        if state.task_queue_length < 1:
            raise IllegalActionError(f"Cannot add to TU with empty queue: {state}")
        if not state.tu_idle:
            raise IllegalActionError(f"Cannot add to busy TU: {state}")
        return replace(
            state,
            task_queue_length=state.task_queue_length - 1,
            tu_state=self._config.tu_number_of_packets,
        )

    def advance_cpu_if_active(self, state: UserEquipmentState) -> UserEquipmentState:
        if state.cpu_idle:
            return state
        return replace(state, cpu_state=state.cpu_state - 1)

    def advance_tu(self, state: UserEquipmentState) -> UserEquipmentState:
        if state.tu_idle:
            raise IllegalActionError(f"Cannot advance idle TU: {state}")
        return replace(state, tu_state=state.tu_state - 1)

    def add_task(self, state: UserEquipmentState) -> UserEquipmentState:
        if state.task_queue_length >= self._config.task_queue_capacity:
            raise IllegalActionError(f"Cannot enqueue into full queue: {state}")
        return replace(state, task_queue_length=state.task_queue_length + 1)

    def apply_action(self, state: UserEquipmentState, action: Action) -> UserEquipmentState:
        """Resource-assignment effect of an action; CPU is assigned before TU for AddToBothUnits."""
        if action == Action.NoOperation:
            return state
        if action == Action.AddToCPU:
            return self.add_to_cpu(state)
        if action == Action.AddToTransmissionUnit:
            return self.add_to_transmission_unit(state)
        if action == Action.AddToBothUnits:
            if state.task_queue_length < 2:
                raise IllegalActionError(f"AddToBothUnits needs at least two queued tasks: {state}")
            return self.add_to_transmission_unit(self.add_to_cpu(state))
        raise IllegalActionError(f"Unknown action: {action}")
