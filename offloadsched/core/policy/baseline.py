"""Deterministic baseline scheduling rules.

Responsibilities:
  - Map a state directly to one admissible action.
Must not:
  - Fail on any state of the grid; every rule is total.
"""

from __future__ import annotations

from typing import Callable

from ..domain.config import OffloadingSystemConfig
from ..domain.enums import Action
from ..domain.models import UserEquipmentState
from .ports import Policy


class LocalOnlyPolicy:
    def __init__(self, system_config: OffloadingSystemConfig | None = None) -> None:
        self.system_config = system_config

    def get_action_for_state(self, state: UserEquipmentState) -> Action:
        if state.cpu_idle and state.task_queue_length > 0:
            return Action.AddToCPU
        return Action.NoOperation


class TransmitOnlyPolicy:
    def __init__(self, system_config: OffloadingSystemConfig | None = None) -> None:
        self.system_config = system_config

    def get_action_for_state(self, state: UserEquipmentState) -> Action:
        if state.tu_idle and state.task_queue_length > 0:
            return Action.AddToTransmissionUnit
        return Action.NoOperation


class GreedyLocalFirstPolicy:
    def __init__(self, system_config: OffloadingSystemConfig | None = None) -> None:
        self.system_config = system_config

    def get_action_for_state(self, state: UserEquipmentState) -> Action:
        can_run_locally = state.cpu_idle
        can_transmit = state.tu_idle

        if can_run_locally and can_transmit and state.task_queue_length >= 2:
            return Action.AddToBothUnits
        elif can_run_locally and state.task_queue_length >= 1:
            return Action.AddToCPU
        elif can_transmit and state.task_queue_length >= 1:
            return Action.AddToTransmissionUnit
        return Action.NoOperation


class GreedyOffloadFirstPolicy:
    def __init__(self, system_config: OffloadingSystemConfig | None = None) -> None:
        self.system_config = system_config

    def get_action_for_state(self, state: UserEquipmentState) -> Action:
        can_run_locally = state.cpu_idle
        can_transmit = state.tu_idle

        if can_run_locally and can_transmit and state.task_queue_length >= 2:
            return Action.AddToBothUnits
        elif can_transmit and state.task_queue_length >= 1:
            return Action.AddToTransmissionUnit
        elif can_run_locally and state.task_queue_length >= 1:
            return Action.AddToCPU
        return Action.NoOperation


def decision_from_policy(policy: Policy, state: UserEquipmentState) -> Callable[[Action], float]:
    """0/1 decision function for symbolic substitution at one state."""
    chosen = policy.get_action_for_state(state)
    return lambda action: 1.0 if action == chosen else 0.0
