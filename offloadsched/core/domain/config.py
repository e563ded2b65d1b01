"""System configuration for the single-device offloading model.

Responsibilities:
  - Hold capacities and per-tick probabilities/power figures as frozen values.
  - Enumerate the full state grid in decision-variable order.

Invariants:
  - Stable CPU states are 0..cpu_number_of_sections-1; the TU axis spans
    0..tu_number_of_packets inclusive.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from itertools import product

from .enums import Action
from .models import UserEquipmentState


@dataclass(frozen=True)
class UserEquipmentStateConfig:
    task_queue_capacity: int
    tu_number_of_packets: int
    cpu_number_of_sections: int

    def all_states(self) -> list[UserEquipmentState]:
        return [
            UserEquipmentState(task_queue_length=q, tu_state=t, cpu_state=c)
            for q, t, c in product(
                range(self.task_queue_capacity + 1),
                range(self.tu_number_of_packets + 1),
                range(self.cpu_number_of_sections),
            )
        ]

    @property
    def state_count(self) -> int:
        return (
            (self.task_queue_capacity + 1)
            * (self.tu_number_of_packets + 1)
            * self.cpu_number_of_sections
        )


@dataclass(frozen=True)
class OffloadingSystemConfig:
    task_queue_capacity: int
    tu_number_of_packets: int
    cpu_number_of_sections: int
    alpha: float
    beta: float
    eta: float = 0.0
    p_loc: float = 0.8
    p_tx: float = 1.0
    p_max: float = 1.0

    def __post_init__(self) -> None:
        if self.task_queue_capacity < 0:
            raise ValueError("task_queue_capacity must be >= 0")
        if self.tu_number_of_packets < 1:
            raise ValueError("tu_number_of_packets must be >= 1")
        if self.cpu_number_of_sections < 1:
            raise ValueError("cpu_number_of_sections must be >= 1")
        if not 0.0 < self.alpha <= 1.0:
            raise ValueError("alpha must be within (0, 1]")
        if not 0.0 < self.beta <= 1.0:
            raise ValueError("beta must be within (0, 1]")
        if self.eta < 0.0:
            raise ValueError("eta must be >= 0")
        if self.p_loc < 0.0 or self.p_tx < 0.0:
            raise ValueError("p_loc and p_tx must be >= 0")
        if self.p_max <= 0.0:
            raise ValueError("p_max must be > 0")

    @property
    def state_config(self) -> UserEquipmentStateConfig:
        return UserEquipmentStateConfig(
            task_queue_capacity=self.task_queue_capacity,
            tu_number_of_packets=self.tu_number_of_packets,
            cpu_number_of_sections=self.cpu_number_of_sections,
        )

    @property
    def all_actions(self) -> list[Action]:
        return sorted(Action, key=lambda a: a.order)

    @property
    def action_count(self) -> int:
        return len(Action)

    @property
    def variable_count(self) -> int:
        return self.state_config.state_count * self.action_count

    def with_eta(self, eta: float) -> "OffloadingSystemConfig":
        return replace(self, eta=eta)

    def with_alpha(self, alpha: float) -> "OffloadingSystemConfig":
        return replace(self, alpha=alpha)
