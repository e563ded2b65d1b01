"""Domain models for device states and symbolic transitions.

Responsibilities:
  - Define immutable value types for device snapshots, decision indices,
    transitions and grouped edges.

Invariants:
  - Models are hashable value carriers with no behavior beyond derived flags.
  - A symbol list is one additive term of a transition probability: a product
    of ParameterSymbol factors tagged with the Action that produced it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .enums import Action, ParameterSymbol

Symbol = Union[ParameterSymbol, Action]


@dataclass(frozen=True)
class UserEquipmentState:
    task_queue_length: int
    tu_state: int
    cpu_state: int

    @property
    def tu_idle(self) -> bool:
        return self.tu_state == 0

    @property
    def cpu_idle(self) -> bool:
        return self.cpu_state == 0


@dataclass(frozen=True)
class Index:
    state: UserEquipmentState
    action: Action


@dataclass(frozen=True)
class Transition:
    source: UserEquipmentState
    dest: UserEquipmentState
    symbol_lists: tuple[tuple[Symbol, ...], ...]


@dataclass(frozen=True)
class Edge:
    dest: UserEquipmentState
    symbol_lists: tuple[tuple[Symbol, ...], ...]
