"""Markov-chain generator for the single-device offloading model.

Responsibilities:
  - Enumerate admissible actions per state.
  - Expand every (state, action) into its elementary random-event branches.
  - Group branches by destination into the per-state edge list.

Inputs/Outputs:
  - Inputs: UserEquipmentStateConfig (capacities only).
  - Outputs: DiscreteTimeMarkovChain with symbolic edges for every grid state.

Invariants:
  - For AddToBothUnits the CPU assignment is applied before the TU assignment.
  - The CPU advances exactly once per tick, after the action.
  - Arrival admission is judged on the queue at the start of the tick: a full
    queue yields no arrival branch. TU activity is judged after the action.
  - Edge terms are concatenated per destination, never overwritten.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..domain.config import UserEquipmentStateConfig
from ..domain.enums import Action, ParameterSymbol
from ..domain.models import Edge, Symbol, Transition, UserEquipmentState
from ..domain.state_manager import UserEquipmentStateManager


@dataclass(frozen=True)
class DiscreteTimeMarkovChain:
    state_config: UserEquipmentStateConfig
    adjacency_list: dict[UserEquipmentState, list[Edge]]


def admissible_actions(state: UserEquipmentState) -> list[Action]:
    res = [Action.NoOperation]

    if state.task_queue_length >= 1:
        if state.tu_idle:
            res.append(Action.AddToTransmissionUnit)
        if state.cpu_idle:
            res.append(Action.AddToCPU)

    if state.task_queue_length >= 2 and state.tu_idle and state.cpu_idle:
        res.append(Action.AddToBothUnits)

    return res


class DTMCCreator:
    def __init__(self, state_config: UserEquipmentStateConfig) -> None:
        self._state_config = state_config
        self._state_manager = UserEquipmentStateManager(state_config)

    def create(self) -> DiscreteTimeMarkovChain:
        adjacency_list = {
            state: self.unique_edges(state) for state in self._state_config.all_states()
        }
        return DiscreteTimeMarkovChain(
            state_config=self._state_config,
            adjacency_list=adjacency_list,
        )

    def unique_edges(self, state: UserEquipmentState) -> list[Edge]:
        grouped: dict[UserEquipmentState, list[tuple[Symbol, ...]]] = {}
        for action in admissible_actions(state):
            for transition in self.elementary_transitions(state, action):
                grouped.setdefault(transition.dest, []).extend(transition.symbol_lists)

        return [Edge(dest=dest, symbol_lists=tuple(terms)) for dest, terms in grouped.items()]

    def elementary_transitions(self, state: UserEquipmentState, action: Action) -> list[Transition]:
        manager = self._state_manager
        after_action = manager.apply_action(state, action)
        ticked = manager.advance_cpu_if_active(after_action)

        destinations: list[tuple[UserEquipmentState, tuple[Symbol, ...]]]
        if state.task_queue_length < self._state_config.task_queue_capacity:
            if ticked.tu_idle:
                destinations = [
                    (ticked, (ParameterSymbol.ALPHA_C, action)),
                    (manager.add_task(ticked), (ParameterSymbol.ALPHA, action)),
                ]
            else:
                delivered = manager.advance_tu(ticked)
                destinations = [
                    (ticked, (ParameterSymbol.ALPHA_C, ParameterSymbol.BETA_C, action)),
                    (manager.add_task(ticked), (ParameterSymbol.ALPHA, ParameterSymbol.BETA_C, action)),
                    (delivered, (ParameterSymbol.ALPHA_C, ParameterSymbol.BETA, action)),
                    (manager.add_task(delivered), (ParameterSymbol.ALPHA, ParameterSymbol.BETA, action)),
                ]
        else:
            if ticked.tu_idle:
                destinations = [(ticked, (action,))]
            else:
                destinations = [
                    (ticked, (ParameterSymbol.BETA_C, action)),
                    (manager.advance_tu(ticked), (ParameterSymbol.BETA, action)),
                ]

        return [
            Transition(source=state, dest=dest, symbol_lists=(symbols,))
            for dest, symbols in destinations
        ]
