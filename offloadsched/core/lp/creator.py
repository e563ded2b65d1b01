"""Linear program over joint stationary (state, action) probabilities.

Responsibilities:
  - Build one pulp problem per system configuration (eta included).
  - Expose delay and power coefficient vectors in decision-variable order.

Inputs/Outputs:
  - Inputs: OffloadingSystemConfig; the symbolic chain from DTMCCreator.
  - Outputs: OffloadingLinearProgram consumed by an LPSolver.

Invariants:
  - Variable i corresponds to decode_index(i); inadmissible pairs are pinned to 0.
  - Balance rows use the environment coefficient of each term (decision left
    symbolic) and route it to the variable of the term's action tag.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np
import pulp

from ..domain.config import OffloadingSystemConfig
from ..domain.costs import tasks_in_system, tick_power
from ..domain.models import Index, UserEquipmentState
from ..dtmc.creator import DTMCCreator, DiscreteTimeMarkovChain, admissible_actions
from ..dtmc.symbols import action_of, evaluate_symbols
from .index import decode_index, encode_index


@dataclass(frozen=True)
class OffloadingLinearProgram:
    problem: pulp.LpProblem
    variables: list[pulp.LpVariable]
    delay_coefficients: np.ndarray
    power_coefficients: np.ndarray
    power_budget: float

    @property
    def variable_count(self) -> int:
        return len(self.variables)


class LPCreator(Protocol):
    def create_lp(self) -> OffloadingLinearProgram:
        ...


class OffloadingLPCreator:
    def __init__(
        self, config: OffloadingSystemConfig, chain: DiscreteTimeMarkovChain | None = None
    ) -> None:
        self._config = config
        self._chain = chain

    def create_lp(self) -> OffloadingLinearProgram:
        config = self._config
        chain = self._chain or DTMCCreator(config.state_config).create()
        n = config.variable_count

        indices = [decode_index(i, config) for i in range(n)]
        delay = np.array([self._delay_coefficient(ix) for ix in indices], dtype=float)
        power = np.array([self._power_coefficient(ix) for ix in indices], dtype=float)

        problem = pulp.LpProblem(f"offloading_eta_{round(config.eta * 1e6):07d}", pulp.LpMinimize)
        x = [pulp.LpVariable(f"x_{i:06d}", lowBound=0) for i in range(n)]

        problem += pulp.lpSum(
            (float(delay[i]) + config.eta * float(power[i])) * x[i] for i in range(n)
        )
        problem += pulp.lpSum(x) == 1, "normalization"

        for i, ix in enumerate(indices):
            if ix.action not in admissible_actions(ix.state):
                problem += x[i] == 0, f"inadmissible_{i:06d}"

        inflow: dict[UserEquipmentState, dict[int, float]] = {s: {} for s in chain.adjacency_list}
        for source, edges in chain.adjacency_list.items():
            for edge in edges:
                row = inflow[edge.dest]
                for terms in edge.symbol_lists:
                    col = encode_index(Index(state=source, action=action_of(terms)), config)
                    row[col] = row.get(col, 0.0) + evaluate_symbols(terms, config.alpha, config.beta)

        for dest, row in inflow.items():
            outflow = [encode_index(Index(state=dest, action=a), config) for a in config.all_actions]
            problem += (
                pulp.lpSum(x[i] for i in outflow) - pulp.lpSum(c * x[i] for i, c in row.items()) == 0,
                f"balance_{dest.task_queue_length}_{dest.tu_state}_{dest.cpu_state}",
            )

        return OffloadingLinearProgram(
            problem=problem,
            variables=x,
            delay_coefficients=delay,
            power_coefficients=power,
            power_budget=config.p_max,
        )

    def _delay_coefficient(self, index: Index) -> float:
        return tasks_in_system(index.state) / self._config.alpha

    def _power_coefficient(self, index: Index) -> float:
        return tick_power(index.state, index.action, self._config.p_loc, self._config.p_tx)
