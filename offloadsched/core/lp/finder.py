"""Stochastic policy synthesis by sweeping the delay/energy trade-off weight.

Responsibilities:
  - Build and solve one LP per eta = i / precision, i = 0..precision.
  - Keep the feasible solution with the strictly smallest objective (first wins ties).
  - Decode the winning vector into per-state conditional action probabilities.

Inputs/Outputs:
  - Inputs: OffloadingSystemConfig, an LP creator factory and an LPSolver.
  - Outputs: PolicySearchResult; a missing policy is a normal outcome.

Invariants:
  - Solver vector length must equal config.variable_count.
  - The symbolic chain is generated once per search and shared by every eta.
  - Conditional probabilities of every state sum to 1 over its actions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from ..domain.config import OffloadingSystemConfig
from ..domain.enums import Action
from ..domain.errors import VariableCountMismatchError
from ..domain.models import Index, UserEquipmentState
from ..dtmc.creator import DTMCCreator, DiscreteTimeMarkovChain, admissible_actions
from ..engine.sweep import run_batched
from .creator import LPCreator, OffloadingLPCreator
from .index import decode_index
from .solver import LPSolution, LPSolver, PulpLPSolver

ZERO_MARGINAL_TOLERANCE = 1e-12

_DEBUG_FN: Callable[[str], None] | None = None


def set_finder_debug(fn: Callable[[str], None] | None) -> None:
    global _DEBUG_FN
    _DEBUG_FN = fn


@dataclass(frozen=True)
class StochasticPolicyConfig:
    eta: float
    average_delay: float
    decision_probabilities: dict[Index, float]

    def distribution(self, state: UserEquipmentState) -> dict[Action, float]:
        return {
            action: self.decision_probabilities.get(Index(state=state, action=action), 0.0)
            for action in Action
        }


@dataclass(frozen=True)
class PolicySearchResult:
    policy: Optional[StochasticPolicyConfig]
    evaluated_etas: list[float]

    @property
    def found(self) -> bool:
        return self.policy is not None


def sweep_etas(precision: int) -> list[float]:
    if precision < 0:
        raise ValueError("precision must be >= 0")
    if precision == 0:
        return [0.0]
    return [i / precision for i in range(precision + 1)]


class OptimalPolicyFinder:
    def __init__(
        self,
        config: OffloadingSystemConfig,
        lp_creator: Callable[
            [OffloadingSystemConfig, DiscreteTimeMarkovChain], LPCreator
        ] = OffloadingLPCreator,
        solver: Optional[LPSolver] = None,
        workers: int = 1,
    ) -> None:
        self._config = config
        self._lp_creator = lp_creator
        self._solver = solver or PulpLPSolver()
        self._workers = workers

    def find_optimal_policy(self, precision: int) -> PolicySearchResult:
        etas = sweep_etas(precision)
        chain = DTMCCreator(self._config.state_config).create()
        if self._workers > 1:
            solutions = run_batched(etas, lambda eta: self._solve_for_eta(eta, chain), self._workers)
        else:
            solutions = [self._solve_for_eta(eta, chain) for eta in etas]

        best: Optional[LPSolution] = None
        best_eta = 0.0
        for eta, solution in zip(etas, solutions):
            if not solution.feasible:
                continue
            if best is None or solution.objective_value < best.objective_value:
                best = solution
                best_eta = eta

        if best is None:
            return PolicySearchResult(policy=None, evaluated_etas=etas)

        return PolicySearchResult(
            policy=StochasticPolicyConfig(
                eta=best_eta,
                average_delay=best.objective_value,
                decision_probabilities=self.normalize(best.variable_values),
            ),
            evaluated_etas=etas,
        )

    def normalize(self, variable_values: list[float]) -> dict[Index, float]:
        config = self._config
        if len(variable_values) != config.variable_count:
            raise VariableCountMismatchError(
                f"Expected {config.variable_count} decision variables, "
                f"solver returned {len(variable_values)}"
            )

        joint = np.clip(np.asarray(variable_values, dtype=float), 0.0, None)
        indices = [decode_index(i, config) for i in range(config.variable_count)]
        for i, ix in enumerate(indices):
            if ix.action not in admissible_actions(ix.state):
                joint[i] = 0.0

        marginals: dict[UserEquipmentState, float] = {}
        for ix, value in zip(indices, joint):
            marginals[ix.state] = marginals.get(ix.state, 0.0) + float(value)

        decisions: dict[Index, float] = {}
        for ix, value in zip(indices, joint):
            marginal = marginals[ix.state]
            if marginal <= ZERO_MARGINAL_TOLERANCE:
                # Unreachable under the solution; fall back to idling.
                decisions[ix] = 1.0 if ix.action == Action.NoOperation else 0.0
            else:
                decisions[ix] = float(value) / marginal
        return decisions

    def _solve_for_eta(self, eta: float, chain: DiscreteTimeMarkovChain) -> LPSolution:
        linear_program = self._lp_creator(self._config.with_eta(eta), chain).create_lp()
        solution = self._solver.solve(linear_program)
        if len(solution.variable_values) != self._config.variable_count:
            raise VariableCountMismatchError(
                f"Expected {self._config.variable_count} decision variables at eta={eta}, "
                f"solver returned {len(solution.variable_values)}"
            )
        if _DEBUG_FN is not None:
            _DEBUG_FN(
                f"SWEEP eta={eta:.6f} feasible={solution.feasible} "
                f"objective={solution.objective_value:.6f} power={solution.average_power:.6f}"
            )
        return solution
