"""Effectiveness comparison of the stochastic policy against the baselines.

Responsibilities:
  - For each arrival probability in a range, synthesize a stochastic policy,
    simulate it and every baseline, and count effective runs.
  - Report per-policy effective percentages.

Invariants:
  - A missing stochastic policy counts as not effective for that point.
  - run() and run_concurrent() give identical results for the same seed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from offloadsched.core.domain.config import OffloadingSystemConfig
from offloadsched.core.engine.sweep import run_batched
from offloadsched.core.lp.finder import OptimalPolicyFinder
from offloadsched.core.lp.solver import LPSolver
from offloadsched.core.policy.factory import (
    GREEDY_LOCAL_FIRST,
    GREEDY_OFFLOAD_FIRST,
    LOCAL_ONLY,
    TRANSMIT_ONLY,
    default_policy_factory,
)
from offloadsched.core.policy.stochastic import StochasticPolicy
from offloadsched.core.simulation.simulator import Simulator

STOCHASTIC = "stochastic"
BASELINE_IDS = [LOCAL_ONLY, TRANSMIT_ONLY, GREEDY_OFFLOAD_FIRST, GREEDY_LOCAL_FIRST]


@dataclass(frozen=True)
class AlphaRange:
    start: float
    end: float
    step: float

    def __post_init__(self) -> None:
        if self.step <= 0.0:
            raise ValueError("step must be > 0")
        if self.end < self.start:
            raise ValueError("end must be >= start")

    def to_list(self) -> list[float]:
        count = int(round((self.end - self.start) / self.step)) + 1
        values = [round(self.start + i * self.step, 10) for i in range(count)]
        return [v for v in values if v <= self.end + 1e-12]


@dataclass(frozen=True)
class EffectivenessResult:
    stochastic_effective_percent: float
    local_only_effective_percent: float
    transmit_only_effective_percent: float
    greedy_offload_first_effective_percent: float
    greedy_local_first_effective_percent: float


class PolicyEffectivenessTester:
    def __init__(
        self,
        base_config: OffloadingSystemConfig,
        alpha_range: AlphaRange,
        precision: int,
        simulation_ticks: int,
        seed: Optional[int] = None,
        solver: Optional[LPSolver] = None,
    ) -> None:
        alphas = alpha_range.to_list()
        if not alphas:
            raise ValueError("alpha_range yields no values")
        self._alpha_configs = [base_config.with_alpha(alpha) for alpha in alphas]
        if simulation_ticks < 1:
            raise ValueError("simulation_ticks must be >= 1")
        self._precision = precision
        self._simulation_ticks = simulation_ticks
        self._seed = seed
        self._solver = solver

    @property
    def alpha_configs(self) -> list[OffloadingSystemConfig]:
        return list(self._alpha_configs)

    def run(self) -> EffectivenessResult:
        return self._aggregate([self._evaluate_config(c) for c in self._alpha_configs])

    def run_concurrent(self, number_of_threads: int) -> EffectivenessResult:
        return self._aggregate(run_batched(self._alpha_configs, self._evaluate_config, number_of_threads))

    def _evaluate_config(self, alpha_config: OffloadingSystemConfig) -> dict[str, bool]:
        simulator = Simulator(alpha_config, seed=self._seed)

        outcome: dict[str, bool] = {}
        search = OptimalPolicyFinder(alpha_config, solver=self._solver).find_optimal_policy(
            self._precision
        )
        if search.policy is None:
            outcome[STOCHASTIC] = False
        else:
            policy = StochasticPolicy(search.policy, seed=self._seed)
            outcome[STOCHASTIC] = simulator.simulate_policy(policy, self._simulation_ticks).is_effective

        for policy_id in BASELINE_IDS:
            policy = default_policy_factory.create(policy_id, alpha_config)
            outcome[policy_id] = simulator.simulate_policy(policy, self._simulation_ticks).is_effective
        return outcome

    def _aggregate(self, outcomes: list[dict[str, bool]]) -> EffectivenessResult:
        total = float(len(outcomes))

        def percent(policy_id: str) -> float:
            return sum(1 for o in outcomes if o[policy_id]) / total * 100.0

        return EffectivenessResult(
            stochastic_effective_percent=percent(STOCHASTIC),
            local_only_effective_percent=percent(LOCAL_ONLY),
            transmit_only_effective_percent=percent(TRANSMIT_ONLY),
            greedy_offload_first_effective_percent=percent(GREEDY_OFFLOAD_FIRST),
            greedy_local_first_effective_percent=percent(GREEDY_LOCAL_FIRST),
        )
