"""Monte-Carlo simulation of a scheduling policy on one device.

Responsibilities:
  - Replay the per-tick dynamics of the Markov model with sampled events.
  - Report time-averaged delay and power and whether the run was effective.

Invariants:
  - Tick order matches DTMCCreator: action, CPU advance, then arrival (only if
    the queue had room at tick start) and TU packet delivery.
  - Actions outside admissible_actions abort the run with IllegalActionError.
  - Delay follows Little's law over accepted arrivals; a blocked arrival is
    counted but never enters the system.
  - A run is effective when average power is within p_max and at most
    MAX_BLOCKED_SHARE of the offered tasks were blocked.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..domain.config import OffloadingSystemConfig
from ..domain.costs import tasks_in_system, tick_power
from ..domain.errors import IllegalActionError
from ..domain.models import UserEquipmentState
from ..domain.state_manager import UserEquipmentStateManager
from ..dtmc.creator import admissible_actions
from ..policy.ports import Policy

MAX_BLOCKED_SHARE = 0.5


@dataclass(frozen=True)
class SimulationReport:
    ticks: int
    average_delay: float
    average_power: float
    arrivals: int
    blocked_arrivals: int
    is_effective: bool


class Simulator:
    def __init__(self, config: OffloadingSystemConfig, seed: Optional[int] = None) -> None:
        self._config = config
        self._seed = seed
        self._manager = UserEquipmentStateManager(config.state_config)

    def simulate_policy(
        self,
        policy: Policy,
        ticks: int,
        initial_state: Optional[UserEquipmentState] = None,
    ) -> SimulationReport:
        if ticks < 1:
            raise ValueError("ticks must be >= 1")

        config = self._config
        manager = self._manager
        rng = np.random.default_rng(self._seed)
        state = initial_state or UserEquipmentState(task_queue_length=0, tu_state=0, cpu_state=0)

        tasks_total = 0
        power_total = 0.0
        arrivals = 0
        blocked_arrivals = 0

        for _ in range(ticks):
            tasks_total += tasks_in_system(state)
            action = policy.get_action_for_state(state)
            if action not in admissible_actions(state):
                raise IllegalActionError(f"Policy chose {action} in {state}")

            power_total += tick_power(state, action, config.p_loc, config.p_tx)

            ticked = manager.advance_cpu_if_active(manager.apply_action(state, action))
            offered = rng.random() < config.alpha
            delivered = not ticked.tu_idle and rng.random() < config.beta

            if delivered:
                ticked = manager.advance_tu(ticked)
            if offered:
                if state.task_queue_length < config.task_queue_capacity:
                    ticked = manager.add_task(ticked)
                    arrivals += 1
                else:
                    blocked_arrivals += 1
            state = ticked

        if arrivals:
            average_delay = tasks_total / arrivals
        else:
            average_delay = 0.0 if tasks_total == 0 else float("inf")

        average_power = power_total / ticks
        offered_total = arrivals + blocked_arrivals
        blocked_share = blocked_arrivals / offered_total if offered_total else 0.0
        return SimulationReport(
            ticks=ticks,
            average_delay=average_delay,
            average_power=average_power,
            arrivals=arrivals,
            blocked_arrivals=blocked_arrivals,
            is_effective=average_power <= config.p_max and blocked_share <= MAX_BLOCKED_SHARE,
        )
