from __future__ import annotations

from typing import Optional

import numpy as np

from ..domain.enums import Action
from ..domain.models import UserEquipmentState
from ..lp.finder import StochasticPolicyConfig


class StochasticPolicy:
    """Samples an action from the optimizer's per-state conditional distribution."""

    def __init__(self, policy_config: StochasticPolicyConfig, seed: Optional[int] = None) -> None:
        self.policy_config = policy_config
        self._rng = np.random.default_rng(seed)
        self._actions = sorted(Action, key=lambda a: a.order)

    def action_distribution(self, state: UserEquipmentState) -> dict[Action, float]:
        return self.policy_config.distribution(state)

    def get_action_for_state(self, state: UserEquipmentState) -> Action:
        distribution = self.action_distribution(state)
        weights = np.array([distribution[a] for a in self._actions], dtype=float)
        total = weights.sum()
        if total <= 0.0:
            return Action.NoOperation
        choice = self._rng.choice(len(self._actions), p=weights / total)
        return self._actions[int(choice)]
