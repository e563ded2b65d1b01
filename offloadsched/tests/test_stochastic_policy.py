from __future__ import annotations

from collections import Counter

import pytest

from offloadsched.core.domain.enums import Action
from offloadsched.core.domain.models import Index, UserEquipmentState
from offloadsched.core.lp.finder import StochasticPolicyConfig
from offloadsched.core.policy.stochastic import StochasticPolicy


def mk_policy_config() -> StochasticPolicyConfig:
    busy = UserEquipmentState(1, 0, 0)
    empty = UserEquipmentState(0, 0, 0)
    return StochasticPolicyConfig(
        eta=0.5,
        average_delay=2.0,
        decision_probabilities={
            Index(busy, Action.NoOperation): 0.0,
            Index(busy, Action.AddToCPU): 0.7,
            Index(busy, Action.AddToTransmissionUnit): 0.3,
            Index(busy, Action.AddToBothUnits): 0.0,
            Index(empty, Action.NoOperation): 1.0,
        },
    )


def test_samples_only_supported_actions():
    policy = StochasticPolicy(mk_policy_config(), seed=11)
    counts = Counter(policy.get_action_for_state(UserEquipmentState(1, 0, 0)) for _ in range(2000))
    assert set(counts) <= {Action.AddToCPU, Action.AddToTransmissionUnit}
    assert counts[Action.AddToCPU] / 2000 == pytest.approx(0.7, abs=0.05)


def test_distribution_and_fallback():
    policy = StochasticPolicy(mk_policy_config(), seed=0)
    assert policy.action_distribution(UserEquipmentState(0, 0, 0))[Action.NoOperation] == 1.0
    # unknown state carries no mass; idle is the only safe choice
    assert policy.get_action_for_state(UserEquipmentState(5, 0, 0)) == Action.NoOperation
