from __future__ import annotations

from typing import Callable, Dict

from ..domain.config import OffloadingSystemConfig
from .baseline import (
    GreedyLocalFirstPolicy,
    GreedyOffloadFirstPolicy,
    LocalOnlyPolicy,
    TransmitOnlyPolicy,
)
from .ports import Policy

LOCAL_ONLY = "local_only"
TRANSMIT_ONLY = "transmit_only"
GREEDY_LOCAL_FIRST = "greedy_local_first"
GREEDY_OFFLOAD_FIRST = "greedy_offload_first"


class PolicyFactory:
    def __init__(self) -> None:
        self._registry: Dict[str, Callable[[OffloadingSystemConfig], Policy]] = {}

    def register(self, policy_id: str, builder: Callable[[OffloadingSystemConfig], Policy]) -> None:
        self._registry[policy_id] = builder

    def create(self, policy_id: str, config: OffloadingSystemConfig) -> Policy:
        if policy_id not in self._registry:
            raise ValueError(f"Unknown policy_id: {policy_id}")
        return self._registry[policy_id](config)

    def policy_ids(self) -> list[str]:
        return list(self._registry)


default_policy_factory = PolicyFactory()
default_policy_factory.register(LOCAL_ONLY, LocalOnlyPolicy)
default_policy_factory.register(TRANSMIT_ONLY, TransmitOnlyPolicy)
default_policy_factory.register(GREEDY_LOCAL_FIRST, GreedyLocalFirstPolicy)
default_policy_factory.register(GREEDY_OFFLOAD_FIRST, GreedyOffloadFirstPolicy)

__all__ = [
    "PolicyFactory",
    "default_policy_factory",
    "LOCAL_ONLY",
    "TRANSMIT_ONLY",
    "GREEDY_LOCAL_FIRST",
    "GREEDY_OFFLOAD_FIRST",
]
