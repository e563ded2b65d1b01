"""Policy port consumed by the simulator and evaluation harness."""

from __future__ import annotations

from typing import Protocol

from ..domain.enums import Action
from ..domain.models import UserEquipmentState


class Policy(Protocol):
    def get_action_for_state(self, state: UserEquipmentState) -> Action:
        ...
