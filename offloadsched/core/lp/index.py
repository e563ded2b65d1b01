"""Decision-variable index codec shared by the LP constructor and the optimizer.

Mixed-radix order, most significant first: task queue length, TU state,
CPU state, action order. Both directions must change together.
"""

from __future__ import annotations

from ..domain.config import OffloadingSystemConfig
from ..domain.enums import Action
from ..domain.models import Index, UserEquipmentState


def _radices(config: OffloadingSystemConfig) -> tuple[int, int, int]:
    r3 = config.action_count
    r2 = config.cpu_number_of_sections * r3
    r1 = (config.tu_number_of_packets + 1) * r2
    return r1, r2, r3


def decode_index(index: int, config: OffloadingSystemConfig) -> Index:
    if not 0 <= index < config.variable_count:
        raise ValueError(f"Index {index} outside 0..{config.variable_count - 1}")
    r1, r2, r3 = _radices(config)
    return Index(
        state=UserEquipmentState(
            task_queue_length=index // r1,
            tu_state=(index % r1) // r2,
            cpu_state=((index % r1) % r2) // r3,
        ),
        action=Action.from_order(((index % r1) % r2) % r3),
    )


def encode_index(index: Index, config: OffloadingSystemConfig) -> int:
    state = index.state
    if not (
        0 <= state.task_queue_length <= config.task_queue_capacity
        and 0 <= state.tu_state <= config.tu_number_of_packets
        and 0 <= state.cpu_state < config.cpu_number_of_sections
    ):
        raise ValueError(f"State outside configured grid: {state}")
    r1, r2, r3 = _radices(config)
    return (
        state.task_queue_length * r1
        + state.tu_state * r2
        + state.cpu_state * r3
        + index.action.order
    )
