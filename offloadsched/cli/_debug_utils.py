from __future__ import annotations

import argparse
from typing import Callable

from offloadsched.core.domain.enums import Action
from offloadsched.core.domain.models import UserEquipmentState


def _debug_enabled(args: argparse.Namespace) -> bool:
    return bool(getattr(args, "debug", False))


def _dbg(args: argparse.Namespace, msg: str) -> None:
    if _debug_enabled(args):
        print(f"[debug] {msg}")


def debug_sink(args: argparse.Namespace) -> Callable[[str], None] | None:
    if not _debug_enabled(args):
        return None
    return lambda msg: _dbg(args, msg)


def format_state(state: UserEquipmentState) -> str:
    return f"({state.task_queue_length},{state.tu_state},{state.cpu_state})"


def format_distribution(distribution: dict[Action, float], min_probability: float = 0.0) -> str:
    parts = [
        f"{action.value}={p:.4f}"
        for action, p in sorted(distribution.items(), key=lambda item: item[0].order)
        if p > min_probability
    ]
    return " ".join(parts) if parts else "-"
