from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from offloadsched.core.domain.config import OffloadingSystemConfig

_OPTIONAL_FLOATS = ("eta", "p_loc", "p_tx", "p_max")


def configs_dir() -> Path:
    return Path(__file__).resolve().parent / "configs"


def _require(payload: dict[str, Any], key: str, expected_type: type) -> Any:
    if key not in payload:
        raise ValueError(f"Missing required field '{key}' in system config")
    value = payload[key]
    if expected_type is float:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise ValueError(f"Field '{key}' must be float")
        return float(value)
    if expected_type is int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"Field '{key}' must be int")
        return value
    if not isinstance(value, expected_type):
        raise ValueError(f"Field '{key}' must be {expected_type.__name__}")
    return value


def parse_system_config(payload: Any) -> OffloadingSystemConfig:
    if not isinstance(payload, dict):
        raise ValueError("System config must be a JSON object")

    optional = {key: _require(payload, key, float) for key in _OPTIONAL_FLOATS if key in payload}
    return OffloadingSystemConfig(
        task_queue_capacity=_require(payload, "task_queue_capacity", int),
        tu_number_of_packets=_require(payload, "tu_number_of_packets", int),
        cpu_number_of_sections=_require(payload, "cpu_number_of_sections", int),
        alpha=_require(payload, "alpha", float),
        beta=_require(payload, "beta", float),
        **optional,
    )


def load_system_config(path: str | Path) -> OffloadingSystemConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise ValueError(f"System config not found: {config_path}")
    payload = json.loads(config_path.read_text(encoding="utf-8"))
    return parse_system_config(payload)
