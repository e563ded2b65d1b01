from __future__ import annotations

import json
import sys

import pytest

from offloadsched.cli import run_effectiveness


def write_config(tmp_path) -> str:
    payload = {
        "task_queue_capacity": 2,
        "tu_number_of_packets": 1,
        "cpu_number_of_sections": 1,
        "alpha": 0.3,
        "beta": 0.6,
        "p_max": 5.0,
    }
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_cli_reports_percentages(tmp_path, monkeypatch, capsys):
    argv = [
        "run_effectiveness",
        "--config",
        write_config(tmp_path),
        "--alpha-from",
        "0.2",
        "--alpha-to",
        "0.3",
        "--alpha-step",
        "0.1",
        "--precision",
        "1",
        "--ticks",
        "200",
        "--threads",
        "2",
        "--seed",
        "3",
    ]
    monkeypatch.setattr(sys, "argv", argv)
    run_effectiveness.main()

    out = capsys.readouterr().out
    assert "SUMMARY stochastic_effective_percent=100.00" in out
    assert "SUMMARY local_only_effective_percent=100.00" in out
    assert "SUMMARY greedy_local_first_effective_percent=100.00" in out


def test_cli_rejects_reversed_alpha_range(tmp_path, monkeypatch, capsys):
    argv = [
        "run_effectiveness",
        "--config",
        write_config(tmp_path),
        "--alpha-from",
        "0.5",
        "--alpha-to",
        "0.2",
    ]
    monkeypatch.setattr(sys, "argv", argv)
    with pytest.raises(SystemExit) as exc:
        run_effectiveness.main()
    assert exc.value.code == 2
    assert "SUMMARY status=ERROR message=INVALID_INPUT" in capsys.readouterr().out
