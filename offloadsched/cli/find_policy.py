from __future__ import annotations

import argparse
import json

from offloadsched.cli._debug_utils import _dbg, debug_sink, format_distribution, format_state
from offloadsched.core.lp.finder import OptimalPolicyFinder, set_finder_debug
from offloadsched.system_config import load_system_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synthesize a stochastic offloading policy by LP sweep")
    parser.add_argument("--config", required=True, help="System config JSON path")
    parser.add_argument("--precision", type=int, default=10, help="Number of eta sweep intervals")
    parser.add_argument("--workers", type=int, default=1, help="Parallel LP solves (max 8)")
    parser.add_argument("--print", action="store_true", dest="print_rows", help="Print per-state distributions")
    parser.add_argument("--json-out", default=None, help="Write decision probabilities to this JSON file")
    parser.add_argument("--debug", action="store_true", help="Print sweep diagnostics")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if args.precision < 0:
        raise SystemExit("ERROR: --precision must be >= 0")
    if args.workers < 1:
        raise SystemExit("ERROR: --workers must be >= 1")

    try:
        config = load_system_config(args.config)
    except (ValueError, json.JSONDecodeError) as exc:
        print(f"SUMMARY status=ERROR message=INVALID_CONFIG detail={exc}")
        raise SystemExit(2)

    _dbg(args, f"config={config}")
    set_finder_debug(debug_sink(args))
    try:
        result = OptimalPolicyFinder(config, workers=args.workers).find_optimal_policy(args.precision)
    finally:
        set_finder_debug(None)

    print(f"SUMMARY etas_evaluated={len(result.evaluated_etas)}")
    if result.policy is None:
        print("SUMMARY status=NO_EFFECTIVE_POLICY")
        raise SystemExit(1)

    policy = result.policy
    print("SUMMARY status=OK")
    print(f"SUMMARY eta={policy.eta:.6f}")
    print(f"SUMMARY average_delay={policy.average_delay:.6f}")

    if args.print_rows:
        for state in config.state_config.all_states():
            print(f"{format_state(state)} {format_distribution(policy.distribution(state))}")

    if args.json_out:
        rows = [
            {
                "task_queue_length": ix.state.task_queue_length,
                "tu_state": ix.state.tu_state,
                "cpu_state": ix.state.cpu_state,
                "action": ix.action.value,
                "probability": p,
            }
            for ix, p in policy.decision_probabilities.items()
        ]
        payload = {"eta": policy.eta, "average_delay": policy.average_delay, "decisions": rows}
        with open(args.json_out, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)
        print(f"SUMMARY json_out={args.json_out}")


if __name__ == "__main__":
    main()
