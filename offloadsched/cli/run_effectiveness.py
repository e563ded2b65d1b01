from __future__ import annotations

import argparse
import json

from offloadsched.cli._debug_utils import _dbg
from offloadsched.research.policy_effectiveness import AlphaRange, PolicyEffectivenessTester
from offloadsched.system_config import load_system_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare stochastic and baseline policies over an arrival-rate range")
    parser.add_argument("--config", required=True, help="System config JSON path")
    parser.add_argument("--alpha-from", type=float, required=True, help="First arrival probability")
    parser.add_argument("--alpha-to", type=float, required=True, help="Last arrival probability")
    parser.add_argument("--alpha-step", type=float, default=0.05, help="Arrival probability step")
    parser.add_argument("--precision", type=int, default=10, help="Number of eta sweep intervals")
    parser.add_argument("--ticks", type=int, default=10000, help="Simulation ticks per policy")
    parser.add_argument("--threads", type=int, default=1, help="Worker threads (max 8)")
    parser.add_argument("--seed", type=int, default=None, help="Simulation RNG seed")
    parser.add_argument("--debug", action="store_true", help="Print diagnostics")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    try:
        config = load_system_config(args.config)
        alpha_range = AlphaRange(start=args.alpha_from, end=args.alpha_to, step=args.alpha_step)
        tester = PolicyEffectivenessTester(
            base_config=config,
            alpha_range=alpha_range,
            precision=args.precision,
            simulation_ticks=args.ticks,
            seed=args.seed,
        )
    except (ValueError, json.JSONDecodeError) as exc:
        print(f"SUMMARY status=ERROR message=INVALID_INPUT detail={exc}")
        raise SystemExit(2)

    _dbg(args, f"alphas={alpha_range.to_list()}")
    result = tester.run_concurrent(args.threads) if args.threads > 1 else tester.run()

    print(f"SUMMARY stochastic_effective_percent={result.stochastic_effective_percent:.2f}")
    print(f"SUMMARY local_only_effective_percent={result.local_only_effective_percent:.2f}")
    print(f"SUMMARY transmit_only_effective_percent={result.transmit_only_effective_percent:.2f}")
    print(f"SUMMARY greedy_offload_first_effective_percent={result.greedy_offload_first_effective_percent:.2f}")
    print(f"SUMMARY greedy_local_first_effective_percent={result.greedy_local_first_effective_percent:.2f}")


if __name__ == "__main__":
    main()
