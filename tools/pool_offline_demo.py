#!/usr/bin/env python3
"""Run a deposit / fee adjustment / swap / stake sequence against an in-memory pool."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from defi_flow.config import PolicyConfig, load_policy_config
from defi_flow.core.cpmm import slippage_floor
from defi_flow.core.oracle import PriceSample
from defi_flow.errors import PoolError
from defi_flow.integration.local_pool import build_local_pool
from defi_flow.state.events import event_to_dict


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--config", type=Path, default=None, help="policy YAML (defaults built in)")
    ap.add_argument("--volatility", type=int, default=75)
    ap.add_argument("--amount-in", type=int, default=10_000)
    ap.add_argument("--slippage-bps", type=int, default=50)
    ap.add_argument("--price-threshold", type=int, default=2_000)
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    policy = load_policy_config(args.config) if args.config else PolicyConfig()
    local = build_local_pool(
        config=policy.pool_config("fee-authority"),
        oracle_policy=policy.oracle,
        clock=lambda: 1_000,
    )
    alice = local.open_participant("alice", token_a=100_000, token_b=100_000, lp_token=1_000)

    try:
        local.engine.provide_liquidity(alice, 1_000, 2_000)
        local.engine.adjust_fee("fee-authority", args.volatility)
        quote = local.engine.quote_swap(args.amount_in)
        floor = slippage_floor(quote.amount_out, args.slippage_bps, max_slippage_bps=policy.max_slippage_bps)
        local.engine.swap_tokens(alice, args.amount_in, floor)
        local.engine.stake_tokens(alice, 500)
        local.feed.publish(PriceSample(price=2_500, confidence=10, publish_time=990))
        signal = local.engine.evaluate_mitigation(args.price_threshold)
    except PoolError as exc:
        print(f"[pool-demo] FAIL ({exc.kind}): {exc}")
        return 1

    for event in local.sink.events:
        print(f"[pool-demo] {json.dumps(event_to_dict(event), sort_keys=True)}")
    print(f"[pool-demo] reserves={local.engine.reserves()} rebalance_recommended={signal.rebalance_recommended}")
    print("[pool-demo] OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
