"""
Command-line entry point: print the top tokens by market cap.

Usage:
    tez-market
    tez-market --top 10 --json
    tez-market --blocklist ./tokens_blocked.json --liquidity-floor 10000 -v
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from decimal import Decimal, InvalidOperation

from tez_market.core.blocklist import BlocklistError, load_blocklist
from tez_market.core.config import FeedConfig, ValuationConfig
from tez_market.feeds.base import FeedError
from tez_market.feeds.snapshot import MarketFeeds
from tez_market.market.pipeline import build_overview

logger = logging.getLogger("tez_market.cli")


def _decimal(value: str) -> Decimal:
    try:
        number = Decimal(value)
    except InvalidOperation as e:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from e
    if not number.is_finite():
        raise argparse.ArgumentTypeError(f"not a finite number: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tez-market",
        description="Ranked market overview of tokens traded on Tezos DEXes.",
    )
    parser.add_argument("--top", type=int, default=None, help="number of tokens to report (default 20)")
    parser.add_argument("--liquidity-floor", type=_decimal, default=None,
                        help="minimum TVL in tez for a market cap (default 5000)")
    parser.add_argument("--blocklist", default=None, help="path to a JSON blocklist file")
    parser.add_argument("--timeout", type=float, default=None, help="per-feed HTTP timeout in seconds")
    parser.add_argument("--window", default=None, help="price change lookback window (default 1d)")
    parser.add_argument("--json", action="store_true", help="print the report as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        feed_config = FeedConfig.from_env()
        if args.timeout is not None:
            feed_config = replace(feed_config, timeout=args.timeout)
        if args.window is not None:
            feed_config = replace(feed_config, history_window=args.window)

        config = ValuationConfig(blocklist=load_blocklist(args.blocklist or feed_config.blocklist_path))
        if args.top is not None:
            config = replace(config, top_n=args.top)
        if args.liquidity_floor is not None:
            config = replace(config, liquidity_floor=args.liquidity_floor)

        with MarketFeeds.from_config(feed_config) as feeds:
            snapshot = feeds.snapshot()
        report = build_overview(snapshot, config)
    except (FeedError, BlocklistError, ValueError) as e:
        logger.error(f"Market overview failed: {e}")
        return 1

    if args.json:
        print(json.dumps(report.model_dump(mode="json"), indent=2))
    else:
        print(report.render())
    return 0


if __name__ == "__main__":
    sys.exit(main())
