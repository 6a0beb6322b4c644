"""
Configuration for market valuation and upstream feeds.

ValuationConfig holds the pricing constants every pipeline stage is built
with. FeedConfig holds the upstream endpoints and is normally read from the
environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Iterable

# Native tez and its wrapped representatives, all priced at exactly 1 tez
TEZ_AND_WRAPPED_TEZ_ADDRESSES = frozenset({
    "tez",
    "KT1UpeXdK6AJbX58GJ92pLZVCucn2DR8Nu4b",
    "KT1PnUZCp3u2KzWr93pn4DD7HAJnm3rWVrgn",
    "KT1SjXiUX63QvdNMcM2m492f7kuf8JxXRLp4",
})

# Scaling factor baked into the raw reserves of fee-bearing ("alien") pools
ALIEN_FEE_DENOMINATOR = Decimal(10) ** 18

# Minimum aggregate TVL (in tez) for a token to get a market cap
LIQUIDITY_FLOOR = Decimal(5000)

TOP_N = 20

TZKT_API = "https://api.tzkt.io"
CRUNCHY_API = "https://api.crunchy.network"
INDEXER_API = "https://dex-indexer-api.onrender.com"


def _finite(name: str, value) -> Decimal:
    try:
        number = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e
    if not number.is_finite():
        raise ValueError(f"{name} must be finite, got {value}")
    return number


@dataclass(frozen=True)
class ValuationConfig:
    """
    Pricing constants injected into the valuation pipeline.

    Args:
        reference_addresses: contract addresses priced at exactly 1 reference unit
        blocklist:           composite token keys whose price is forced to 0
        fee_denominator:     reserve scaling factor for fee-bearing pools
        fee_bearing_types:   dex type tags that use the fee-bearing reserve formula
        liquidity_floor:     minimum aggregate TVL for a non-zero market cap
        top_n:               number of tokens kept in the ranking
    """
    reference_addresses: frozenset[str] = TEZ_AND_WRAPPED_TEZ_ADDRESSES
    blocklist: frozenset[str] = frozenset()
    fee_denominator: Decimal = ALIEN_FEE_DENOMINATOR
    fee_bearing_types: frozenset[str] = frozenset({"alien"})
    liquidity_floor: Decimal = LIQUIDITY_FLOOR
    top_n: int = TOP_N

    def __post_init__(self) -> None:
        object.__setattr__(self, "reference_addresses", frozenset(self.reference_addresses))
        object.__setattr__(self, "blocklist", frozenset(self.blocklist))
        object.__setattr__(self, "fee_bearing_types", frozenset(self.fee_bearing_types))
        object.__setattr__(self, "fee_denominator", _finite("fee_denominator", self.fee_denominator))
        object.__setattr__(self, "liquidity_floor", _finite("liquidity_floor", self.liquidity_floor))

        if self.fee_denominator <= 0:
            raise ValueError(f"fee_denominator must be positive, got {self.fee_denominator}")
        if self.liquidity_floor < 0:
            raise ValueError(f"liquidity_floor must not be negative, got {self.liquidity_floor}")
        if self.top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {self.top_n}")

    def is_reference_asset(self, token_address: str) -> bool:
        return token_address in self.reference_addresses

    def is_blocked(self, token_key: str) -> bool:
        return token_key in self.blocklist

    def with_blocklist(self, blocklist: Iterable[str]) -> ValuationConfig:
        return replace(self, blocklist=frozenset(blocklist))


@dataclass(frozen=True)
class FeedConfig:
    """Upstream endpoints and HTTP settings."""
    tzkt_url: str = TZKT_API
    crunchy_url: str = CRUNCHY_API
    indexer_url: str = INDEXER_API
    timeout: float = 15.0
    history_window: str = "1d"
    blocklist_path: str | None = field(default=None)

    @classmethod
    def from_env(cls) -> FeedConfig:
        """
        Build a FeedConfig from environment variables.

        Reads TZKT_API_URL, CRUNCHY_API_URL, INDEXER_API_URL, FEED_TIMEOUT,
        HISTORY_WINDOW and BLOCKLIST_PATH. Unset variables keep the defaults.
        """
        timeout = os.getenv("FEED_TIMEOUT")
        try:
            timeout_s = float(timeout) if timeout else cls.timeout
        except ValueError as e:
            raise ValueError(f"FEED_TIMEOUT must be a number of seconds, got {timeout!r}") from e

        return cls(
            tzkt_url=os.getenv("TZKT_API_URL", TZKT_API),
            crunchy_url=os.getenv("CRUNCHY_API_URL", CRUNCHY_API),
            indexer_url=os.getenv("INDEXER_API_URL", INDEXER_API),
            timeout=timeout_s,
            history_window=os.getenv("HISTORY_WINDOW", "1d"),
            blocklist_path=os.getenv("BLOCKLIST_PATH") or None,
        )
