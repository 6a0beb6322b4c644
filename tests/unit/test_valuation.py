"""
Unit tests for the ValuationEngine (price, TVL, market cap).
These run without network access.
"""

from dataclasses import replace
from decimal import Decimal

import pytest

from tez_market.core.config import ValuationConfig
from tez_market.core.models import (
    Dex,
    EnrichedToken,
    Exchange,
    LegToken,
    PeerQuote,
    PoolLeg,
    TokenQuote,
    TokenRef,
)
from tez_market.market.joiner import join_pools
from tez_market.market.valuation import ValuationEngine

WTZ = "KT1PnUZCp3u2KzWr93pn4DD7HAJnm3rWVrgn"


def _quote(address, rate):
    return PeerQuote(token=TokenRef(token_address=address, decimals=6), quote=rate)


def _token(address="KT1tok", token_id="0", *, decimals=6, price=None, supply=None,
           reserves=None, quotes=None, exchanges=()):
    if quotes is None:
        quotes = [_quote("tez", Decimal(price))] if price is not None else []
    return EnrichedToken(
        token_address=address,
        token_id=token_id,
        symbol=address[-3:].upper(),
        decimals=decimals,
        total_supply=supply,
        reserves=reserves,
        quotes=quotes,
        exchanges=list(exchanges),
    )


def _pool(address="KT1tok", token_id="0", *, reserves, decimals=6, dex_type="quipuswap"):
    return Exchange(
        dex=Dex(type=dex_type),
        tokens=[
            PoolLeg(token=LegToken(token_address="tez", decimals=6), reserves=10**12),
            PoolLeg(token=LegToken(token_address=address, token_id=token_id, decimals=decimals),
                    reserves=reserves),
        ],
    )


@pytest.fixture
def engine():
    return ValuationEngine(ValuationConfig(blocklist={"KT1bad_0"}))


# ------------------------------------------------------------------
# Price
# ------------------------------------------------------------------

def test_reference_token_priced_at_one(engine):
    token = _token("tez", None, quotes=[_quote("KT1usd", Decimal("0.9"))])
    valued = engine.value(token, Decimal("0.5"))
    assert valued.current_price == 1
    assert valued.current_price_usd == Decimal("0.5")


def test_wrapped_tez_priced_at_one(engine):
    valued = engine.value(_token(WTZ, "0", price="0.98"), Decimal("0.8"))
    assert valued.current_price == 1
    assert valued.current_price_usd == Decimal("0.8")


def test_first_tez_quote_wins(engine):
    token = _token(quotes=[
        _quote("KT1usd", Decimal("7")),
        _quote(WTZ, Decimal("2")),
        _quote("tez", Decimal("3")),
    ])
    assert engine.price_of(token) == Decimal("2")


def test_missing_tez_quote_is_undefined(engine):
    token = _token(quotes=[_quote("KT1usd", Decimal("7"))], supply=10**9,
                   exchanges=[_pool(reserves=10**12)])
    valued = engine.value(token, Decimal("0.5"))
    assert valued.current_price is None
    assert valued.current_price_usd is None
    assert valued.token_tvl == 0
    assert valued.exchanges[0].token_tvl == 0
    assert valued.market_cap == 0


def test_blocklist_overrides_everything(engine):
    token = _token("KT1bad", "0", price="3", supply=10**12,
                   exchanges=[_pool("KT1bad", "0", reserves=10**15)])
    valued = engine.value(token, Decimal("0.5"))
    assert valued.current_price == 0
    assert valued.token_tvl == 0
    assert valued.market_cap == 0


def test_blocklist_beats_reference_asset():
    engine = ValuationEngine(ValuationConfig(blocklist={f"{WTZ}_0"}))
    assert engine.price_of(_token(WTZ, "0")) == 0


def test_usd_undefined_without_reference_price(engine):
    valued = engine.value(_token(price="2"), None)
    assert valued.current_price == 2
    assert valued.current_price_usd is None


# ------------------------------------------------------------------
# TVL
# ------------------------------------------------------------------

def test_standard_pool_tvl(engine):
    # 1,000,000 raw at 6 decimals = 1.0 token, at 2 tez = 2.0
    token = _token(price="2", exchanges=[_pool(reserves=1_000_000, decimals=6)])
    valued = engine.value(token, Decimal("0.5"))
    assert valued.exchanges[0].token_tvl == Decimal("2")
    assert valued.token_tvl == Decimal("2")


def test_leg_decimals_are_used_for_tvl(engine):
    token = _token(decimals=6, price="1", exchanges=[_pool(reserves=1_000, decimals=3)])
    assert engine.value(token, None).token_tvl == Decimal("1")


def test_fee_bearing_pool_uses_token_level_reserves(engine):
    token = _token(
        price="4",
        reserves=Decimal(5) * 10**18 * 10**6,
        exchanges=[_pool(reserves=999, decimals=6, dex_type="alien")],
    )
    valued = engine.value(token, None)
    # 5e24 / (1e18 * 1e6) = 5 tokens, at 4 tez = 20; the leg reserve is ignored
    assert valued.exchanges[0].token_tvl == Decimal("20")


def test_fee_bearing_pool_without_token_reserves_is_zero(engine):
    token = _token(price="4", exchanges=[_pool(reserves=10**24, dex_type="alien")])
    assert engine.value(token, None).token_tvl == 0


def test_non_finite_reserve_coerces_to_zero(engine):
    leg = PoolLeg.model_construct(
        token=LegToken(token_address="KT1tok", token_id="0", decimals=6),
        reserves=Decimal("Infinity"),
    )
    pool = Exchange(dex=Dex(type="quipuswap"), tokens=[leg])
    token = _token(price="2", exchanges=[pool])
    assert engine.value(token, None).token_tvl == 0


def test_aggregate_tvl_is_sum_of_pool_tvls(engine):
    pools = [
        _pool(reserves=1_500_000),
        _pool(reserves=2_250_000, dex_type="vortex"),
        _pool(reserves=10**12 * 10**6, dex_type="alien"),
    ]
    token = _token(price="3", reserves=Decimal("4") * 10**24, exchanges=pools)
    valued = engine.value(token, Decimal("0.5"))
    assert valued.token_tvl == sum(p.token_tvl for p in valued.exchanges)
    assert valued.token_tvl == Decimal("4.5") + Decimal("6.75") + Decimal("12")


def test_no_pools_means_zero_tvl_and_market_cap(engine):
    spot = TokenQuote(token_address="KT1tok", token_id="0", decimals=6, total_supply=10**15,
                      quotes=[_quote("tez", Decimal("10"))])
    valued = engine.value_all(join_pools([spot], []), Decimal("0.5"))[0]
    assert valued.exchanges == []
    assert valued.token_tvl == 0
    assert valued.market_cap == 0


def test_shared_pool_gets_separate_tvl_per_token(engine):
    pool = Exchange(
        dex=Dex(type="quipuswap"),
        tokens=[
            PoolLeg(token=LegToken(token_address="KT1a", token_id="0", decimals=0), reserves=10),
            PoolLeg(token=LegToken(token_address="KT1b", token_id="0", decimals=0), reserves=20),
        ],
    )
    a = _token("KT1a", price="1", exchanges=[pool])
    b = _token("KT1b", price="1", exchanges=[pool])
    va, vb = engine.value_all([a, b], None)
    assert va.exchanges[0].token_tvl == 10
    assert vb.exchanges[0].token_tvl == 20
    assert not hasattr(pool, "token_tvl")


# ------------------------------------------------------------------
# Market cap
# ------------------------------------------------------------------

def test_market_cap_scenario(engine):
    # 1,000,000 supply at 3 decimals = 1000 tokens, at 10 tez = 10000
    token = _token(decimals=3, price="10", supply=1_000_000,
                   exchanges=[_pool(reserves=600, decimals=0)])
    valued = engine.value(token, Decimal("0.5"))
    assert valued.token_tvl == Decimal("6000")
    assert valued.market_cap == Decimal("10000")


def test_liquidity_gate(engine):
    token = _token(decimals=3, price="10", supply=1_000_000,
                   exchanges=[_pool(reserves=499, decimals=0)])
    valued = engine.value(token, Decimal("0.5"))
    assert valued.token_tvl == Decimal("4990")
    assert valued.market_cap == 0


def test_liquidity_floor_is_configurable():
    engine = ValuationEngine(replace(ValuationConfig(), liquidity_floor=Decimal(100)))
    token = _token(decimals=0, price="2", supply=50, exchanges=[_pool(reserves=50, decimals=0)])
    assert engine.value(token, None).market_cap == Decimal("100")


@pytest.mark.parametrize("supply", [None, 0, -5])
def test_market_cap_needs_positive_supply(engine, supply):
    token = _token(decimals=0, price="10", supply=supply,
                   exchanges=[_pool(reserves=10_000, decimals=0)])
    assert engine.value(token, None).market_cap == 0


def test_market_cap_needs_positive_price(engine):
    token = _token(decimals=0, price="0", supply=100,
                   exchanges=[_pool(reserves=10**9, decimals=0)])
    assert engine.value(token, None).market_cap == 0


def test_large_reserves_keep_decimal_precision(engine):
    token = _token(decimals=18, price="0.000000123456789",
                   exchanges=[_pool(reserves=123456789012345678901234567, decimals=18)])
    tvl = engine.value(token, None).token_tvl
    assert tvl == Decimal("123456789.012345678901234567") * Decimal("0.000000123456789")
