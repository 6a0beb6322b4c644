"""
Unit tests for joining spot tokens with pools.
"""

from tez_market.core.models import Dex, Exchange, LegToken, PoolLeg, TokenQuote
from tez_market.market.joiner import join_pools


def _token(address, token_id="0", symbol=None):
    return TokenQuote(token_address=address, token_id=token_id, symbol=symbol, decimals=6)


def _pool(*legs, dex_type="quipuswap"):
    return Exchange(
        dex=Dex(type=dex_type),
        tokens=[
            PoolLeg(token=LegToken(token_address=a, token_id=i, decimals=6), reserves=r)
            for a, i, r in legs
        ],
    )


def test_two_leg_pool_attaches_to_both_tokens():
    kusd = _token("KT1kusd", symbol="kUSD")
    usdt = _token("KT1usdt", symbol="USDt")
    pool = _pool(("KT1kusd", "0", 100), ("KT1usdt", "0", 200))

    joined = join_pools([kusd, usdt], [pool])

    assert [t.exchanges for t in joined] == [[pool], [pool]]


def test_token_without_pool_gets_empty_list():
    joined = join_pools([_token("KT1lonely")], [_pool(("tez", None, 5), ("KT1other", "0", 5))])
    assert joined[0].exchanges == []


def test_matching_needs_both_address_and_token_id():
    pool = _pool(("tez", None, 5), ("KT1fa2", "1", 5))
    joined = join_pools([_token("KT1fa2", "0"), _token("KT1fa2", "1")], [pool])
    assert joined[0].exchanges == []
    assert joined[1].exchanges == [pool]


def test_order_of_tokens_and_pools_is_preserved():
    first = _pool(("tez", None, 1), ("KT1a", "0", 1))
    second = _pool(("KT1a", "0", 2), ("KT1b", "0", 2))
    unrelated = _pool(("tez", None, 3), ("KT1c", "0", 3))

    joined = join_pools([_token("KT1b"), _token("KT1a")], [first, unrelated, second])

    assert [t.token_address for t in joined] == ["KT1b", "KT1a"]
    assert joined[1].exchanges == [first, second]


def test_token_fields_are_carried_over():
    token = TokenQuote(
        token_address="KT1a", token_id="0", symbol="A", decimals=8, total_supply=10**12,
    )
    joined = join_pools([token], [])[0]
    assert joined.symbol == "A"
    assert joined.decimals == 8
    assert joined.total_supply == 10**12
    assert joined.key == token.key
