from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from tez_market.api.server import app
from tez_market.core.models import (
    Exchange,
    MarketSnapshot,
    TokenQuote,
)
from tez_market.feeds.base import FeedFormatError


def _snapshot():
    tokens = [
        TokenQuote.model_validate({
            "tokenAddress": f"KT1tok{i}", "tokenId": 0, "symbol": f"T{i}", "decimals": 0,
            "totalSupply": str(1000 * (i + 1)),
            "quotes": [{"token": {"tokenAddress": "tez"}, "quote": "10"}],
        })
        for i in range(3)
    ]
    pools = [
        Exchange.model_validate({
            "dex": {"type": "quipuswap"},
            "tokens": [
                {"token": {"tokenAddress": "tez", "decimals": 6}, "reserves": "1"},
                {"token": {"tokenAddress": f"KT1tok{i}", "tokenId": 0, "decimals": 0}, "reserves": "1000"},
            ],
        })
        for i in range(3)
    ]
    return MarketSnapshot(reference_usd=Decimal("0.5"), pools=pools, spot=tokens)


class StubFeeds:
    def __init__(self, snapshot=None, error=None):
        self._snapshot = snapshot
        self._error = error

    def snapshot(self):
        if self._error:
            raise self._error
        return self._snapshot

    def close(self):
        pass


@pytest.fixture
def client():
    # Feeds are replaced after startup so no request leaves the process
    with TestClient(app) as c:
        c.app.state.feeds = StubFeeds(_snapshot())
        yield c


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_top_tokens(client):
    response = client.get("/tokens/top")
    assert response.status_code == 200
    rows = response.json()
    assert [row["symbol"] for row in rows] == ["T2", "T1", "T0"]
    assert [row["rank"] for row in rows] == [1, 2, 3]
    assert Decimal(rows[0]["market_cap"]) == Decimal("30000")
    assert Decimal(rows[0]["token_tvl"]) == Decimal("10000")
    assert Decimal(rows[0]["current_price_usd"]) == Decimal("5")
    assert rows[0]["has_history"] is False
    assert rows[0]["price_change"] == 0


def test_top_tokens_limit(client):
    response = client.get("/tokens/top", params={"limit": 1})
    assert response.status_code == 200
    assert [row["symbol"] for row in response.json()] == ["T2"]


def test_top_tokens_invalid_limit(client):
    response = client.get("/tokens/top", params={"limit": 0})
    assert response.status_code == 422


def test_overview(client):
    response = client.get("/overview")
    assert response.status_code == 200
    body = response.json()
    assert body["tokens_considered"] == 3
    assert body["tokens_with_market_cap"] == 3
    assert Decimal(body["reference_usd"]) == Decimal("0.5")
    assert len(body["tokens"]) == 3


def test_malformed_feed_returns_502(client):
    client.app.state.feeds = StubFeeds(error=FeedFormatError("crunchy: expected a JSON array"))
    response = client.get("/tokens/top")
    assert response.status_code == 502
    assert "expected a JSON array" in response.text


def test_missing_feeds_returns_500(client):
    client.app.state.feeds = None
    response = client.get("/overview")
    assert response.status_code == 500
    assert "not initialized" in response.text


def test_all_tokens_includes_tokens_without_market_cap(client):
    snapshot = _snapshot()
    unpriced = TokenQuote.model_validate({
        "tokenAddress": "KT1nopool", "tokenId": 0, "symbol": "NOPOOL", "decimals": 0,
        "totalSupply": "1000",
    })
    client.app.state.feeds = StubFeeds(snapshot.model_copy(update={"spot": [unpriced, *snapshot.spot]}))

    response = client.get("/tokens")
    assert response.status_code == 200
    rows = response.json()
    assert [row["symbol"] for row in rows] == ["NOPOOL", "T0", "T1", "T2"]
    assert "rank" not in rows[0]
    assert rows[0]["token_key"] == "KT1nopool_0"
    assert rows[0]["current_price"] is None
    assert Decimal(rows[0]["market_cap"]) == 0
    assert Decimal(rows[1]["market_cap"]) == Decimal("10000")


def test_all_tokens_missing_feeds_returns_500(client):
    client.app.state.feeds = None
    assert client.get("/tokens").status_code == 500
