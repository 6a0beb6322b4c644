"""
Period-over-period price change.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from tez_market.core.models import HistoricalPrice, ValuedToken

logger = logging.getLogger("tez_market.change")


def percent_change(current: Decimal | None, previous: Decimal | None) -> float | None:
    """
    Percentage change from ``previous`` to ``current`` as a float.

    None when either price is undefined or the previous price is 0.
    """
    if current is None or previous is None or previous == 0:
        return None
    now = float(current)
    before = float(previous)
    return (now - before) / before * 100


def apply_price_change(
    tokens: Iterable[ValuedToken],
    history: Iterable[HistoricalPrice],
) -> list[ValuedToken]:
    """
    Attach ``price_change`` to each valued token.

    Tokens are matched to their historical record by composite key. A token
    with no historical record keeps ``price_change == 0`` and
    ``has_history == False``; it is never dropped.
    """
    previous = {record.key: record for record in history}

    changed = []
    missing = 0
    for token in tokens:
        record = previous.get(token.key)
        if record is None:
            missing += 1
            changed.append(token.model_copy(update={"price_change": 0.0, "has_history": False}))
            continue
        changed.append(token.model_copy(update={
            "price_change": percent_change(token.current_price, record.current_price),
            "has_history": True,
        }))

    if missing:
        logger.info(f"{missing} tokens have no historical price; change defaults to 0")
    return changed
