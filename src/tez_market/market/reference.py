"""
Reference price resolution: the USD value of one tez for the current run.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Protocol

from tez_market.core.models import ReferenceQuote

logger = logging.getLogger("tez_market.reference")


class ReferenceQuoteSource(Protocol):
    def get_last_quote(self) -> ReferenceQuote | None: ...


def resolve_reference_price(source: ReferenceQuoteSource) -> Decimal | None:
    """
    Return the tez/USD rate, or None when it is unavailable.

    None means every USD-denominated value of the run is undefined; the
    pipeline still runs.
    """
    quote = source.get_last_quote()
    if quote is None or quote.usd is None:
        logger.warning("Reference USD price unavailable")
        return None
    if not quote.usd.is_finite() or quote.usd <= 0:
        logger.warning(f"Ignoring non-positive reference USD price: {quote.usd}")
        return None
    return quote.usd
