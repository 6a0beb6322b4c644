"""
API module for the tez market overview.

Provides FastAPI routes and models for serving the ranked overview over HTTP.
"""

from tez_market.api.models import OverviewResponse, RankedTokenResponse, TokenValuationResponse

__all__ = [
    "OverviewResponse",
    "RankedTokenResponse",
    "TokenValuationResponse",
]
