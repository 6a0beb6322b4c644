import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tez_market.api.routes import router
from tez_market.core.blocklist import load_blocklist
from tez_market.core.config import FeedConfig, ValuationConfig
from tez_market.feeds.base import FeedFormatError
from tez_market.feeds.snapshot import MarketFeeds

logger = logging.getLogger("tez_market.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load configuration
    feed_config = FeedConfig.from_env()
    blocklist = load_blocklist(feed_config.blocklist_path)

    feeds = MarketFeeds.from_config(feed_config)

    # Attach to app state
    app.state.feeds = feeds
    app.state.valuation_config = ValuationConfig(blocklist=blocklist)

    yield
    feeds.close()


app = FastAPI(
    title="tez-market",
    description="Ranked market overview of tokens traded on Tezos DEXes",
    version="0.1.0",
    lifespan=lifespan,
)

# Allow CORS for easy frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Register routes
app.include_router(router)


@app.exception_handler(FeedFormatError)
async def feed_format_error_handler(request: Request, exc: FeedFormatError):
    logger.error(f"Upstream feed returned a malformed payload: {exc}")
    return JSONResponse(
        status_code=502,
        content={"detail": str(exc)},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc)},
    )


@app.get("/health")
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok"}
