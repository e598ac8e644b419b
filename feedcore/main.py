from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from feedcore.api.routes import feed, health
from feedcore.core.config import settings
from feedcore.core.errors import (
    FeedError,
    HttpStatusError,
    InvalidFeedFormatError,
    ParseError,
    TransportError,
)
from feedcore.core.logging import get_logger
from feedcore.schemas.api import ErrorResponse

log = get_logger("app")

# Upstream unreachable or failing -> 502; upstream answered with something that is not a feed -> 422
ERROR_STATUS = {
    TransportError: 502,
    HttpStatusError: 502,
    ParseError: 422,
    InvalidFeedFormatError: 422,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info(f"Starting feedcore in {settings.ENV.upper()} mode")
    log.info(f"Default feed: {settings.DEFAULT_FEED_URL} | id fallback: {settings.ID_FALLBACK}")
    yield
    log.info("Application shutdown complete")


app = FastAPI(
    title="feedcore",
    description="RSS 2.0 / Atom fetching and normalization",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.docs_enabled else None,
    debug=settings.is_development,
)


@app.exception_handler(FeedError)
async def feed_error_handler(request: Request, exc: FeedError) -> JSONResponse:
    status = ERROR_STATUS.get(type(exc), 500)
    body = ErrorResponse(
        error=exc.kind,
        detail=exc.message,
        status_code=getattr(exc, "status_code", None),
    )
    return JSONResponse(status_code=status, content=body.model_dump(exclude_none=True))


app.include_router(feed.router)
app.include_router(health.router)
