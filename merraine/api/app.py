"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from merraine.api.auth import require_auth
from merraine.api.limiter import limiter
from merraine.clients.pearch import (
    PearchAuthError,
    PearchError,
    PearchRateLimitError,
    PearchTimeoutError,
)
from merraine.config import settings
from merraine.db.base import init_db

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = settings.cors_origins.split(",")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    try:
        init_db()
    except ValueError:
        logger.warning("DATABASE_URL not configured, saved searches and credit history are unavailable")
    yield


app = FastAPI(
    title="Merraine AI API",
    description="Candidate search, enrichment and job matching on top of Pearch",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with rate limit headers when the local limit is exceeded."""
    response = JSONResponse(
        status_code=429,
        content={"detail": f"Too many requests. Rate limit exceeded: {exc.detail}"},
    )
    return request.app.state.limiter._inject_headers(response, request.state.view_rate_limit)


# Vendor failures: timeout -> 504, rate limit -> 429, auth -> 502, anything else -> 500
PEARCH_ERROR_STATUS: list[tuple[type[PearchError], int]] = [
    (PearchTimeoutError, 504),
    (PearchRateLimitError, 429),
    (PearchAuthError, 502),
]


@app.exception_handler(PearchError)
async def pearch_error_handler(request: Request, exc: PearchError):
    status_code = next((code for cls, code in PEARCH_ERROR_STATUS if isinstance(exc, cls)), 500)
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Any other failure becomes a 500 carrying the underlying message."""
    logger.exception(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc) or type(exc).__name__})


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


# Import and include routers
from merraine.api.routes import auth, credits, enrich, jobs, match, saved, search, searches  # noqa: E402

protected = [Depends(require_auth)]

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(search.router, prefix="/api/search", tags=["Search"], dependencies=protected)
app.include_router(enrich.router, prefix="/api/enrich", tags=["Enrich"], dependencies=protected)
app.include_router(jobs.router, prefix="/api/jobs", tags=["Jobs"], dependencies=protected)
app.include_router(match.router, prefix="/api/match", tags=["Match"], dependencies=protected)
app.include_router(searches.router, prefix="/api/searches", tags=["Searches"], dependencies=protected)
app.include_router(saved.router, prefix="/api/saved", tags=["Saved"], dependencies=protected)
app.include_router(credits.router, prefix="/api/credits", tags=["Credits"], dependencies=protected)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
