"""FastAPI application entry point for the faculty portfolio API."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from faculty_portfolio.api.routes import (
    approvals,
    auth,
    departments,
    documents,
    health,
    items,
    portfolios,
    profile,
)
from faculty_portfolio.services.errors import PortfolioSystemError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

_DEV_SESSION_SECRET = "fpms-development-session-secret"


def get_session_secret() -> str:
    """Return the key used to sign session cookies."""
    return os.getenv("FPMS_SESSION_SECRET") or _DEV_SESSION_SECRET


def get_cors_origins() -> list[str]:
    """Return allowed CORS origins from a comma separated env var."""
    raw = os.getenv("FPMS_CORS_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize resources on startup and clean up on shutdown."""
    from faculty_portfolio.data.db import init_db
    from faculty_portfolio.services.storage import ensure_base_directories

    init_db()
    ensure_base_directories()
    yield


app = FastAPI(
    title="Faculty Portfolio API",
    description="API for managing faculty portfolios, documents, sharing and approvals",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=get_session_secret(),
    session_cookie="fpms_session",
    same_site="lax",
)


@app.exception_handler(PortfolioSystemError)
async def portfolio_error_handler(request: Request, exc: PortfolioSystemError) -> JSONResponse:
    """Translate service exceptions into JSON error responses."""
    if exc.status_code >= 500:
        logger.error("Unhandled service error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


app.include_router(health.router)
app.include_router(auth.router, prefix="/api")
app.include_router(portfolios.router, prefix="/api")
app.include_router(items.router, prefix="/api")
app.include_router(documents.router, prefix="/api")
app.include_router(approvals.router, prefix="/api")
app.include_router(departments.router, prefix="/api")
app.include_router(profile.router, prefix="/api")


def main() -> None:
    """Start the development server."""
    import uvicorn

    uvicorn.run(
        "faculty_portfolio.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
