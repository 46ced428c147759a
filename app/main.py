# app/main.py
from __future__ import annotations

"""
# Reelbase API — Application Entrypoint (FastAPI)

ASGI application factory and lifecycle for the Reelbase movie catalog.

## Design Goals
- Deterministic, testable **app factory** (`create_app`) with explicit lifespan.
- Explicit **middleware order**:
  1) request id → 2) security headers/HTTPS → 3) CORS → 4) gzip →
  5) rate limits → 6) strip `Server` header.
- Centralized problem+json exception handling.

## Probes
- `/healthz` — liveness (process up).
- `/readyz` — readiness (quick DB check).
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable
import logging
import os

from fastapi import FastAPI, Request
from starlette.middleware.gzip import GZipMiddleware
from starlette.responses import JSONResponse, Response

# -- Logging bootstrap (Loguru + stdlib intercept) ----------------------------
from app.core import logger as _logsetup  # noqa: F401

from app.api.v1.routers import router as api_v1_router
from app.core.config import settings
from app.core.exception_handlers import install_exception_handlers
from app.core.limiter import install_rate_limiter
from app.db.session import async_engine, db_healthcheck
from app.middleware.request_id import RequestIDMiddleware
from app.security_headers import configure_cors, install_security

logger = logging.getLogger("app.main")


# ─────────────────────────────────────────────────────────────────────────────
# 🔄 Lifespan: startup & shutdown
# ─────────────────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log the startup banner; dispose the DB engine on shutdown."""
    logger.info("✅ %s starting up (env=%s)", settings.PROJECT_NAME, settings.ENV)
    try:
        yield
    finally:
        try:
            await async_engine.dispose()
            logger.info("🛑 Database engine disposed")
        except Exception:
            logger.exception("Error disposing DB engine")
        logger.info("🛑 %s shutting down", settings.PROJECT_NAME)


# ─────────────────────────────────────────────────────────────────────────────
# 🏗️ App factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app() -> FastAPI:
    """
    Build and configure the FastAPI app instance.

    Returns:
        FastAPI: fully wired application with middleware, exception handlers,
        routers, and health/readiness endpoints.
    """
    docs_url = "/docs" if settings.ENABLE_DOCS else None
    redoc_url = "/redoc" if settings.ENABLE_DOCS else None
    openapi_url = "/openapi.json" if settings.ENABLE_DOCS else None

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url=docs_url,
        redoc_url=redoc_url,
        openapi_url=openapi_url,
        lifespan=lifespan,
    )

    # ── Middlewares (order matters) ─────────────────────────────────────────
    app.add_middleware(RequestIDMiddleware)  # 1) Correlation ID

    # 2) Security headers + HTTPS redirect (config via env)
    install_security(app)

    # 3) CORS (allow-list via env; exposes X-Request-ID)
    configure_cors(app)

    # 4) GZip (safe defaults)
    app.add_middleware(GZipMiddleware, minimum_size=1024)

    # 5) Rate limiter (SlowAPI middleware + 429 handler)
    install_rate_limiter(app)

    # 6) Strip the Server header at the end of the chain
    @app.middleware("http")
    async def _strip_server_header(request: Request, call_next: Callable) -> Response:
        response: Response = await call_next(request)
        if "server" in response.headers:
            del response.headers["server"]
        return response

    # ── Exception handlers (problem+json) ───────────────────────────────────
    install_exception_handlers(app)

    # ── Routers (versioned API) ─────────────────────────────────────────────
    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    # ── Meta endpoints ──────────────────────────────────────────────────────
    @app.get("/healthz", tags=["meta"])
    async def healthz() -> dict[str, bool]:
        """Liveness probe. No external checks."""
        return {"ok": True}

    @app.get("/readyz", tags=["meta"])
    async def readyz() -> JSONResponse:
        """Readiness probe; 503 when the database is unreachable."""
        db_ok = await db_healthcheck()
        return JSONResponse(
            {"ready": db_ok, "checks": {"db": db_ok}},
            status_code=200 if db_ok else 503,
        )

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Minimal root that points to docs (when enabled)."""
        return JSONResponse(
            {"name": settings.PROJECT_NAME, "docs": app.docs_url or "", "version": settings.VERSION}
        )

    return app


# ─────────────────────────────────────────────────────────────────────────────
# 🚀 Module-level ASGI app for Uvicorn/Gunicorn
# ─────────────────────────────────────────────────────────────────────────────
app = create_app()
__all__ = ["create_app", "app"]


# Local dev runner (prefer: `uvicorn app.main:app --reload`)
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "1") == "1",
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
