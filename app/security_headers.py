# app/security_headers.py
from __future__ import annotations

"""
# Reelbase — Security Headers & CORS

Security headers and CORS utilities for a JSON API.

## What you get
- **Headers**: a locked-down CSP (`default-src 'none'`), HSTS, Referrer-Policy,
  X-Content-Type-Options, X-Frame-Options.
- **CORS installer**: strict allow-list from `settings.BACKEND_CORS_ORIGINS`.
- **Cache helper**: `set_sensitive_cache()` for token-issuing responses.
- **Skip list**: configurable path prefixes (docs) so Swagger UI keeps working.

## Env knobs
- ENABLE_HTTPS_REDIRECT (default "false")
- SECURITY_SKIP_PATHS (CSV; default "/docs,/redoc,/openapi.json")
- HSTS_MAX_AGE (31536000)
- REFERRER_POLICY (default "no-referrer")
"""

import os
from typing import Iterable, List, Optional, Tuple

from fastapi import Response
from starlette.middleware.cors import CORSMiddleware
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.core.config import settings

# ─────────────────────────────────────────────────────────────
# ⚙️ Configuration
# ─────────────────────────────────────────────────────────────
HSTS_MAX_AGE = int(os.getenv("HSTS_MAX_AGE", "31536000"))
REFERRER_POLICY = os.getenv("REFERRER_POLICY", "no-referrer")
SKIP_PREFIXES: Tuple[str, ...] = tuple(
    p.strip() for p in os.getenv("SECURITY_SKIP_PATHS", "/docs,/redoc,/openapi.json").split(",") if p.strip()
)

_API_HEADERS: List[Tuple[str, str]] = [
    ("Strict-Transport-Security", f"max-age={HSTS_MAX_AGE}; includeSubDomains"),
    ("X-Content-Type-Options", "nosniff"),
    ("X-Frame-Options", "DENY"),
    ("Referrer-Policy", REFERRER_POLICY),
    ("Content-Security-Policy", "default-src 'none'; frame-ancestors 'none'"),
]


# ─────────────────────────────────────────────────────────────
# 🧩 Middleware
# ─────────────────────────────────────────────────────────────
class SecurityHeadersMiddleware:
    """ASGI middleware that applies the API security headers idempotently."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http" or scope.get("path", "").startswith(SKIP_PREFIXES):
            return await self.app(scope, receive, send)

        async def send_wrapper(message: Message) -> None:
            if message.get("type") == "http.response.start":
                raw = list(message.get("headers", []))
                present = {k.lower() for k, _ in raw}
                for name, value in _API_HEADERS:
                    if name.lower().encode("latin-1") not in present:
                        raw.append((name.encode("latin-1"), value.encode("latin-1")))
                message["headers"] = raw
            await send(message)

        await self.app(scope, receive, send_wrapper)


# ─────────────────────────────────────────────────────────────
# 🔓 Route helpers
# ─────────────────────────────────────────────────────────────
def set_sensitive_cache(response: Response) -> None:
    """Mark a response as non-cacheable (tokens, credentials)."""
    response.headers["Cache-Control"] = "no-store"
    response.headers["Pragma"] = "no-cache"
    response.headers["Expires"] = "0"


# ─────────────────────────────────────────────────────────────
# 🌐 CORS installer (allow-list, not '*')
# ─────────────────────────────────────────────────────────────
def configure_cors(
    app,
    *,
    origins: Optional[Iterable[str]] = None,
    allow_credentials: bool = True,
) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(origins if origins is not None else settings.cors_origins_list),
        allow_credentials=allow_credentials,
        allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "Retry-After"],
        max_age=3600,
    )


def install_security(app) -> None:
    """Add HTTPS redirect (opt-in) and the security headers middleware."""
    if os.getenv("ENABLE_HTTPS_REDIRECT", "false").lower() == "true":
        app.add_middleware(HTTPSRedirectMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)


__all__ = [
    "SecurityHeadersMiddleware",
    "install_security",
    "configure_cors",
    "set_sensitive_cache",
]
