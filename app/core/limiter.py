from __future__ import annotations

"""
Reelbase — HTTP Rate Limiting (SlowAPI)
=======================================

Highlights
----------
- **User/IP aware** keying: per-user when auth sets `request.state.user_id`,
  else per-client-IP (using XFF/X-Real-IP/client.host).
- **Exemptions**: health/docs paths and configurable trusted IPs.
- **Test/CI friendly**:
    - `RATE_LIMIT_ENABLED=false` turns the limiter into a no-op.
    - `RATE_LIMIT_TEST_BYPASS` exempts every request when truthy.
- **Backends**: any `limits` storage via `RATELIMIT_STORAGE_URI`, in-memory by default.

Environment
-----------
RATE_LIMIT_ENABLED           default: "true"
DEFAULT_RATE_LIMIT           default: "100/minute"
RATELIMIT_STORAGE_URI        default: "memory://"
RATE_LIMIT_SKIP_PATHS        default: "/healthz,/readyz,/docs,/openapi.json,/favicon.ico"
RATE_LIMIT_TRUSTED_IPS       default: "" (comma separated)
RATE_LIMIT_TEST_BYPASS       default: "" (truthy to bypass in tests/CI)

Usage
-----
    from app.core.limiter import install_rate_limiter, rate_limit

    app = FastAPI()
    install_rate_limiter(app)

    @router.post("/auth/login")
    @rate_limit("5/minute")
    async def login(request: Request, response: Response, ...): ...

Decorated endpoints must accept both `request: Request` and `response: Response`
so SlowAPI can read the client and inject `X-RateLimit-*` headers.
"""

import os
from typing import Callable, List, Optional, Set

from dotenv import load_dotenv
from loguru import logger
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.requests import Request

# ──────────────────────────────────────────────────────────────
# ⚙️ Environment & defaults
# ──────────────────────────────────────────────────────────────
load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}

RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").strip().lower() in _TRUTHY
DEFAULT_LIMIT = os.getenv("DEFAULT_RATE_LIMIT", "100/minute").strip()
STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "").strip() or "memory://"

SKIP_PATHS: List[str] = [
    p.strip()
    for p in os.getenv("RATE_LIMIT_SKIP_PATHS", "/healthz,/readyz,/docs,/openapi.json,/favicon.ico").split(",")
    if p.strip()
]
TRUSTED_IPS: Set[str] = {ip.strip() for ip in os.getenv("RATE_LIMIT_TRUSTED_IPS", "").split(",") if ip.strip()}


# ──────────────────────────────────────────────────────────────
# 🧠 Keying & exemptions
# ──────────────────────────────────────────────────────────────
def _client_ip(request: Request) -> str:
    """Best-effort client IP: X-Forwarded-For (first hop), X-Real-IP, then ASGI client."""
    xff = request.headers.get("x-forwarded-for")
    if xff:
        ip = xff.split(",")[0].strip()
        if ip:
            return ip
    xri = request.headers.get("x-real-ip")
    if xri:
        return xri.strip()
    return get_remote_address(request) or "unknown"


def get_user_rate_limit_key(request: Request) -> str:
    """`user:<id>` when the caller is authenticated, else `ip:<addr>`."""
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return f"user:{user_id}"
    return f"ip:{_client_ip(request)}"


def should_exempt_request(request: Optional[Request]) -> bool:
    """Exempt skipped paths, trusted IPs, and everything under test bypass."""
    # Read at request time so tests can toggle without re-importing this module.
    if os.getenv("RATE_LIMIT_TEST_BYPASS", "").strip().lower() in _TRUTHY:
        return True
    if request is None:
        return False

    path = request.url.path
    if any(path == p or path.startswith(p.rstrip("/") + "/") for p in SKIP_PATHS):
        return True
    return _client_ip(request) in TRUSTED_IPS


# ──────────────────────────────────────────────────────────────
# 🧰 Limiter instance
# ──────────────────────────────────────────────────────────────
def _build_default_limits() -> List[str]:
    return [chunk.strip() for chunk in DEFAULT_LIMIT.split(",") if chunk.strip()]


limiter = Limiter(
    key_func=get_user_rate_limit_key,
    default_limits=_build_default_limits(),
    headers_enabled=True,
    storage_uri=STORAGE_URI,
    enabled=RATE_LIMIT_ENABLED,
)


# ──────────────────────────────────────────────────────────────
# 🎛 Decorators
# ──────────────────────────────────────────────────────────────
def _exempt_when(request: Request) -> bool:
    return should_exempt_request(request)


def rate_limit(*limits: str) -> Callable:
    """
    Apply per-route limits with Reelbase exemptions.

    Examples
    --------
    @rate_limit("10/minute")
    @rate_limit("5/second", "100/minute")
    """
    selected = list(limits) if limits else _build_default_limits()

    def _apply(fn: Callable) -> Callable:
        for limit_value in reversed(selected):
            fn = limiter.limit(limit_value, exempt_when=_exempt_when)(fn)
        return fn

    return _apply


# ──────────────────────────────────────────────────────────────
# 🔧 Installer
# ──────────────────────────────────────────────────────────────
def install_rate_limiter(app) -> None:
    """Attach SlowAPI middleware and the 429 handler (skipped when disabled)."""
    if not RATE_LIMIT_ENABLED:
        logger.info("RateLimiter disabled by env; middleware not installed")
        return

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    logger.info("SlowAPI middleware installed | default={} | storage={}", _build_default_limits(), STORAGE_URI)


__all__ = [
    "limiter",
    "rate_limit",
    "install_rate_limiter",
    "should_exempt_request",
    "get_user_rate_limit_key",
]
