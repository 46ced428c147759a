# app/core/exceptions.py
from __future__ import annotations

"""
Reelbase — Application Exceptions
=================================
A small, consistent layer on top of FastAPI/Starlette's `HTTPException` that
lets us attach a stable machine-readable `code` and structured details, and
integrate cleanly with the problem+json shape from `app.core.exception_handlers`.

Taxonomy
--------
- `ValidationException`         422  VALIDATION_ERROR
- `NotFoundException`           404  NOT_FOUND
- `UnauthenticatedException`    401  UNAUTHENTICATED
- `InvalidTokenException`       401  INVALID_TOKEN
- `ConflictException`           409  CONFLICT
- `InvalidCredentialsException` 401  INVALID_CREDENTIALS

None of these are retried; callers fix input or re-authenticate.

Usage
-----
    raise NotFoundException("Movie not found", details={"movie_id": str(movie_id)})
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

__all__ = [
    "AppException",
    "ValidationException",
    "NotFoundException",
    "UnauthenticatedException",
    "InvalidTokenException",
    "ConflictException",
    "InvalidCredentialsException",
]


# ──────────────────────────────────────────────────────────────
# 📦 Core: AppException
# ──────────────────────────────────────────────────────────────
class AppException(HTTPException):
    """Base application-level exception with a stable error code.

    Attributes
    -----------
    status_code : int
        HTTP status code.
    message : str
        Human-readable error message (serialized as `detail` as well).
    code : str
        Machine-readable error code, stable across releases.
    details : Any
        Optional machine-readable details (field names, ids, limits).
    headers : dict | None
        Optional headers (e.g., `{"WWW-Authenticate": "Bearer"}`).
    """

    default_status: int = status.HTTP_400_BAD_REQUEST
    default_code: str = "BAD_REQUEST"
    default_message: str = "Bad request"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        message = message or self.default_message
        super().__init__(status_code=status_code or self.default_status, detail=message, headers=headers)
        self.message: str = message
        self.code: str = code or self.default_code
        self.details: Optional[Any] = details

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    # ── [Helper] Canonical body used by handlers ───────────────────────────
    def to_problem(self, *, instance: str = "", request_id: Optional[str] = None) -> Dict[str, Any]:
        """Return a dict matching our problem+json shape."""
        body: Dict[str, Any] = {
            "type": "about:blank",
            "title": self.__class__.__name__.replace("Exception", "") or "Error",
            "status": self.status_code,
            "detail": self.message,
            "code": self.code,
            "instance": instance,
        }
        if request_id:
            body["request_id"] = request_id
        if self.details is not None:
            body["details"] = self.details
        return body


# ──────────────────────────────────────────────────────────────
# 🧾 Input / lookup errors
# ──────────────────────────────────────────────────────────────
class ValidationException(AppException):
    """Bad input shape or range."""

    default_status = 422
    default_code = "VALIDATION_ERROR"
    default_message = "Invalid input"


class NotFoundException(AppException):
    """Referenced entity does not exist."""

    default_status = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"
    default_message = "Not found"


class ConflictException(AppException):
    """Unique-constraint violation (e.g., email already registered)."""

    default_status = status.HTTP_409_CONFLICT
    default_code = "CONFLICT"
    default_message = "Resource already exists"


# ──────────────────────────────────────────────────────────────
# 🔑 Auth/Token exceptions
# ──────────────────────────────────────────────────────────────
class UnauthenticatedException(AppException):
    """No verified identity is attached to the request."""

    default_status = status.HTTP_401_UNAUTHORIZED
    default_code = "UNAUTHENTICATED"
    default_message = "Unauthenticated"

    def __init__(self, message: Optional[str] = None, **kwargs: Any) -> None:
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(message, **kwargs)


class InvalidTokenException(UnauthenticatedException):
    """Bearer token failed signature, expiry, or claim checks."""

    default_code = "INVALID_TOKEN"
    default_message = "Invalid or expired token"


class InvalidCredentialsException(AppException):
    """Wrong email or password; the two cases are indistinguishable."""

    default_status = status.HTTP_401_UNAUTHORIZED
    default_code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password"
