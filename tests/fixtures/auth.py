from __future__ import annotations

from typing import Callable, Dict

import pytest

from app.core.security import create_access_token
from app.db.models.user import User


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers_for() -> Callable[[User], Dict[str, str]]:
    """Build `Authorization` headers carrying a fresh token for any user."""
    def _headers(u: User) -> Dict[str, str]:
        return bearer(create_access_token(u.id, "user"))

    return _headers


@pytest.fixture
def auth_headers(user: User, auth_headers_for) -> Dict[str, str]:
    return auth_headers_for(user)
