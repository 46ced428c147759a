# tests/conftest.py
"""
Global test bootstrap
- Points the app at a throwaway SQLite database and a fixed JWT secret
- Turns SlowAPI into a no-op (and bypasses it on top, for safety)
- Keeps log output on the console only
"""

from __future__ import annotations

import os
import warnings

from sqlalchemy.exc import SAWarning

# ──────────────────────────────────────────────────────────────────────────────
# 🌱 Test env
#   NOTE: These are set BEFORE importing the app/fixtures so they take effect.
# ──────────────────────────────────────────────────────────────────────────────
os.environ.setdefault("ENV", "test")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-please-change-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./reelbase-test.db")
os.environ.setdefault("LOG_TO_FILE", "0")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("TMDB_API_KEY", "test-tmdb-key")
os.environ.setdefault("RATELIMIT_STORAGE_URI", "memory://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_TEST_BYPASS", "1")

warnings.filterwarnings("ignore", category=SAWarning, message=r".*conflicts with relationship\(s\):.*")

# ──────────────────────────────────────────────────────────────────────────────
# 📦 Pull in the fixtures (db, app, auth, users)
# ──────────────────────────────────────────────────────────────────────────────
from tests.fixtures.db import *          # noqa: E402,F401,F403
from tests.fixtures.app import *         # noqa: E402,F401,F403
from tests.fixtures.users import *       # noqa: E402,F401,F403
from tests.fixtures.auth import *        # noqa: E402,F401,F403
