#!/usr/bin/env python3
"""
Reelbase • TMDB Movie Sync
==========================

Pulls popular movies (and the genre list) from TMDB and upserts them into the
catalog. Each page is committed on its own; rerunning is safe.

Usage
-----
    TMDB_API_KEY=... python -m scripts.sync_movies --pages 3

Exit codes: 0 success, 1 TMDB/API failure, 2 missing configuration.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from app.core import logger as _logsetup  # noqa: F401
from app.db.session import async_engine, async_session_maker
from app.services.movie_sync_service import sync_movies
from app.services.tmdb_service import TMDBClient, TMDBConfigurationError, TMDBError

logger = logging.getLogger("scripts.sync_movies")


async def run(pages: int) -> int:
    try:
        client = TMDBClient()
    except TMDBConfigurationError as exc:
        logger.error("%s", exc)
        return 2

    try:
        async with client, async_session_maker() as db:
            report = await sync_movies(db, client, pages=pages)
    except TMDBError as exc:
        logger.error("TMDB sync aborted: %s (status=%s)", exc, exc.status_code)
        return 1
    finally:
        await async_engine.dispose()

    logger.info(
        "Synced %d page(s): %d created, %d updated, %d genres, %d links",
        report.pages,
        report.movies_created,
        report.movies_updated,
        report.genres_created,
        report.links_created,
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Sync popular movies from TMDB")
    ap.add_argument("--pages", type=int, default=1, help="Number of popular-movie pages to fetch (>= 1)")
    args = ap.parse_args(argv)
    if args.pages < 1:
        ap.error("--pages must be >= 1")
    return asyncio.run(run(args.pages))


if __name__ == "__main__":
    sys.exit(main())
