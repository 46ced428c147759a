from __future__ import annotations

"""
One-way TMDB → catalog sync.

For each page of TMDB's popular movies:
1) upsert every referenced genre by its TMDB id (real name when TMDB's genre
   list has it, `Genre-<id>` placeholder otherwise; placeholders are renamed
   once a real name is known),
2) upsert each movie by `tmdb_id` (metadata only; rating aggregates are never
   touched),
3) make sure each `(movie, genre)` link exists,
then commit the page. A failure rolls back the current page only.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Optional, Set

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.genre import Genre
from app.db.models.movie import Movie
from app.db.models.movie_genre import MovieGenre
from app.services.tmdb_service import TMDBClient, TMDBMovie

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    pages: int = 0
    movies_created: int = 0
    movies_updated: int = 0
    genres_created: int = 0
    links_created: int = 0


def placeholder_genre_name(genre_id: int) -> str:
    return f"Genre-{genre_id}"


def parse_release_date(raw: Optional[str]) -> Optional[date]:
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        logger.warning("Ignoring unparseable TMDB release_date %r", raw)
        return None


async def _upsert_genres(
    db: AsyncSession, genre_ids: Iterable[int], names: Dict[int, str], report: SyncReport
) -> None:
    wanted = set(genre_ids)
    if not wanted:
        return
    existing = {
        g.id: g for g in (await db.execute(select(Genre).where(Genre.id.in_(wanted)))).scalars()
    }
    for genre_id in sorted(wanted):
        genre = existing.get(genre_id)
        if genre is None:
            db.add(Genre(id=genre_id, name=names.get(genre_id) or placeholder_genre_name(genre_id)))
            report.genres_created += 1
        elif genre_id in names and genre.name == placeholder_genre_name(genre_id):
            genre.name = names[genre_id]


async def _upsert_movie(db: AsyncSession, item: TMDBMovie, report: SyncReport) -> Movie:
    movie = (await db.execute(select(Movie).where(Movie.tmdb_id == item.id))).scalar_one_or_none()
    fields = {
        "title": item.title,
        "description": item.overview,
        "release_date": parse_release_date(item.release_date),
        "poster_url": item.poster_path,
        "backdrop_url": item.backdrop_path,
        "popularity": item.popularity,
    }
    if movie is None:
        movie = Movie(tmdb_id=item.id, **fields)
        db.add(movie)
        report.movies_created += 1
    else:
        for key, value in fields.items():
            setattr(movie, key, value)
        report.movies_updated += 1
    await db.flush()
    return movie


async def _link_genres(db: AsyncSession, movie: Movie, genre_ids: Iterable[int], report: SyncReport) -> None:
    linked: Set[int] = set(
        (await db.execute(select(MovieGenre.genre_id).where(MovieGenre.movie_id == movie.id))).scalars()
    )
    for genre_id in dict.fromkeys(genre_ids):
        if genre_id not in linked:
            db.add(MovieGenre(movie_id=movie.id, genre_id=genre_id))
            linked.add(genre_id)
            report.links_created += 1


async def sync_movies(db: AsyncSession, client: TMDBClient, pages: int = 1) -> SyncReport:
    """Pull `pages` pages of popular movies from TMDB into the catalog."""
    if pages < 1:
        raise ValueError("pages must be >= 1")

    report = SyncReport()
    genre_names = await client.get_movie_genres()

    for page in range(1, pages + 1):
        items = await client.get_popular_movies(page)
        logger.info("TMDB page %d: %d movies", page, len(items))
        try:
            await _upsert_genres(db, (gid for item in items for gid in item.genre_ids), genre_names, report)
            await db.flush()
            for item in items:
                movie = await _upsert_movie(db, item, report)
                await _link_genres(db, movie, item.genre_ids, report)
            await db.commit()
        except Exception:
            await db.rollback()
            logger.exception("TMDB sync failed on page %d", page)
            raise
        report.pages += 1

    logger.info("TMDB sync completed: %s", report)
    return report


__all__ = ["SyncReport", "sync_movies", "parse_release_date", "placeholder_genre_name"]
