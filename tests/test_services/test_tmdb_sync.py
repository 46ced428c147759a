import httpx
import pytest
from sqlalchemy import func, select

from app.core.config import settings
from app.db.models.genre import Genre
from app.db.models.movie import Movie
from app.db.models.movie_genre import MovieGenre
from app.services.movie_sync_service import parse_release_date, sync_movies
from app.services.tmdb_service import TMDBClient, TMDBConfigurationError, TMDBError

GENRES = {"genres": [{"id": 18, "name": "Drama"}, {"id": 878, "name": "Science Fiction"}]}

PAGES = {
    "1": {
        "page": 1,
        "results": [
            {
                "id": 329865,
                "title": "Arrival",
                "overview": "Linguist meets heptapods.",
                "release_date": "2016-11-10",
                "poster_path": "/arrival.jpg",
                "backdrop_path": "/arrival-bg.jpg",
                "genre_ids": [18, 878, 18],
                "popularity": 88.1,
            },
            {
                "id": 42,
                "title": "Untitled",
                "overview": "",
                "release_date": "",
                "poster_path": None,
                "backdrop_path": None,
                "genre_ids": [9999],
                "popularity": 1.0,
            },
        ],
    },
    "2": {
        "page": 2,
        "results": [
            {"id": 603, "title": "The Matrix", "release_date": "1999-03-30", "genre_ids": [878], "popularity": 70.0},
        ],
    },
}


def _transport(calls: list, titles: dict | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.url.params.get("api_key") != "k":
            return httpx.Response(401, json={"status_message": "Invalid API key"})
        if request.url.path.endswith("/genre/movie/list"):
            return httpx.Response(200, json=GENRES)
        if request.url.path.endswith("/movie/popular"):
            page = PAGES[request.url.params["page"]]
            if titles:
                page = {
                    **page,
                    "results": [{**m, "title": titles.get(m["id"], m["title"])} for m in page["results"]],
                }
            return httpx.Response(200, json=page)
        return httpx.Response(404)

    return httpx.MockTransport(handler)


def _client(calls: list, **kwargs) -> TMDBClient:
    return TMDBClient("k", base_url="https://tmdb.test/3", transport=_transport(calls, **kwargs))


async def _count(db, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


# ─────────────────────────────────────────────────────────────
# Client
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_client_sends_key_and_language():
    calls: list = []
    async with _client(calls) as tmdb:
        movies = await tmdb.get_popular_movies(2)

    assert [m.title for m in movies] == ["The Matrix"]
    assert calls[0].url.params["language"] == settings.TMDB_LANGUAGE
    assert calls[0].url.params["page"] == "2"


@pytest.mark.anyio
async def test_client_raises_on_error_status():
    calls: list = []
    tmdb = TMDBClient("wrong", base_url="https://tmdb.test/3", transport=_transport(calls))
    with pytest.raises(TMDBError) as info:
        await tmdb.get_movie_genres()
    await tmdb.aclose()
    assert info.value.status_code == 401


def test_client_requires_api_key(monkeypatch):
    monkeypatch.setattr(settings, "TMDB_API_KEY", None)
    with pytest.raises(TMDBConfigurationError):
        TMDBClient()


def test_parse_release_date():
    assert parse_release_date("") is None
    assert parse_release_date(None) is None
    assert parse_release_date("not a date") is None
    assert str(parse_release_date("1999-03-30")) == "1999-03-30"


# ─────────────────────────────────────────────────────────────
# Sync
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_sync_imports_movies_genres_and_links(db_session):
    calls: list = []
    async with _client(calls) as tmdb:
        report = await sync_movies(db_session, tmdb, pages=2)

    assert (report.pages, report.movies_created, report.movies_updated) == (2, 3, 0)
    assert report.genres_created == 3
    assert report.links_created == 4

    arrival = (await db_session.execute(select(Movie).where(Movie.tmdb_id == 329865))).scalar_one()
    assert arrival.title == "Arrival"
    assert str(arrival.release_date) == "2016-11-10"
    assert arrival.poster_url == "/arrival.jpg"
    assert arrival.rating_count == 0

    untitled = (await db_session.execute(select(Movie).where(Movie.tmdb_id == 42))).scalar_one()
    assert untitled.release_date is None

    names = dict((await db_session.execute(select(Genre.id, Genre.name))).all())
    assert names == {18: "Drama", 878: "Science Fiction", 9999: "Genre-9999"}

    # Genre list fetched once, then one call per page.
    assert [c.url.path.rsplit("/", 1)[-1] for c in calls] == ["list", "popular", "popular"]


@pytest.mark.anyio
async def test_resync_updates_in_place_and_keeps_ratings(db_session):
    async with _client([]) as tmdb:
        await sync_movies(db_session, tmdb, pages=1)

    arrival = (await db_session.execute(select(Movie).where(Movie.tmdb_id == 329865))).scalar_one()
    arrival.rating_count, arrival.average_rating = 3, 4.0
    await db_session.commit()

    async with _client([], titles={329865: "Arrival (2016)"}) as tmdb:
        report = await sync_movies(db_session, tmdb, pages=1)

    assert (report.movies_created, report.movies_updated, report.links_created) == (0, 2, 0)
    assert await _count(db_session, Movie) == 2
    assert await _count(db_session, MovieGenre) == 3

    arrival = (await db_session.execute(select(Movie).where(Movie.tmdb_id == 329865))).scalar_one()
    assert arrival.title == "Arrival (2016)"
    assert (arrival.rating_count, arrival.average_rating) == (3, 4.0)


@pytest.mark.anyio
async def test_sync_rejects_zero_pages(db_session):
    async with _client([]) as tmdb:
        with pytest.raises(ValueError):
            await sync_movies(db_session, tmdb, pages=0)


# ─────────────────────────────────────────────────────────────
# CLI
# ─────────────────────────────────────────────────────────────
def test_cli_rejects_bad_page_count():
    from scripts.sync_movies import main

    with pytest.raises(SystemExit) as info:
        main(["--pages", "0"])
    assert info.value.code == 2


@pytest.mark.anyio
async def test_cli_reports_missing_key(monkeypatch):
    from scripts import sync_movies as cli

    monkeypatch.setattr(settings, "TMDB_API_KEY", None)
    assert await cli.run(1) == 2
