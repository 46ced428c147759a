import random
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from app.core.exceptions import NotFoundException, ValidationException
from app.db.models.movie import Movie
from app.db.models.rating import Rating
from app.services.rating_service import (
    MAX_RATING,
    MIN_RATING,
    movie_rating_stats,
    rate_movie,
    validate_rating_value,
)


async def _fresh_movie(db_session, movie_id):
    return (
        await db_session.execute(
            select(Movie).where(Movie.id == movie_id).execution_options(populate_existing=True)
        )
    ).scalar_one()


@pytest.mark.parametrize("bad", [0, 6, True, 3.0, "3", None])
def test_validate_rating_value_rejects(bad):
    with pytest.raises(ValidationException):
        validate_rating_value(bad)


@pytest.mark.anyio
async def test_worked_example(db_session, make_user, make_movie):
    alice, bob = await make_user(), await make_user()
    film = await make_movie()
    alice_id, bob_id, film_id = alice.id, bob.id, film.id

    await rate_movie(db_session, alice_id, film_id, 4)
    fresh = await _fresh_movie(db_session, film_id)
    assert (fresh.rating_count, fresh.average_rating) == (1, 4.0)

    await rate_movie(db_session, bob_id, film_id, 2)
    fresh = await _fresh_movie(db_session, film_id)
    assert (fresh.rating_count, fresh.average_rating) == (2, 3.0)

    await rate_movie(db_session, alice_id, film_id, 5)
    fresh = await _fresh_movie(db_session, film_id)
    assert (fresh.rating_count, fresh.average_rating) == (2, 3.5)


@pytest.mark.anyio
async def test_unrated_movie_stats(db_session, movie):
    assert await movie_rating_stats(db_session, movie.id) == (0, 0.0)


@pytest.mark.anyio
async def test_all_fives_after_updates_stays_in_range(db_session, make_user, make_movie):
    users = [await make_user() for _ in range(8)]
    film = await make_movie()
    user_ids, film_id = [u.id for u in users], film.id

    sequence = [(3, 5), (3, 5), (2, 5), (6, 4), (1, 5), (0, 1), (7, 5), (4, 4), (6, 5), (0, 1), (0, 5), (4, 5)]
    for idx, value in sequence:
        assert await rate_movie(db_session, user_ids[idx], film_id, value) is True

    fresh = await _fresh_movie(db_session, film_id)
    assert fresh.rating_count == 7
    assert fresh.average_rating == 5.0
    assert MIN_RATING <= fresh.average_rating <= MAX_RATING


@pytest.mark.anyio
async def test_random_sequences_keep_the_invariant(db_session, make_user, make_movie):
    rng = random.Random(20261019)
    users = [await make_user() for _ in range(6)]
    films = [await make_movie() for _ in range(2)]
    user_ids, film_ids = [u.id for u in users], [m.id for m in films]

    for _ in range(60):
        u, m = rng.choice(user_ids), rng.choice(film_ids)
        assert await rate_movie(db_session, u, m, rng.randint(1, 5)) is True

    for film_id in film_ids:
        count, mean = (
            await db_session.execute(
                select(func.count(Rating.value), func.avg(Rating.value)).where(Rating.movie_id == film_id)
            )
        ).one()
        fresh = await _fresh_movie(db_session, film_id)
        assert fresh.rating_count == count
        if count:
            assert fresh.average_rating == pytest.approx(float(mean))
            assert MIN_RATING <= fresh.average_rating <= MAX_RATING


@pytest.mark.anyio
async def test_failed_commit_rolls_back_rating_and_aggregate(db_session, user, movie, monkeypatch):
    user_id, movie_id = user.id, movie.id

    async def _boom():
        raise RuntimeError("disk full")

    monkeypatch.setattr(db_session, "commit", _boom)
    with pytest.raises(RuntimeError):
        await rate_movie(db_session, user_id, movie_id, 5)
    monkeypatch.undo()

    assert (await db_session.execute(select(func.count()).select_from(Rating))).scalar_one() == 0
    refreshed = await db_session.get(Movie, movie_id, populate_existing=True)
    assert refreshed.rating_count == 0


@pytest.mark.anyio
async def test_rate_unknown_movie(db_session, user):
    with pytest.raises(NotFoundException):
        await rate_movie(db_session, user.id, uuid4(), 3)
