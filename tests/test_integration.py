"""Runs the storage operations against a real PostgreSQL database.

Set TEST_DATABASE_URL to a database the tests may freely wipe.
"""
import os
from pathlib import Path

import pytest

import actors.actors_dao as actors_dao
import movies.movies_dao as movies_dao
from common.utils.db_pool import DatabasePool
from common.utils.exceptions import QueryError, ValidationError
from common.utils.query_builder import resolve_movie_sorting

DATABASE_URL = os.getenv("TEST_DATABASE_URL")

pytestmark = pytest.mark.skipif(
    not DATABASE_URL, reason="TEST_DATABASE_URL is not set"
)

SCHEMA = Path(__file__).resolve().parent.parent / "sql" / "schema.sql"


@pytest.fixture(scope="module")
def db():
    pool = DatabasePool(DATABASE_URL, min_size=1, max_size=2, timeout=10).open()
    with pool.connection() as conn:
        conn.execute(SCHEMA.read_text())
    yield pool
    pool.close()


@pytest.fixture(autouse=True)
def empty_catalog(db):
    with db.connection() as conn:
        conn.execute("TRUNCATE movie, actor, movie_actor RESTART IDENTITY")


def cast_rows(db, column, value):
    with db.connection() as conn:
        return conn.execute(
            f"SELECT movie_id, actor_id FROM movie_actor WHERE {column} = %s", (value,)
        ).fetchall()


def test_empty_catalog(db):
    assert movies_dao.list_movies(db, resolve_movie_sorting("")) == []
    assert actors_dao.list_actors(db) == []


@pytest.mark.parametrize(
    "sort_key, expected",
    [
        ("rating", ["B", "C", "A"]),
        ("title", ["A", "B", "C"]),
        ("date", ["C", "A", "B"]),
        ("unknown", ["B", "C", "A"]),
    ],
)
def test_list_movies_sorting(db, sort_key, expected):
    movies_dao.create_movie(db, "A", "", "2001-01-01", 3, [])
    movies_dao.create_movie(db, "B", "", "2000-01-01", 9, [])
    movies_dao.create_movie(db, "C", "", "2010-01-01", 5, [])

    movies = movies_dao.list_movies(db, resolve_movie_sorting(sort_key))

    assert [m.title for m in movies] == expected


def test_created_movie_lists_its_cast(db):
    a1 = actors_dao.create_actor(db, "Ada", "F", "1990-01-01")
    a2 = actors_dao.create_actor(db, "Linus", "M", "1969-12-28")
    movies_dao.create_movie(db, "X", "d", "2020-01-01", 7, [a1, a2])

    (movie,) = movies_dao.list_movies(db, "rating DESC")

    assert movie.title == "X"
    assert sorted(a.name for a in movie.actors) == ["Ada", "Linus"]


def test_delete_movie_removes_cast_rows(db):
    actor_id = actors_dao.create_actor(db, "Ada", "F", "1990-01-01")
    movie_id = movies_dao.create_movie(db, "X", "", "", 7, [actor_id, actor_id])

    movies_dao.delete_movie(db, movie_id)

    assert cast_rows(db, "movie_id", movie_id) == []
    assert movies_dao.list_movies(db, "rating DESC") == []
    # deleting again is a no-op
    movies_dao.delete_movie(db, movie_id)


def test_update_movie_sentinels(db):
    movie_id = movies_dao.create_movie(db, "X", "d", "2020-01-01", 7, [])

    movies_dao.update_movie(db, movie_id, title="Y", rating=0)

    (movie,) = movies_dao.list_movies(db, "rating DESC")
    assert (movie.title, movie.rating, movie.description) == ("Y", 7, "d")

    with pytest.raises(ValidationError):
        movies_dao.update_movie(db, movie_id)

    # unknown id is not an error
    movies_dao.update_movie(db, movie_id + 100, rating=3)


def test_update_values_are_bound_not_inlined(db):
    actor_id = actors_dao.create_actor(db, "Ada", "F", "1990-01-01")

    actors_dao.update_actor(db, actor_id, name="O'Hara', gender = 'X")

    (actor,) = actors_dao.list_actors(db)
    assert actor.name == "O'Hara', gender = 'X"
    assert actor.gender == "F"


def test_delete_actor_keeps_movie(db):
    actor_id = actors_dao.create_actor(db, "Ada", "F", "1990-01-01")
    assert actor_id == 1
    movies_dao.create_movie(db, "Machine", "", "", 8, [actor_id])

    (movie,) = movies_dao.list_movies(db, resolve_movie_sorting(None))
    assert (movie.title, movie.rating, [a.name for a in movie.actors]) == (
        "Machine",
        8,
        ["Ada"],
    )

    actors_dao.delete_actor(db, actor_id)

    assert actors_dao.list_actors(db) == []
    assert cast_rows(db, "actor_id", actor_id) == []
    (movie,) = movies_dao.list_movies(db, "rating DESC")
    assert movie.title == "Machine"
    assert movie.actors == []


def test_create_movie_keeps_rows_inserted_before_failure(db):
    with db.connection() as conn:
        conn.execute("ALTER TABLE movie_actor ADD CONSTRAINT positive_actor CHECK (actor_id > 0)")
    try:
        with pytest.raises(QueryError):
            movies_dao.create_movie(db, "Half", "", "", 1, [1, -1, 2])

        (movie,) = movies_dao.list_movies(db, "rating DESC")
        assert movie.title == "Half"
        assert cast_rows(db, "movie_id", movie.id) == [
            {"movie_id": movie.id, "actor_id": 1}
        ]
    finally:
        with db.connection() as conn:
            conn.execute("ALTER TABLE movie_actor DROP CONSTRAINT positive_actor")
