from typing import List, Optional

import psycopg
from psycopg.rows import dict_row

from common.utils.context import NO_DEADLINE, Deadline
from common.utils.db_pool import checkout
from common.utils.exceptions import QueryError, ValidationError
from common.utils.logging_service import logger
from common.utils.query_builder import (
    MOVIE_COLUMNS,
    build_order_by,
    build_update,
    specified_fields,
)
from movies.model.movie import ActorName, Movie, MovieView


def list_movies(
    pool, order_by: str, deadline: Deadline = NO_DEADLINE
) -> List[MovieView]:
    """Every movie with the names of its cast, ordered by ``order_by``.

    ``order_by`` must be one of the fixed ordering expressions of the query
    builder. Cast names are fetched with one query per movie.
    """
    movies_query = f"""
    SELECT id, title, description, release_date, rating
    FROM movie
    {build_order_by(order_by)};
    """

    actors_query = """
    SELECT actor.name
    FROM actor
    JOIN movie_actor ON actor.id = movie_actor.actor_id
    WHERE movie_actor.movie_id = %s;
    """

    try:
        deadline.check("list_movies")
        with checkout(pool, deadline) as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(movies_query)
                movies = [Movie(**row) for row in cur.fetchall()]

                movie_views = []
                for movie in movies:
                    deadline.check("list_movies")
                    cur.execute(actors_query, (movie.id,))
                    actors = [ActorName(**row) for row in cur.fetchall()]
                    movie_views.append(MovieView.from_movie(movie, actors))
    except psycopg.Error as e:
        logger.error(f"list_movies failed: {e}")
        raise QueryError("list_movies") from e

    return movie_views


def create_movie(
    pool,
    title: str,
    description: str,
    release_date: str,
    rating: int,
    actor_ids: List[int],
    deadline: Deadline = NO_DEADLINE,
) -> int:
    """Inserts the movie, then one cast row per entry of ``actor_ids``.

    Actor ids are neither deduplicated nor checked against the actor table.
    Each insert commits on its own: when a cast insert fails, the movie and
    the cast rows inserted before it remain.
    """
    movie_query = """
    INSERT INTO movie (title, description, release_date, rating)
    VALUES (%s, %s, %s, %s) RETURNING id;
    """

    cast_query = """
    INSERT INTO movie_actor (movie_id, actor_id)
    VALUES (%s, %s);
    """

    try:
        deadline.check("create_movie")
        with checkout(pool, deadline) as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(movie_query, (title, description, release_date, rating))
                movie_id = cur.fetchone()["id"]

                for actor_id in actor_ids:
                    deadline.check("create_movie")
                    cur.execute(cast_query, (movie_id, actor_id))
    except psycopg.Error as e:
        logger.error(f"create_movie failed: {e}")
        raise QueryError("create_movie", "unable to insert row") from e

    return movie_id


def delete_movie(pool, movie_id: int, deadline: Deadline = NO_DEADLINE):
    """Deletes the movie row and then its cast rows.

    Both statements run even when no such movie exists. If the second one
    fails the cast rows are left dangling and the error is raised.
    """
    try:
        deadline.check("delete_movie")
        with checkout(pool, deadline) as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM movie WHERE id = %s;", (movie_id,))

                deadline.check("delete_movie")
                cur.execute("DELETE FROM movie_actor WHERE movie_id = %s;", (movie_id,))
    except psycopg.Error as e:
        logger.error(f"delete_movie failed for id {movie_id}: {e}")
        raise QueryError("delete_movie", "unable to delete row") from e


def update_movie(
    pool,
    movie_id: int,
    title: Optional[str] = None,
    description: Optional[str] = None,
    release_date: Optional[str] = None,
    rating: Optional[int] = None,
    deadline: Deadline = NO_DEADLINE,
):
    fields = specified_fields(
        title=title, description=description, release_date=release_date, rating=rating
    )
    if not fields:
        raise ValidationError("no fields to update")

    query, values = build_update("movie", MOVIE_COLUMNS, fields)

    try:
        deadline.check("update_movie")
        with checkout(pool, deadline) as conn:
            with conn.cursor() as cur:
                cur.execute(query, (*values, movie_id))
    except psycopg.Error as e:
        logger.error(f"update_movie failed for id {movie_id}: {e}")
        raise QueryError("update_movie", "unable to update row") from e
