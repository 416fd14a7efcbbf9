from typing import List, Optional

import psycopg
from psycopg.rows import dict_row

from actors.model.actor import Actor, ActorView, MovieTitle
from common.utils.context import NO_DEADLINE, Deadline
from common.utils.db_pool import checkout
from common.utils.exceptions import QueryError, ValidationError
from common.utils.logging_service import logger
from common.utils.query_builder import ACTOR_COLUMNS, build_update, specified_fields


def list_actors(pool, deadline: Deadline = NO_DEADLINE) -> List[ActorView]:
    actors_query = """
    SELECT id, name, gender, birthday
    FROM actor;
    """

    movies_query = """
    SELECT movie.title
    FROM movie
    JOIN movie_actor ON movie.id = movie_actor.movie_id
    WHERE movie_actor.actor_id = %s;
    """

    try:
        deadline.check("list_actors")
        with checkout(pool, deadline) as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(actors_query)
                actors = [Actor(**row) for row in cur.fetchall()]

                actor_views = []
                for actor in actors:
                    deadline.check("list_actors")
                    cur.execute(movies_query, (actor.id,))
                    movies = [MovieTitle(**row) for row in cur.fetchall()]
                    actor_views.append(ActorView.from_actor(actor, movies))
    except psycopg.Error as e:
        logger.error(f"list_actors failed: {e}")
        raise QueryError("list_actors") from e

    return actor_views


def create_actor(
    pool, name: str, gender: str, birthday: str, deadline: Deadline = NO_DEADLINE
) -> int:
    query = """
    INSERT INTO actor (name, gender, birthday)
    VALUES (%s, %s, %s) RETURNING id;
    """

    try:
        deadline.check("create_actor")
        with checkout(pool, deadline) as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, (name, gender, birthday))
                return cur.fetchone()["id"]
    except psycopg.Error as e:
        logger.error(f"create_actor failed: {e}")
        raise QueryError("create_actor", "unable to insert row") from e


def delete_actor(pool, actor_id: int, deadline: Deadline = NO_DEADLINE):
    """Deletes the actor row and then every cast row naming the actor.

    Movies the actor appeared in are kept.
    """
    try:
        deadline.check("delete_actor")
        with checkout(pool, deadline) as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM actor WHERE id = %s;", (actor_id,))

                deadline.check("delete_actor")
                cur.execute("DELETE FROM movie_actor WHERE actor_id = %s;", (actor_id,))
    except psycopg.Error as e:
        logger.error(f"delete_actor failed for id {actor_id}: {e}")
        raise QueryError("delete_actor", "unable to delete row") from e


def update_actor(
    pool,
    actor_id: int,
    name: Optional[str] = None,
    gender: Optional[str] = None,
    birthday: Optional[str] = None,
    deadline: Deadline = NO_DEADLINE,
):
    fields = specified_fields(name=name, gender=gender, birthday=birthday)
    if not fields:
        raise ValidationError("no fields to update")

    query, values = build_update("actor", ACTOR_COLUMNS, fields)

    try:
        deadline.check("update_actor")
        with checkout(pool, deadline) as conn:
            with conn.cursor() as cur:
                cur.execute(query, (*values, actor_id))
    except psycopg.Error as e:
        logger.error(f"update_actor failed for id {actor_id}: {e}")
        raise QueryError("update_actor", "unable to update row") from e
