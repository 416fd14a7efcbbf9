from dataclasses import asdict
from typing import Any, Dict, List, Optional

from flask import request

import movies.movies_dao as movies_dao
from common.utils.context import request_deadline
from common.utils.db_pool import get_db_pool
from common.utils.query_builder import resolve_movie_sorting
from common.utils.utils import time_it
from movies.model.movie import MovieView
from schema.movie_schema import CreateMovieRequestSchema, UpdateMovieRequestSchema


def get_movie_sorting() -> str:
    """Translates the ``sort`` query argument into a fixed ordering expression."""
    return resolve_movie_sorting(request.args.get("sort"))


@time_it
def get_movies(order_by: str) -> List[MovieView]:
    return movies_dao.list_movies(get_db_pool(), order_by, deadline=request_deadline())


def filter_movies(movies: List[MovieView], search: Optional[str]) -> List[MovieView]:
    """Keeps movies whose title or any cast member's name contains ``search``.

    Matching is a case-sensitive substring test; an empty search keeps all.
    """
    if not search:
        return list(movies)

    return [
        movie
        for movie in movies
        if search in movie.title or any(search in actor.name for actor in movie.actors)
    ]


def search_movies(search: Optional[str], order_by: str) -> List[MovieView]:
    return filter_movies(get_movies(order_by), search)


def create_movie(body: Dict[str, Any]) -> int:
    movie = CreateMovieRequestSchema().load(body)

    return movies_dao.create_movie(
        get_db_pool(),
        movie["title"],
        movie["description"],
        movie["release_date"],
        movie["rating"],
        movie["actors"],
        deadline=request_deadline(),
    )


def update_movie(movie_id: int, body: Dict[str, Any]):
    changes = UpdateMovieRequestSchema().load(body)

    movies_dao.update_movie(
        get_db_pool(), movie_id, **changes, deadline=request_deadline()
    )


def delete_movie(movie_id: int):
    movies_dao.delete_movie(get_db_pool(), movie_id, deadline=request_deadline())


def to_json(movies: List[MovieView]) -> List[Dict[str, Any]]:
    return [asdict(movie) for movie in movies]
