from typing import Any

from flask import Blueprint, jsonify, make_response, request

import movies.movies_service as movies_service
from security.guards import basic_auth_guard, request_logger

bp_name = "movies"
bp_url_prefix = "/api/v1.0/movies"
bp = Blueprint(bp_name, __name__, url_prefix=bp_url_prefix)


@bp.route("", methods=["GET"])
@request_logger
def show_all_movies() -> Any:
    order_by = movies_service.get_movie_sorting()

    movies = movies_service.get_movies(order_by)

    return make_response(jsonify(movies_service.to_json(movies)), 200)


@bp.route("/search", methods=["GET"])
@request_logger
def search_movies() -> Any:
    """Movies whose title or cast contains the ``search`` argument."""
    order_by = movies_service.get_movie_sorting()

    movies = movies_service.search_movies(request.args.get("search", ""), order_by)

    return make_response(jsonify(movies_service.to_json(movies)), 200)


@bp.route("", methods=["POST"])
@basic_auth_guard
def create_movie() -> Any:
    movie_id = movies_service.create_movie(request.get_json(silent=True))

    return jsonify({"message": "successfully created", "id": movie_id}), 201


@bp.route("/<int:movie_id>", methods=["PUT"])
@basic_auth_guard
def update_movie(movie_id: int) -> Any:
    movies_service.update_movie(movie_id, request.get_json(silent=True))

    return make_response(jsonify({"message": "successfully updated"}), 200)


@bp.route("/<int:movie_id>", methods=["DELETE"])
@basic_auth_guard
def delete_movie(movie_id: int) -> Any:
    movies_service.delete_movie(movie_id)

    return make_response("", 204)
