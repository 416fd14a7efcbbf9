from typing import Any

from flask import Blueprint, jsonify, make_response, request

import actors.actors_service as actors_service
from security.guards import basic_auth_guard, request_logger

bp_name = "actors"
bp_url_prefix = "/api/v1.0/actors"
bp = Blueprint(bp_name, __name__, url_prefix=bp_url_prefix)


@bp.route("", methods=["GET"])
@request_logger
def show_all_actors() -> Any:
    actors = actors_service.get_actors()

    return make_response(jsonify(actors_service.to_json(actors)), 200)


@bp.route("", methods=["POST"])
@basic_auth_guard
def create_actor() -> Any:
    actor_id = actors_service.create_actor(request.get_json(silent=True))

    return jsonify({"message": "successfully created", "id": actor_id}), 201


@bp.route("/<int:actor_id>", methods=["PUT"])
@basic_auth_guard
def update_actor(actor_id: int) -> Any:
    actors_service.update_actor(actor_id, request.get_json(silent=True))

    return make_response(jsonify({"message": "successfully updated"}), 200)


@bp.route("/<int:actor_id>", methods=["DELETE"])
@basic_auth_guard
def delete_actor(actor_id: int) -> Any:
    actors_service.delete_actor(actor_id)

    return make_response("", 204)
