from dataclasses import asdict
from typing import Any, Dict, List

import actors.actors_dao as actors_dao
from actors.model.actor import ActorView
from common.utils.context import request_deadline
from common.utils.db_pool import get_db_pool
from common.utils.utils import time_it
from schema.actor_schema import CreateActorRequestSchema, UpdateActorRequestSchema


@time_it
def get_actors() -> List[ActorView]:
    return actors_dao.list_actors(get_db_pool(), deadline=request_deadline())


def create_actor(body: Dict[str, Any]) -> int:
    actor = CreateActorRequestSchema().load(body)

    return actors_dao.create_actor(
        get_db_pool(),
        actor["name"],
        actor["gender"],
        actor["birthday"],
        deadline=request_deadline(),
    )


def update_actor(actor_id: int, body: Dict[str, Any]):
    changes = UpdateActorRequestSchema().load(body)

    actors_dao.update_actor(
        get_db_pool(), actor_id, **changes, deadline=request_deadline()
    )


def delete_actor(actor_id: int):
    actors_dao.delete_actor(get_db_pool(), actor_id, deadline=request_deadline())


def to_json(actors: List[ActorView]) -> List[Dict[str, Any]]:
    return [asdict(actor) for actor in actors]
