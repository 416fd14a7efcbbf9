import pytest

import actors.actors_dao as actors_dao
from actors.model.actor import ActorView, MovieTitle
from common.utils.exceptions import QueryError, ValidationError
from fakes import FakePool


def test_list_actors_fetches_titles_per_actor():
    pool = FakePool(
        responses=[
            [
                {"id": 1, "name": "Ada", "gender": "F", "birthday": "1990-01-01"},
                {"id": 2, "name": "Linus", "gender": "M", "birthday": "1969-12-28"},
            ],
            [{"title": "Machine"}],
            [],
        ]
    )

    actors = actors_dao.list_actors(pool)

    assert actors == [
        ActorView(1, "Ada", "F", "1990-01-01", [MovieTitle("Machine")]),
        ActorView(2, "Linus", "M", "1969-12-28", []),
    ]
    assert "ORDER BY" not in pool.queries[0]
    assert [params for _, params in pool.executed[1:]] == [(1,), (2,)]


def test_list_actors_wraps_backend_failure():
    pool = FakePool(fail_on_call=0)

    with pytest.raises(QueryError) as excinfo:
        actors_dao.list_actors(pool)

    assert excinfo.value.operation == "list_actors"


def test_create_actor_binds_values_and_returns_id():
    pool = FakePool(responses=[[{"id": 11}]])

    assert actors_dao.create_actor(pool, "Ada", "F", "1990-01-01") == 11
    assert pool.executed[0][1] == ("Ada", "F", "1990-01-01")


def test_delete_actor_removes_row_then_cast_rows():
    pool = FakePool()

    actors_dao.delete_actor(pool, 1)

    assert pool.queries == [
        "DELETE FROM actor WHERE id = %s;",
        "DELETE FROM movie_actor WHERE actor_id = %s;",
    ]


def test_delete_actor_stops_after_first_failure():
    pool = FakePool(fail_on_call=0)

    with pytest.raises(QueryError):
        actors_dao.delete_actor(pool, 1)

    assert len(pool.executed) == 1


def test_update_actor_keeps_column_order():
    pool = FakePool()

    actors_dao.update_actor(pool, 3, birthday="1990-02-02", name="Ada")

    assert pool.queries == ["UPDATE actor SET name = %s, birthday = %s WHERE id = %s"]
    assert pool.executed[0][1] == ("Ada", "1990-02-02", 3)


def test_update_actor_without_fields_is_rejected():
    pool = FakePool()

    with pytest.raises(ValidationError):
        actors_dao.update_actor(pool, 3)

    assert pool.executed == []
