import json
from unittest import mock

import pytest

from workdesk.data.entities import EntityStore


@pytest.fixture
def request_mock():
    return mock.Mock(return_value=[])


def test_unknown_entity_is_rejected(request_mock):
    with pytest.raises(ValueError):
        EntityStore("Invoice", request=request_mock)


def test_list_with_sort(request_mock):
    EntityStore("DiaryEntry", request=request_mock).list(sort="-created_date")
    request_mock.assert_called_once_with("GET", "/entities/DiaryEntry", params={"sort": "-created_date"})


def test_filter_sends_equality_predicate(request_mock):
    request_mock.return_value = [{"id": "t1"}]
    rows = EntityStore("KanbanTask", request=request_mock).filter({"board_id": "b1"})
    assert rows == [{"id": "t1"}]
    _, kwargs = request_mock.call_args
    assert json.loads(kwargs["params"]["q"]) == {"board_id": "b1"}


def test_list_tolerates_empty_body(request_mock):
    request_mock.return_value = None
    assert EntityStore("User", request=request_mock).list() == []


def test_create_update_delete_paths(request_mock):
    store = EntityStore("KanbanTask", request=request_mock)
    request_mock.return_value = {"id": "t1", "title": "x"}

    store.create({"title": "x"})
    store.update("t1", {"status": "done", "order": 2})
    store.delete("t/1")

    assert request_mock.call_args_list == [
        mock.call("POST", "/entities/KanbanTask", json={"title": "x"}),
        mock.call("PUT", "/entities/KanbanTask/t1", json={"status": "done", "order": 2}),
        mock.call("DELETE", "/entities/KanbanTask/t%2F1"),
    ]
