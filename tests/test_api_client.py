from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests

from taskflow.client.api import TaskApiClient, TransportError
from taskflow.schemas.user import User

from .conftest import make_draft

TASK_JSON = {
    "id": "abc",
    "title": "Pay electricity bill",
    "category": "Finance",
    "amount": 120.5,
    "dueDate": "2026-10-25",
    "status": "Upcoming",
    "reminder": False,
    "userId": "adan.food@gmail.com",
    "createdAt": "2026-10-17T09:00:00",
    "updatedAt": "2026-10-17T09:00:00",
}


def _response(status_code: int = 200, body=None, reason: str = "OK") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.reason = reason
    response.json.return_value = body
    return response


def _client(response=None, error=None) -> tuple:
    session = Mock(spec=requests.Session)
    if error is not None:
        session.request.side_effect = error
    else:
        session.request.return_value = response
    return TaskApiClient("http://api.test/", session=session), session


def test_list_tasks_passes_owner_and_parses() -> None:
    client, session = _client(_response(body=[TASK_JSON]))

    tasks = client.list_tasks(user_id="adan.food@gmail.com")

    session.request.assert_called_once_with(
        "GET",
        "http://api.test/api/tasks",
        timeout=client.timeout,
        params={"userId": "adan.food@gmail.com"},
    )
    assert tasks[0].id == "abc"
    assert tasks[0].due_date.isoformat() == "2026-10-25"


def test_create_sends_camel_case_body_without_id() -> None:
    client, session = _client(_response(201, TASK_JSON))

    saved = client.create_task(make_draft(user_id="adan.food@gmail.com"))

    _, kwargs = session.request.call_args
    body = kwargs["json"]
    assert body["dueDate"] == "2026-10-25"
    assert body["userId"] == "adan.food@gmail.com"
    assert body["category"] == "Finance"
    assert "id" not in body
    assert saved.id == "abc"


def test_replace_and_delete_target_the_task_url() -> None:
    client, session = _client(_response(body=TASK_JSON))

    client.replace_task("abc", make_draft())
    assert session.request.call_args[0] == ("PUT", "http://api.test/api/tasks/abc")

    session.request.return_value = _response(body={"message": "Task deleted successfully"})
    client.delete_task("abc")
    assert session.request.call_args[0] == ("DELETE", "http://api.test/api/tasks/abc")


def test_sync_user_sends_identity_only() -> None:
    client, session = _client(
        _response(body={"id": "u1", "name": "Adan", "email": "a@x.io", "lastLogin": "2026-10-17T09:00:00"})
    )

    synced = client.sync_user(User(name="Adan", email="a@x.io", avatar=None))

    assert session.request.call_args[1]["json"] == {"name": "Adan", "email": "a@x.io", "avatar": None}
    assert synced.id == "u1"
    assert synced.last_login is not None


def test_list_user_stats() -> None:
    client, _ = _client(
        _response(
            body=[
                {
                    "id": "u1",
                    "name": "Adan",
                    "email": "a@x.io",
                    "lastLogin": "2026-10-17T09:00:00",
                    "totalTasks": 3,
                    "completedTasks": 1,
                    "totalSpent": 235.5,
                }
            ]
        )
    )

    stats = client.list_user_stats()

    assert stats[0].total_spent == 235.5


def test_connection_error_becomes_transport_error() -> None:
    client, _ = _client(error=requests.ConnectionError("refused"))

    with pytest.raises(TransportError):
        client.list_tasks()


def test_non_success_status_becomes_transport_error() -> None:
    client, _ = _client(_response(500, {"message": "database down"}, reason="Internal Server Error"))

    with pytest.raises(TransportError) as excinfo:
        client.list_tasks()

    assert excinfo.value.status_code == 500
    assert "database down" in str(excinfo.value)


def test_non_json_body_becomes_transport_error() -> None:
    response = _response(200)
    response.json.side_effect = ValueError("no json")
    client, _ = _client(response)

    with pytest.raises(TransportError):
        client.list_tasks()


def test_unexpected_payload_becomes_transport_error() -> None:
    client, _ = _client(_response(body=[{"id": "abc"}]))

    with pytest.raises(TransportError):
        client.list_tasks()

    client, _ = _client(_response(body={"not": "a list"}))
    with pytest.raises(TransportError):
        client.list_tasks()
