"""Tests for task endpoints."""

import re
import uuid
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError


HEX_ID = re.compile(r"[0-9a-f]{32}")


def _create_task(client, **overrides):
    body = {
        "title": "Test task",
        "description": "Desc",
        "due_date": "2024-01-01T00:00:00Z",
        "status": "pending",
    }
    body.update(overrides)
    return client.post("/tasks", json=body)


class TestCreateTask:
    def test_create_task(self, client, payload):
        response = client.post("/tasks", json=payload)
        assert response.status_code == 201
        data = response.get_json()
        assert HEX_ID.fullmatch(data["id"])
        assert data["title"] == "Buy milk"
        assert data["description"] == "2%"
        assert data["due_date"] == "2024-01-01T00:00:00+00:00"
        assert data["status"] == "pending"

    def test_create_assigns_fresh_ids(self, client):
        first = _create_task(client).get_json()["id"]
        second = _create_task(client).get_json()["id"]
        assert first != second

    def test_client_supplied_id_is_ignored(self, client, payload):
        supplied = uuid.uuid4().hex
        response = client.post("/tasks", json={**payload, "id": supplied})
        assert response.status_code == 201
        assert response.get_json()["id"] != supplied

    def test_create_defaults_optional_fields(self, client):
        response = client.post("/tasks", json={"title": "Minimal", "due_date": "2024-01-01T00:00:00Z"})
        assert response.status_code == 201
        data = response.get_json()
        assert data["description"] == ""
        assert data["status"] == ""

    def test_create_normalizes_due_date_to_utc(self, client):
        response = _create_task(client, due_date="2024-01-01T02:00:00+02:00")
        assert response.get_json()["due_date"] == "2024-01-01T00:00:00+00:00"

    def test_create_missing_fields(self, client):
        response = client.post("/tasks", json={})
        assert response.status_code == 400
        data = response.get_json()
        assert "title" in data["details"]
        assert "due_date" in data["details"]

    def test_create_empty_title(self, client):
        response = _create_task(client, title="")
        assert response.status_code == 400
        assert "title" in response.get_json()["details"]

    def test_create_bad_due_date(self, client):
        response = _create_task(client, due_date="next tuesday")
        assert response.status_code == 400

    @pytest.mark.parametrize("due_date", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:00:00-02:00"])
    def test_create_due_date_out_of_range_in_utc(self, client, due_date):
        response = client.post("/tasks", json={"title": "Edge of time", "due_date": due_date})
        assert response.status_code == 400
        assert "due_date" in response.get_json()["details"]

    def test_create_malformed_json(self, client):
        response = client.post("/tasks", data="{not json", content_type="application/json")
        assert response.status_code == 400
        assert response.get_json()["error"] == "Request body must be a JSON object"

    def test_create_non_object_body(self, client):
        response = client.post("/tasks", json=["title"])
        assert response.status_code == 400

    def test_create_store_failure(self, client, store, payload):
        with patch.object(store, "_sessions") as sessions:
            sessions.begin.side_effect = OperationalError("INSERT", {}, Exception("connection refused"))
            response = client.post("/tasks", json=payload)

        assert response.status_code == 500
        assert response.get_json()["error"] == "Failed to create task"


class TestGetTask:
    def test_get_task(self, client, payload):
        task_id = client.post("/tasks", json=payload).get_json()["id"]

        response = client.get(f"/tasks/{task_id}")
        assert response.status_code == 200
        data = response.get_json()
        assert data["id"] == task_id
        assert data["title"] == payload["title"]
        assert data["description"] == payload["description"]
        assert data["status"] == payload["status"]

    def test_get_task_malformed_id(self, client):
        response = client.get("/tasks/not-an-id")
        assert response.status_code == 400
        assert response.get_json()["error"] == "malformed identifier"

    def test_get_task_hyphenated_uuid_rejected(self, client):
        response = client.get(f"/tasks/{uuid.uuid4()}")
        assert response.status_code == 400

    def test_get_task_not_found(self, client):
        response = client.get(f"/tasks/{uuid.uuid4().hex}")
        assert response.status_code == 404
        assert response.get_json()["error"] == "Task not found"

    def test_get_task_store_failure(self, client, store):
        with patch.object(store, "_sessions") as sessions:
            sessions.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
            response = client.get(f"/tasks/{uuid.uuid4().hex}")

        assert response.status_code == 500
        assert response.get_json()["error"] == "Failed to fetch task"


class TestUpdateTask:
    def test_update_task(self, client, payload):
        task_id = client.post("/tasks", json=payload).get_json()["id"]

        response = client.put(
            f"/tasks/{task_id}",
            json={**payload, "due_date": "2024-01-02T00:00:00Z", "status": "done"},
        )
        assert response.status_code == 200
        data = response.get_json()
        assert data["id"] == task_id
        assert data["due_date"] == "2024-01-02T00:00:00+00:00"
        assert data["status"] == "done"

        stored = client.get(f"/tasks/{task_id}").get_json()
        assert stored == data

    def test_update_replaces_wholesale(self, client, payload):
        task_id = client.post("/tasks", json=payload).get_json()["id"]

        response = client.put(
            f"/tasks/{task_id}",
            json={"title": "Buy milk", "due_date": "2024-01-01T00:00:00Z"},
        )
        assert response.status_code == 200

        stored = client.get(f"/tasks/{task_id}").get_json()
        assert stored["status"] == ""
        assert stored["description"] == ""

    def test_update_not_found(self, client, payload):
        response = client.put(f"/tasks/{uuid.uuid4().hex}", json=payload)
        assert response.status_code == 404

    def test_update_store_failure(self, client, store, payload):
        with patch.object(store, "_sessions") as sessions:
            sessions.begin.side_effect = OperationalError("UPDATE", {}, Exception("connection refused"))
            response = client.put(f"/tasks/{uuid.uuid4().hex}", json=payload)

        assert response.status_code == 500
        assert response.get_json()["error"] == "Failed to update task"

    def test_update_malformed_id(self, client, payload):
        response = client.put("/tasks/123", json=payload)
        assert response.status_code == 400

    def test_update_invalid_body(self, client, payload):
        task_id = client.post("/tasks", json=payload).get_json()["id"]

        response = client.put(f"/tasks/{task_id}", json={"title": ""})
        assert response.status_code == 400

        # Rejected replace leaves the record untouched
        assert client.get(f"/tasks/{task_id}").get_json()["status"] == "pending"


class TestDeleteTask:
    def test_delete_task(self, client, payload):
        task_id = client.post("/tasks", json=payload).get_json()["id"]

        response = client.delete(f"/tasks/{task_id}")
        assert response.status_code == 200
        assert response.get_json()["message"] == "Task deleted successfully"

    def test_delete_twice(self, client, payload):
        task_id = client.post("/tasks", json=payload).get_json()["id"]

        assert client.delete(f"/tasks/{task_id}").status_code == 200
        assert client.delete(f"/tasks/{task_id}").status_code == 404

    def test_delete_not_found(self, client):
        response = client.delete(f"/tasks/{uuid.uuid4().hex}")
        assert response.status_code == 404

    def test_delete_store_failure(self, client, store):
        with patch.object(store, "_sessions") as sessions:
            sessions.begin.side_effect = OperationalError("DELETE", {}, Exception("connection refused"))
            response = client.delete(f"/tasks/{uuid.uuid4().hex}")

        assert response.status_code == 500
        assert response.get_json()["error"] == "Failed to delete task"

    def test_delete_malformed_id(self, client):
        response = client.delete("/tasks/zzzz")
        assert response.status_code == 400


class TestListTasks:
    def test_list_tasks_empty(self, client):
        response = client.get("/tasks")
        assert response.status_code == 200
        assert response.get_json() == []

    def test_list_tasks(self, client):
        created = {_create_task(client, title=f"Task {i}").get_json()["id"] for i in range(3)}

        response = client.get("/tasks")
        assert response.status_code == 200
        assert {task["id"] for task in response.get_json()} == created

    def test_list_excludes_deleted(self, client):
        keep = _create_task(client, title="Keep").get_json()["id"]
        drop = _create_task(client, title="Drop").get_json()["id"]
        client.delete(f"/tasks/{drop}")

        assert [task["id"] for task in client.get("/tasks").get_json()] == [keep]

    def test_list_store_failure(self, client, store):
        with patch.object(store, "_sessions") as sessions:
            sessions.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
            response = client.get("/tasks")

        assert response.status_code == 500
        assert response.get_json()["error"] == "Failed to list tasks"


class TestErrors:
    def test_unknown_route(self, client):
        response = client.get("/nope")
        assert response.status_code == 404
        assert response.get_json()["status"] == 404

    def test_method_not_allowed(self, client):
        response = client.patch("/tasks")
        assert response.status_code == 405


def test_task_lifecycle(client):
    created = client.post(
        "/tasks",
        json={
            "title": "Buy milk",
            "description": "2%",
            "due_date": "2024-01-01T00:00:00Z",
            "status": "pending",
        },
    )
    assert created.status_code == 201
    task = created.get_json()
    task_id = task["id"]

    fetched = client.get(f"/tasks/{task_id}")
    assert fetched.status_code == 200
    assert fetched.get_json() == task

    updated = client.put(
        f"/tasks/{task_id}",
        json={
            "title": "Buy milk",
            "description": "2%",
            "due_date": "2024-01-02T00:00:00Z",
            "status": "done",
        },
    )
    assert updated.status_code == 200
    assert updated.get_json()["due_date"] == "2024-01-02T00:00:00+00:00"

    deleted = client.delete(f"/tasks/{task_id}")
    assert deleted.status_code == 200

    assert client.get(f"/tasks/{task_id}").status_code == 404
