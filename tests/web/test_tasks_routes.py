"""Tests for task API routes."""


def _create(client, headers, **body):
    body.setdefault("title", "Drink water")
    return client.post("/api/tasks", headers=headers, json=body)


def test_list_empty(client, auth_headers):
    res = client.get("/api/tasks", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {"tasks": []}


def test_create_task(client, auth_headers):
    res = _create(client, auth_headers, category="Health", priority="High")
    assert res.status_code == 201
    data = res.json()
    assert data["saved"] is True
    assert data["task"]["title"] == "Drink water"
    assert data["task"]["category"] == "Health"
    assert data["task"]["priority"] == "High"
    assert data["task"]["completed"] is False
    assert data["task"]["user_id"] == "user-123"


def test_create_rejects_unknown_category(client, auth_headers):
    res = _create(client, auth_headers, category="Hobby")
    assert res.status_code == 422


def test_create_and_list(client, auth_headers):
    _create(client, auth_headers, title="One")
    _create(client, auth_headers, title="Two")
    tasks = client.get("/api/tasks", headers=auth_headers).json()["tasks"]
    assert {t["title"] for t in tasks} == {"One", "Two"}


def test_update_task(client, auth_headers):
    task_id = _create(client, auth_headers).json()["task"]["id"]
    res = client.put(f"/api/tasks/{task_id}", headers=auth_headers, json={"completed": True})
    assert res.status_code == 200
    data = res.json()
    assert data["saved"] is True
    assert data["task"]["completed"] is True
    assert data["task"]["title"] == "Drink water"


def test_update_ignores_null_fields(client, auth_headers):
    task_id = _create(client, auth_headers).json()["task"]["id"]
    res = client.put(
        f"/api/tasks/{task_id}",
        headers=auth_headers,
        json={"title": None, "completed": None, "priority": "High"},
    )
    assert res.status_code == 200
    task = res.json()["task"]
    assert task["title"] == "Drink water"
    assert task["completed"] is False
    assert task["priority"] == "High"

    stored = client.get("/api/tasks", headers=auth_headers).json()["tasks"][0]
    assert stored["title"] == "Drink water"
    assert stored["completed"] is False


def test_update_missing_task_404(client, auth_headers):
    res = client.put("/api/tasks/nope", headers=auth_headers, json={"completed": True})
    assert res.status_code == 404
    assert res.json()["detail"] == "Task not found"


def test_delete_task(client, auth_headers):
    task_id = _create(client, auth_headers).json()["task"]["id"]
    res = client.delete(f"/api/tasks/{task_id}", headers=auth_headers)
    assert res.json() == {"success": True, "deleted": True}
    assert client.get("/api/tasks", headers=auth_headers).json()["tasks"] == []


def test_delete_missing_task_404(client, auth_headers):
    assert client.delete("/api/tasks/nope", headers=auth_headers).status_code == 404


def test_isolation(client, auth_headers, auth_headers_b):
    task_id = _create(client, auth_headers).json()["task"]["id"]

    assert client.get("/api/tasks", headers=auth_headers_b).json()["tasks"] == []
    assert client.put(f"/api/tasks/{task_id}", headers=auth_headers_b, json={"title": "x"}).status_code == 404
    assert client.delete(f"/api/tasks/{task_id}", headers=auth_headers_b).status_code == 404


class TestDegraded:
    def test_list_empty(self, degraded_client, auth_headers):
        res = degraded_client.get("/api/tasks", headers=auth_headers)
        assert res.status_code == 200
        assert res.json() == {"tasks": []}

    def test_create_not_saved(self, degraded_client, auth_headers):
        res = _create(degraded_client, auth_headers, title="Offline")
        assert res.status_code == 201
        assert res.json()["saved"] is False
        assert res.json()["task"]["title"] == "Offline"

    def test_update_optimistic(self, degraded_client, auth_headers):
        res = degraded_client.put("/api/tasks/t1", headers=auth_headers, json={"completed": True})
        assert res.status_code == 200
        data = res.json()
        assert data["saved"] is False
        assert data["task"]["id"] == "t1"
        assert data["task"]["completed"] is True

    def test_delete_not_deleted(self, degraded_client, auth_headers):
        res = degraded_client.delete("/api/tasks/t1", headers=auth_headers)
        assert res.status_code == 200
        assert res.json() == {"success": True, "deleted": False}
