"""Tests for task persistence in live and degraded modes."""

from store import create_task, delete_task, list_tasks, new_task, update_task
from store.documents import StoreError


def test_new_task_defaults():
    task = new_task("u1", "Meditate")
    assert task["user_id"] == "u1"
    assert task["category"] == "Personal"
    assert task["priority"] == "Medium"
    assert task["completed"] is False
    assert task["due_date"] == task["created_at"] == task["updated_at"]
    assert len(task["id"]) == 32


def test_new_task_ids_unique():
    assert new_task("u1", "a")["id"] != new_task("u1", "a")["id"]


def test_create_and_list(store_handle):
    result = create_task(store_handle, new_task("u1", "Read", category="Study", priority="High"))
    assert result.persisted is True

    tasks = list_tasks(store_handle, "u1")
    assert len(tasks) == 1
    assert tasks[0]["title"] == "Read"
    assert tasks[0]["category"] == "Study"


def test_list_newest_first(store_handle):
    first = new_task("u1", "first")
    first["created_at"] = "2026-01-01T00:00:00+00:00"
    second = new_task("u1", "second")
    second["created_at"] = "2026-02-01T00:00:00+00:00"
    create_task(store_handle, first)
    create_task(store_handle, second)

    assert [t["title"] for t in list_tasks(store_handle, "u1")] == ["second", "first"]


def test_list_isolated_by_user(store_handle):
    create_task(store_handle, new_task("u1", "mine"))
    assert list_tasks(store_handle, "u2") == []


def test_update_marks_complete(store_handle):
    task = new_task("u1", "Walk")
    create_task(store_handle, task)

    result = update_task(store_handle, "u1", task["id"], {"completed": True})
    assert result.persisted is True
    assert result.found is True
    assert result.document["completed"] is True
    assert result.document["updated_at"] >= task["updated_at"]


def test_update_cannot_change_identity(store_handle):
    task = new_task("u1", "Walk")
    create_task(store_handle, task)

    result = update_task(store_handle, "u1", task["id"], {"id": "hijack", "user_id": "u2"})
    assert result.document["id"] == task["id"]
    assert result.document["user_id"] == "u1"


def test_update_other_users_task_not_found(store_handle):
    task = new_task("u1", "Walk")
    create_task(store_handle, task)

    result = update_task(store_handle, "u2", task["id"], {"completed": True})
    assert result.found is False
    assert result.document is None


def test_delete(store_handle):
    task = new_task("u1", "Gym")
    create_task(store_handle, task)

    assert delete_task(store_handle, "u2", task["id"]).found is False
    result = delete_task(store_handle, "u1", task["id"])
    assert result.persisted is True
    assert list_tasks(store_handle, "u1") == []


class TestDegraded:
    def test_list_empty(self, down_handle):
        assert list_tasks(down_handle, "u1") == []

    def test_create_not_persisted(self, down_handle):
        task = new_task("u1", "Offline")
        result = create_task(down_handle, task)
        assert result.persisted is False
        assert result.document is task

    def test_update_optimistic(self, down_handle):
        result = update_task(down_handle, "u1", "t9", {"completed": True})
        assert result.persisted is False
        assert result.found is True
        assert result.document["id"] == "t9"
        assert result.document["user_id"] == "u1"
        assert result.document["completed"] is True
        assert "updated_at" in result.document

    def test_delete_not_persisted(self, down_handle):
        result = delete_task(down_handle, "u1", "t9")
        assert result.persisted is False
        assert result.found is True

    def test_write_failure_on_live_store(self, store_handle, monkeypatch):
        from store.documents import Collection

        def boom(self, document):
            raise StoreError("database is locked")

        monkeypatch.setattr(Collection, "insert_one", boom)
        result = create_task(store_handle, new_task("u1", "x"))
        assert result.persisted is False
        assert result.document["title"] == "x"
