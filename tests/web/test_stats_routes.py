"""Tests for dashboard stats and quote routes."""

from coach import PromptTemplates


def test_stats_empty(client, auth_headers):
    res = client.get("/api/stats", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {
        "completedTasks": 0,
        "pendingTasks": 0,
        "streak": 0,
        "quote": "Coach says: keep going.",
    }


def test_stats_after_completion(client, auth_headers):
    ids = [
        client.post("/api/tasks", headers=auth_headers, json={"title": t}).json()["task"]["id"]
        for t in ("a", "b", "c")
    ]
    client.put(f"/api/tasks/{ids[0]}", headers=auth_headers, json={"completed": True})

    data = client.get("/api/stats", headers=auth_headers).json()
    assert data["completedTasks"] == 1
    assert data["pendingTasks"] == 2
    assert data["streak"] == 1


def test_quote(client, auth_headers, primary_provider):
    res = client.get("/api/quote", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {"quote": "Coach says: keep going."}
    assert primary_provider.calls[0]["system"] == PromptTemplates.QUOTE_SYSTEM


def test_quote_with_store_and_llms_down(degraded_client, auth_headers):
    res = degraded_client.get("/api/quote", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {"quote": PromptTemplates.QUOTE_FALLBACK}


def test_stats_degraded(degraded_client, auth_headers):
    res = degraded_client.get("/api/stats", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {
        "completedTasks": 0,
        "pendingTasks": 0,
        "streak": 0,
        "quote": PromptTemplates.QUOTE_FALLBACK,
    }
