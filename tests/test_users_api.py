from __future__ import annotations

from fastapi.testclient import TestClient

ADAN = {"name": "Adan Food", "email": "adan.food@gmail.com", "avatar": "https://example.com/a.png"}
BEA = {"name": "Bea", "email": "bea@example.com", "avatar": "https://example.com/b.png"}


def _task(client: TestClient, owner: str, amount: float, status: str) -> None:
    response = client.post(
        "/api/tasks",
        json={
            "title": f"{owner} {status}",
            "category": "Finance",
            "amount": amount,
            "dueDate": "2026-10-20",
            "status": status,
            "userId": owner,
        },
    )
    assert response.status_code == 201


def test_sync_creates_then_updates_user(client: TestClient) -> None:
    first = client.post("/api/users/sync", json=ADAN)
    assert first.status_code == 200
    created = first.json()
    assert created["id"]
    assert created["email"] == ADAN["email"]
    assert created["lastLogin"]

    second = client.post("/api/users/sync", json={**ADAN, "name": "Adan F."})
    updated = second.json()

    assert updated["id"] == created["id"]
    assert updated["name"] == "Adan F."
    assert updated["lastLogin"] >= created["lastLogin"]


def test_sync_rejects_missing_email(client: TestClient) -> None:
    response = client.post("/api/users/sync", json={"name": "Nobody"})

    assert response.status_code == 400
    assert "email" in response.json()["message"]


def test_admin_users_aggregates_tasks_by_email(client: TestClient) -> None:
    client.post("/api/users/sync", json=ADAN)
    client.post("/api/users/sync", json=BEA)
    _task(client, ADAN["email"], 150, "Overdue")
    _task(client, ADAN["email"], 85.5, "Completed")
    _task(client, ADAN["email"], 0, "Upcoming")
    _task(client, "stranger@example.com", 999, "Completed")

    response = client.get("/api/admin/users")

    assert response.status_code == 200
    stats = response.json()
    # Most recent login first.
    assert [s["email"] for s in stats] == [BEA["email"], ADAN["email"]]

    bea, adan = stats
    assert (bea["totalTasks"], bea["completedTasks"], bea["totalSpent"]) == (0, 0, 0)
    assert adan["totalTasks"] == 3
    assert adan["completedTasks"] == 1
    assert adan["totalSpent"] == 235.5


def test_admin_users_empty(client: TestClient) -> None:
    assert client.get("/api/admin/users").json() == []
