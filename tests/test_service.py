"""Tests for the reminder REST service."""
import json
import typing as t
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from services.reminder_service.app import app


@pytest.fixture
def client(reminder_env: Path) -> t.Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_add_toggle_filter_scenario(client: TestClient) -> None:
    """Test the add, toggle and filter flow through the HTTP surface."""
    created = client.post("/reminders", json={"text": "Buy milk", "when": None})
    assert created.status_code == 201
    reminder = created.json()
    assert reminder["text"] == "Buy milk"
    assert reminder["when"] is None
    assert reminder["done"] is False

    toggled = client.post(f"/reminders/{reminder['id']}/toggle")
    assert toggled.json()["done"] is True

    done = client.get("/reminders", params={"filter": "done"}).json()
    active = client.get("/reminders", params={"filter": "active"}).json()
    assert [item["id"] for item in done["reminders"]] == [reminder["id"]]
    assert active["reminders"] == []
    assert active["total"] == 1


def test_add_empty_text_is_rejected(client: TestClient) -> None:
    """Test that blank text is a 422 and sets the error slot."""
    response = client.post("/reminders", json={"text": "   "})
    assert response.status_code == 422
    assert response.json()["detail"] == "text must not be empty"

    state = client.get("/state").json()
    assert state["error"] == "text must not be empty"
    assert state["total"] == 0


def test_overdue_flag(client: TestClient) -> None:
    client.post("/reminders", json={"text": "Late", "when": "2000-01-01T00:00"})
    client.post("/reminders", json={"text": "Later", "when": "2999-01-01T00:00"})

    reminders = client.get("/reminders").json()["reminders"]
    assert {item["text"]: item["overdue"] for item in reminders} == {"Later": False, "Late": True}


def test_edit_flow(client: TestClient) -> None:
    """Test start, commit and cancel of an edit."""
    reminder = client.post("/reminders", json={"text": "Pay rent"}).json()

    pending = client.post(f"/reminders/{reminder['id']}/edit")
    assert pending.json() == {"id": reminder["id"], "draft_text": "Pay rent", "draft_when": None}
    assert client.get("/state").json()["pending_edit"]["id"] == reminder["id"]

    updated = client.put(f"/reminders/{reminder['id']}", json={"text": "Pay rent early", "when": "2025-03-01T09:30"})
    assert updated.status_code == 200
    assert updated.json() == {"id": reminder["id"], "text": "Pay rent early", "when": "2025-03-01T09:30", "done": False}
    assert client.get("/state").json()["pending_edit"] is None

    client.post(f"/reminders/{reminder['id']}/edit")
    assert client.delete("/edit").status_code == 204
    assert client.get("/state").json()["pending_edit"] is None


def test_start_edit_unknown_id_is_404(client: TestClient) -> None:
    assert client.post("/reminders/missing/edit").status_code == 404


def test_remove_is_idempotent(client: TestClient) -> None:
    reminder = client.post("/reminders", json={"text": "Delete me"}).json()

    assert client.delete(f"/reminders/{reminder['id']}").status_code == 204
    assert client.delete(f"/reminders/{reminder['id']}").status_code == 204
    assert client.get("/reminders").json()["total"] == 0


def test_export_and_import(client: TestClient) -> None:
    """Test that an exported download can be imported back."""
    client.post("/reminders", json={"text": "One"})
    client.post("/reminders", json={"text": "Two", "when": "2025-03-01T09:30"})

    exported = client.get("/export")
    assert exported.status_code == 200
    assert 'filename="reminders-' in exported.headers["content-disposition"]
    records = json.loads(exported.text)
    assert [record["text"] for record in records] == ["Two", "One"]

    client.post("/reminders", json={"text": "Three"})
    imported = client.post("/import", content=exported.content)
    assert imported.status_code == 200
    assert imported.json()["imported"] == 2

    listed = client.get("/reminders").json()["reminders"]
    assert [item["id"] for item in listed] == [record["id"] for record in records]


@pytest.mark.parametrize("payload", ['{"text":"x"}', '[{"foo":1}]'])
def test_import_bad_payload_is_400(client: TestClient, payload: str) -> None:
    client.post("/reminders", json={"text": "Keep"})

    response = client.post("/import", content=payload)

    assert response.status_code == 400
    assert [item["text"] for item in client.get("/reminders").json()["reminders"]] == ["Keep"]


def test_state_is_persisted_across_restarts(reminder_env: Path) -> None:
    """Test that a new service process reloads the stored list."""
    with TestClient(app) as first:
        first.post("/reminders", json={"text": "Survives"})

    with TestClient(app) as second:
        assert [item["text"] for item in second.get("/reminders").json()["reminders"]] == ["Survives"]


def test_show_reminders(client: TestClient) -> None:
    assert "No reminders yet" in client.get("/show-reminders").json()["formatted_reminders"]

    client.post("/reminders", json={"text": "Buy milk"})
    formatted = client.get("/show-reminders", params={"filter": "active"}).json()["formatted_reminders"]
    assert "Buy milk" in formatted
    assert "Showing: 1 of 1" in formatted


def test_import_keeps_non_string_fields_listable(client: TestClient) -> None:
    """Test that pass-through when/done values survive import, listing and restart."""
    payload = '[{"id": "n1", "text": "x", "when": 1700000000000, "done": null}]'

    imported = client.post("/import", content=payload)
    assert imported.status_code == 200
    assert imported.json()["reminders"] == [{"id": "n1", "text": "x", "when": 1700000000000, "done": None}]

    listed = client.get("/reminders")
    assert listed.status_code == 200
    assert listed.json()["reminders"] == [
        {"id": "n1", "text": "x", "when": 1700000000000, "done": None, "overdue": False}
    ]
    assert client.get("/reminders", params={"filter": "active"}).json()["total"] == 1
    assert "1700000000000" in client.get("/show-reminders").json()["formatted_reminders"]


def test_export_clears_previous_error(client: TestClient) -> None:
    """Test that a successful download replaces an earlier validation message."""
    client.post("/reminders", json={"text": "Keep"})
    client.post("/reminders", json={"text": ""})
    assert client.get("/state").json()["error"] == "text must not be empty"

    assert client.get("/export").status_code == 200

    assert client.get("/state").json()["error"] == ""
