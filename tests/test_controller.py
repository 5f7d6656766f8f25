from __future__ import annotations

from types import SimpleNamespace

import pytest
from flask import Flask

from src.checkin_system.checkin_system.attendance.service import AttendanceService
from src.checkin_system.checkin_system.inscritos.controller import register
from src.checkin_system.checkin_system.inscritos.service import InscritoService
from tests.fakes import InMemoryInscritos


@pytest.fixture
def client(roster, fixed_now):
    repo = InMemoryInscritos(roster)
    container = SimpleNamespace(
        inscrito_service=InscritoService(repo),
        attendance_service=AttendanceService(repo, clock=lambda: fixed_now),
    )
    app = Flask(__name__)
    register(app, container)
    return app.test_client()


def test_index_returns_page_and_churches(client):
    res = client.get("/api/inscritos?query=norte&iglesia=Central")
    data = res.get_json()

    assert res.status_code == 200
    assert [r["id"] for r in data["data"]] == [1, 2]
    assert data["total"] == 2
    assert data["iglesias"] == ["Betel", "Central", "Emanuel", "Iglesia 12"]
    assert data["data"][0]["estado"] == "OUTSIDE"


def test_show_404(client):
    assert client.get("/api/inscritos/999").status_code == 404


def test_attendance_success_then_conflict(client):
    ok = client.post("/api/inscritos/attendance", json={"action": "entrada", "ids": [1, 2]})
    assert ok.status_code == 200
    assert ok.get_json()["updated"] == 2

    show = client.get("/api/inscritos/1").get_json()
    assert show["data"]["estado"] == "INSIDE"
    assert show["data"]["entrada"] == "2025-10-04 08:30:00"

    again = client.post("/api/inscritos/attendance", json={"action": "entrada", "ids": [2, 3]})
    body = again.get_json()
    assert again.status_code == 422
    assert body["success"] is False
    assert body["ids"] == [2]


def test_attendance_invalid_payload(client):
    res = client.post("/api/inscritos/attendance", json={"action": "saltar", "ids": []})
    body = res.get_json()
    assert res.status_code == 422
    assert len(body["violations"]) == 2
    assert body["ids"] == []
