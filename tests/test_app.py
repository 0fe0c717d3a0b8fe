import pytest

from src.timemanager.timemanager.main import create_app


@pytest.fixture
def client(monkeypatch, services):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=services)
    app.config["TESTING"] = True
    return app.test_client()


def test_clock_in_twice_maps_to_409(client):
    first = client.post("/api/clocks/1/in", json={"at": "2025-03-03T09:00:00"})
    assert first.status_code == 201
    assert first.get_json()["clockOut"] is None

    second = client.post("/api/clocks/1/in", json={"at": "2025-03-03T09:10:00"})
    assert second.status_code == 409
    assert second.get_json() == {"error": "User is already clocked-in"}


def test_unknown_person_maps_to_404(client):
    resp = client.post("/api/clocks/999/in", json={})

    assert resp.status_code == 404


def test_malformed_input_maps_to_400(client):
    resp = client.get("/api/hours/1?from=yesterday&to=2025-03-04T00:00:00")

    assert resp.status_code == 400
    assert "from" in resp.get_json()["error"]


def test_session_pause_and_hours_flow(client):
    client.post("/api/clocks/1/in", json={"at": "2025-03-03T09:00:00"})
    out = client.post("/api/clocks/1/out", json={"at": "2025-03-03T17:00:00"}).get_json()

    pause = client.post(
        f"/api/sessions/{out['id']}/pauses",
        json={"startAt": "2025-03-03T12:00:00", "endAt": "2025-03-03T12:30:00"},
    )
    assert pause.status_code == 201

    clash = client.post(
        f"/api/sessions/{out['id']}/pauses",
        json={"startAt": "2025-03-03T12:15:00", "endAt": "2025-03-03T12:45:00"},
    )
    assert clash.status_code == 409

    hours = client.get("/api/hours/1?from=2025-03-03T00:00:00&to=2025-03-04T00:00:00").get_json()
    assert hours == {"grossHours": 8.0, "pauseHours": 0.5, "netHours": 7.5}


def test_leave_request_and_overlap(client):
    body = {"personId": 1, "type": "paid", "startDate": "2025-01-10", "endDate": "2025-01-12"}
    created = client.post("/api/leaves", json=body)
    assert created.status_code == 201
    assert created.get_json()["status"] == "PENDING"

    approved = client.post(f"/api/leaves/{created.get_json()['id']}/approve")
    assert approved.get_json()["status"] == "APPROVED"

    body.update(startDate="2025-01-11", endDate="2025-01-13")
    clash = client.post("/api/leaves", json=body)
    assert clash.status_code == 409
    assert "Overlaps" in clash.get_json()["error"]


def test_shift_conflict_over_http(client):
    body = {"teamId": 10, "personId": 1, "startAt": "2025-03-03T09:00:00", "endAt": "2025-03-03T17:00:00"}
    assert client.post("/api/shifts", json=body).status_code == 201

    body.update(startAt="2025-03-03T16:00:00", endAt="2025-03-03T18:00:00")
    assert client.post("/api/shifts", json=body).status_code == 409

    body.update(personId=2)
    assert client.post("/api/shifts", json=body).status_code == 201


def test_report_endpoint(client):
    resp = client.get("/api/reports?now=2025-03-05T11:00:00&zone=Europe/Paris")

    assert resp.status_code == 200
    payload = resp.get_json()
    assert payload["latenessRateMonth"] == 0.0
    assert [t["teamName"] for t in payload["teamAvgHoursWeek"]] == ["Support", "Warehouse"]


def test_report_rejects_unknown_zone(client):
    assert client.get("/api/reports?zone=Mars/Olympus").status_code == 400


def test_timestamp_with_offset_maps_to_400(client):
    client.post("/api/clocks/1/in", json={"at": "2025-03-03T09:00:00"})

    resp = client.post("/api/clocks/1/out", json={"at": "2025-03-03T17:00:00+01:00"})

    assert resp.status_code == 400
    assert "at" in resp.get_json()["error"]
    assert client.get("/api/clocks/1/open").get_json()["clockOut"] is None
