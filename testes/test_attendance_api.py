from datetime import datetime, timedelta

import pytest

SESSION_PAYLOAD = {
    "course_id": "CS101",
    "start_time": "2025-03-10T09:00:00",
    "end_time": "2025-03-10T10:00:00",
    "required_presence_percentage": 75,
}


def _iso(minutes: float) -> str:
    return (datetime(2025, 3, 10, 9, 0, 0) + timedelta(minutes=minutes)).isoformat()


async def _create_session(ac, **overrides) -> int:
    resp = await ac.post("/api/v1/sessions/", json={**SESSION_PAYLOAD, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


async def _post_scenario_logs(ac, session_id: int) -> None:
    logs = [
        {"session_id": session_id, "device_identifier": "A", "timestamp": _iso(m), "rssi": -60}
        for m in range(0, 51)
    ]
    logs += [
        {"session_id": session_id, "device_identifier": "B", "timestamp": _iso(0)},
        {"session_id": session_id, "device_identifier": "B", "timestamp": "2025-03-10T09:05:01"},
    ]
    resp = await ac.post("/api/v1/presence-logs/batch", json={"logs": logs})
    assert resp.status_code == 201, resp.text
    assert len(resp.json()) == len(logs)


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_session_crud(client):
    session_id = await _create_session(client)

    resp_get = await client.get(f"/api/v1/sessions/{session_id}")
    assert resp_get.status_code == 200
    assert resp_get.json()["course_id"] == "CS101"

    resp_list = await client.get("/api/v1/sessions/")
    assert resp_list.status_code == 200
    assert any(s["id"] == session_id for s in resp_list.json())

    resp_update = await client.put(
        f"/api/v1/sessions/{session_id}",
        json={"required_presence_percentage": 50},
    )
    assert resp_update.status_code == 200, resp_update.text
    assert resp_update.json()["required_presence_percentage"] == 50

    resp_404 = await client.get("/api/v1/sessions/999999")
    assert resp_404.status_code == 404


@pytest.mark.asyncio
async def test_session_with_inverted_window_is_rejected(client):
    resp = await client.post(
        "/api/v1/sessions/",
        json={**SESSION_PAYLOAD, "end_time": "2025-03-10T08:00:00"},
    )
    assert resp.status_code == 422

    resp = await client.post(
        "/api/v1/sessions/",
        json={**SESSION_PAYLOAD, "required_presence_percentage": 0},
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_update_that_breaks_window_is_rejected(client):
    session_id = await _create_session(client)

    resp = await client.put(
        f"/api/v1/sessions/{session_id}",
        json={"end_time": "2025-03-10T08:59:00"},
    )
    assert resp.status_code == 422

    # nada mudou
    resp_get = await client.get(f"/api/v1/sessions/{session_id}")
    assert resp_get.json()["end_time"].startswith("2025-03-10T10:00:00")


@pytest.mark.asyncio
async def test_presence_log_defaults_rssi_and_normalizes_timezone(client):
    session_id = await _create_session(client)

    resp = await client.post(
        "/api/v1/presence-logs/",
        json={
            "session_id": session_id,
            "device_identifier": "phone-1",
            "timestamp": "2025-03-10T10:15:00+01:00",
        },
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["rssi"] == -50
    assert data["timestamp"].startswith("2025-03-10T09:15:00")

    resp_list = await client.get(f"/api/v1/presence-logs/{session_id}")
    assert [log["device_identifier"] for log in resp_list.json()] == ["phone-1"]


@pytest.mark.asyncio
async def test_presence_log_for_unknown_session_is_404(client):
    resp = await client.post(
        "/api/v1/presence-logs/",
        json={"session_id": 424242, "device_identifier": "x", "timestamp": _iso(0)},
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_compute_attendance_scenario(client):
    session_id = await _create_session(client)
    await _post_scenario_logs(client, session_id)

    resp = await client.post(f"/api/v1/attendance/compute/{session_id}")
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["message"] == "Attendance computed"

    records = {r["device_identifier"]: r for r in body["records"]}
    assert records["A"]["status"] == "Present"
    assert records["A"]["cumulative_duration_ms"] == 50 * 60 * 1000
    assert records["A"]["required_duration_ms"] == 45 * 60 * 1000
    assert records["B"]["status"] == "Absent"
    assert records["B"]["cumulative_duration_ms"] == 0

    resp_list = await client.get(f"/api/v1/attendance/{session_id}")
    assert resp_list.status_code == 200
    assert [r["status"] for r in resp_list.json()] == ["Present", "Absent"]


@pytest.mark.asyncio
async def test_compute_with_included_devices(client):
    session_id = await _create_session(client)

    resp = await client.post(
        f"/api/v1/attendance/compute/{session_id}",
        json={"include_devices": ["never-seen"]},
    )
    assert resp.status_code == 200, resp.text
    records = resp.json()["records"]
    assert len(records) == 1
    assert records[0]["device_identifier"] == "never-seen"
    assert records[0]["status"] == "Absent"


@pytest.mark.asyncio
async def test_recompute_keeps_history_and_latest_only_filters(client):
    session_id = await _create_session(client)
    await _post_scenario_logs(client, session_id)

    assert (await client.post(f"/api/v1/attendance/compute/{session_id}")).status_code == 200
    assert (await client.post(f"/api/v1/attendance/compute/{session_id}")).status_code == 200

    history = (await client.get(f"/api/v1/attendance/{session_id}")).json()
    assert len(history) == 4

    latest = (
        await client.get(f"/api/v1/attendance/{session_id}", params={"latest_only": "true"})
    ).json()
    assert sorted(r["device_identifier"] for r in latest) == ["A", "B"]
    assert len({r["computed_at"] for r in latest}) == 1


@pytest.mark.asyncio
async def test_compute_unknown_session_is_404(client):
    resp = await client.post("/api/v1/attendance/compute/999999")
    assert resp.status_code == 404
    assert "not found" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_store_failure_is_503(client):
    from roximity.api.deps import get_attendance_service
    from roximity.core.exceptions import StoreError
    from roximity.main import app
    from roximity.services.attendance import AttendanceService
    from roximity.services.attendance_types import SessionWindow

    class _Sessions:
        async def get_session(self, session_id):
            return SessionWindow(
                id=session_id,
                window_start=datetime(2025, 3, 10, 9),
                window_end=datetime(2025, 3, 10, 10),
                required_presence_fraction=0.5,
            )

    class _Sightings:
        async def get_sightings(self, session_id):
            raise StoreError("presence_logs unavailable")

    class _Sink:
        async def save_records(self, records):
            raise AssertionError("must not be called")

    app.dependency_overrides[get_attendance_service] = lambda: AttendanceService(
        sessions=_Sessions(), sightings=_Sightings(), sink=_Sink()
    )
    try:
        resp = await client.post("/api/v1/attendance/compute/1")
    finally:
        app.dependency_overrides.pop(get_attendance_service, None)

    assert resp.status_code == 503
    assert resp.json()["detail"] == "presence_logs unavailable"


@pytest.mark.asyncio
async def test_database_outage_on_crud_routes_is_503(client):
    from sqlalchemy.exc import OperationalError

    from roximity.api.deps import get_db_session
    from roximity.main import app

    class _BrokenSession:
        async def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("db down"))

        async def rollback(self):
            pass

    async def _broken_db():
        yield _BrokenSession()

    app.dependency_overrides[get_db_session] = _broken_db
    try:
        resp_session = await client.get("/api/v1/sessions/1")
        resp_logs = await client.get("/api/v1/presence-logs/1")
        resp_enrollments = await client.get(
            "/api/v1/student-sessions/", params={"student_id": "ana"}
        )
    finally:
        app.dependency_overrides.pop(get_db_session, None)

    assert resp_session.status_code == 503
    assert resp_session.json()["detail"] == "Failed to load sessions 1"
    assert resp_logs.status_code == 503
    assert resp_enrollments.status_code == 503
