from __future__ import annotations

import uuid

from fastapi.testclient import TestClient


def _sign_up(client: TestClient, user: dict, event_id: str, **body):
    return client.post(
        f"/v1/events/{event_id}/attendance",
        json=body or None,
        headers=user["headers"],
    )


def _set_status(client: TestClient, user: dict, attendance_id: str, status: str):
    return client.patch(
        f"/v1/attendance/{attendance_id}/status",
        json={"status": status},
        headers=user["headers"],
    )


def test_sign_up_is_pending_with_event_hours(client: TestClient, member, create_event):
    event = create_event(hours_value=4)
    resp = _sign_up(client, member, event["id"])
    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "pending"
    assert body["hours_awarded"] == 4
    assert body["user_id"] == member["user_id"]
    assert body["verified_by"] is None


def test_second_sign_up_for_same_event_conflicts(client: TestClient, member, create_event):
    event = create_event()
    assert _sign_up(client, member, event["id"]).status_code == 201

    again = _sign_up(client, member, event["id"])
    assert again.status_code == 409
    assert again.json()["detail"]["code"] == "ATTENDANCE_ALREADY_EXISTS"


def test_cannot_sign_up_someone_else(client: TestClient, member, officer, create_event):
    event = create_event()
    resp = _sign_up(client, officer, event["id"], user_id=member["user_id"])
    assert resp.status_code == 403
    assert resp.json()["detail"]["code"] == "SIGNUP_FOR_OTHER_USER"

    own = _sign_up(client, member, event["id"], user_id=member["user_id"])
    assert own.status_code == 201


def test_sign_up_for_missing_event(client: TestClient, member):
    resp = _sign_up(client, member, str(uuid.uuid4()))
    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "EVENT_NOT_FOUND"


def test_approve_then_deny_scenario(client: TestClient, member, officer, create_event, hours_of):
    event = create_event(hours_value=3)
    record = _sign_up(client, member, event["id"]).json()
    assert hours_of(member["user_id"]) == 0

    approved = _set_status(client, officer, record["id"], "approved")
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"
    assert approved.json()["verified_by"] == officer["user_id"]
    assert hours_of(member["user_id"]) == 3

    denied = _set_status(client, officer, record["id"], "denied")
    assert denied.status_code == 200
    assert hours_of(member["user_id"]) == 0


def test_pending_to_denied_leaves_total(client: TestClient, member, officer, create_event, hours_of):
    event = create_event(hours_value=2)
    record = _sign_up(client, member, event["id"]).json()

    assert _set_status(client, officer, record["id"], "denied").status_code == 200
    assert hours_of(member["user_id"]) == 0

    assert _set_status(client, officer, record["id"], "pending").status_code == 200
    assert hours_of(member["user_id"]) == 0


def test_reapproving_does_not_double_count(client: TestClient, member, admin, create_event, hours_of):
    event = create_event(hours_value=5)
    record = _sign_up(client, member, event["id"]).json()

    _set_status(client, admin, record["id"], "approved")
    _set_status(client, admin, record["id"], "approved")
    assert hours_of(member["user_id"]) == 5

    _set_status(client, admin, record["id"], "pending")
    assert hours_of(member["user_id"]) == 0


def test_totals_accumulate_across_events(client: TestClient, member, officer, create_event, hours_of):
    first = create_event(title="One", hours_value=2)
    second = create_event(title="Two", hours_value=6)
    r1 = _sign_up(client, member, first["id"]).json()
    r2 = _sign_up(client, member, second["id"]).json()

    _set_status(client, officer, r1["id"], "approved")
    _set_status(client, officer, r2["id"], "approved")
    assert hours_of(member["user_id"]) == 8

    _set_status(client, officer, r1["id"], "denied")
    assert hours_of(member["user_id"]) == 6


def test_member_cannot_change_status(client: TestClient, member, create_event, hours_of):
    event = create_event()
    record = _sign_up(client, member, event["id"]).json()

    resp = _set_status(client, member, record["id"], "approved")
    assert resp.status_code == 403
    assert hours_of(member["user_id"]) == 0


def test_unknown_status_value_rejected(client: TestClient, member, officer, create_event):
    event = create_event()
    record = _sign_up(client, member, event["id"]).json()
    assert _set_status(client, officer, record["id"], "maybe").status_code == 422


def test_status_change_on_missing_record(client: TestClient, officer):
    resp = _set_status(client, officer, str(uuid.uuid4()), "approved")
    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "ATTENDANCE_NOT_FOUND"


def test_hours_edit_after_approval_does_not_touch_total(
    client: TestClient, member, officer, create_event, hours_of
):
    event = create_event(hours_value=3)
    record = _sign_up(client, member, event["id"]).json()
    _set_status(client, officer, record["id"], "approved")
    assert hours_of(member["user_id"]) == 3

    edited = client.patch(
        f"/v1/attendance/{record['id']}/hours",
        json={"hours_awarded": 10},
        headers=officer["headers"],
    )
    assert edited.status_code == 200
    assert edited.json()["hours_awarded"] == 10
    assert hours_of(member["user_id"]) == 3

    # Un-approving subtracts the edited value, floored at zero
    _set_status(client, officer, record["id"], "denied")
    assert hours_of(member["user_id"]) == 0


def test_member_cannot_edit_hours(client: TestClient, member, create_event):
    event = create_event()
    record = _sign_up(client, member, event["id"]).json()
    resp = client.patch(
        f"/v1/attendance/{record['id']}/hours",
        json={"hours_awarded": 50},
        headers=member["headers"],
    )
    assert resp.status_code == 403


def test_my_attendance_includes_event(client: TestClient, member, create_event):
    first = create_event(title="First")
    second = create_event(title="Second")
    _sign_up(client, member, first["id"])
    _sign_up(client, member, second["id"])

    resp = client.get("/v1/attendance/me", headers=member["headers"])
    assert resp.status_code == 200
    rows = resp.json()
    assert [row["event"]["title"] for row in rows] == ["Second", "First"]


def test_review_queue_lists_pending_with_profiles(
    client: TestClient, member, make_user, officer, create_event
):
    other = make_user("other@example.com", name="Olive Other")
    event = create_event()
    r1 = _sign_up(client, member, event["id"]).json()
    r2 = _sign_up(client, other, event["id"]).json()
    _set_status(client, officer, r2["id"], "denied")

    queue = client.get("/v1/attendance", headers=officer["headers"])
    assert queue.status_code == 200
    rows = queue.json()
    assert [row["id"] for row in rows] == [r1["id"]]
    assert rows[0]["profile"] == {
        "user_id": member["user_id"],
        "name": "Mia Member",
        "email": "member@example.com",
    }

    everything = client.get(
        "/v1/attendance",
        params={"all_statuses": "true", "event_id": event["id"]},
        headers=officer["headers"],
    )
    assert [row["id"] for row in everything.json()] == [r1["id"], r2["id"]]

    assert client.get("/v1/attendance", headers=member["headers"]).status_code == 403


def test_attendance_visibility(client: TestClient, member, make_user, officer, create_event):
    other = make_user("peer@example.com")
    event = create_event()
    record = _sign_up(client, member, event["id"]).json()

    own = client.get(f"/v1/attendance/{record['id']}", headers=member["headers"])
    assert own.status_code == 200

    staff = client.get(f"/v1/attendance/{record['id']}", headers=officer["headers"])
    assert staff.status_code == 200

    hidden = client.get(f"/v1/attendance/{record['id']}", headers=other["headers"])
    assert hidden.status_code == 404
