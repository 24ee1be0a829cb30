import pytest
from datetime import date
from sqlalchemy.exc import SQLAlchemyError

from app.models.employee import Employee
from app.models.time_off import TimeOff
from app.services.time_off_service import TimeOffService


def vacation_payload(employee_id, **overrides):
    payload = {
        "employee_id": employee_id,
        "type": "vacation",
        "start_date": "2025-07-01",
        "end_date": "2025-07-10",
        "reason": "Summer holiday",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def pending_vacation(db_session, employee):
    request = TimeOff(
        employee_id=employee.id,
        type="vacation",
        start_date=date(2025, 7, 1),
        end_date=date(2025, 7, 10),
        total_days=10,
        reason="Summer holiday",
    )
    db_session.add(request)
    db_session.commit()
    return request


def test_employee_requests_own_time_off(client, employee, auth_headers):
    response = client.post("/api/time-off", json=vacation_payload(employee.id), headers=auth_headers(employee))
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "pending"
    assert data["total_days"] == 10
    assert data["employee_name"] == "Bruno Silva"


def test_employee_cannot_request_for_colleague(client, employee, colleague, auth_headers):
    response = client.post("/api/time-off", json=vacation_payload(colleague.id), headers=auth_headers(employee))
    assert response.status_code == 403


def test_admin_requests_for_colleague(client, admin, colleague, auth_headers):
    response = client.post(
        "/api/time-off", json=vacation_payload(colleague.id, total_days=7.5), headers=auth_headers(admin),
    )
    assert response.status_code == 201
    assert response.json()["data"]["total_days"] == 7.5


def test_end_before_start_is_422(client, employee, auth_headers):
    payload = vacation_payload(employee.id, start_date="2025-07-10", end_date="2025-07-01")
    response = client.post("/api/time-off", json=payload, headers=auth_headers(employee))
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_approving_vacation_puts_employee_on_vacation(client, db_session, admin, employee, pending_vacation, auth_headers):
    response = client.patch(
        f"/api/time-off/{pending_vacation.id}/status", json={"status": "approved"}, headers=auth_headers(admin),
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "approved"
    assert data["approved_by"] == admin.id
    assert data["approver_name"] == "Ana Admin"
    assert data["approved_at"] is not None

    db_session.expire_all()
    assert db_session.get(Employee, employee.id).status == "vacation"


def test_rejecting_vacation_keeps_employee_active(client, db_session, admin, employee, pending_vacation, auth_headers):
    response = client.patch(
        f"/api/time-off/{pending_vacation.id}/status", json={"status": "rejected"}, headers=auth_headers(admin),
    )
    assert response.status_code == 200
    assert response.json()["data"]["approved_by"] == admin.id

    db_session.expire_all()
    assert db_session.get(Employee, employee.id).status == "active"


def test_approving_sick_leave_does_not_change_employee_status(client, db_session, admin, employee, auth_headers):
    created = client.post(
        "/api/time-off", json=vacation_payload(employee.id, type="sick_leave"), headers=auth_headers(employee),
    ).json()["data"]

    client.patch(f"/api/time-off/{created['id']}/status", json={"status": "approved"}, headers=auth_headers(admin))

    db_session.expire_all()
    assert db_session.get(Employee, employee.id).status == "active"


@pytest.mark.parametrize("first, second", [("approved", "rejected"), ("rejected", "approved"), ("approved", "pending")])
def test_terminal_states_are_final(client, admin, pending_vacation, auth_headers, first, second):
    url = f"/api/time-off/{pending_vacation.id}/status"
    assert client.patch(url, json={"status": first}, headers=auth_headers(admin)).status_code == 200

    response = client.patch(url, json={"status": second}, headers=auth_headers(admin))
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_TRANSITION"


def test_status_change_is_admin_only(client, employee, pending_vacation, auth_headers):
    response = client.patch(
        f"/api/time-off/{pending_vacation.id}/status", json={"status": "approved"}, headers=auth_headers(employee),
    )
    assert response.status_code == 403


def test_failed_side_effect_rolls_back_approval(client, db_session, admin, employee, pending_vacation, auth_headers, monkeypatch):
    def failing_side_effect(self, request):
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(TimeOffService, "_apply_vacation_status", failing_side_effect)

    response = client.patch(
        f"/api/time-off/{pending_vacation.id}/status", json={"status": "approved"}, headers=auth_headers(admin),
    )
    assert response.status_code == 500
    assert response.json()["error"]["code"] == "INTERNAL_ERROR"

    db_session.expire_all()
    stored = db_session.get(TimeOff, pending_vacation.id)
    assert stored.status == "pending"
    assert stored.approved_by is None
    assert stored.approved_at is None
    assert db_session.get(Employee, employee.id).status == "active"


def test_list_filters(client, db_session, admin, employee, colleague, auth_headers):
    db_session.add_all([
        TimeOff(employee_id=employee.id, type="vacation", start_date=date(2025, 1, 6), end_date=date(2025, 1, 7),
                total_days=2, reason="Beach"),
        TimeOff(employee_id=colleague.id, type="personal", start_date=date(2025, 2, 3), end_date=date(2025, 2, 3),
                total_days=1, reason="Moving house", status="approved"),
    ])
    db_session.commit()

    own = client.get("/api/time-off", headers=auth_headers(employee)).json()["data"]
    assert [r["reason"] for r in own] == ["Beach"]

    response = client.get(f"/api/time-off?employee_id={colleague.id}", headers=auth_headers(employee))
    assert response.status_code == 403

    by_type = client.get("/api/time-off?type=personal", headers=auth_headers(admin)).json()["data"]
    assert [r["reason"] for r in by_type] == ["Moving house"]

    by_employee = client.get(f"/api/time-off?employee_id={employee.id}&status=all", headers=auth_headers(admin)).json()["data"]
    assert [r["reason"] for r in by_employee] == ["Beach"]

    by_text = client.get("/api/time-off?search=HOUSE", headers=auth_headers(admin)).json()["data"]
    assert [r["employee_name"] for r in by_text] == ["Carla Souza"]


def test_owner_withdraws_only_pending(client, db_session, admin, employee, pending_vacation, auth_headers):
    other = TimeOff(employee_id=employee.id, type="personal", start_date=date(2025, 3, 3), end_date=date(2025, 3, 3),
                    total_days=1, reason="Errand", status="approved")
    db_session.add(other)
    db_session.commit()

    response = client.delete(f"/api/time-off/{other.id}", headers=auth_headers(employee))
    assert response.status_code == 422

    response = client.delete(f"/api/time-off/{pending_vacation.id}", headers=auth_headers(employee))
    assert response.status_code == 200

    response = client.delete(f"/api/time-off/{other.id}", headers=auth_headers(admin))
    assert response.status_code == 200
