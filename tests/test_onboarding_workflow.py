import pytest
from datetime import date, timedelta

from app.models.employee_onboarding import EmployeeOnboarding, OnboardingStatus
from app.models.onboarding_task import OnboardingTask, OnboardingTaskCategory


@pytest.fixture
def tasks(db_session, company):
    laptop = OnboardingTask(
        company_id=company.id, name="Collect laptop", category=OnboardingTaskCategory.equipment.value, default_due_days=3,
    )
    policies = OnboardingTask(
        company_id=company.id, name="Read policies", category=OnboardingTaskCategory.documentation.value, default_due_days=10,
    )
    db_session.add_all([laptop, policies])
    db_session.commit()
    return laptop, policies


@pytest.fixture
def assignment(db_session, employee, tasks):
    onboarding = EmployeeOnboarding(employee_id=employee.id, task_id=tasks[0].id, status=OnboardingStatus.pending.value)
    db_session.add(onboarding)
    db_session.commit()
    return onboarding


def test_create_task_template(client, admin, auth_headers):
    payload = {"name": "Badge photo", "category": "introduction", "default_due_days": 2}
    response = client.post("/api/onboarding/tasks", json=payload, headers=auth_headers(admin))
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["category"] == "introduction"
    assert data["is_required"] is True


def test_task_templates_are_admin_managed(client, employee, tasks, auth_headers):
    response = client.post("/api/onboarding/tasks", json={"name": "Sneaky task"}, headers=auth_headers(employee))
    assert response.status_code == 403

    response = client.get("/api/onboarding/tasks", headers=auth_headers(employee))
    assert response.status_code == 200
    assert [t["name"] for t in response.json()["data"]] == ["Collect laptop", "Read policies"]


def test_assign_uses_task_default_due_days(client, admin, employee, tasks, auth_headers):
    laptop, policies = tasks
    payload = {"employee_id": employee.id, "task_ids": [laptop.id, policies.id, laptop.id]}
    response = client.post("/api/onboarding/assign", json=payload, headers=auth_headers(admin))
    assert response.status_code == 201

    data = response.json()["data"]
    assert len(data) == 2
    due = {a["task_name"]: a["due_date"] for a in data}
    assert due["Collect laptop"] == (date.today() + timedelta(days=3)).isoformat()
    assert due["Read policies"] == (date.today() + timedelta(days=10)).isoformat()
    assert all(a["status"] == "pending" for a in data)


def test_assign_foreign_task_is_404(client, db_session, admin, employee, other_company, auth_headers):
    foreign = OnboardingTask(company_id=other_company.id, name="Beta task")
    db_session.add(foreign)
    db_session.commit()

    payload = {"employee_id": employee.id, "task_ids": [foreign.id]}
    response = client.post("/api/onboarding/assign", json=payload, headers=auth_headers(admin))
    assert response.status_code == 404
    assert db_session.query(EmployeeOnboarding).count() == 0


def test_owner_completes_assignment(client, employee, assignment, auth_headers):
    response = client.patch(
        f"/api/onboarding/{assignment.id}/status", json={"status": "completed"}, headers=auth_headers(employee),
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "completed"
    assert data["completed_by"] == employee.id
    assert data["completed_at"] is not None


def test_complete_twice_keeps_first_stamp(client, admin, employee, assignment, auth_headers):
    url = f"/api/onboarding/{assignment.id}/status"
    first = client.patch(url, json={"status": "completed"}, headers=auth_headers(employee)).json()["data"]
    second = client.patch(url, json={"status": "completed"}, headers=auth_headers(admin)).json()["data"]

    assert second["status"] == "completed"
    assert second["completed_at"] == first["completed_at"]
    assert second["completed_by"] == first["completed_by"] == employee.id


def test_admin_can_record_who_completed(client, admin, colleague, assignment, auth_headers):
    response = client.patch(
        f"/api/onboarding/{assignment.id}/status",
        json={"status": "completed", "completed_by": colleague.id},
        headers=auth_headers(admin),
    )
    assert response.status_code == 200
    assert response.json()["data"]["completed_by"] == colleague.id


def test_reopen_clears_completion(client, employee, assignment, auth_headers):
    url = f"/api/onboarding/{assignment.id}/status"
    client.patch(url, json={"status": "completed"}, headers=auth_headers(employee))

    response = client.patch(url, json={"status": "pending"}, headers=auth_headers(employee))
    data = response.json()["data"]
    assert data["status"] == "pending"
    assert data["completed_at"] is None
    assert data["completed_by"] is None


def test_notes_only_update_leaves_status_alone(client, employee, assignment, auth_headers):
    url = f"/api/onboarding/{assignment.id}/status"
    completed = client.patch(url, json={"status": "completed"}, headers=auth_headers(employee)).json()["data"]

    response = client.patch(url, json={"notes": "Picked up at front desk"}, headers=auth_headers(employee))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["notes"] == "Picked up at front desk"
    assert data["status"] == "completed"
    assert data["completed_at"] == completed["completed_at"]


def test_empty_update_is_rejected_without_write(client, db_session, employee, assignment, auth_headers):
    response = client.patch(f"/api/onboarding/{assignment.id}/status", json={}, headers=auth_headers(employee))
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    db_session.expire_all()
    stored = db_session.get(EmployeeOnboarding, assignment.id)
    assert stored.status == "pending"
    assert stored.updated_at is None


def test_colleague_cannot_touch_assignment(client, colleague, assignment, auth_headers):
    response = client.patch(
        f"/api/onboarding/{assignment.id}/status", json={"status": "completed"}, headers=auth_headers(colleague),
    )
    assert response.status_code == 403


def test_list_shows_only_own_assignments(client, db_session, admin, employee, colleague, tasks, auth_headers):
    db_session.add_all([
        EmployeeOnboarding(employee_id=employee.id, task_id=tasks[0].id),
        EmployeeOnboarding(employee_id=colleague.id, task_id=tasks[1].id),
    ])
    db_session.commit()

    own = client.get("/api/onboarding", headers=auth_headers(employee)).json()["data"]
    assert [o["employee_name"] for o in own] == ["Bruno Silva"]

    searched = client.get("/api/onboarding?search=policies", headers=auth_headers(admin)).json()["data"]
    assert [o["employee_name"] for o in searched] == ["Carla Souza"]


def test_task_in_use_cannot_be_deleted(client, admin, tasks, assignment, auth_headers):
    response = client.delete(f"/api/onboarding/tasks/{tasks[0].id}", headers=auth_headers(admin))
    assert response.status_code == 409

    response = client.delete(f"/api/onboarding/tasks/{tasks[1].id}", headers=auth_headers(admin))
    assert response.status_code == 200


def test_null_status_counts_as_not_sent(client, db_session, employee, assignment, auth_headers):
    url = f"/api/onboarding/{assignment.id}/status"
    response = client.patch(url, json={"status": None}, headers=auth_headers(employee))
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    response = client.patch(url, json={"status": None, "notes": "Waiting on IT"}, headers=auth_headers(employee))
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "pending"
    assert response.json()["data"]["notes"] == "Waiting on IT"


def test_task_name_cannot_be_cleared(client, db_session, admin, tasks, auth_headers):
    laptop = tasks[0]
    response = client.patch(f"/api/onboarding/tasks/{laptop.id}", json={"name": None}, headers=auth_headers(admin))
    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["details"]["fields"] == ["name"]

    response = client.patch(
        f"/api/onboarding/tasks/{laptop.id}", json={"description": None}, headers=auth_headers(admin),
    )
    assert response.status_code == 200

    db_session.expire_all()
    assert db_session.get(OnboardingTask, laptop.id).name == "Collect laptop"
