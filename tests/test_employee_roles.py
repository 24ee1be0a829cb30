import pytest

from app.models.employee_role import EmployeeRole
from app.models.role import Role


@pytest.fixture
def roles(db_session, company):
    analyst = Role(company_id=company.id, title="Analyst", contract_type="clt")
    lead = Role(company_id=company.id, title="Tech Lead", contract_type="clt")
    db_session.add_all([analyst, lead])
    db_session.commit()
    return analyst, lead


def _assign(client, headers, employee, role, start_date, is_current=True):
    payload = {"role_id": role.id, "start_date": start_date, "is_current": is_current}
    response = client.post(f"/api/employees/{employee.id}/roles", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()["data"]


def test_new_current_role_closes_previous(client, admin, employee, roles, auth_headers):
    analyst, lead = roles
    headers = auth_headers(admin)
    first = _assign(client, headers, employee, analyst, "2023-01-02")
    second = _assign(client, headers, employee, lead, "2024-06-01")

    history = client.get(f"/api/employees/{employee.id}/roles", headers=headers).json()["data"]
    assert [h["id"] for h in history] == [second["id"], first["id"]]
    assert history[0]["is_current"] is True
    assert history[0]["role_title"] == "Tech Lead"
    assert history[1]["is_current"] is False
    assert history[1]["end_date"] == "2024-06-01"

    current = client.get(f"/api/employees/{employee.id}/roles/current", headers=auth_headers(employee)).json()["data"]
    assert current["id"] == second["id"]


def test_no_current_role_is_404(client, employee, auth_headers):
    response = client.get(f"/api/employees/{employee.id}/roles/current", headers=auth_headers(employee))
    assert response.status_code == 404


def test_deleting_current_promotes_latest(client, db_session, admin, employee, roles, auth_headers):
    analyst, lead = roles
    headers = auth_headers(admin)
    first = _assign(client, headers, employee, analyst, "2023-01-02")
    second = _assign(client, headers, employee, lead, "2024-06-01")

    assert client.delete(f"/api/employee-roles/{second['id']}", headers=headers).status_code == 200

    db_session.expire_all()
    promoted = db_session.get(EmployeeRole, first["id"])
    assert promoted.is_current is True
    assert promoted.end_date is None
    assert db_session.get(EmployeeRole, second["id"]) is None


def test_update_to_current_closes_others(client, db_session, admin, employee, roles, auth_headers):
    analyst, lead = roles
    headers = auth_headers(admin)
    current = _assign(client, headers, employee, analyst, "2023-01-02")
    planned = _assign(client, headers, employee, lead, "2024-06-01", is_current=False)

    response = client.patch(f"/api/employee-roles/{planned['id']}", json={"is_current": True}, headers=headers)
    assert response.status_code == 200
    assert response.json()["data"]["is_current"] is True

    db_session.expire_all()
    closed = db_session.get(EmployeeRole, current["id"])
    assert closed.is_current is False
    assert closed.end_date.isoformat() == "2024-06-01"


def test_update_rejects_inverted_dates_and_cleared_role(client, admin, employee, roles, auth_headers):
    headers = auth_headers(admin)
    assignment = _assign(client, headers, employee, roles[0], "2023-01-02")
    url = f"/api/employee-roles/{assignment['id']}"

    assert client.patch(url, json={"end_date": "2022-12-31"}, headers=headers).status_code == 400
    assert client.patch(url, json={"role_id": None}, headers=headers).status_code == 400
    assert client.patch(url, json={}, headers=headers).status_code == 400


def test_create_rejects_inverted_dates(client, admin, employee, roles, auth_headers):
    payload = {"role_id": roles[0].id, "start_date": "2024-01-10", "end_date": "2024-01-01"}
    response = client.post(f"/api/employees/{employee.id}/roles", json=payload, headers=auth_headers(admin))
    assert response.status_code == 422


def test_assignments_are_admin_managed(client, employee, roles, auth_headers):
    payload = {"role_id": roles[0].id, "start_date": "2024-01-10"}
    response = client.post(f"/api/employees/{employee.id}/roles", json=payload, headers=auth_headers(employee))
    assert response.status_code == 403


def test_foreign_role_or_employee_is_404(client, db_session, admin, employee, outsider, other_company, roles, auth_headers):
    foreign_role = Role(company_id=other_company.id, title="Beta Dev", contract_type="clt")
    db_session.add(foreign_role)
    db_session.commit()
    headers = auth_headers(admin)

    payload = {"role_id": foreign_role.id, "start_date": "2024-01-10"}
    assert client.post(f"/api/employees/{employee.id}/roles", json=payload, headers=headers).status_code == 404

    payload = {"role_id": roles[0].id, "start_date": "2024-01-10"}
    assert client.post(f"/api/employees/{outsider.id}/roles", json=payload, headers=headers).status_code == 404
    assert client.get(f"/api/employees/{outsider.id}/roles", headers=headers).status_code == 404


def test_role_details_count_current_holders(client, admin, employee, colleague, roles, auth_headers):
    analyst, lead = roles
    headers = auth_headers(admin)
    _assign(client, headers, employee, analyst, "2023-01-02")
    _assign(client, headers, colleague, analyst, "2023-03-01")
    _assign(client, headers, employee, lead, "2024-06-01")

    assert client.get(f"/api/roles/{analyst.id}", headers=headers).json()["data"]["employees_count"] == 1
    assert client.get(f"/api/roles/{lead.id}", headers=headers).json()["data"]["employees_count"] == 1


def test_role_with_history_cannot_be_deleted(client, db_session, admin, employee, roles, auth_headers):
    headers = auth_headers(admin)
    _assign(client, headers, employee, roles[0], "2023-01-02")

    response = client.delete(f"/api/roles/{roles[0].id}", headers=headers)
    assert response.status_code == 409
    db_session.expire_all()
    assert db_session.get(Role, roles[0].id) is not None
