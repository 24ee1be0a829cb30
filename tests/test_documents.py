import pytest

from app.models.document import Document


@pytest.fixture
def colleague_document(db_session, colleague):
    document = Document(employee_id=colleague.id, name="Carla RG", type="identity", file_path="docs/carla-rg.pdf")
    db_session.add(document)
    db_session.commit()
    return document


def test_employee_cannot_read_colleague_document(client, employee, colleague_document, auth_headers):
    """Same company, different owner, not admin -> forbidden (not hidden)."""
    response = client.get(f"/api/documents/{colleague_document.id}", headers=auth_headers(employee))
    assert response.status_code == 403
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "AUTHORIZATION_ERROR"


def test_owner_and_admin_can_read_document(client, admin, colleague, colleague_document, auth_headers):
    for actor in (colleague, admin):
        response = client.get(f"/api/documents/{colleague_document.id}", headers=auth_headers(actor))
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Carla RG"
        assert data["employee_name"] == "Carla Souza"


def test_employee_uploads_own_document(client, employee, auth_headers):
    payload = {"employee_id": employee.id, "name": "Work permit", "type": "permit", "file_size": 2048}
    response = client.post("/api/documents", json=payload, headers=auth_headers(employee))
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "pending"
    assert data["employee_id"] == employee.id


def test_employee_cannot_upload_for_colleague(client, employee, colleague, auth_headers):
    payload = {"employee_id": colleague.id, "name": "Not mine", "type": "permit"}
    response = client.post("/api/documents", json=payload, headers=auth_headers(employee))
    assert response.status_code == 403


def test_admin_uploads_for_any_colleague(client, admin, colleague, auth_headers):
    payload = {"employee_id": colleague.id, "name": "Signed contract", "type": "contract"}
    response = client.post("/api/documents", json=payload, headers=auth_headers(admin))
    assert response.status_code == 201


def test_create_document_schema_failure_is_422(client, employee, auth_headers):
    response = client.post("/api/documents", json={"employee_id": employee.id, "name": "x"}, headers=auth_headers(employee))
    assert response.status_code == 422
    body = response.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    fields = {e["field"] for e in body["error"]["details"]["errors"]}
    assert {"name", "type"} <= fields


def test_status_change_is_admin_only(client, db_session, admin, colleague, colleague_document, auth_headers):
    url = f"/api/documents/{colleague_document.id}/status"

    response = client.patch(url, json={"status": "approved"}, headers=auth_headers(colleague))
    assert response.status_code == 403

    response = client.patch(url, json={"status": "approved"}, headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "approved"


def test_update_with_no_recognized_fields_is_rejected(client, db_session, colleague, colleague_document, auth_headers):
    response = client.patch(
        f"/api/documents/{colleague_document.id}",
        json={"unknown": "value"},
        headers=auth_headers(colleague),
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    db_session.expire_all()
    assert db_session.get(Document, colleague_document.id).name == "Carla RG"


def test_owner_updates_metadata(client, colleague, colleague_document, auth_headers):
    response = client.patch(
        f"/api/documents/{colleague_document.id}",
        json={"notes": "Renewed copy", "expiration_date": "2030-01-31"},
        headers=auth_headers(colleague),
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["notes"] == "Renewed copy"
    assert data["expiration_date"] == "2030-01-31"
    assert data["name"] == "Carla RG"


def test_list_scopes_and_filters(client, db_session, admin, employee, colleague, colleague_document, auth_headers):
    db_session.add(Document(employee_id=employee.id, name="Bruno CPF", type="identity", status="approved"))
    db_session.commit()

    own = client.get("/api/documents", headers=auth_headers(employee)).json()["data"]
    assert [d["name"] for d in own] == ["Bruno CPF"]

    everyone = client.get("/api/documents", headers=auth_headers(admin)).json()["data"]
    assert {d["name"] for d in everyone} == {"Bruno CPF", "Carla RG"}

    pending = client.get("/api/documents?status=pending", headers=auth_headers(admin)).json()["data"]
    assert [d["name"] for d in pending] == ["Carla RG"]

    by_owner = client.get("/api/documents?search=souza", headers=auth_headers(admin)).json()["data"]
    assert [d["name"] for d in by_owner] == ["Carla RG"]

    unfiltered = client.get("/api/documents?status=all&employee_id=all", headers=auth_headers(admin)).json()["data"]
    assert len(unfiltered) == 2


def test_delete_document(client, db_session, employee, colleague, colleague_document, auth_headers):
    response = client.delete(f"/api/documents/{colleague_document.id}", headers=auth_headers(employee))
    assert response.status_code == 403

    response = client.delete(f"/api/documents/{colleague_document.id}", headers=auth_headers(colleague))
    assert response.status_code == 200
    assert response.json()["message"] == "Document deleted"
    assert db_session.get(Document, colleague_document.id) is None


def test_required_metadata_cannot_be_cleared(client, db_session, colleague, colleague_document, auth_headers):
    response = client.patch(
        f"/api/documents/{colleague_document.id}",
        json={"name": None, "type": None},
        headers=auth_headers(colleague),
    )
    assert response.status_code == 400
    assert response.json()["error"]["details"]["fields"] == ["name", "type"]

    db_session.expire_all()
    stored = db_session.get(Document, colleague_document.id)
    assert stored.name == "Carla RG"
    assert stored.type == "identity"
