from http import HTTPStatus
from unittest.mock import MagicMock

from users import crud


def test_submit_contact_form(client, contact_payload):
    response = client.post("/api/contact/", json=contact_payload)

    assert response.status_code == HTTPStatus.CREATED
    data = response.json()
    assert data["id"] is not None
    assert data["created_at"] is not None
    for key, value in contact_payload.items():
        assert data[key] == value


def test_submit_without_optional_fields(client):
    payload = {"name": "Jane Doe", "email": "not-an-email", "message": "Call me"}

    response = client.post("/api/contact/", json=payload)

    assert response.status_code == HTTPStatus.CREATED
    data = response.json()
    assert data["email"] == "not-an-email"
    assert data["company"] is None
    assert data["service"] is None


def test_submit_missing_fields_returns_422(client):
    response = client.post("/api/contact/", json={"name": "John Doe"})

    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    body = response.json()
    assert body["detail"] == "Validation error"
    assert [error["field"] for error in body["errors"]] == ["email", "message"]
    assert {error["kind"] for error in body["errors"]} == {"missing_field"}


def test_client_cannot_choose_id(client, contact_payload):
    response = client.post("/api/contact/", json=dict(contact_payload, id=500))

    assert response.status_code == HTTPStatus.CREATED
    assert response.json()["id"] == 1


def test_non_object_body_returns_422(client):
    response = client.post("/api/contact/", json=["John Doe"])

    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    body = response.json()
    assert body["detail"] == "Validation error"
    assert [error["field"] for error in body["errors"]] == ["body"]


def test_storage_failure_returns_500(client, contact_payload, monkeypatch):
    mock = MagicMock(side_effect=RuntimeError("Database commit failed in test"))
    monkeypatch.setattr(crud, "create_contact_submission", mock)

    response = client.post("/api/contact/", json=contact_payload)

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == "Internal server error during contact submission."
    assert mock.called
