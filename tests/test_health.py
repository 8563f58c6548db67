from http import HTTPStatus


def test_health(client):
    response = client.get("/health")

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {"status": "ok"}


def test_root_points_to_docs(client):
    response = client.get("/")

    assert response.status_code == HTTPStatus.OK
    assert response.json()["documentation"] == "/api/docs"
