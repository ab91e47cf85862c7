from __future__ import annotations

from uuid import uuid4

from fastapi.testclient import TestClient

from contact_directory_api.app.main import app
from contact_directory_api.app.services.contact_service import ContactService

from .factories import contact_payload

BASE = "/api/v1/contacts"


def assert_error_body(body: dict, status: int, error: str) -> None:
    assert body["status"] == status
    assert body["error"] == error
    assert body["message"]
    assert "timestamp" in body


def test_create_returns_201_then_duplicate_returns_409(client) -> None:
    response = client.post(BASE, json=contact_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["id"]
    assert body["deleted"] is False
    assert body["dob"] == "1990-01-15"

    duplicate = client.post(BASE, json=contact_payload(name="Other", email="other@x.com"))
    assert duplicate.status_code == 409
    assert_error_body(duplicate.json(), 409, "Contact Already Exists")
    assert duplicate.json()["message"] == "Contact with mobile 1234567890 already exists"


def test_create_ignores_client_supplied_id_and_deleted(client) -> None:
    supplied = str(uuid4())
    payload = {**contact_payload(), "id": supplied, "deleted": True}

    body = client.post(BASE, json=payload).json()

    assert body["id"] != supplied
    assert body["deleted"] is False


def test_create_accepts_date_of_birth_alias(client) -> None:
    payload = contact_payload()
    payload["dateOfBirth"] = payload.pop("dob")

    response = client.post(BASE, json=payload)

    assert response.status_code == 201
    assert response.json()["dob"] == "1990-01-15"


def test_create_with_invalid_fields_returns_400_with_field_messages(client) -> None:
    payload = {"name": "  ", "email": "not-an-email", "mobile": "12345"}

    response = client.post(BASE, json=payload)

    assert response.status_code == 400
    body = response.json()
    assert_error_body(body, 400, "Validation Failed")
    assert body["message"] == "Invalid input data"
    errors = body["validationErrors"]
    assert errors["name"] == "Name is required"
    assert errors["mobile"] == "Mobile must be 10 digits"
    assert errors["dob"] == "Date of birth is required"
    assert errors["email"] == "Invalid email format"
    assert client.get(BASE).json() == []


def test_email_is_stored_exactly_as_sent(client) -> None:
    created = client.post(BASE, json=contact_payload(email="John.Doe@Example.COM")).json()

    assert created["email"] == "John.Doe@Example.COM"
    assert client.get(f"{BASE}/{created['id']}").json()["email"] == "John.Doe@Example.COM"

    updated = client.put(f"{BASE}/{created['id']}", json=contact_payload(email="Jane.Roe@EXAMPLE.org"))
    assert updated.json()["email"] == "Jane.Roe@EXAMPLE.org"


def test_collection_routes_accept_trailing_slash(client) -> None:
    created = client.post(f"{BASE}/", json=contact_payload(), follow_redirects=False)
    assert created.status_code == 201

    listed = client.get(f"{BASE}/", follow_redirects=False)
    assert listed.status_code == 200
    assert [c["id"] for c in listed.json()] == [created.json()["id"]]


def test_search_folds_non_ascii_case(client) -> None:
    client.post(BASE, json=contact_payload(name="ÉMILE ZOLA"))

    response = client.get(f"{BASE}/search", params={"q": "émile"})

    assert [c["name"] for c in response.json()] == ["ÉMILE ZOLA"]


def test_mobile_must_be_ascii_digits(client) -> None:
    response = client.post(BASE, json=contact_payload(mobile="١٢٣٤٥٦٧٨٩٠"))

    assert response.status_code == 400
    assert response.json()["validationErrors"]["mobile"] == "Mobile must be 10 digits"


def test_batch_create_returns_all_contacts(client) -> None:
    payload = [
        contact_payload(name="John Doe", mobile="1111111111"),
        contact_payload(name="Jane Smith", email="jane@x.com", mobile="2222222222"),
    ]

    response = client.post(f"{BASE}/batch", json=payload)

    assert response.status_code == 201
    assert [c["name"] for c in response.json()] == ["John Doe", "Jane Smith"]


def test_batch_conflicts_return_409_and_store_nothing(client) -> None:
    duplicate_in_batch = [
        contact_payload(mobile="1111111111"),
        contact_payload(name="Jane", mobile="1111111111"),
    ]
    response = client.post(f"{BASE}/batch", json=duplicate_in_batch)
    assert response.status_code == 409
    assert response.json()["message"] == "Duplicate mobile numbers found in the batch"

    client.post(BASE, json=contact_payload(mobile="2222222222"))
    clashing = [
        contact_payload(name="New", mobile="3333333333"),
        contact_payload(name="Clash", mobile="2222222222"),
    ]
    response = client.post(f"{BASE}/batch", json=clashing)
    assert response.status_code == 409
    assert response.json()["message"] == "Mobile numbers already exist: 2222222222"
    assert [c["mobile"] for c in client.get(BASE).json()] == ["2222222222"]


def test_batch_validation_errors_are_keyed_by_index(client) -> None:
    payload = [contact_payload(), contact_payload(mobile="abc")]

    response = client.post(f"{BASE}/batch", json=payload)

    assert response.status_code == 400
    assert response.json()["validationErrors"] == {"1.mobile": "Mobile must be 10 digits"}


def test_get_by_id(client) -> None:
    created = client.post(BASE, json=contact_payload()).json()

    response = client.get(f"{BASE}/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_unknown_id_returns_404(client) -> None:
    response = client.get(f"{BASE}/{uuid4()}")

    assert response.status_code == 404
    assert_error_body(response.json(), 404, "Contact Not Found")


def test_malformed_id_is_a_validation_error(client) -> None:
    response = client.get(f"{BASE}/not-a-uuid")

    assert response.status_code == 400
    assert "contact_id" in response.json()["validationErrors"]


def test_update_and_conflicts(client) -> None:
    first = client.post(BASE, json=contact_payload(mobile="1111111111")).json()
    second = client.post(BASE, json=contact_payload(name="Jane", email="jane@x.com", mobile="2222222222")).json()

    response = client.put(f"{BASE}/{second['id']}", json=contact_payload(name="Jane Roe", email="jane@x.com", mobile="3333333333"))
    assert response.status_code == 200
    assert response.json()["name"] == "Jane Roe"
    assert response.json()["mobile"] == "3333333333"

    conflict = client.put(f"{BASE}/{second['id']}", json=contact_payload(mobile=first["mobile"]))
    assert conflict.status_code == 409

    missing = client.put(f"{BASE}/{uuid4()}", json=contact_payload())
    assert missing.status_code == 404


def test_delete_flow(client) -> None:
    created = client.post(BASE, json=contact_payload()).json()
    url = f"{BASE}/{created['id']}"

    first = client.delete(url)
    assert first.status_code == 204
    assert first.content == b""

    second = client.delete(url)
    assert second.status_code == 404
    assert second.json()["message"] == f"Contact already deleted with id: {created['id']}"

    assert client.get(url).status_code == 404
    assert client.get(BASE).json() == []
    assert client.get(f"{BASE}/search", params={"q": "john"}).json() == []

    update = client.put(url, json=contact_payload())
    assert update.status_code == 404
    assert update.json()["message"] == f"Cannot update deleted contact with id: {created['id']}"

    # the number is free again
    assert client.post(BASE, json=contact_payload()).status_code == 201


def test_search(client) -> None:
    client.post(BASE, json=contact_payload(name="John Doe", email="jd@x.com", mobile="1111111111"))
    client.post(BASE, json=contact_payload(name="Alice", email="john.a@x.com", mobile="2222222222"))
    client.post(BASE, json=contact_payload(name="Bob", email="bob@x.com", mobile="3333333333"))

    response = client.get(f"{BASE}/search", params={"q": "JOHN"})

    assert response.status_code == 200
    assert {c["name"] for c in response.json()} == {"John Doe", "Alice"}
    assert len(client.get(f"{BASE}/search", params={"q": ""}).json()) == 3


def test_search_requires_query_parameter(client) -> None:
    response = client.get(f"{BASE}/search")

    assert response.status_code == 400
    assert "q" in response.json()["validationErrors"]


def test_health(client) -> None:
    response = client.get(f"{BASE}/health")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Contact Service is running"


def test_unexpected_error_returns_generic_500(database, monkeypatch) -> None:
    async def boom():
        raise RuntimeError("database exploded")

    monkeypatch.setattr(ContactService, "get_all_contacts", boom)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get(BASE)

    assert response.status_code == 500
    body = response.json()
    assert_error_body(body, 500, "Internal Server Error")
    assert body["message"] == "An unexpected error occurred"
    assert "exploded" not in response.text


def test_openapi_document_describes_the_service(client) -> None:
    document = client.get("/openapi.json").json()

    assert document["info"]["title"] == "Contact Management API"
    assert document["info"]["license"]["name"] == "MIT License"
    assert f"{BASE}/batch" in document["paths"]
    assert "409" in document["paths"][f"{BASE}/"]["post"]["responses"]
    assert BASE not in document["paths"]
