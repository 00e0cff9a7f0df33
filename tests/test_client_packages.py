import pytest


@pytest.fixture(name="package_id")
def package_id_fixture(client, auth_headers):
    response = client.post(
        "/packages/",
        json={"name": "Coaching 2", "price": "200.00", "session_count": 2, "validity_days": 30},
        headers=auth_headers,
    )
    return response.json()["id"]


def sell(client, headers, client_id, package_id, **extra):
    return client.post(
        "/client-packages/",
        json={"client_id": client_id, "package_id": package_id, **extra},
        headers=headers,
    )


def test_sell_package_snapshots_sessions(client, auth_headers, client_id, package_id):
    response = sell(client, auth_headers, client_id, package_id, purchase_date="2099-01-01T10:00:00")
    assert response.status_code == 201
    body = response.json()
    assert body["sessions_total"] == 2
    assert body["sessions_remaining"] == 2
    assert body["sessions_used"] == 0
    assert body["expiry_date"].startswith("2099-01-31")
    assert body["package"] == {"name": "Coaching 2"}


def test_use_sessions_until_completed(client, auth_headers, client_id, package_id):
    item_id = sell(client, auth_headers, client_id, package_id).json()["id"]

    first = client.post(f"/client-packages/{item_id}/use", headers=auth_headers).json()
    assert first["sessions_remaining"] == 1
    assert first["status"] == "active"

    second = client.post(f"/client-packages/{item_id}/use", headers=auth_headers).json()
    assert second["sessions_remaining"] == 0
    assert second["sessions_used"] == 2
    assert second["status"] == "completed"

    response = client.post(f"/client-packages/{item_id}/use", headers=auth_headers)
    assert response.status_code == 400


def test_expired_package_cannot_be_used(client, auth_headers, client_id, package_id):
    item_id = sell(client, auth_headers, client_id, package_id, purchase_date="2020-01-01T10:00:00").json()["id"]

    assert client.get(f"/client-packages/{item_id}", headers=auth_headers).json()["status"] == "expired"
    assert client.post(f"/client-packages/{item_id}/use", headers=auth_headers).status_code == 400


def test_inactive_package_cannot_be_sold(client, auth_headers, client_id, package_id):
    client.patch(f"/packages/{package_id}", json={"is_active": False}, headers=auth_headers)
    assert sell(client, auth_headers, client_id, package_id).status_code == 400


def test_other_owner_package_is_forbidden(client, other_headers, client_id, package_id):
    assert sell(client, other_headers, client_id, package_id).status_code == 403


def test_update_client_package(client, auth_headers, client_id, package_id):
    item_id = sell(client, auth_headers, client_id, package_id, purchase_date="2099-01-01T10:00:00").json()["id"]

    response = client.patch(
        f"/client-packages/{item_id}",
        json={"expiry_date": "2099-03-01T12:00:00+02:00"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["expiry_date"] == "2099-03-01T10:00:00"

    response = client.patch(f"/client-packages/{item_id}", json={"status": "completed"}, headers=auth_headers)
    assert response.json()["status"] == "completed"


def test_update_client_package_rejects_null_status(client, auth_headers, client_id, package_id):
    item_id = sell(client, auth_headers, client_id, package_id).json()["id"]

    response = client.patch(f"/client-packages/{item_id}", json={"status": None}, headers=auth_headers)
    assert response.status_code == 422
    assert client.get(f"/client-packages/{item_id}", headers=auth_headers).json()["status"] == "active"


def test_update_client_package_of_other_owner(client, auth_headers, other_headers, client_id, package_id):
    item_id = sell(client, auth_headers, client_id, package_id).json()["id"]

    response = client.patch(f"/client-packages/{item_id}", json={"status": "expired"}, headers=other_headers)
    assert response.status_code == 403


def test_sell_with_offset_purchase_date(client, auth_headers, client_id, package_id):
    body = sell(client, auth_headers, client_id, package_id, purchase_date="2099-01-01T10:00:00Z").json()
    assert body["purchase_date"] == "2099-01-01T10:00:00"
    assert body["expiry_date"] == "2099-01-31T10:00:00"
