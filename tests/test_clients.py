def test_create_and_get_client(client, auth_headers, client_id):
    response = client.get(f"/clients/{client_id}", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["first_name"] == "Sarah"
    assert body["status"] == "active"


def test_list_newest_first_and_search(client, auth_headers, client_id):
    client.post("/clients/", json={"first_name": "Michael", "last_name": "Chen"}, headers=auth_headers)

    names = [c["first_name"] for c in client.get("/clients/", headers=auth_headers).json()]
    assert names == ["Michael", "Sarah"]

    found = client.get("/clients/", params={"q": "JOHNSON"}, headers=auth_headers).json()
    assert [c["id"] for c in found] == [client_id]

    found = client.get("/clients/", params={"q": "example.com"}, headers=auth_headers).json()
    assert [c["id"] for c in found] == [client_id]


def test_update_client(client, auth_headers, client_id):
    response = client.patch(
        f"/clients/{client_id}",
        json={"status": "inactive", "goals": "Melhorar postura"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "inactive"
    assert body["goals"] == "Melhorar postura"
    assert body["last_name"] == "Johnson"


def test_update_client_rejects_null_name(client, auth_headers, client_id):
    response = client.patch(f"/clients/{client_id}", json={"first_name": None}, headers=auth_headers)
    assert response.status_code == 422
    assert client.get(f"/clients/{client_id}", headers=auth_headers).json()["first_name"] == "Sarah"


def test_clients_are_scoped_by_owner(client, auth_headers, other_headers, client_id):
    assert client.get("/clients/", headers=other_headers).json() == []
    assert client.get(f"/clients/{client_id}", headers=other_headers).status_code == 403
    assert client.delete(f"/clients/{client_id}", headers=other_headers).status_code == 403


def test_delete_client(client, auth_headers, client_id):
    assert client.delete(f"/clients/{client_id}", headers=auth_headers).status_code == 200
    assert client.get(f"/clients/{client_id}", headers=auth_headers).status_code == 404


def test_services_and_packages_crud(client, auth_headers):
    response = client.post(
        "/services/",
        json={"name": "Yoga Session", "duration_minutes": 60, "price": "80.00"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    service_id = response.json()["id"]

    client.patch(f"/services/{service_id}", json={"is_active": False}, headers=auth_headers)
    assert client.get("/services/", params={"active_only": True}, headers=auth_headers).json() == []

    response = client.post(
        "/packages/",
        json={"name": "Yoga 10", "price": "700.00", "session_count": 10, "validity_days": 90},
        headers=auth_headers,
    )
    assert response.status_code == 201
    found = client.get("/packages/", params={"q": "yoga"}, headers=auth_headers).json()
    assert len(found) == 1

    assert client.delete(f"/services/{service_id}", headers=auth_headers).status_code == 200
    assert client.get(f"/services/{service_id}", headers=auth_headers).status_code == 404


def test_package_requires_sessions(client, auth_headers):
    response = client.post(
        "/packages/",
        json={"name": "Vazio", "price": "10.00", "session_count": 0},
        headers=auth_headers,
    )
    assert response.status_code == 422
