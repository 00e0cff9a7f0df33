def test_session_note_crud(client, auth_headers, client_id):
    response = client.post(
        "/session-notes/",
        json={
            "client_id": client_id,
            "session_date": "2024-05-06T10:00:00",
            "notes": "Dor lombar melhorou",
            "mood_rating": 8,
        },
        headers=auth_headers,
    )
    assert response.status_code == 201
    note = response.json()
    assert note["client"] == {"first_name": "Sarah", "last_name": "Johnson"}

    response = client.patch(f"/session-notes/{note['id']}", json={"next_steps": "Alongamento"}, headers=auth_headers)
    assert response.json()["next_steps"] == "Alongamento"

    assert client.delete(f"/session-notes/{note['id']}", headers=auth_headers).status_code == 200
    assert client.get("/session-notes/", headers=auth_headers).json() == []


def test_ratings_are_bounded(client, auth_headers, client_id):
    response = client.post(
        "/session-notes/",
        json={"client_id": client_id, "session_date": "2024-05-06T10:00:00", "notes": "x", "pain_level": 11},
        headers=auth_headers,
    )
    assert response.status_code == 422


def test_notes_newest_first_and_search(client, auth_headers, client_id):
    for day, text in [("2024-05-01", "Primeira sessão"), ("2024-05-08", "Segunda sessão, lombar")]:
        client.post(
            "/session-notes/",
            json={"client_id": client_id, "session_date": f"{day}T10:00:00", "notes": text},
            headers=auth_headers,
        )

    notes = client.get("/session-notes/", headers=auth_headers).json()
    assert [n["notes"] for n in notes] == ["Segunda sessão, lombar", "Primeira sessão"]

    found = client.get("/session-notes/", params={"q": "LOMBAR"}, headers=auth_headers).json()
    assert len(found) == 1

    by_client = client.get("/session-notes/", params={"client_id": client_id + 100}, headers=auth_headers).json()
    assert by_client == []


def test_session_date_with_offset_and_null_notes(client, auth_headers, client_id):
    response = client.post(
        "/session-notes/",
        json={"client_id": client_id, "session_date": "2024-05-06T10:00:00-03:00", "notes": "Primeira"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    note = response.json()
    assert note["session_date"] == "2024-05-06T13:00:00"

    response = client.patch(f"/session-notes/{note['id']}", json={"notes": None}, headers=auth_headers)
    assert response.status_code == 422
