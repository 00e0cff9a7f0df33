from decimal import Decimal

import pytest


@pytest.fixture(name="package_id")
def package_id_fixture(client, auth_headers):
    response = client.post(
        "/packages/",
        json={"name": "Yoga 10", "price": "700.00", "session_count": 10, "validity_days": 90},
        headers=auth_headers,
    )
    return response.json()["id"]


def pay(client, headers, client_id, amount, **extra):
    return client.post("/payments/", json={"client_id": client_id, "amount": amount, **extra}, headers=headers)


def test_create_payment_defaults_and_lookups(client, auth_headers, client_id, package_id):
    response = pay(client, auth_headers, client_id, "700.00", package_id=package_id)
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "completed"
    assert body["currency"] == "USD"
    assert body["payment_method"] == "card"
    assert body["package"] == {"name": "Yoga 10"}
    assert body["client"]["last_name"] == "Johnson"
    assert body["service"] is None


def test_service_and_package_are_exclusive(client, auth_headers, client_id, package_id):
    service_id = client.post("/services/", json={"name": "Yoga"}, headers=auth_headers).json()["id"]
    response = pay(client, auth_headers, client_id, "10.00", package_id=package_id, service_id=service_id)
    assert response.status_code == 400


def test_summary_counts_only_completed_revenue(client, auth_headers, client_id):
    pay(client, auth_headers, client_id, "100.00")
    pay(client, auth_headers, client_id, "50.50")
    pay(client, auth_headers, client_id, "999.00", status="pending")
    pay(client, auth_headers, client_id, "20.00", status="refunded")

    summary = client.get("/payments/summary", headers=auth_headers).json()

    assert Decimal(str(summary["total_revenue"])) == Decimal("150.50")
    assert summary["pending_payments"] == 1
    assert summary["completed_payments"] == 2


def test_empty_summary(client, auth_headers):
    summary = client.get("/payments/summary", headers=auth_headers).json()
    assert Decimal(str(summary["total_revenue"])) == 0
    assert summary["pending_payments"] == 0


def test_list_newest_payment_first_and_search(client, auth_headers, client_id, package_id):
    pay(client, auth_headers, client_id, "10.00", payment_date="2024-05-01T10:00:00")
    pay(client, auth_headers, client_id, "20.00", payment_date="2024-05-03T10:00:00", package_id=package_id)

    payments = client.get("/payments/", headers=auth_headers).json()
    assert [Decimal(str(p["amount"])) for p in payments] == [Decimal("20.00"), Decimal("10.00")]

    found = client.get("/payments/", params={"q": "YOGA"}, headers=auth_headers).json()
    assert len(found) == 1


def test_update_payment_status(client, auth_headers, client_id):
    payment_id = pay(client, auth_headers, client_id, "80.00", status="pending").json()["id"]

    response = client.patch(f"/payments/{payment_id}", json={"status": "completed"}, headers=auth_headers)
    assert response.status_code == 200

    summary = client.get("/payments/summary", headers=auth_headers).json()
    assert Decimal(str(summary["total_revenue"])) == Decimal("80.00")


def test_payments_scoped_by_owner(client, auth_headers, other_headers, client_id):
    payment_id = pay(client, auth_headers, client_id, "80.00").json()["id"]

    assert client.get("/payments/", headers=other_headers).json() == []
    assert client.patch(f"/payments/{payment_id}", json={"amount": "1.00"}, headers=other_headers).status_code == 403
    summary = client.get("/payments/summary", headers=other_headers).json()
    assert Decimal(str(summary["total_revenue"])) == 0
