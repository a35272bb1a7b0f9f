import pytest

from ebee.db import models
from tests.helpers import auth_headers


def rental_payload(product_id, **overrides):
    payload = {
        "productId": product_id,
        "rentStart": "2026-03-01T09:00:00Z",
        "rentEnd": "2026-03-03T09:00:00Z",
        "price": 500,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def rental(client, customer_headers, product):
    return client.post("/api/rentals/", json=rental_payload(product.id), headers=customer_headers).json()["data"]


def test_create_rental_uses_caller_and_defaults_pending(client, customer, rental):
    assert rental["userId"] == customer.id
    assert rental["status"] == "pending"
    assert rental["product"]["name"] == "City Bike"
    assert rental["user"]["name"] == "Jane"


def test_rental_end_must_follow_start(client, customer_headers, product):
    response = client.post(
        "/api/rentals/",
        json=rental_payload(product.id, rentEnd="2026-02-28T09:00:00Z"),
        headers=customer_headers,
    )

    assert response.status_code == 400
    assert "rentEnd must be after rentStart" in response.json()["message"]


def test_rental_missing_fields(client, customer_headers):
    response = client.post("/api/rentals/", json={"price": 100}, headers=customer_headers)

    assert response.status_code == 400
    assert response.json()["message"].startswith("Missing required fields: productId")


def test_rental_for_unknown_product(client, customer_headers):
    response = client.post("/api/rentals/", json=rental_payload(777), headers=customer_headers)

    assert response.status_code == 404


def test_update_rental_checks_period_against_stored_dates(client, admin_headers, rental):
    response = client.put(
        f"/api/rentals/{rental['id']}", json={"rentEnd": "2026-02-01T00:00:00Z"}, headers=admin_headers
    )

    assert response.status_code == 400


def test_rental_period_accepts_mixed_offsets(client, customer_headers, product):
    # 12:00+03:00 is 09:00Z, an hour before the naive (UTC) end
    response = client.post(
        "/api/rentals/",
        json=rental_payload(product.id, rentStart="2026-03-01T12:00:00+03:00", rentEnd="2026-03-01T10:00:00"),
        headers=customer_headers,
    )

    assert response.status_code == 201
    assert response.json()["data"]["rentStart"].startswith("2026-03-01T09:00:00")


def test_rental_period_compares_mixed_offsets_in_utc(client, customer_headers, product):
    response = client.post(
        "/api/rentals/",
        json=rental_payload(product.id, rentStart="2026-03-01T10:00:00", rentEnd="2026-03-01T12:00:00+03:00"),
        headers=customer_headers,
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_update_rental_end_with_offset_before_start(client, customer_headers, admin_headers, product):
    created = client.post(
        "/api/rentals/",
        json=rental_payload(product.id, rentStart="2026-01-01T10:00:00Z", rentEnd="2026-01-01T12:00:00Z"),
        headers=customer_headers,
    ).json()["data"]

    # 11:00+03:00 is 08:00Z
    response = client.put(
        f"/api/rentals/{created['id']}", json={"rentEnd": "2026-01-01T11:00:00+03:00"}, headers=admin_headers
    )

    assert response.status_code == 400
    assert "rentEnd must be after rentStart" in response.json()["message"]


def test_update_rental_status(client, admin_headers, rental):
    response = client.put(f"/api/rentals/{rental['id']}", json={"status": "paid"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "paid"


def test_list_and_delete_rental(client, customer_headers, admin_headers, rental):
    listed = client.get("/api/rentals/", headers=customer_headers).json()["data"]
    assert [r["id"] for r in listed] == [rental["id"]]

    response = client.delete(f"/api/rentals/{rental['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert client.get("/api/rentals/", headers=customer_headers).json()["data"] == []


def test_fine_links_back_to_rental(client, admin_headers, customer, rental, db):
    response = client.post(
        "/api/fines/",
        json={"reason": "Late return", "amount": 250, "userId": customer.id, "rentalId": rental["id"]},
        headers=admin_headers,
    )

    assert response.status_code == 201
    fine = response.json()["data"]
    assert fine["amount"] == 250.0
    assert db.get(models.Rental, rental["id"]).fine_id == fine["id"]


def test_fine_amount_must_be_positive(client, admin_headers, customer, rental):
    response = client.post(
        "/api/fines/",
        json={"reason": "Scratch", "amount": 0, "userId": customer.id, "rentalId": rental["id"]},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_update_and_delete_fine(client, admin_headers, customer, rental):
    fine = client.post(
        "/api/fines/",
        json={"reason": "Late return", "amount": 250, "userId": customer.id, "rentalId": rental["id"]},
        headers=admin_headers,
    ).json()["data"]

    updated = client.put(f"/api/fines/{fine['id']}", json={"amount": 300}, headers=admin_headers)
    deleted = client.delete(f"/api/fines/{fine['id']}", headers=admin_headers)

    assert updated.json()["data"]["amount"] == 300.0
    assert updated.json()["data"]["reason"] == "Late return"
    assert deleted.status_code == 200
    assert client.get("/api/fines/", headers=admin_headers).json()["data"] == []


def test_customer_cannot_issue_fines(client, customer, customer_headers, rental):
    response = client.post(
        "/api/fines/",
        json={"reason": "Self-fine", "amount": 10, "userId": customer.id, "rentalId": rental["id"]},
        headers=customer_headers,
    )

    assert response.status_code == 403


def test_unknown_fine(client, make_user):
    headers = auth_headers(make_user(models.UserType.finance_manager))

    assert client.delete("/api/fines/5150", headers=headers).status_code == 404
