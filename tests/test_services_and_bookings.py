import pytest

from ebee.db import models
from tests.helpers import auth_headers


@pytest.fixture
def manager_headers(make_user):
    return auth_headers(make_user(models.UserType.service_manager, name="Sam"))


@pytest.fixture
def service(client, manager_headers):
    response = client.post(
        "/api/services/",
        json={"name": "Brake tune-up", "description": "Pads and cables", "price": 800},
        headers=manager_headers,
    )
    return response.json()["data"]


def test_create_service_records_owner(service):
    assert service["name"] == "Brake tune-up"
    assert service["price"] == 800.0
    assert service["owner"]["name"] == "Sam"


def test_service_requires_name_and_positive_price(client, manager_headers):
    blank = client.post("/api/services/", json={"name": "  ", "price": 100}, headers=manager_headers)
    free = client.post("/api/services/", json={"name": "Wash", "price": 0}, headers=manager_headers)

    assert blank.status_code == 400
    assert blank.json()["message"] == "name: Service name cannot be empty"
    assert free.status_code == 400


def test_customer_cannot_create_service(client, customer_headers):
    response = client.post("/api/services/", json={"name": "Wash", "price": 100}, headers=customer_headers)

    assert response.status_code == 403


def test_get_update_list_service(client, manager_headers, customer_headers, service):
    updated = client.put(f"/api/services/{service['id']}", json={"price": 950}, headers=manager_headers)
    fetched = client.get(f"/api/services/{service['id']}", headers=customer_headers)
    listed = client.get("/api/services/", headers=customer_headers)

    assert updated.json()["data"]["price"] == 950.0
    assert fetched.json()["data"]["name"] == "Brake tune-up"
    assert len(listed.json()["data"]) == 1


def test_unknown_service(client, customer_headers):
    assert client.get("/api/services/404", headers=customer_headers).status_code == 404


def test_booking_defaults_to_pending_for_caller(client, customer, customer_headers, service):
    response = client.post(
        "/api/bookings/", json={"serviceId": service["id"], "notes": "Squeaky rear brake"}, headers=customer_headers
    )

    assert response.status_code == 201
    booking = response.json()["data"]
    assert booking["status"] == "pending"
    assert booking["userId"] == customer.id
    assert booking["service"]["name"] == "Brake tune-up"


def test_booking_requires_service(client, customer_headers):
    missing = client.post("/api/bookings/", json={}, headers=customer_headers)
    unknown = client.post("/api/bookings/", json={"serviceId": 999}, headers=customer_headers)

    assert missing.status_code == 400
    assert missing.json()["message"] == "Service ID is required"
    assert unknown.status_code == 404


def test_assign_technician(client, customer_headers, manager_headers, service, make_user):
    booking = client.post("/api/bookings/", json={"serviceId": service["id"]}, headers=customer_headers).json()["data"]
    technician = make_user(models.UserType.technician_manager, name="Tina")

    response = client.put(
        f"/api/bookings/{booking['id']}",
        json={"assignedTo": technician.id, "status": "confirmed"},
        headers=manager_headers,
    )

    data = response.json()["data"]
    assert data["status"] == "confirmed"
    assert data["technician"]["name"] == "Tina"


def test_assign_unknown_technician(client, customer_headers, manager_headers, service):
    booking = client.post("/api/bookings/", json={"serviceId": service["id"]}, headers=customer_headers).json()["data"]

    response = client.put(f"/api/bookings/{booking['id']}", json={"assignedTo": 9999}, headers=manager_headers)

    assert response.status_code == 404


def test_my_bookings_only_lists_callers(client, customer_headers, service, make_user):
    client.post("/api/bookings/", json={"serviceId": service["id"]}, headers=customer_headers)
    other = auth_headers(make_user(models.UserType.customer))
    client.post("/api/bookings/", json={"serviceId": service["id"]}, headers=other)

    mine = client.get("/api/bookings/my", headers=customer_headers).json()["data"]

    assert len(mine) == 1


def test_only_owner_or_staff_delete_booking(client, customer_headers, manager_headers, service, make_user):
    booking = client.post("/api/bookings/", json={"serviceId": service["id"]}, headers=customer_headers).json()["data"]
    stranger = auth_headers(make_user(models.UserType.customer))

    assert client.delete(f"/api/bookings/{booking['id']}", headers=stranger).status_code == 403
    assert client.delete(f"/api/bookings/{booking['id']}", headers=customer_headers).status_code == 200


def test_deleting_service_cascades_to_bookings(client, customer_headers, manager_headers, service, db):
    client.post("/api/bookings/", json={"serviceId": service["id"]}, headers=customer_headers)

    response = client.delete(f"/api/services/{service['id']}", headers=manager_headers)

    assert response.status_code == 200
    assert db.query(models.Booking).count() == 0
