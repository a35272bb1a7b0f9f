import pytest

from ebee.db import models
from ebee.services.inventory_service import InventoryService
from tests.helpers import auth_headers


@pytest.fixture
def keeper_headers(make_user):
    return auth_headers(make_user(models.UserType.inventory_manager))


def log(client, headers, product_id, change_type, quantity, reason="Stock take"):
    return client.post(
        "/api/inventories/",
        json={"productId": product_id, "changeType": change_type, "quantity": quantity, "reason": reason},
        headers=headers,
    )


def test_inventory_add_increases_stock(client, keeper_headers, product, db):
    response = log(client, keeper_headers, product.id, "add", 5, "Delivery from supplier")

    assert response.status_code == 201
    assert response.json()["data"]["changeType"] == "add"
    db.expire_all()
    assert db.get(models.Product, product.id).stock_quantity == 15


def test_inventory_remove_never_goes_negative(client, keeper_headers, product, db):
    log(client, keeper_headers, product.id, "remove", 25, "Write-off")

    db.expire_all()
    assert db.get(models.Product, product.id).stock_quantity == 0


@pytest.mark.parametrize("change_type,expected", [
    (models.ChangeType.add, 13),
    (models.ChangeType.remove, 7),
    (models.ChangeType.adjust, 7),
])
def test_apply_change(change_type, expected):
    assert InventoryService.apply_change(10, change_type, 3) == expected


def test_inventory_validation(client, keeper_headers, product):
    bad_type = log(client, keeper_headers, product.id, "steal", 1)
    zero = log(client, keeper_headers, product.id, "add", 0)
    unknown_product = log(client, keeper_headers, 1234, "add", 1)

    assert bad_type.status_code == 400
    assert zero.status_code == 400
    assert unknown_product.status_code == 404


def test_inventory_list_and_delete(client, keeper_headers, product):
    entry = log(client, keeper_headers, product.id, "add", 2).json()["data"]

    listed = client.get("/api/inventories/", headers=keeper_headers).json()["data"]
    deleted = client.delete(f"/api/inventories/{entry['id']}", headers=keeper_headers)

    assert listed[0]["product"]["name"] == "City Bike"
    assert deleted.status_code == 200


def test_customer_cannot_log_inventory(client, customer_headers, product):
    assert log(client, customer_headers, product.id, "add", 1).status_code == 403


@pytest.mark.parametrize("rating", [1, 5])
def test_feedback_rating_bounds_accepted(client, customer_headers, product, rating):
    response = client.post(
        "/api/feedbacks/", json={"rating": rating, "productId": product.id}, headers=customer_headers
    )

    assert response.status_code == 201
    assert response.json()["data"]["rating"] == rating


@pytest.mark.parametrize("rating", [0, 6])
def test_feedback_rating_out_of_range_rejected(client, customer_headers, product, rating, db):
    response = client.post(
        "/api/feedbacks/", json={"rating": rating, "productId": product.id}, headers=customer_headers
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert db.query(models.Feedback).count() == 0


def test_feedback_requires_auth(client, product):
    response = client.post("/api/feedbacks/", json={"rating": 4, "productId": product.id})

    assert response.status_code == 401


def test_feedback_crud(client, customer, customer_headers, product):
    created = client.post(
        "/api/feedbacks/", json={"rating": 3, "comment": "OK", "productId": product.id}, headers=customer_headers
    ).json()["data"]
    assert created["userId"] == customer.id

    updated = client.put(f"/api/feedbacks/{created['id']}", json={"rating": 4}, headers=customer_headers)
    assert updated.json()["data"]["rating"] == 4
    assert updated.json()["data"]["comment"] == "OK"

    assert client.get(f"/api/feedbacks/{created['id']}").json()["data"]["product"]["name"] == "City Bike"
    assert len(client.get("/api/feedbacks/").json()["data"]) == 1

    assert client.delete(f"/api/feedbacks/{created['id']}", headers=customer_headers).status_code == 200
    assert client.get(f"/api/feedbacks/{created['id']}").status_code == 404


def test_feedback_rating_update_out_of_range(client, customer_headers, product):
    created = client.post(
        "/api/feedbacks/", json={"rating": 3, "productId": product.id}, headers=customer_headers
    ).json()["data"]

    response = client.put(f"/api/feedbacks/{created['id']}", json={"rating": 6}, headers=customer_headers)

    assert response.status_code == 400


def test_only_author_edits_feedback(client, customer_headers, product, make_user):
    created = client.post(
        "/api/feedbacks/", json={"rating": 3, "productId": product.id}, headers=customer_headers
    ).json()["data"]
    other = auth_headers(make_user(models.UserType.customer))

    assert client.put(f"/api/feedbacks/{created['id']}", json={"rating": 1}, headers=other).status_code == 403
    assert client.delete(f"/api/feedbacks/{created['id']}", headers=other).status_code == 403
