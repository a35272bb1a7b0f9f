import json
from datetime import timedelta

from ebee.db import models
from ebee.schemas.report import ReportGenerate
from ebee.services.report_service import ReportService
from tests.helpers import auth_headers


def test_create_report_stores_content_as_json_text(client, admin, admin_headers, db):
    content = {"totals": {"orders": 4}, "notes": ["weekend spike"]}

    response = client.post(
        "/api/reports/", json={"title": "Weekly", "content": content, "period": "weekly"}, headers=admin_headers
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["content"] == content
    assert data["type"] == "custom"
    assert data["format"] == "pdf"
    assert data["user"]["name"] == "Admin"

    stored = db.get(models.Report, data["id"])
    assert json.loads(stored.content) == content


def test_report_with_plain_text_content(client, admin_headers):
    response = client.post(
        "/api/reports/", json={"title": "Memo", "content": "Stock count on Friday"}, headers=admin_headers
    )

    assert response.json()["data"]["content"] == {"text": "Stock count on Friday"}


def test_report_without_content_is_empty_object(client, admin_headers, db):
    data = client.post("/api/reports/", json={"title": "Blank"}, headers=admin_headers).json()["data"]

    assert data["content"] == {}
    assert db.get(models.Report, data["id"]).content == "{}"


def test_legacy_plain_text_rows_are_wrapped(client, admin, admin_headers, db):
    report = models.Report(user_id=admin.id, title="Legacy", content="written by hand")
    db.add(report)
    db.commit()

    response = client.get(f"/api/reports/{report.id}", headers=admin_headers)

    assert response.json()["data"]["content"] == {"text": "written by hand"}


def test_report_requires_title(client, admin_headers):
    response = client.post("/api/reports/", json={"content": {}}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Missing required fields: title"


def test_list_get_delete_report(client, admin_headers):
    created = client.post("/api/reports/", json={"title": "Q1"}, headers=admin_headers).json()["data"]

    assert len(client.get("/api/reports/", headers=admin_headers).json()["data"]) == 1
    assert client.delete(f"/api/reports/{created['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/reports/{created['id']}", headers=admin_headers).status_code == 404


def test_customers_cannot_read_reports(client, customer_headers):
    assert client.get("/api/reports/", headers=customer_headers).status_code == 403


def test_generate_sales_report(client, admin_headers, customer, product, address, db):
    cart = models.Cart(user_id=customer.id)
    db.add(cart)
    db.flush()
    db.add_all([
        models.Order(user_id=customer.id, cart_id=cart.id, user_address_id=address.id, total_price=1500.0,
                     payment_status=models.PaymentStatus.paid, order_status=models.OrderStatus.processing),
        models.Order(user_id=customer.id, cart_id=cart.id, user_address_id=address.id, total_price=500.0),
    ])
    db.commit()

    response = client.post("/api/reports/generate/sales", json={}, headers=admin_headers)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["type"] == "sales_summary"
    assert data["isGenerated"] is True
    assert data["content"]["totalOrders"] == 2
    assert data["content"]["paidOrders"] == 1
    assert data["content"]["totalRevenue"] == 1500.0
    assert data["content"]["ordersByStatus"] == {"Processing": 1, "Pending": 1}


def test_generate_inventory_report(client, admin_headers, product, db):
    product.stock_quantity = 3
    db.commit()

    data = client.post("/api/reports/generate/inventory", headers=admin_headers).json()["data"]

    content = data["content"]
    assert content["totalProducts"] == 1
    assert content["totalStock"] == 3
    assert content["stockValue"] == 4500.0
    assert content["lowStock"] == [{"id": product.id, "name": "City Bike", "stockQuantity": 3}]
    assert content["productsByCategory"] == {"bike": 1}


def test_generate_feedback_report(client, admin_headers, customer, product, db):
    db.add_all([
        models.Feedback(rating=5, user_id=customer.id, product_id=product.id),
        models.Feedback(rating=2, user_id=customer.id, product_id=product.id),
    ])
    db.commit()

    data = client.post(
        "/api/reports/generate/feedback", json={"title": "Ratings", "period": "custom"}, headers=admin_headers
    ).json()["data"]

    content = data["content"]
    assert data["title"] == "Ratings"
    assert content["totalFeedbacks"] == 2
    assert content["averageRating"] == 3.5
    assert content["ratingDistribution"] == {"1": 0, "2": 1, "3": 0, "4": 0, "5": 1}
    assert content["byProduct"][0]["averageRating"] == 3.5


def test_finance_manager_can_generate(client, make_user):
    headers = auth_headers(make_user(models.UserType.finance_manager))

    response = client.post("/api/reports/generate/sales", headers=headers)

    assert response.status_code == 201
    assert response.json()["data"]["content"]["totalOrders"] == 0


def test_period_windows_count_back_from_now():
    start, end = ReportService._window(ReportGenerate(period=models.ReportPeriod.quarterly))
    assert end - start == timedelta(days=90)

    assert ReportService._window(ReportGenerate(period=models.ReportPeriod.custom)) == (None, None)
