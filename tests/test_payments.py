import pytest
import requests

from ebee.db import models
from ebee.utils import payhero
from ebee.utils.exceptions import PaymentGatewayError
from tests.helpers import auth_headers


@pytest.fixture
def order(db, customer, product, address):
    cart = models.Cart(user_id=customer.id)
    db.add(cart)
    db.flush()
    db.add(models.CartItem(cart_id=cart.id, product_id=product.id, quantity=2))
    order = models.Order(
        user_id=customer.id, cart_id=cart.id, user_address_id=address.id, total_price=3000.0,
        items=[models.OrderItem(product_id=product.id, quantity=2, price=1500.0)],
    )
    db.add(order)
    db.commit()
    db.refresh(order)
    return order


@pytest.fixture
def fake_payhero(monkeypatch):
    sent = []

    def fake_push(amount, phone_number, reference):
        sent.append({"amount": amount, "phone_number": phone_number, "reference": reference})
        return {"success": True, "status": "QUEUED", "CheckoutRequestID": "ws_CO_123"}

    monkeypatch.setattr(payhero, "initiate_stk_push", fake_push)
    return sent


def test_stk_push_queues_payment_for_order_total(client, customer, customer_headers, order, fake_payhero, db):
    response = client.post(
        "/api/payment/stkpush", json={"phone": "0712345678", "orderId": order.id}, headers=customer_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["CheckoutRequestID"] == "ws_CO_123"

    push = fake_payhero[0]
    assert push["amount"] == 3000.0
    assert push["phone_number"] == "254712345678"
    assert push["reference"].startswith(f"PAY-{customer.id}-")
    assert push["reference"].endswith(f"-{order.id}")

    payment = db.get(models.Payment, body["paymentId"])
    assert payment.status == "QUEUED"
    assert payment.checkout_request_id == "ws_CO_123"


def test_stk_push_requires_phone_and_order(client, customer_headers, fake_payhero):
    response = client.post("/api/payment/stkpush", json={"phone": "0712345678"}, headers=customer_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Phone and orderId are required."


def test_stk_push_rejects_second_attempt_while_in_flight(client, customer_headers, order, fake_payhero):
    payload = {"phone": "0712345678", "orderId": order.id}
    client.post("/api/payment/stkpush", json=payload, headers=customer_headers)

    response = client.post("/api/payment/stkpush", json=payload, headers=customer_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Payment already in progress for this order."
    assert len(fake_payhero) == 1


def test_stk_push_rejects_paid_order(client, customer_headers, order, fake_payhero, db):
    order.payment_status = models.PaymentStatus.paid
    db.commit()

    response = client.post(
        "/api/payment/stkpush", json={"phone": "0712345678", "orderId": order.id}, headers=customer_headers
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Order already paid."


def test_gateway_failure_is_bad_gateway(client, customer_headers, order, monkeypatch):
    def failing(*args, **kwargs):
        raise requests.ConnectionError("down")

    monkeypatch.setattr(payhero.requests, "post", failing)

    response = client.post(
        "/api/payment/stkpush", json={"phone": "0712345678", "orderId": order.id}, headers=customer_headers
    )

    assert response.status_code == 502
    assert response.json()["success"] is False


def callback(client, reference, **fields):
    payload = {"response": {"ExternalReference": reference, "CheckoutRequestID": "ws_CO_123", **fields}}
    return client.post("/api/payment/callback", json=payload)


def test_successful_callback_marks_order_paid_and_clears_cart(
    client, customer, customer_headers, order, fake_payhero, db
):
    client.post("/api/payment/stkpush", json={"phone": "0712345678", "orderId": order.id}, headers=customer_headers)
    reference = fake_payhero[0]["reference"]

    response = callback(client, reference, ResultCode=0, MpesaReceiptNumber="QK123ABC", Amount=3000)

    assert response.status_code == 200
    db.expire_all()
    refreshed = db.get(models.Order, order.id)
    assert refreshed.payment_status == models.PaymentStatus.paid
    assert refreshed.order_status == models.OrderStatus.processing
    assert db.query(models.CartItem).count() == 0

    latest = client.get("/api/payment/latest", headers=customer_headers).json()["data"]
    assert latest["mpesaReceiptNumber"] == "QK123ABC"
    assert latest["status"] == "Paid"


def test_failed_callback_cancels_order(client, customer, order, db):
    reference = f"PAY-{customer.id}-1700000000000-{order.id}"

    response = callback(client, reference, ResultCode=1032, Status="Cancelled")

    assert response.status_code == 200
    db.expire_all()
    refreshed = db.get(models.Order, order.id)
    assert refreshed.payment_status == models.PaymentStatus.cancelled
    assert refreshed.order_status == models.OrderStatus.cancelled
    # no prior STK push, so the callback recorded the payment itself
    payment = db.query(models.Payment).one()
    assert payment.reference == reference
    assert payment.status == "Cancelled"


def test_callback_without_status_or_receipt_is_failed(client, customer, order, db):
    callback(client, f"PAY-{customer.id}-1-{order.id}", ResultCode=1)

    assert db.query(models.Payment).one().status == "Failed"


def test_callback_with_bad_reference(client):
    response = callback(client, "garbage")

    assert response.status_code == 400


def test_latest_paid_payment_missing(client, customer_headers):
    response = client.get("/api/payment/latest", headers=customer_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "No successful payment found."


def test_history_and_approval_for_finance(client, make_user, customer, order, db):
    payment = models.Payment(amount=3000.0, status="Paid", user_id=customer.id, order_id=order.id)
    db.add(payment)
    db.commit()
    finance = auth_headers(make_user(models.UserType.finance_manager))

    history = client.get("/api/payment/history", headers=finance)
    approved = client.put(f"/api/payment/{payment.id}/approve", json={"isApproved": True}, headers=finance)

    assert [p["id"] for p in history.json()["data"]] == [payment.id]
    assert approved.json()["data"]["isApproved"] is True


def test_customer_cannot_see_history(client, customer_headers):
    assert client.get("/api/payment/history", headers=customer_headers).status_code == 403


def test_status_lookups(client, customer, order, db):
    db.add(models.Payment(
        amount=3000.0, status="QUEUED", checkout_request_id="ws_CO_999",
        user_id=customer.id, order_id=order.id,
    ))
    db.commit()

    by_checkout = client.get("/api/payment/status/ws_CO_999")
    by_order = client.get(f"/api/payment/status/order/{order.id}")
    missing = client.get("/api/payment/status/order/4040")

    assert by_checkout.json()["data"]["status"] == "QUEUED"
    assert by_order.json()["data"]["checkoutRequestId"] == "ws_CO_999"
    assert missing.status_code == 404
    assert missing.json()["message"] == "Payment not found for this order."


def test_normalize_phone():
    assert payhero.normalize_phone("0712345678") == "254712345678"
    assert payhero.normalize_phone("+254712345678") == "254712345678"
    assert payhero.normalize_phone("254712345678") == "254712345678"


def test_initiate_stk_push_without_checkout_id_raises(monkeypatch):
    class FakeResponse:
        def raise_for_status(self):
            pass

        def json(self):
            return {"success": False}

    monkeypatch.setattr(payhero.requests, "post", lambda *a, **kw: FakeResponse())

    with pytest.raises(PaymentGatewayError):
        payhero.initiate_stk_push(100.0, "254712345678", "PAY-1-2-3")
