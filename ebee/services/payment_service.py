"""
M-Pesa payments through PayHero: STK push, callback handling and lookups.
"""
import time
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ebee.core.logging import get_logger, log_business_event
from ebee.db import models
from ebee.schemas.payment import CallbackResponse, StkPushRequest
from ebee.services.cart_service import CartService
from ebee.utils import payhero
from ebee.utils.exceptions import NotFoundError, ValidationError

logger = get_logger(__name__)

PAID = models.PaymentStatus.paid.value
QUEUED = "QUEUED"
IN_FLIGHT_STATUSES = (models.PaymentStatus.pending.value, QUEUED)
FAILED_STATUSES = ("Cancelled", "Failed")


class PaymentService:
    """Service class for payment-related business logic."""

    def __init__(self, db: Session):
        self.db = db

    def initiate_stk_push(self, current_user: models.User, request: StkPushRequest) -> Tuple[dict, models.Payment]:
        if not request.phone or not request.order_id:
            raise ValidationError("Phone and orderId are required.")

        order = self.db.get(models.Order, request.order_id)
        if not order:
            raise NotFoundError(message="Order not found.")
        if order.payment_status == models.PaymentStatus.paid:
            raise ValidationError("Order already paid.")

        amount = float(order.total_price or 0)
        if amount <= 0:
            raise ValidationError("Invalid order amount.")

        in_flight = (
            self.db.query(models.Payment)
            .filter(
                models.Payment.order_id == order.id,
                or_(models.Payment.status.in_(IN_FLIGHT_STATUSES), models.Payment.status.is_(None)),
            )
            .first()
        )
        if in_flight:
            raise ValidationError("Payment already in progress for this order.")

        phone = payhero.normalize_phone(request.phone)
        reference = f"PAY-{current_user.id}-{int(time.time() * 1000)}-{order.id}"
        gateway_response = payhero.initiate_stk_push(amount, phone, reference)

        payment = models.Payment(
            amount=amount,
            phone_number=phone,
            status=QUEUED,
            reference=reference,
            checkout_request_id=gateway_response["CheckoutRequestID"],
            is_approved=False,
            user_id=current_user.id,
            order_id=order.id,
        )
        self.db.add(payment)
        self.db.commit()
        self.db.refresh(payment)

        log_business_event("stk_push_sent", current_user.id, order_id=order.id, reference=reference)
        return gateway_response, payment

    def handle_callback(self, response: Optional[CallbackResponse]) -> models.Payment:
        """Record the gateway's verdict and move the order along with it."""
        if response is None or not response.ExternalReference:
            raise ValidationError("Invalid callback payload")

        parts = response.ExternalReference.split("-")
        if len(parts) < 4:
            raise ValidationError("Invalid payment reference")
        try:
            user_id, order_id = int(parts[1]), int(parts[3])
        except ValueError:
            raise ValidationError("Invalid payment reference")

        order = self.db.get(models.Order, order_id)
        if not order:
            raise NotFoundError("Order")

        filters = [models.Payment.reference == response.ExternalReference]
        if response.CheckoutRequestID:
            filters.append(models.Payment.checkout_request_id == response.CheckoutRequestID)
        payment = self.db.query(models.Payment).filter(or_(*filters)).first()

        status = response.Status or (PAID if response.ResultCode == 0 else "Failed")
        if response.MpesaReceiptNumber:
            status = PAID

        if payment:
            payment.amount = response.Amount or payment.amount
            payment.phone_number = response.Phone or payment.phone_number
            payment.status = status
            payment.mpesa_receipt_number = response.MpesaReceiptNumber
        else:
            payment = models.Payment(
                amount=response.Amount,
                phone_number=response.Phone,
                status=status,
                reference=response.ExternalReference,
                checkout_request_id=response.CheckoutRequestID,
                mpesa_receipt_number=response.MpesaReceiptNumber,
                user_id=user_id,
                order_id=order_id,
                is_approved=False,
            )
            self.db.add(payment)

        if status == PAID:
            order.payment_status = models.PaymentStatus.paid
            order.order_status = models.OrderStatus.processing
            cart = self.db.get(models.Cart, order.cart_id)
            if cart is not None:
                CartService(self.db).empty_cart(cart)
        elif status in FAILED_STATUSES:
            order.payment_status = models.PaymentStatus.cancelled
            order.order_status = models.OrderStatus.cancelled

        self.db.commit()
        self.db.refresh(payment)
        log_business_event("payment_callback", user_id, order_id=order_id, status=status)
        return payment

    def get_latest_paid(self, user_id: int) -> models.Payment:
        payment = (
            self.db.query(models.Payment)
            .filter(models.Payment.user_id == user_id, models.Payment.status == PAID)
            .order_by(models.Payment.created_at.desc(), models.Payment.id.desc())
            .first()
        )
        if not payment:
            raise NotFoundError(message="No successful payment found.")
        return payment

    def get_history(self) -> List[models.Payment]:
        return (
            self.db.query(models.Payment)
            .order_by(models.Payment.created_at.desc(), models.Payment.id.desc())
            .all()
        )

    def approve_payment(self, payment_id: int, is_approved: bool) -> models.Payment:
        payment = self.db.get(models.Payment, payment_id)
        if not payment:
            raise NotFoundError(message="Payment not found.")
        payment.is_approved = is_approved
        self.db.commit()
        self.db.refresh(payment)
        return payment

    def get_by_checkout_request_id(self, checkout_request_id: str) -> models.Payment:
        payment = (
            self.db.query(models.Payment)
            .filter(models.Payment.checkout_request_id == checkout_request_id)
            .first()
        )
        if not payment:
            raise NotFoundError(message="Payment not found.")
        return payment

    def get_by_order_id(self, order_id: int) -> models.Payment:
        payment = (
            self.db.query(models.Payment)
            .filter(models.Payment.order_id == order_id)
            .order_by(models.Payment.created_at.desc(), models.Payment.id.desc())
            .first()
        )
        if not payment:
            raise NotFoundError(message="Payment not found for this order.")
        return payment
