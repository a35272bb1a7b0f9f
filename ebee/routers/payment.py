# ebee/routers/payment.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ebee.db import database, models
from ebee.schemas.common import Envelope, ok
from ebee.schemas.payment import CallbackPayload, PaymentApprove, PaymentOut, StkPushRequest
from ebee.services import PaymentService
from ebee.utils.dependencies import get_current_user, require_role

router = APIRouter(prefix="/payment", tags=["payment"])

require_finance = require_role(models.UserType.admin, models.UserType.finance_manager)


@router.post("/stkpush")
def stk_push(
    payload: StkPushRequest,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    gateway_response, payment = PaymentService(db).initiate_stk_push(current_user, payload)
    return {"success": True, "message": "STK Push sent.", "data": gateway_response, "paymentId": payment.id}


@router.post("/callback", response_model=Envelope[None])
def payment_callback(payload: CallbackPayload, db: Session = Depends(database.get_db)):
    """PayHero posts the transaction result here; no auth, the reference ties it to an order."""
    PaymentService(db).handle_callback(payload.response)
    return ok()


@router.get("/latest", response_model=Envelope[PaymentOut])
def latest_paid_payment(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(get_current_user),
):
    return ok(PaymentService(db).get_latest_paid(current_user.id))


@router.get("/history", response_model=Envelope[List[PaymentOut]])
def payment_history(
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_finance),
):
    return ok(PaymentService(db).get_history())


@router.put("/{payment_id}/approve", response_model=Envelope[PaymentOut])
def approve_payment(
    payment_id: int,
    payload: PaymentApprove,
    db: Session = Depends(database.get_db),
    current_user: models.User = Depends(require_finance),
):
    payment = PaymentService(db).approve_payment(payment_id, payload.is_approved)
    return ok(payment, "Payment approval status updated successfully.")


@router.get("/status/order/{order_id}", response_model=Envelope[PaymentOut])
def payment_status_by_order(order_id: int, db: Session = Depends(database.get_db)):
    return ok(PaymentService(db).get_by_order_id(order_id))


@router.get("/status/{checkout_request_id}", response_model=Envelope[PaymentOut])
def payment_status_by_checkout(checkout_request_id: str, db: Session = Depends(database.get_db)):
    return ok(PaymentService(db).get_by_checkout_request_id(checkout_request_id))
