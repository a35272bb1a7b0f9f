from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ebee.schemas.common import CamelModel


class StkPushRequest(CamelModel):
    phone: Optional[str] = None
    order_id: Optional[int] = None


class CallbackResponse(BaseModel):
    # Field names follow the gateway's payload verbatim
    model_config = ConfigDict(extra="ignore")

    Amount: Optional[float] = None
    Phone: Optional[str] = None
    Status: Optional[str] = None
    MpesaReceiptNumber: Optional[str] = None
    CheckoutRequestID: Optional[str] = None
    ExternalReference: Optional[str] = None
    ResultCode: Optional[int] = None


class CallbackPayload(BaseModel):
    response: Optional[CallbackResponse] = None


class PaymentApprove(CamelModel):
    is_approved: bool


class PaymentOut(CamelModel):
    id: int
    amount: Optional[float] = None
    phone_number: Optional[str] = None
    status: Optional[str] = None
    is_approved: bool
    reference: Optional[str] = None
    checkout_request_id: Optional[str] = None
    mpesa_receipt_number: Optional[str] = None
    user_id: int
    order_id: Optional[int] = None
    created_at: Optional[datetime] = None
