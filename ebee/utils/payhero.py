# ebee/utils/payhero.py
import requests

from ebee.core.config import settings
from ebee.core.logging import get_logger
from ebee.utils.exceptions import PaymentGatewayError

logger = get_logger(__name__)


def normalize_phone(phone: str) -> str:
    """07XXXXXXXX -> 2547XXXXXXXX; anything else is passed through."""
    phone = phone.strip()
    if phone.startswith("0"):
        return "254" + phone[1:]
    if phone.startswith("+"):
        return phone[1:]
    return phone


def initiate_stk_push(amount: float, phone_number: str, reference: str) -> dict:
    """Ask PayHero to send an M-Pesa STK prompt to the customer's phone."""
    try:
        response = requests.post(
            settings.PAYHERO_API_URL,
            json={
                "amount": amount,
                "phone_number": phone_number,
                "channel_id": settings.PAYHERO_CHANNEL_ID,
                "provider": "m-pesa",
                "external_reference": reference,
                "callback_url": settings.PAYMENT_CALLBACK_URL,
            },
            auth=(settings.PAYHERO_API_USERNAME, settings.PAYHERO_API_PASSWORD),
            timeout=settings.PAYMENT_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error("STK push request failed", reference=reference, error=str(e))
        raise PaymentGatewayError(f"Payment provider error: {e}")

    if not data.get("CheckoutRequestID"):
        logger.error("STK push rejected", reference=reference, response=data)
        raise PaymentGatewayError("Failed to initiate payment.")
    return data
