import requests

from ebee.core.config import settings
from ebee.core.logging import get_logger
from ebee.tasks.celery_app import celery_app
from ebee.utils import email_templates

logger = get_logger(__name__)


def deliver_email(to_email: str, to_name: str, subject: str, html: str) -> bool:
    """POST one message to the Brevo transactional API."""
    if not settings.BREVO_API_KEY:
        logger.info("Email delivery disabled; skipping", to=to_email, subject=subject)
        return False

    response = requests.post(
        settings.BREVO_API_URL,
        json={
            "sender": {"name": settings.EMAIL_SENDER_NAME, "email": settings.EMAIL_SENDER_ADDRESS},
            "to": [{"email": to_email, "name": to_name}],
            "subject": subject,
            "htmlContent": html,
        },
        headers={"api-key": settings.BREVO_API_KEY, "accept": "application/json"},
        timeout=15,
    )
    response.raise_for_status()
    logger.info("Email sent", to=to_email, subject=subject)
    return True


@celery_app.task(bind=True, max_retries=3, default_retry_delay=30)
def send_email(self, to_email: str, to_name: str, subject: str, html: str):
    try:
        return deliver_email(to_email, to_name, subject, html)
    except requests.RequestException as exc:
        logger.warning("Email delivery failed", to=to_email, error=str(exc))
        raise self.retry(exc=exc)


def _queue_email(to_email: str, to_name: str, subject: str, html: str):
    """Hand a message to the broker. The caller has already committed, so a broker outage is logged, not raised."""
    try:
        return send_email.delay(to_email, to_name, subject, html)
    except Exception as e:
        logger.warning("Could not queue email", to=to_email, subject=subject, error=str(e))
        return None


def send_welcome_email(email: str, name: str):
    html = email_templates.render_template(
        email_templates.WELCOME_EMAIL_TEMPLATE,
        name=name,
        dashboardLink=settings.FRONTEND_URL,
    )
    return _queue_email(email, name, "Welcome to Ebee", html)


def send_password_reset_email(email: str, name: str, reset_link: str):
    html = email_templates.render_template(
        email_templates.PASSWORD_RESET_REQUEST_TEMPLATE, name=name, resetLink=reset_link
    )
    return _queue_email(email, name, "Reset your password", html)


def send_reset_success_email(email: str, name: str):
    html = email_templates.render_template(email_templates.PASSWORD_RESET_SUCCESS_TEMPLATE, name=name)
    return _queue_email(email, name, "Password Reset Successful", html)


def send_order_notification(email: str, name: str, order_id: int, order_total: float, content: str):
    html = email_templates.render_template(
        email_templates.ORDER_NOTIFICATION_TEMPLATE,
        name=name,
        orderNumber=order_id,
        orderTotal=f"{order_total:.2f}",
        notificationContent=content,
        orderLink=f"{settings.FRONTEND_URL}/orders/{order_id}",
    )
    return _queue_email(email, name, f"Order #{order_id} update", html)
