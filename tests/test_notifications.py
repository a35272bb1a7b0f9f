import pytest

from ebee.core.config import settings
from ebee.tasks import notification_tasks
from ebee.utils import email_templates


def test_render_template_replaces_markers():
    html = email_templates.render_template(
        email_templates.PASSWORD_RESET_REQUEST_TEMPLATE, name="Jane", resetLink="https://ebee.test/reset/abc"
    )

    assert "Dear Jane," in html
    assert 'href="https://ebee.test/reset/abc"' in html
    assert "{resetLink}" not in html


def test_render_template_leaves_unknown_markers():
    html = email_templates.render_template(email_templates.VERIFICATION_EMAIL_TEMPLATE, name="Jane")

    assert "{verificationCode}" in html


def test_order_notification_template_has_all_markers():
    for marker in ("{name}", "{orderNumber}", "{orderTotal}", "{notificationContent}", "{orderLink}"):
        assert marker in email_templates.ORDER_NOTIFICATION_TEMPLATE


def test_delivery_skipped_without_api_key():
    assert notification_tasks.deliver_email("a@b.co", "A", "Hi", "<p>hi</p>") is False


def test_delivery_posts_to_brevo(monkeypatch):
    sent = {}

    class FakeResponse:
        def raise_for_status(self):
            pass

    def fake_post(url, json=None, headers=None, timeout=None):
        sent.update(url=url, json=json, headers=headers)
        return FakeResponse()

    monkeypatch.setattr(settings, "BREVO_API_KEY", "test-key")
    monkeypatch.setattr(notification_tasks.requests, "post", fake_post)

    assert notification_tasks.deliver_email("a@b.co", "A", "Hi", "<p>hi</p>") is True
    assert sent["url"] == settings.BREVO_API_URL
    assert sent["headers"]["api-key"] == "test-key"
    assert sent["json"]["to"] == [{"email": "a@b.co", "name": "A"}]


def test_order_notification_renders_and_queues(monkeypatch):
    captured = {}

    def fake_deliver(to_email, to_name, subject, html):
        captured.update(to=to_email, subject=subject, html=html)
        return True

    monkeypatch.setattr(notification_tasks, "deliver_email", fake_deliver)

    notification_tasks.send_order_notification("jane@example.com", "Jane", 42, 3000, "Your order shipped.")

    assert captured["subject"] == "Order #42 update"
    assert "3000.00" in captured["html"]
    assert "Your order shipped." in captured["html"]


def test_queue_failure_is_logged_not_raised(monkeypatch):
    class UnreachableBroker:
        def delay(self, *args, **kwargs):
            raise ConnectionRefusedError("broker down")

    monkeypatch.setattr(notification_tasks, "send_email", UnreachableBroker())

    assert notification_tasks.send_welcome_email("jane@example.com", "Jane") is None
    assert notification_tasks.send_order_notification("jane@example.com", "Jane", 7, 10, "Paid.") is None
