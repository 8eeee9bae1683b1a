import asyncio

import httpx
import pytest
from fastapi import HTTPException

from roomhub import email_templates
from roomhub.services import fcm_service, twilio_service


def configure_twilio(monkeypatch):
    monkeypatch.setattr(twilio_service, "TWILIO_ACCOUNT_SID", "AC123")
    monkeypatch.setattr(twilio_service, "TWILIO_AUTH_TOKEN", "secret")
    monkeypatch.setattr(twilio_service, "TWILIO_PHONE_NUMBER", "+15550000")


def mock_httpx(monkeypatch, handler):
    real_client = httpx.AsyncClient
    monkeypatch.setattr(
        twilio_service.httpx,
        "AsyncClient",
        lambda *args, **kwargs: real_client(transport=httpx.MockTransport(handler)),
    )


def test_sms_without_configuration_fails(monkeypatch):
    monkeypatch.setattr(twilio_service, "TWILIO_ACCOUNT_SID", None)
    with pytest.raises(HTTPException) as exc:
        asyncio.run(twilio_service.send_sms("+15550001", "hi"))
    assert exc.value.status_code == 500
    assert exc.value.detail == "Failed to send SMS to the user"


def test_sms_posts_to_twilio(monkeypatch):
    configure_twilio(monkeypatch)
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = request.content.decode()
        return httpx.Response(201, json={"sid": "SM1"})

    mock_httpx(monkeypatch, handler)
    asyncio.run(twilio_service.send_sms("+15550001", "Booking approved"))

    assert seen["url"].endswith("/Accounts/AC123/Messages.json")
    assert "Body=Booking+approved" in seen["body"]


def test_sms_provider_rejection_fails(monkeypatch):
    configure_twilio(monkeypatch)
    mock_httpx(monkeypatch, lambda request: httpx.Response(400, json={"message": "bad number"}))

    with pytest.raises(HTTPException) as exc:
        asyncio.run(twilio_service.send_sms("nope", "hi"))
    assert exc.value.status_code == 500


def test_push_failure_is_reported_not_raised(monkeypatch):
    def boom():
        raise RuntimeError("Firebase credentials are not configured properly")

    monkeypatch.setattr(fcm_service, "get_firebase_app", boom)
    assert asyncio.run(fcm_service.send_notification_to_token("device", "t", "b")) is False


def test_unknown_template():
    with pytest.raises(ValueError):
        email_templates.render_template("booking-archived")


def test_reset_template_carries_link():
    mjml = email_templates.render_template(
        "reset-password", {"resetLink": "http://localhost:5173/reset-password?token=abc"}
    )
    assert "reset-password?token=abc" in mjml


def test_every_status_has_a_template():
    for status in ("pending", "approved", "canceled", "refused"):
        assert f"Booking {status}" in email_templates.render_template(f"booking-{status}")


def test_push_is_sent_off_the_event_loop(monkeypatch):
    sent = {}

    def fake_send(message, app=None):
        sent["token"] = message.token
        sent["app"] = app
        return "projects/demo/messages/1"

    monkeypatch.setattr(fcm_service, "get_firebase_app", lambda: "app")
    monkeypatch.setattr(fcm_service.messaging, "send", fake_send)

    assert asyncio.run(fcm_service.send_notification_to_token("device", "t", "b")) is True
    assert sent == {"token": "device", "app": "app"}
