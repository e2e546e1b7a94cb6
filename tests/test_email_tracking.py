import base64
import json
from datetime import datetime, timezone

import pytest
from svix.webhooks import Webhook

from foreclosure_hub.core.config import settings
from foreclosure_hub.models.email_message import EmailMessage
from foreclosure_hub.services.email_service import EmailService

WEBHOOK_URL = "/api/webhooks/resend"
USER_EMAIL = "homeowner@example.com"


def _event(event_type, email_id="test-message-1", at="2026-01-05T10:00:00.000Z", **data):
    return {
        "type": event_type,
        "created_at": at,
        "data": {
            "email_id": email_id,
            "to": [USER_EMAIL],
            "subject": "Welcome to EnterActDFW",
            "created_at": "2026-01-05T09:59:00.000Z",
            **data,
        },
    }


def _send(db, to=USER_EMAIL, email_type="welcome"):
    ok, message_id = EmailService().send_logged(db, email_type, to, "Welcome to EnterActDFW", "<p>Hi</p>")
    assert ok
    return message_id


def _message(db, message_id):
    db.expire_all()
    return db.query(EmailMessage).filter(EmailMessage.provider_message_id == message_id).one()


def test_delivered_event_updates_logged_email(client, db, sent_emails):
    message_id = _send(db)
    res = client.post(WEBHOOK_URL, json=_event("email.delivered", message_id))
    assert res.status_code == 200
    assert res.json() == {"received": True}

    message = _message(db, message_id)
    assert message.email_type == "welcome"
    assert message.status == "delivered"
    assert message.delivered_at == datetime(2026, 1, 5, 10, 0)
    assert message.last_event == "email.delivered"


def test_click_records_link(client, db, sent_emails):
    message_id = _send(db)
    client.post(WEBHOOK_URL, json=_event("email.clicked", message_id, click={"link": "https://enteractdfw.com/guide"}))

    message = _message(db, message_id)
    assert message.status == "clicked"
    assert message.clicked_url == "https://enteractdfw.com/guide"


def test_late_event_does_not_downgrade_status(client, db, sent_emails):
    message_id = _send(db)
    client.post(WEBHOOK_URL, json=_event("email.opened", message_id, at="2026-01-05T10:05:00Z"))
    client.post(WEBHOOK_URL, json=_event("email.delivered", message_id, at="2026-01-05T10:01:00Z"))

    message = _message(db, message_id)
    assert message.status == "opened"
    assert message.delivered_at == datetime(2026, 1, 5, 10, 1)
    assert message.opened_at == datetime(2026, 1, 5, 10, 5)
    assert message.last_event == "email.delivered"


def test_bounce_is_final(client, db, sent_emails):
    message_id = _send(db)
    bounce = {"type": "Permanent", "message": "Mailbox does not exist"}
    client.post(WEBHOOK_URL, json=_event("email.bounced", message_id, bounce=bounce))
    client.post(WEBHOOK_URL, json=_event("email.clicked", message_id))

    message = _message(db, message_id)
    assert message.status == "bounced"
    assert message.bounce_reason == "Permanent: Mailbox does not exist"
    assert message.bounced_at is not None


def test_bounce_without_details(client, db, sent_emails):
    message_id = _send(db)
    client.post(WEBHOOK_URL, json=_event("email.bounced", message_id))
    assert _message(db, message_id).bounce_reason == "Unknown bounce reason"


def test_spam_complaint_counts_as_bounce(client, db, sent_emails):
    message_id = _send(db)
    client.post(WEBHOOK_URL, json=_event("email.complained", message_id))

    message = _message(db, message_id)
    assert message.status == "bounced"
    assert message.bounce_reason == "Spam complaint"


def test_delay_only_touches_last_event(client, db, sent_emails):
    message_id = _send(db)
    client.post(WEBHOOK_URL, json=_event("email.delivery_delayed", message_id))

    message = _message(db, message_id)
    assert message.status == "sent"
    assert message.last_event == "email.delivery_delayed"


def test_unknown_message_gets_a_tracking_row(client, db):
    event = _event("email.delivered", "outside-app-1")
    event["data"]["to"] = ["Someone@Example.com"]
    assert client.post(WEBHOOK_URL, json=event).status_code == 200

    message = _message(db, "outside-app-1")
    assert message.email_type == "unknown"
    assert message.recipient == "someone@example.com"
    assert message.status == "delivered"
    assert message.sent_at == datetime(2026, 1, 5, 9, 59)


@pytest.mark.parametrize("payload", [
    b"not json",
    json.dumps({"type": "email.delivered"}).encode(),
    json.dumps({"type": "email.delivered", "created_at": "2026-01-05T10:00:00Z", "data": {}}).encode(),
])
def test_malformed_payload_is_rejected(client, db, payload):
    res = client.post(WEBHOOK_URL, content=payload, headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert db.query(EmailMessage).count() == 0


@pytest.fixture
def webhook_secret(monkeypatch):
    secret = "whsec_" + base64.b64encode(b"resend-webhook-test-secret").decode()
    monkeypatch.setattr(settings, "RESEND_WEBHOOK_SECRET", secret)
    return secret


def _signed_headers(secret, body, msg_id="msg_test_1"):
    now = datetime.now(timezone.utc)
    return {
        "Content-Type": "application/json",
        "svix-id": msg_id,
        "svix-timestamp": str(int(now.timestamp())),
        "svix-signature": Webhook(secret).sign(msg_id, now, body),
    }


def test_signed_webhook_is_accepted(client, db, sent_emails, webhook_secret):
    message_id = _send(db)
    body = json.dumps(_event("email.delivered", message_id))
    res = client.post(WEBHOOK_URL, content=body, headers=_signed_headers(webhook_secret, body))
    assert res.status_code == 200
    assert _message(db, message_id).status == "delivered"


def test_bad_signature_is_rejected(client, db, sent_emails, webhook_secret):
    message_id = _send(db)
    body = json.dumps(_event("email.delivered", message_id))
    headers = _signed_headers(webhook_secret, body)

    tampered = body.replace("email.delivered", "email.clicked")
    assert client.post(WEBHOOK_URL, content=tampered, headers=headers).status_code == 401

    unsigned = client.post(WEBHOOK_URL, content=body, headers={"Content-Type": "application/json"})
    assert unsigned.status_code == 401
    assert _message(db, message_id).status == "sent"


def _tracked_mailbox(client, db):
    clicked = _send(db)
    delivered = _send(db)
    bounced = _send(db)
    _send(db, to="someone.else@example.com")
    for event in ("email.delivered", "email.opened", "email.clicked"):
        client.post(WEBHOOK_URL, json=_event(event, clicked))
    client.post(WEBHOOK_URL, json=_event("email.delivered", delivered))
    client.post(WEBHOOK_URL, json=_event("email.bounced", bounced))
    # Never reached the provider
    db.add(EmailMessage(email_type="welcome", recipient=USER_EMAIL, status="failed", error_message="timeout"))
    db.commit()


def test_my_emails(client, db, sent_emails, user_headers):
    _tracked_mailbox(client, db)

    res = client.get("/api/my-emails", headers=user_headers)
    assert res.status_code == 200
    emails = res.json()
    assert len(emails) == 4
    assert {e["recipient"] for e in emails} == {USER_EMAIL}

    stats = client.get("/api/my-emails/stats", headers=user_headers).json()
    assert stats == {
        "total_emails": 3,
        "delivered_count": 2,
        "opened_count": 1,
        "clicked_count": 1,
        "bounced_count": 1,
        "delivery_rate": 66.67,
        "open_rate": 50.0,
        "click_rate": 100.0,
        "bounce_rate": 33.33,
    }


def test_stats_with_no_email(client, user_headers):
    stats = client.get("/api/my-emails/stats", headers=user_headers).json()
    assert stats["total_emails"] == 0
    assert stats["delivery_rate"] == 0.0
    assert stats["open_rate"] == 0.0


def test_my_emails_requires_login(client):
    assert client.get("/api/my-emails").status_code == 401


def test_admin_email_log(client, db, sent_emails, admin_headers, user_headers):
    _tracked_mailbox(client, db)

    assert client.get("/api/admin/emails", headers=user_headers).status_code == 403

    emails = client.get("/api/admin/emails", headers=admin_headers).json()
    assert len(emails) == 5
    page = client.get("/api/admin/emails?limit=2&offset=1", headers=admin_headers).json()
    assert [e["id"] for e in page] == [e["id"] for e in emails[1:3]]

    stats = client.get("/api/admin/emails/stats", headers=admin_headers).json()
    assert stats["total_emails"] == 4
    assert stats["bounced_count"] == 1

    detail = client.get("/api/admin/emails/test-message-1", headers=admin_headers)
    assert detail.status_code == 200
    assert detail.json()["status"] == "clicked"
    assert client.get("/api/admin/emails/missing", headers=admin_headers).status_code == 404
