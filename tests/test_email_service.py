import base64

import pytest
import requests

from foreclosure_hub.core.config import settings
from foreclosure_hub.models.email_message import EmailMessage
from foreclosure_hub.services import email_service
from foreclosure_hub.services.email_service import EmailService


class FakeResponse:
    def __init__(self, status_code=200, text='{"id": "msg-1"}'):
        self.status_code = status_code
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return {"id": "msg-1"}


@pytest.fixture
def provider(monkeypatch):
    sent = []
    state = {"response": FakeResponse()}

    def fake_post(url, json=None, headers=None, timeout=None):
        sent.append({"url": url, "json": json, "headers": headers})
        if isinstance(state["response"], Exception):
            raise state["response"]
        return state["response"]

    monkeypatch.setattr(email_service.requests, "post", fake_post)
    service = EmailService()
    service.api_key = "re_test"
    return service, sent, state


def test_not_configured():
    service = EmailService()
    service.api_key = None
    assert service.send_email("a@example.com", "Hi", "<p>Hi</p>") == (False, "Email service not configured")


def test_send_with_attachment(provider):
    service, sent, _ = provider
    assert service.send_email("a@example.com", "Hi", "<p>Hi</p>", attachments=[("t.pdf", b"%PDF-1.4")]) == (True, "msg-1")

    payload = sent[0]["json"]
    assert payload["to"] == ["a@example.com"]
    assert payload["attachments"][0]["filename"] == "t.pdf"
    assert base64.b64decode(payload["attachments"][0]["content"]) == b"%PDF-1.4"
    assert sent[0]["headers"]["authorization"] == "Bearer re_test"


def test_rejected_recipient(provider):
    service, _, state = provider
    state["response"] = FakeResponse(status_code=422, text="Invalid address")
    ok, error = service.send_email("nobody@example.com", "Hi", "x")
    assert ok is False
    assert error.startswith("RECIPIENT_NOT_FOUND")


def test_connection_error(provider):
    service, _, state = provider
    state["response"] = requests.exceptions.ConnectionError("refused")
    ok, error = service.send_email("a@example.com", "Hi", "x")
    assert ok is False
    assert error.startswith("CONNECTION_ERROR")


def test_send_logged_writes_delivery_row(provider, db):
    service, _, state = provider
    service.send_logged(db, "welcome", "a@example.com", "Welcome", "x")
    state["response"] = FakeResponse(status_code=500, text="boom")
    service.send_logged(db, "welcome", "b@example.com", "Welcome", "x")

    rows = db.query(EmailMessage).order_by(EmailMessage.id).all()
    assert [r.status for r in rows] == ["sent", "failed"]
    assert rows[0].sent_at is not None
    assert rows[0].provider_message_id == "msg-1"
    assert rows[0].error_message is None
    assert rows[1].provider_message_id is None
    assert rows[1].error_message.startswith("500")


def test_notify_owner(provider, db, monkeypatch):
    service, sent, _ = provider
    assert service.notify_owner(db, "Title", "body")[0] is False
    assert sent == []

    monkeypatch.setattr(settings, "OWNER_EMAIL", "owner@example.com")
    assert service.notify_owner(db, "New Lead", "<b>Name</b>: Ann \"O'Neil\" & co")[0] is True
    assert sent[0]["json"]["to"] == ["owner@example.com"]
    assert "&lt;b&gt;Name&lt;/b&gt;: Ann &quot;O&#x27;Neil&quot; &amp; co" in sent[0]["json"]["html"]
