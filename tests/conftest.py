import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["ADMIN_EMAILS"] = "admin@example.com"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["SITE_URL"] = "http://testserver"
for key in ("CRM_API_KEY", "CRM_LOCATION_ID", "RESEND_API_KEY", "RESEND_WEBHOOK_SECRET", "OWNER_EMAIL"):
    os.environ[key] = ""

import pytest
from fastapi.testclient import TestClient

from foreclosure_hub.core.database import Base, engine, SessionLocal
from foreclosure_hub.main import app
from foreclosure_hub.services.email_service import EmailService

ADMIN_EMAIL = "admin@example.com"
USER_EMAIL = "homeowner@example.com"
PASSWORD = "s3cret-pass"


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    # No context manager: startup hooks (scheduler) stay off
    return TestClient(app)


def _login(client, email, full_name):
    client.post("/auth/register", json={"email": email, "password": PASSWORD, "full_name": full_name})
    res = client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert res.status_code == 200, res.text
    # Drop the cookie so each request authenticates with its own header
    client.cookies.clear()
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return _login(client, ADMIN_EMAIL, "Site Admin")


@pytest.fixture
def user_headers(client):
    return _login(client, USER_EMAIL, "Maria Lopez")


@pytest.fixture
def sent_emails(monkeypatch):
    """Captures outbound email instead of calling the provider."""
    outbox = []

    def fake_send(self, to_email, subject, body, attachments=None):
        outbox.append({"to": to_email, "subject": subject, "body": body, "attachments": attachments or []})
        return True, f"test-message-{len(outbox)}"

    monkeypatch.setattr(EmailService, "send_email", fake_send)
    return outbox
