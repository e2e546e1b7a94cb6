from datetime import date, timedelta

from foreclosure_hub.models.email_message import EmailMessage


def test_calculate_returns_milestones_and_alert(client):
    notice = date.today() - timedelta(days=10)
    res = client.post("/api/timeline/calculate", json={"notice_date": notice.isoformat()})
    assert res.status_code == 200
    body = res.json()
    assert body["variant"] == "standard"
    assert len(body["milestones"]) == 5
    assert body["milestones"][0]["status"] == "past"
    assert body["days_until_sale"] == 116
    assert body["alert"]["level"] == "time_to_act"


def test_calculate_detailed_variant(client):
    res = client.post("/api/timeline/calculate", json={"notice_date": "2025-01-15", "variant": "detailed"})
    assert res.status_code == 200
    assert [m["id"] for m in res.json()["milestones"]][1] == "contact-lender"


def test_calculate_unknown_variant_is_422(client):
    res = client.post("/api/timeline/calculate", json={"notice_date": "2025-01-15", "variant": "express"})
    assert res.status_code == 422


def test_calculate_missing_date_is_422(client):
    res = client.post("/api/timeline/calculate", json={})
    assert res.status_code == 422


def test_pdf_download(client):
    res = client.post("/api/timeline/pdf", json={"notice_date": "2025-01-15"})
    assert res.status_code == 200
    assert res.headers["content-type"] == "application/pdf"
    assert "foreclosure-timeline-2025-01-15.pdf" in res.headers["content-disposition"]
    assert res.content.startswith(b"%PDF")


def test_email_timeline_attaches_pdf(client, db, sent_emails):
    res = client.post("/api/timeline/email", json={
        "notice_date": "2025-01-15",
        "email": "owner@example.com",
        "first_name": "Dana",
    })
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Timeline sent to owner@example.com"}

    assert len(sent_emails) == 1
    filename, content = sent_emails[0]["attachments"][0]
    assert filename == "foreclosure-timeline-2025-01-15.pdf"
    assert content.startswith(b"%PDF")

    logged = db.query(EmailMessage).filter(EmailMessage.email_type == "timeline_pdf").one()
    assert logged.status == "sent"


def test_email_timeline_reports_provider_failure(client, db):
    # No provider key configured
    res = client.post("/api/timeline/email", json={"notice_date": "2025-01-15", "email": "owner@example.com"})
    assert res.status_code == 200
    assert res.json()["success"] is False

    logged = db.query(EmailMessage).one()
    assert logged.status == "failed"
