from datetime import datetime, timedelta

from foreclosure_hub.models.link import ShortenedLink
from foreclosure_hub.scheduler import scheduler, start_scheduler, stop_scheduler
from foreclosure_hub.services.link_service import LinkService
from foreclosure_hub.workers.links.expiration_worker import check_link_expiration


NOW = datetime(2030, 6, 1, 2, 0)


class RecordingEmail:
    def __init__(self, ok=True):
        self.ok = ok
        self.notices = []

    def notify_owner(self, db, title, content):
        self.notices.append((title, content))
        return (True, None) if self.ok else (False, "Owner email not configured")


def _seed(db):
    service = LinkService(db)
    expired = service.create_link({"original_url": "example.com", "title": "Old promo", "expires_at": NOW - timedelta(hours=1)})
    soon = service.create_link({"original_url": "example.com", "expires_at": NOW + timedelta(days=2, hours=1)})
    service.create_link({"original_url": "example.com", "expires_at": NOW + timedelta(days=60)})
    service.create_link({"original_url": "example.com"})
    return expired, soon


def test_deactivates_and_warns(db):
    expired, soon = _seed(db)
    email = RecordingEmail()

    report = check_link_expiration(db, now=NOW, email_service=email)

    assert report["deactivated"] == 1
    assert report["expiring"] == 1
    assert report["errors"] == []

    db.refresh(expired)
    assert expired.is_active is False
    assert db.query(ShortenedLink).filter(ShortenedLink.is_active.is_(True)).count() == 3

    titles = [t for t, _ in email.notices]
    assert titles == ["1 Shortened Link Expired", "1 Shortened Link Expiring Soon"]
    assert "Old promo" in email.notices[0][1]
    assert "expires in 3 days" in email.notices[1][1]


def test_second_run_is_quiet(db):
    _seed(db)
    check_link_expiration(db, now=NOW, email_service=RecordingEmail())
    report = check_link_expiration(db, now=NOW, email_service=RecordingEmail())
    assert report["deactivated"] == 0


def test_notification_failures_are_reported(db):
    _seed(db)
    report = check_link_expiration(db, now=NOW, email_service=RecordingEmail(ok=False))
    assert report["deactivated"] == 1
    assert len(report["errors"]) == 2


def test_nothing_to_do(db):
    email = RecordingEmail()
    report = check_link_expiration(db, now=NOW, email_service=email)
    assert report["deactivated"] == 0
    assert report["expiring"] == 0
    assert email.notices == []


def test_manual_trigger_endpoint(client, admin_headers):
    past = (datetime.utcnow() - timedelta(hours=1)).isoformat()
    client.post("/api/admin/links", json={"original_url": "example.com", "expires_at": past}, headers=admin_headers)

    res = client.post("/api/admin/jobs/link-expiration", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["deactivated"] == 1
    # OWNER_EMAIL is unset in tests
    assert res.json()["errors"]


def test_scheduler_registers_daily_job():
    start_scheduler()
    try:
        job = scheduler.get_job("link_expiration")
        assert job is not None
        assert str(job.trigger.fields[5]) == "2"
    finally:
        stop_scheduler()
