import pytest

from foreclosure_hub.models.email_message import EmailMessage
from foreclosure_hub.models.resource_download import ResourceDownload
from foreclosure_hub.services import template_service


def test_download_records_request_and_emails_guide(client, db, sent_emails):
    res = client.post("/api/resources/download", json={
        "name": "Carlos Ruiz",
        "email": "Carlos@Example.com",
        "resource_name": "Texas Foreclosure Survival Guide",
        "resource_file": "/guides/texas-foreclosure-survival-guide.pdf",
    })
    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "file_url": "http://testserver/guides/texas-foreclosure-survival-guide.pdf",
    }

    download = db.query(ResourceDownload).one()
    assert download.email == "carlos@example.com"
    assert download.user_agent

    assert sent_emails[0]["to"] == "carlos@example.com"
    assert "texas-foreclosure-survival-guide.pdf" in sent_emails[0]["body"]
    assert db.query(EmailMessage).filter(EmailMessage.email_type == "guide_download").count() == 1


@pytest.mark.parametrize("resource_file", [
    "https://cdn.example.com/checklist.pdf",
    "//evil.example/guide.pdf",
    '/guides/x.pdf" onmouseover="alert(1)',
    "/guides/../admin",
    "guides/checklist.pdf",
])
def test_only_site_paths_are_accepted(client, db, sent_emails, resource_file):
    res = client.post("/api/resources/download", json={
        "name": "Carlos",
        "email": "carlos@example.com",
        "resource_name": "Checklist",
        "resource_file": resource_file,
    })
    assert res.status_code == 422
    assert db.query(ResourceDownload).count() == 0
    assert sent_emails == []


def test_guide_email_escapes_link_and_name():
    subject, html = template_service.guide_download_email(
        "Ann <b>", "Checklist", 'http://testserver/a.pdf" onclick="x'
    )
    assert 'href="http://testserver/a.pdf&quot; onclick=&quot;x"' in html
    assert "Ann &lt;b&gt;" in html
