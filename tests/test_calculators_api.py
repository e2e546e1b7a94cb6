from foreclosure_hub.models.email_message import EmailMessage
from foreclosure_hub.models.property_value_lead import PropertyValueLead

PROPERTY = {
    "zip_code": "75201",
    "property_type": "single_family",
    "square_feet": 2000,
    "bedrooms": 3,
    "bathrooms": 2,
    "condition": "good",
}
REPORT = {**PROPERTY, "property_address": "123 Main St, Dallas, TX", "mortgage_balance": 300000}


def test_valuation(client):
    res = client.post("/api/calculators/valuation", json=PROPERTY)
    assert res.status_code == 200
    body = res.json()
    assert body["estimated_value"] == 700000
    assert body["confidence"] == "high"


def test_valuation_validates_input(client):
    assert client.post("/api/calculators/valuation", json={**PROPERTY, "zip_code": "7520"}).status_code == 422
    assert client.post("/api/calculators/valuation", json={**PROPERTY, "condition": "ruined"}).status_code == 422
    assert client.post("/api/calculators/valuation", json={**PROPERTY, "square_feet": 50}).status_code == 422


def test_valuation_lead_capture(client, db):
    res = client.post(
        "/api/calculators/valuation/leads",
        json={"name": "Maria Lopez", "email": "Maria@Example.com"},
        headers={"User-Agent": "pytest-browser"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True

    lead = db.query(PropertyValueLead).one()
    assert lead.id == body["lead_id"]
    assert lead.email == "maria@example.com"
    assert lead.user_agent == "pytest-browser"
    assert lead.access_granted_at is not None


def test_valuation_lead_requires_valid_email(client, db):
    res = client.post("/api/calculators/valuation/leads", json={"name": "Maria", "email": "nope"})
    assert res.status_code == 422
    assert db.query(PropertyValueLead).count() == 0


def test_sale_options(client):
    res = client.post("/api/calculators/sale-options", json={"property_value": 400000, "mortgage_balance": 360000})
    assert res.status_code == 200
    body = res.json()
    assert body["recommended"] == "cash_offer"
    assert len(body["options"]) == 3


def test_sale_options_requires_positive_value(client):
    res = client.post("/api/calculators/sale-options", json={"property_value": 0, "mortgage_balance": 1000})
    assert res.status_code == 422


def test_report_combines_estimate_and_options(client):
    res = client.post("/api/calculators/sale-options/report", json=REPORT)
    assert res.status_code == 200
    body = res.json()
    assert body["valuation"]["estimated_value"] == 700000
    assert body["comparison"]["property_value"] == 700000
    assert body["comparison"]["equity"] == 400000
    assert body["comparison"]["recommended"] == "traditional"


def test_report_without_estimate_is_rejected(client):
    tiny = {**REPORT, "zip_code": "75237", "square_feet": 100, "bedrooms": 0, "bathrooms": 0, "condition": "poor"}
    res = client.post("/api/calculators/sale-options/report", json=tiny)
    assert res.status_code == 422


def test_pdf_download(client):
    res = client.post("/api/calculators/sale-options/pdf", json=REPORT)
    assert res.status_code == 200
    assert res.headers["content-type"] == "application/pdf"
    assert "sale-options-comparison.pdf" in res.headers["content-disposition"]
    assert res.content.startswith(b"%PDF")


def test_email_report(client, db, sent_emails):
    res = client.post(
        "/api/calculators/sale-options/email",
        json={**REPORT, "email": "Maria@Example.com", "first_name": "Maria"},
    )
    assert res.status_code == 200
    assert res.json()["success"] is True

    assert len(sent_emails) == 1
    sent = sent_emails[0]
    assert sent["to"] == "Maria@Example.com"
    assert "Maria" in sent["body"]
    filename, pdf = sent["attachments"][0]
    assert filename == "sale-options-comparison.pdf"
    assert pdf.startswith(b"%PDF")

    message = db.query(EmailMessage).filter(EmailMessage.email_type == "comparison_report").one()
    assert message.recipient == "maria@example.com"
    assert message.status == "sent"
    assert message.provider_message_id == "test-message-1"


def test_email_report_without_provider(client, db):
    res = client.post("/api/calculators/sale-options/email", json={**REPORT, "email": "maria@example.com"})
    assert res.status_code == 200
    assert res.json()["success"] is False
    assert db.query(EmailMessage).filter(EmailMessage.status == "failed").count() == 1
