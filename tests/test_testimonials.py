import pytest


STORY = {
    "name": "Linda M.",
    "location": "Arlington, TX",
    "situation": "Job loss",
    "story": "After losing my job I fell three payments behind and got a notice of default in the mail.",
    "outcome": "Sold the house for cash and avoided the auction.",
    "permission_to_publish": "yes",
    "email": "",
}


def _submit(client, **overrides):
    assert client.post("/api/testimonials", json={**STORY, **overrides}).status_code == 200


def _pending_id(client, admin_headers):
    return client.get("/api/admin/testimonials", headers=admin_headers).json()[0]["id"]


def test_submit_is_pending_and_hidden(client, admin_headers):
    _submit(client)
    assert client.get("/api/testimonials").json() == []

    items = client.get("/api/admin/testimonials", headers=admin_headers).json()
    assert items[0]["status"] == "pending"
    assert items[0]["email"] is None


@pytest.mark.parametrize("field, value", [
    ("story", "Too short."),
    ("outcome", "Short."),
    ("permission_to_publish", "maybe"),
])
def test_submit_validation(client, field, value):
    assert client.post("/api/testimonials", json={**STORY, field: value}).status_code == 422


def test_approve_publishes(client, admin_headers):
    _submit(client)
    testimonial_id = _pending_id(client, admin_headers)

    res = client.patch(
        f"/api/admin/testimonials/{testimonial_id}/status", json={"status": "approved"}, headers=admin_headers
    )
    assert res.json()["published_at"] is not None

    public = client.get("/api/testimonials").json()
    assert [t["id"] for t in public] == [testimonial_id]
    assert "email" not in public[0]

    res = client.patch(
        f"/api/admin/testimonials/{testimonial_id}/status", json={"status": "rejected"}, headers=admin_headers
    )
    assert res.json()["published_at"] is None
    assert client.get("/api/testimonials").json() == []


def test_approved_without_permission_stays_private(client, admin_headers):
    _submit(client, permission_to_publish="no")
    testimonial_id = _pending_id(client, admin_headers)
    client.patch(f"/api/admin/testimonials/{testimonial_id}/status", json={"status": "approved"}, headers=admin_headers)
    assert client.get("/api/testimonials").json() == []


def test_edit_and_filter_by_theme(client, admin_headers):
    _submit(client)
    testimonial_id = _pending_id(client, admin_headers)

    res = client.patch(
        f"/api/admin/testimonials/{testimonial_id}",
        json={"theme": "cash_offer", "location": "Dallas, TX"},
        headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["theme"] == "cash_offer"
    assert res.json()["story"] == STORY["story"]

    client.patch(f"/api/admin/testimonials/{testimonial_id}/status", json={"status": "approved"}, headers=admin_headers)
    assert len(client.get("/api/testimonials", params={"theme": "cash_offer"}).json()) == 1
    assert client.get("/api/testimonials", params={"theme": "divorce"}).json() == []


def test_edit_rejects_unknown_theme(client, admin_headers):
    _submit(client)
    testimonial_id = _pending_id(client, admin_headers)
    res = client.patch(f"/api/admin/testimonials/{testimonial_id}", json={"theme": "lottery"}, headers=admin_headers)
    assert res.status_code == 422


def test_soft_delete(client, admin_headers):
    _submit(client)
    testimonial_id = _pending_id(client, admin_headers)
    client.patch(f"/api/admin/testimonials/{testimonial_id}/status", json={"status": "approved"}, headers=admin_headers)

    assert client.delete(f"/api/admin/testimonials/{testimonial_id}", headers=admin_headers).status_code == 200
    assert client.get("/api/testimonials").json() == []
    assert client.get("/api/admin/testimonials", headers=admin_headers).json() == []
    assert client.delete(f"/api/admin/testimonials/{testimonial_id}", headers=admin_headers).status_code == 404


@pytest.mark.parametrize("field", ["name", "story", "outcome"])
def test_edit_rejects_null_for_required_fields(client, admin_headers, field):
    _submit(client)
    testimonial_id = _pending_id(client, admin_headers)
    res = client.patch(f"/api/admin/testimonials/{testimonial_id}", json={field: None}, headers=admin_headers)
    assert res.status_code == 422
    assert client.get("/api/admin/testimonials", headers=admin_headers).json()[0][field] == STORY[field]


def test_edit_can_clear_theme(client, admin_headers):
    _submit(client)
    testimonial_id = _pending_id(client, admin_headers)
    client.patch(f"/api/admin/testimonials/{testimonial_id}", json={"theme": "divorce"}, headers=admin_headers)
    res = client.patch(f"/api/admin/testimonials/{testimonial_id}", json={"theme": None}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["theme"] is None
