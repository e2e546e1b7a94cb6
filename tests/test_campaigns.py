def _campaign(client, headers, **body):
    res = client.post("/api/admin/campaigns", json={"name": "Spring Mailer", **body}, headers=headers)
    assert res.status_code == 200, res.text
    return res.json()


def _link(client, headers, **body):
    res = client.post("/api/admin/links", json={"original_url": "example.com", **body}, headers=headers)
    return res.json()


def test_create_with_default_color(client, admin_headers):
    campaign = _campaign(client, admin_headers)
    assert campaign["color"] == "#3b82f6"
    assert campaign["created_by"] == "admin@example.com"


def test_bad_color_rejected(client, admin_headers):
    res = client.post("/api/admin/campaigns", json={"name": "X", "color": "blue"}, headers=admin_headers)
    assert res.status_code == 422


def test_update_and_list(client, admin_headers):
    campaign = _campaign(client, admin_headers)
    res = client.patch(
        f"/api/admin/campaigns/{campaign['id']}", json={"name": "Summer Mailer", "color": "#ff0000"}, headers=admin_headers
    )
    assert res.json()["name"] == "Summer Mailer"
    assert [c["name"] for c in client.get("/api/admin/campaigns", headers=admin_headers).json()] == ["Summer Mailer"]


def test_update_rejects_null_name_or_color(client, admin_headers):
    campaign = _campaign(client, admin_headers)
    for body in ({"name": None}, {"color": None}):
        res = client.patch(f"/api/admin/campaigns/{campaign['id']}", json=body, headers=admin_headers)
        assert res.status_code == 422

    res = client.patch(f"/api/admin/campaigns/{campaign['id']}", json={"description": None}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["name"] == "Spring Mailer"


def test_links_and_stats(client, admin_headers):
    campaign = _campaign(client, admin_headers)
    created_inside = _link(client, admin_headers, campaign_id=campaign["id"])
    assigned = _link(client, admin_headers)
    _link(client, admin_headers)

    res = client.post(f"/api/admin/campaigns/{campaign['id']}/links", json={"link_id": assigned["id"]}, headers=admin_headers)
    assert res.json()["campaign_id"] == campaign["id"]

    client.get(f"/l/{created_inside['short_code']}", follow_redirects=False)
    client.get(f"/l/{assigned['short_code']}", follow_redirects=False)
    client.get(f"/l/{assigned['short_code']}", follow_redirects=False)
    client.patch(f"/api/admin/links/{assigned['id']}", json={"is_active": False}, headers=admin_headers)

    links = client.get(f"/api/admin/campaigns/{campaign['id']}/links", headers=admin_headers).json()
    assert {l["id"] for l in links} == {created_inside["id"], assigned["id"]}

    stats = client.get(f"/api/admin/campaigns/{campaign['id']}/stats", headers=admin_headers).json()
    assert stats == {"campaign_id": campaign["id"], "total_links": 2, "active_links": 1, "total_clicks": 3}

    detail = client.get(f"/api/admin/campaigns/{campaign['id']}", headers=admin_headers).json()
    assert detail["campaign"]["name"] == "Spring Mailer"
    assert detail["stats"]["total_clicks"] == 3

    by_campaign = client.get(
        "/api/admin/links", params={"campaign_id": campaign["id"], "include_expired": True}, headers=admin_headers
    ).json()
    assert len(by_campaign) == 2


def test_unassign_link(client, admin_headers):
    campaign = _campaign(client, admin_headers)
    other = _campaign(client, admin_headers, name="Other")
    link = _link(client, admin_headers, campaign_id=campaign["id"])

    assert client.delete(f"/api/admin/campaigns/{other['id']}/links/{link['id']}", headers=admin_headers).status_code == 404

    res = client.delete(f"/api/admin/campaigns/{campaign['id']}/links/{link['id']}", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["campaign_id"] is None


def test_delete_campaign_keeps_links(client, admin_headers):
    campaign = _campaign(client, admin_headers)
    link = _link(client, admin_headers, campaign_id=campaign["id"])

    assert client.delete(f"/api/admin/campaigns/{campaign['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/admin/campaigns/{campaign['id']}", headers=admin_headers).status_code == 404

    stats = client.get(f"/api/admin/links/{link['id']}/stats", headers=admin_headers).json()
    assert stats["link"]["campaign_id"] is None


def test_unknown_campaign_or_link(client, admin_headers):
    assert client.get("/api/admin/campaigns/5/stats", headers=admin_headers).status_code == 404
    campaign = _campaign(client, admin_headers)
    res = client.post(f"/api/admin/campaigns/{campaign['id']}/links", json={"link_id": 77}, headers=admin_headers)
    assert res.status_code == 404
