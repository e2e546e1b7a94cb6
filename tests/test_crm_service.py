import pytest
import requests

from foreclosure_hub.services import crm_service
from foreclosure_hub.services.crm_service import CrmService


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self.payload = payload if payload is not None else {}
        self.content = b"{}"
        self.text = str(self.payload)

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self.payload


class FakeApi:
    """Replays queued responses and records each call."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def __call__(self, method, url, json=None, params=None, headers=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "params": params, "headers": headers})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def crm(monkeypatch):
    monkeypatch.setattr(CrmService._send.retry, "sleep", lambda seconds: None)
    service = CrmService()
    service.api_key = "key"
    service.location_id = "loc-1"
    return service


def _install(monkeypatch, api):
    monkeypatch.setattr(crm_service.requests, "request", api)
    return api


def test_not_configured_makes_no_calls(monkeypatch):
    api = _install(monkeypatch, FakeApi())
    service = CrmService()
    service.api_key = None
    assert service.upsert_contact(email="a@example.com", first_name="A") == (False, crm_service.NOT_CONFIGURED)
    assert api.calls == []


def test_upsert_creates_new_contact(crm, monkeypatch):
    api = _install(monkeypatch, FakeApi(
        FakeResponse(payload={"contacts": []}),
        FakeResponse(payload={"contact": {"id": "c-1"}}),
    ))
    ok, contact_id = crm.upsert_contact(email="a@example.com", first_name="Ann", tags=["Website Lead"])
    assert (ok, contact_id) == (True, "c-1")

    search, create = api.calls
    assert search["method"] == "GET"
    assert search["params"] == {"locationId": "loc-1", "email": "a@example.com"}
    assert create["method"] == "POST"
    assert create["url"].endswith("/contacts/")
    assert create["json"]["tags"] == ["Website Lead"]
    assert "phone" not in create["json"]
    assert create["headers"]["Authorization"] == "Bearer key"


def test_upsert_updates_existing_contact(crm, monkeypatch):
    api = _install(monkeypatch, FakeApi(
        FakeResponse(payload={"contacts": [{"id": "c-7"}]}),
        FakeResponse(payload={"contact": {"id": "c-7"}}),
    ))
    assert crm.upsert_contact(email="a@example.com", first_name="Ann") == (True, "c-7")
    assert api.calls[1]["method"] == "PUT"
    assert api.calls[1]["url"].endswith("/contacts/c-7")


def test_api_error_is_returned_not_raised(crm, monkeypatch):
    _install(monkeypatch, FakeApi(FakeResponse(status_code=401, payload={"message": "bad key"})))
    ok, error = crm.upsert_contact(email="a@example.com", first_name="Ann")
    assert ok is False
    assert "401" in error


def test_transient_errors_are_retried(crm, monkeypatch):
    api = _install(monkeypatch, FakeApi(
        requests.exceptions.ConnectionError("reset"),
        requests.exceptions.Timeout("slow"),
        FakeResponse(payload={"contacts": [{"id": "c-2"}]}),
        FakeResponse(),
    ))
    assert crm.upsert_contact(email="a@example.com", first_name="Ann") == (True, "c-2")
    assert len(api.calls) == 4


def test_retries_give_up_after_three_attempts(crm, monkeypatch):
    api = _install(monkeypatch, FakeApi(*[requests.exceptions.ConnectionError("down")] * 3))
    ok, error = crm.upsert_contact(email="a@example.com", first_name="Ann")
    assert ok is False
    assert error.startswith("CONNECTION_ERROR")
    assert len(api.calls) == 3


def test_sync_lead_adds_note_and_task(crm, monkeypatch):
    api = _install(monkeypatch, FakeApi(
        FakeResponse(payload={"contacts": []}),
        FakeResponse(payload={"contact": {"id": "c-3"}}),
        FakeResponse(payload={"note": {"id": "n-1"}}),
        FakeResponse(payload={"task": {"id": "t-1"}}),
    ))
    assert crm.sync_lead("Ann", "a@example.com", "2145550101", "75201", source="landing_page") == (True, "c-3")

    create = api.calls[1]["json"]
    assert "landing_page" in create["tags"]
    assert create["postalCode"] == "75201"
    assert api.calls[2]["url"].endswith("/contacts/c-3/notes")
    assert api.calls[3]["url"].endswith("/contacts/c-3/tasks")
    assert api.calls[3]["json"]["completed"] is False
