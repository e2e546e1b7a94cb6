import requests
import logging
from datetime import datetime, timedelta
from typing import Optional
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from foreclosure_hub.core.config import settings

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "CRM not configured"

TRANSIENT_ERRORS = (requests.exceptions.ConnectionError, requests.exceptions.Timeout)


class CrmService:
    """
    Thin wrapper around the LeadConnector (GoHighLevel) contacts API.

    Every public method returns a (success, value_or_error) tuple and never
    raises. Connection errors and timeouts are retried three times.
    """

    def __init__(self):
        self.api_url = settings.CRM_API_URL.rstrip("/")
        self.api_key = settings.CRM_API_KEY
        self.location_id = settings.CRM_LOCATION_ID

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.location_id)

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, max=4),
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        reraise=True,
    )
    def _send(self, method: str, endpoint: str, body: dict = None, params: dict = None):
        return requests.request(
            method,
            f"{self.api_url}{endpoint}",
            json=body,
            params=params,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
                "Version": settings.CRM_API_VERSION,
            },
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )

    def _request(self, method: str, endpoint: str, body: dict = None, params: dict = None):
        if not self.configured:
            logger.warning(f"[CRM] Not configured. Skipping {method} {endpoint}")
            return False, NOT_CONFIGURED

        try:
            response = self._send(method, endpoint, body, params)
            if not response.ok:
                logger.error(f"[CRM] API error ({response.status_code}) on {endpoint}: {response.text}")
                return False, f"CRM API error: {response.status_code}"
            return True, response.json() if response.content else {}

        except requests.exceptions.ConnectionError as e:
            logger.error(f"[CRM] Connection error on {endpoint}: {e}")
            return False, f"CONNECTION_ERROR: {e}"

        except requests.exceptions.Timeout as e:
            logger.error(f"[CRM] Timeout on {endpoint}: {e}")
            return False, f"TIMEOUT_ERROR: {e}"

        except requests.exceptions.RequestException as e:
            logger.error(f"[CRM] Request failed on {endpoint}: {e}")
            return False, str(e)

        except ValueError as e:
            # Non-JSON body on a 2xx
            logger.error(f"[CRM] Unreadable response on {endpoint}: {e}")
            return False, str(e)

    # ---------------------------------------------------------
    # 1. CONTACTS
    # ---------------------------------------------------------
    def upsert_contact(
        self,
        email: str,
        first_name: str,
        last_name: str = None,
        phone: str = None,
        postal_code: str = None,
        address1: str = None,
        city: str = None,
        state: str = None,
        tags: list[str] = None,
        custom_fields: dict = None,
        source: str = "EnterActDFW Foreclosure Hub",
    ):
        """Searches by email, then updates the match or creates a new contact. Returns (ok, contact_id)."""
        ok, data = self._request("GET", "/contacts/", params={"locationId": self.location_id, "email": email})
        if not ok:
            return False, data

        contact = {
            "firstName": first_name,
            "lastName": last_name,
            "email": email,
            "phone": phone,
            "postalCode": postal_code,
            "address1": address1,
            "city": city,
            "state": state,
            "tags": tags or [],
            "customFields": custom_fields or {},
            "source": source,
            "locationId": self.location_id,
        }
        # The API rejects explicit nulls on some fields
        contact = {k: v for k, v in contact.items() if v is not None}

        existing = (data.get("contacts") or [None])[0]
        if existing:
            logger.info(f"[CRM] Updating existing contact {existing['id']}")
            ok, result = self._request("PUT", f"/contacts/{existing['id']}", body=contact)
            return (True, existing["id"]) if ok else (False, result)

        logger.info(f"[CRM] Creating new contact for {email}")
        ok, result = self._request("POST", "/contacts/", body=contact)
        if not ok:
            return False, result
        contact_id = (result.get("contact") or {}).get("id")
        if not contact_id:
            return False, "CRM response missing contact id"
        return True, contact_id

    def add_note(self, contact_id: str, body: str):
        ok, result = self._request("POST", f"/contacts/{contact_id}/notes", body={"body": body})
        return (True, (result.get("note") or {}).get("id")) if ok else (False, result)

    def add_tags(self, contact_id: str, tags: list[str]):
        ok, result = self._request("POST", f"/contacts/{contact_id}/tags", body={"tags": tags})
        return (True, None) if ok else (False, result)

    def create_task(self, contact_id: str, title: str, body: str, due_date: Optional[datetime] = None):
        due_date = due_date or datetime.utcnow() + timedelta(days=1)
        ok, result = self._request("POST", f"/contacts/{contact_id}/tasks", body={
            "title": title,
            "body": body,
            "dueDate": due_date.isoformat(),
            "completed": False,
        })
        return (True, (result.get("task") or {}).get("id")) if ok else (False, result)

    # ---------------------------------------------------------
    # 2. WEBSITE EVENTS
    # ---------------------------------------------------------
    def sync_lead(self, first_name: str, email: str, phone: str, property_zip: str, source: str = "Website Form"):
        """Main entry for form submissions: contact + intro note + follow-up task."""
        ok, contact_id = self.upsert_contact(
            email=email,
            first_name=first_name,
            phone=phone,
            postal_code=property_zip,
            tags=["Foreclosure Lead", "Website Lead", source],
            custom_fields={
                "property_zip": property_zip,
                "lead_source": source,
                "foreclosure_stage": "Initial Contact",
            },
        )
        if not ok:
            return False, contact_id

        self.add_note(
            contact_id,
            f"New foreclosure lead submitted via website.\n\nProperty ZIP: {property_zip}\nPhone: {phone}\nSource: {source}",
        )
        self.create_task(
            contact_id,
            title="Follow up with foreclosure lead",
            body=f"Contact {first_name} to discuss their foreclosure situation and options.",
        )
        logger.info(f"[CRM] Synced lead {email} -> {contact_id}")
        return True, contact_id

    def track_timeline_saved(self, email: str, first_name: str, notice_date, milestones: list[dict]):
        ok, contact_id = self.upsert_contact(
            email=email,
            first_name=first_name,
            tags=["Timeline Saved", "High Engagement"],
            custom_fields={"notice_of_default_date": str(notice_date)},
        )
        if not ok:
            return False, contact_id

        lines = [f"- {m['title']}: {m['date']} ({m['status']})" for m in milestones]
        self.add_note(contact_id, f"Saved foreclosure timeline (Notice of Default: {notice_date}).\n\n" + "\n".join(lines))
        return True, contact_id

    def track_timeline_progress(self, email: str, action_completed: str, milestone_title: str, completion_percentage: int):
        ok, contact_id = self.upsert_contact(
            email=email,
            first_name=email.split("@")[0],
            custom_fields={"timeline_completion": str(completion_percentage)},
        )
        if not ok:
            return False, contact_id

        return self.add_note(
            contact_id,
            f"Completed timeline action: {action_completed}\nMilestone: {milestone_title}\n"
            f"Overall progress: {completion_percentage}%",
        )
