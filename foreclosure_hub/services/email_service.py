import base64
import requests
import logging
from datetime import datetime
from html import escape

from foreclosure_hub.core.config import settings
from foreclosure_hub.models.email_message import EmailMessage

logger = logging.getLogger(__name__)

# Error messages that mean the recipient address doesn't exist
RECIPIENT_NOT_FOUND_ERRORS = [
    "550",
    "user unknown",
    "does not exist",
    "no such user",
    "invalid address",
    "address not found",
    "recipient rejected",
    "mailbox unavailable",
]


class EmailService:
    def __init__(self):
        self.api_url = settings.RESEND_API_URL
        self.api_key = settings.RESEND_API_KEY
        self.from_address = settings.EMAIL_FROM_ADDRESS

    def send_email(self, to_email: str, subject: str, body: str, attachments: list[tuple[str, bytes]] = None):
        """
        Sends one HTML email. `attachments` is a list of (filename, raw bytes).
        Returns (success, message_id) on success and (False, error_message) otherwise.
        """
        if not self.api_key:
            logger.warning(f"[Email] API key not configured. Not sending '{subject}' to {to_email}")
            return False, "Email service not configured"

        payload = {
            "from": self.from_address,
            "to": [to_email],
            "subject": subject,
            "html": body,
        }
        if attachments:
            payload["attachments"] = [
                {"filename": name, "content": base64.b64encode(content).decode("ascii")}
                for name, content in attachments
            ]

        headers = {
            "accept": "application/json",
            "content-type": "application/json",
            "authorization": f"Bearer {self.api_key}",
        }

        try:
            response = requests.post(self.api_url, json=payload, headers=headers, timeout=settings.HTTP_TIMEOUT_SECONDS)

            if response.ok:
                message_id = None
                try:
                    message_id = response.json().get("id")
                except ValueError:
                    pass
                logger.info(f"✅ Email queued for {to_email} [id={message_id}]")
                return True, message_id

            error_message = response.text.lower()
            if any(err in error_message for err in RECIPIENT_NOT_FOUND_ERRORS) or response.status_code == 422:
                logger.warning(f"📭 Recipient not found / rejected: {to_email}: {response.text}")
                return False, f"RECIPIENT_NOT_FOUND: {response.text}"

            logger.error(f"❌ Email provider error for {to_email}: {response.status_code} {response.text}")
            return False, f"{response.status_code}: {response.text}"

        except requests.exceptions.ConnectionError as e:
            logger.error(f"🔌 Connection error while sending to {to_email}: {e}")
            return False, f"CONNECTION_ERROR: {e}"

        except requests.exceptions.Timeout as e:
            logger.error(f"⏱️ Timeout while sending to {to_email}: {e}")
            return False, f"TIMEOUT_ERROR: {e}"

        except requests.exceptions.RequestException as e:
            logger.error(f"❌ Failed to send email to {to_email}: {e}")
            return False, str(e)

    def send_logged(self, db, email_type: str, to_email: str, subject: str, body: str, attachments=None):
        """
        send_email plus a row in the delivery log. The provider's message id is
        kept so delivery webhooks can find the row later.
        """
        success, result = self.send_email(to_email, subject, body, attachments)
        db.add(EmailMessage(
            email_type=email_type,
            recipient=to_email.lower(),
            subject=subject,
            status="sent" if success else "failed",
            provider_message_id=result if success else None,
            error_message=None if success else result,
            sent_at=datetime.utcnow() if success else None,
        ))
        db.commit()
        return success, result

    def notify_owner(self, db, title: str, content: str):
        if not settings.OWNER_EMAIL:
            logger.info(f"[Email] OWNER_EMAIL not set. Owner notification skipped: {title}")
            return False, "Owner email not configured"
        html = "<pre style=\"font-family: Arial, sans-serif\">" + escape(content) + "</pre>"
        return self.send_logged(db, "owner_notification", settings.OWNER_EMAIL, title, html)

