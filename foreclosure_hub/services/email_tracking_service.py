import logging
from typing import Optional

from sqlalchemy.orm import Session

from foreclosure_hub.models.email_message import EmailMessage
from foreclosure_hub.services.link_service import to_naive_utc

logger = logging.getLogger(__name__)

# Provider event -> delivery status. Events missing here only touch last_event.
EVENT_STATUS = {
    "email.delivered": "delivered",
    "email.opened": "opened",
    "email.clicked": "clicked",
    "email.bounced": "bounced",
    "email.complained": "bounced",
}

# Webhooks can arrive out of order; a status never moves back down this ladder
STATUS_RANK = {"failed": 0, "sent": 1, "delivered": 2, "opened": 3, "clicked": 4}

DELIVERED_STATUSES = ("delivered", "opened", "clicked")
OPENED_STATUSES = ("opened", "clicked")


def _pct(part: int, whole: int) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


class EmailTrackingService:
    def __init__(self, db: Session):
        self.db = db

    # ---------------------------------------------------------
    # 1. WEBHOOK EVENTS
    # ---------------------------------------------------------
    def record_event(self, event: dict) -> EmailMessage:
        event_type = event["type"]
        data = event["data"]
        at = to_naive_utc(event["created_at"])

        message = self.db.query(EmailMessage).filter(
            EmailMessage.provider_message_id == data["email_id"]
        ).first()
        if not message:
            # Sent from outside this app, or the send row never committed
            message = EmailMessage(
                provider_message_id=data["email_id"],
                email_type="unknown",
                recipient=data["to"][0].lower() if data.get("to") else None,
                subject=data.get("subject"),
                status="sent",
                sent_at=to_naive_utc(data.get("created_at")) or at,
            )
            self.db.add(message)
            logger.info(f"[EmailTracking] Created tracking row for {data['email_id']}")

        if event_type == "email.delivered":
            message.delivered_at = at
        elif event_type == "email.opened":
            message.opened_at = at
        elif event_type == "email.clicked":
            message.clicked_at = at
            message.clicked_url = (data.get("click") or {}).get("link")
        elif event_type == "email.bounced":
            bounce = data.get("bounce") or {}
            reason = bounce.get("reason") or bounce.get("message")
            message.bounced_at = at
            if bounce.get("type") or reason:
                message.bounce_reason = f"{bounce.get('type') or 'Bounce'}: {reason or 'no reason given'}"
            else:
                message.bounce_reason = "Unknown bounce reason"
        elif event_type == "email.complained":
            message.bounced_at = at
            message.bounce_reason = "Spam complaint"
        elif event_type not in ("email.sent", "email.delivery_delayed"):
            logger.info(f"[EmailTracking] Unhandled event type {event_type} for {data['email_id']}")

        status = EVENT_STATUS.get(event_type)
        if status:
            self._advance(message, status)

        message.last_event = event_type
        message.last_event_at = at
        self.db.commit()
        self.db.refresh(message)
        logger.info(f"📬 [EmailTracking] {event_type} for {data['email_id']} -> {message.status}")
        return message

    @staticmethod
    def _advance(message: EmailMessage, status: str):
        if message.status == "bounced":
            return
        if status == "bounced" or STATUS_RANK.get(status, 0) > STATUS_RANK.get(message.status, 0):
            message.status = status

    # ---------------------------------------------------------
    # 2. QUERIES
    # ---------------------------------------------------------
    def _query(self, recipient: Optional[str] = None, email_type: Optional[str] = None):
        query = self.db.query(EmailMessage)
        if recipient:
            query = query.filter(EmailMessage.recipient == recipient.lower())
        if email_type:
            query = query.filter(EmailMessage.email_type == email_type)
        return query

    def list_messages(self, recipient=None, email_type=None, limit: int = 50, offset: int = 0):
        return (
            self._query(recipient, email_type)
            .order_by(EmailMessage.created_at.desc(), EmailMessage.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def get_by_provider_id(self, provider_message_id: str) -> Optional[EmailMessage]:
        return self.db.query(EmailMessage).filter(EmailMessage.provider_message_id == provider_message_id).first()

    def stats(self, recipient: Optional[str] = None) -> dict:
        # Failed sends never reached the provider, so they are left out of the rates
        statuses = [
            s for (s,) in self._query(recipient).with_entities(EmailMessage.status).all() if s != "failed"
        ]
        total = len(statuses)
        delivered = sum(1 for s in statuses if s in DELIVERED_STATUSES)
        opened = sum(1 for s in statuses if s in OPENED_STATUSES)
        clicked = sum(1 for s in statuses if s == "clicked")
        bounced = sum(1 for s in statuses if s == "bounced")
        return {
            "total_emails": total,
            "delivered_count": delivered,
            "opened_count": opened,
            "clicked_count": clicked,
            "bounced_count": bounced,
            "delivery_rate": _pct(delivered, total),
            "open_rate": _pct(opened, delivered),
            "click_rate": _pct(clicked, opened),
            "bounce_rate": _pct(bounced, total),
        }
