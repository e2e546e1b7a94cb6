from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP
from foreclosure_hub.core.database import Base

class EmailMessage(Base):
    """Delivery log for every outbound email (welcome, guide, timeline PDF, owner alerts)."""
    __tablename__ = "email_messages"

    id = Column(Integer, primary_key=True, index=True)

    email_type = Column(String(50)) # 'welcome', 'guide_download', 'timeline_pdf', 'comparison_report', 'owner_notification', 'unknown'
    recipient = Column(String(320), index=True)
    subject = Column(Text)

    # 'sent', 'failed', then from provider webhooks: 'delivered', 'opened', 'clicked', 'bounced'
    status = Column(String(20))
    provider = Column(String(30), default="resend")
    provider_message_id = Column(String(100), unique=True, nullable=True, index=True)
    error_message = Column(Text, nullable=True)

    # DELIVERY TRACKING
    delivered_at = Column(TIMESTAMP, nullable=True)
    opened_at = Column(TIMESTAMP, nullable=True)
    clicked_at = Column(TIMESTAMP, nullable=True)
    clicked_url = Column(Text, nullable=True)
    bounced_at = Column(TIMESTAMP, nullable=True)
    bounce_reason = Column(Text, nullable=True)
    last_event = Column(String(50), nullable=True)
    last_event_at = Column(TIMESTAMP, nullable=True)

    sent_at = Column(TIMESTAMP, nullable=True)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
