from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

# --- 1. PROVIDER WEBHOOK (Resend event payload) ---
class ResendClick(BaseModel):
    link: Optional[str] = None

class ResendBounce(BaseModel):
    type: Optional[str] = None
    reason: Optional[str] = None
    message: Optional[str] = None

class ResendEventData(BaseModel):
    email_id: str
    to: List[str] = []
    subject: Optional[str] = None
    created_at: Optional[datetime] = None
    click: Optional[ResendClick] = None
    bounce: Optional[ResendBounce] = None

class ResendWebhookEvent(BaseModel):
    type: str
    created_at: datetime
    data: ResendEventData

# --- 2. DELIVERY LOG ---
class EmailMessageResponse(BaseModel):
    id: int
    email_type: Optional[str] = None
    recipient: Optional[str] = None
    subject: Optional[str] = None
    status: Optional[str] = None
    provider_message_id: Optional[str] = None
    error_message: Optional[str] = None
    sent_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    opened_at: Optional[datetime] = None
    clicked_at: Optional[datetime] = None
    clicked_url: Optional[str] = None
    bounced_at: Optional[datetime] = None
    bounce_reason: Optional[str] = None
    last_event: Optional[str] = None
    last_event_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class EmailStatsResponse(BaseModel):
    total_emails: int
    delivered_count: int
    opened_count: int
    clicked_count: int
    bounced_count: int
    delivery_rate: float
    open_rate: float
    click_rate: float
    bounce_rate: float
