import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session
from svix.webhooks import Webhook, WebhookVerificationError

from foreclosure_hub.core.config import settings
from foreclosure_hub.core.database import get_db
from foreclosure_hub.schemas.email_tracking import ResendWebhookEvent
from foreclosure_hub.services.email_tracking_service import EmailTrackingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhooks", tags=["Webhooks"])


# Resend delivery events (svix-signed)
@router.post("/resend")
async def resend_webhook(request: Request, db: Session = Depends(get_db)):
    payload = await request.body()

    if settings.RESEND_WEBHOOK_SECRET:
        try:
            body = Webhook(settings.RESEND_WEBHOOK_SECRET).verify(payload, dict(request.headers))
        except WebhookVerificationError:
            logger.warning("[Webhook] Resend signature verification failed")
            raise HTTPException(status_code=401, detail="Invalid webhook signature")
    else:
        try:
            body = json.loads(payload)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid JSON payload")

    try:
        event = ResendWebhookEvent.model_validate(body)
    except ValidationError as e:
        logger.warning(f"[Webhook] Rejected Resend payload: {e.error_count()} errors")
        raise HTTPException(status_code=400, detail="Invalid webhook payload")

    EmailTrackingService(db).record_event(event.model_dump())
    return {"received": True}
