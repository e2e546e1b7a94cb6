from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from foreclosure_hub.api.auth import get_current_user, require_admin
from foreclosure_hub.core.database import get_db
from foreclosure_hub.models.user import User
from foreclosure_hub.schemas.email_tracking import EmailMessageResponse, EmailStatsResponse
from foreclosure_hub.services.email_tracking_service import EmailTrackingService

router = APIRouter(tags=["Email Tracking"])


# 1. Signed-in user: emails sent to their own address
@router.get("/api/my-emails", response_model=List[EmailMessageResponse])
def my_emails(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return EmailTrackingService(db).list_messages(recipient=user.email)


@router.get("/api/my-emails/stats", response_model=EmailStatsResponse)
def my_email_stats(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return EmailTrackingService(db).stats(recipient=user.email)


# 2. Admin: every logged email
@router.get("/api/admin/emails", response_model=List[EmailMessageResponse])
def list_emails(
    email_type: Optional[str] = None,
    recipient: Optional[str] = None,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return EmailTrackingService(db).list_messages(recipient, email_type, limit, offset)


@router.get("/api/admin/emails/stats", response_model=EmailStatsResponse)
def email_stats(db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return EmailTrackingService(db).stats()


@router.get("/api/admin/emails/{message_id}", response_model=EmailMessageResponse)
def get_email(message_id: str, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    message = EmailTrackingService(db).get_by_provider_id(message_id)
    if not message:
        raise HTTPException(status_code=404, detail="Email not found")
    return message
