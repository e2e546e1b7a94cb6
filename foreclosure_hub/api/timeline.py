from datetime import date

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from foreclosure_hub.core.config import settings
from foreclosure_hub.core.database import get_db
from foreclosure_hub.schemas.timeline import TimelineRequest, TimelineEmailRequest, TimelineResponse
from foreclosure_hub.schemas.lead import SubmitResponse
from foreclosure_hub.services import timeline_service, template_service
from foreclosure_hub.services.email_service import EmailService
from foreclosure_hub.services.pdf_service import PdfService
from foreclosure_hub.workers.crm.lead_sync import sync_timeline_requester

router = APIRouter(prefix="/api/timeline", tags=["Timeline Calculator"])


def _calculate(notice_date: date, variant: str):
    milestones = timeline_service.generate_timeline(notice_date, variant)
    days_left = timeline_service.days_until_sale(milestones)
    return milestones, days_left


# 1. Calculate
@router.post("/calculate", response_model=TimelineResponse)
def calculate(req: TimelineRequest):
    milestones, days_left = _calculate(req.notice_date, req.variant)
    return {
        "notice_date": req.notice_date,
        "variant": req.variant,
        "milestones": milestones,
        "days_until_sale": days_left,
        "alert": timeline_service.urgency_alert(days_left, settings.CONTACT_PHONE),
    }


# 2. PDF download
@router.post("/pdf")
def download_pdf(req: TimelineRequest):
    milestones, days_left = _calculate(req.notice_date, req.variant)
    pdf = PdfService().render_timeline(req.notice_date, milestones, days_left)
    filename = f"foreclosure-timeline-{req.notice_date.isoformat()}.pdf"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# 3. Email the PDF
@router.post("/email", response_model=SubmitResponse)
def email_timeline(req: TimelineEmailRequest, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    milestones, days_left = _calculate(req.notice_date, req.variant)
    pdf = PdfService().render_timeline(req.notice_date, milestones, days_left)

    first_name = req.first_name or req.email.split("@")[0]
    subject, html = template_service.timeline_email(first_name, req.notice_date)

    ok, _ = EmailService().send_logged(
        db, "timeline_pdf", req.email, subject, html,
        attachments=[(f"foreclosure-timeline-{req.notice_date.isoformat()}.pdf", pdf)],
    )

    background_tasks.add_task(sync_timeline_requester, req.email, first_name, req.notice_date)

    if not ok:
        return {"success": False, "message": "Failed to send timeline email. Please try again."}
    return {"success": True, "message": f"Timeline sent to {req.email}"}
