from typing import Optional, List

from fastapi import APIRouter, Depends, Query, HTTPException, BackgroundTasks
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from foreclosure_hub.api.auth import require_admin
from foreclosure_hub.core.database import get_db
from foreclosure_hub.models.user import User
from foreclosure_hub.schemas.lead import (
    LeadSubmitRequest,
    ContactFormRequest,
    SubmitResponse,
    LeadResponse,
    LeadStatusUpdate,
    LeadNotesUpdate,
    LeadNoteCreate,
    LeadNoteResponse,
    LeadExportRequest,
)
from foreclosure_hub.services.lead_service import LeadService
from foreclosure_hub.workers.crm.lead_sync import sync_lead

router = APIRouter(tags=["Leads"])


# =========================================================
# 1. PUBLIC FORMS
# =========================================================

@router.post("/api/leads", response_model=SubmitResponse)
def submit_lead(req: LeadSubmitRequest, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    lead = LeadService(db).create_lead(
        first_name=req.first_name,
        email=req.email,
        phone=req.phone,
        property_zip=req.property_zip,
        sms_consent=req.sms_consent,
        source=req.source,
    )
    background_tasks.add_task(sync_lead, lead.id)
    return {"success": True, "message": "Thank you! A foreclosure specialist will contact you shortly."}


@router.post("/api/leads/contact", response_model=SubmitResponse)
def submit_contact_form(req: ContactFormRequest, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    lead = LeadService(db).create_lead(
        first_name=req.name,
        email=req.email,
        phone=req.phone,
        property_zip=req.property_zip or "",
        source="contact_form",
        notes=req.message,
    )
    background_tasks.add_task(sync_lead, lead.id)
    return {"success": True, "message": "Thank you for contacting us! We'll be in touch within one business day."}


# =========================================================
# 2. ADMIN
# =========================================================

def _get_lead_or_404(service: LeadService, lead_id: int):
    lead = service.get_lead(lead_id)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


@router.get("/api/admin/leads")
def list_leads(
    status: Optional[str] = Query(None, enum=["new", "contacted", "qualified", "closed"]),
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    result = LeadService(db).list_leads(status=status, search=search, page=page, limit=limit)
    result["items"] = [LeadResponse.model_validate(l) for l in result["items"]]
    return result


@router.get("/api/admin/leads/export")
def export_leads(
    ids: Optional[List[int]] = Query(None),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return _csv_response(LeadService(db).export_csv(ids))


@router.post("/api/admin/leads/export")
def export_selected_leads(req: LeadExportRequest, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return _csv_response(LeadService(db).export_csv(req.lead_ids))


def _csv_response(content: str):
    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=leads.csv"},
    )


@router.get("/api/admin/leads/{lead_id}", response_model=LeadResponse)
def get_lead(lead_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return _get_lead_or_404(LeadService(db), lead_id)


@router.patch("/api/admin/leads/{lead_id}/status", response_model=LeadResponse)
def update_lead_status(
    lead_id: int, req: LeadStatusUpdate, db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    service = LeadService(db)
    lead = _get_lead_or_404(service, lead_id)
    return service.update_status(lead, req.status, changed_by=admin.email)


@router.patch("/api/admin/leads/{lead_id}/notes", response_model=LeadResponse)
def update_lead_notes(lead_id: int, req: LeadNotesUpdate, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    service = LeadService(db)
    lead = _get_lead_or_404(service, lead_id)
    return service.update_notes(lead, req.notes)


@router.get("/api/admin/leads/{lead_id}/notes", response_model=List[LeadNoteResponse])
def list_lead_notes(lead_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    service = LeadService(db)
    _get_lead_or_404(service, lead_id)
    return service.list_notes(lead_id)


@router.post("/api/admin/leads/{lead_id}/notes", response_model=LeadNoteResponse)
def add_lead_note(
    lead_id: int, req: LeadNoteCreate, db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    service = LeadService(db)
    lead = _get_lead_or_404(service, lead_id)
    return service.add_note(lead, req.note, req.note_type, created_by=admin.email)
