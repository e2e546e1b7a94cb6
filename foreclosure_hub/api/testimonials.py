from typing import Optional, List

from fastapi import APIRouter, Depends, Query, HTTPException, BackgroundTasks
from sqlalchemy.orm import Session

from foreclosure_hub.api.auth import require_admin
from foreclosure_hub.core.database import get_db
from foreclosure_hub.models.user import User
from foreclosure_hub.schemas.testimonial import (
    TestimonialSubmitRequest,
    TestimonialUpdate,
    TestimonialStatusUpdate,
    TestimonialResponse,
    PublicTestimonial,
)
from foreclosure_hub.schemas.lead import SubmitResponse
from foreclosure_hub.services.testimonial_service import TestimonialService
from foreclosure_hub.workers.crm.lead_sync import notify_testimonial

router = APIRouter(tags=["Testimonials"])


# --- PUBLIC ---

@router.post("/api/testimonials", response_model=SubmitResponse)
def submit_testimonial(req: TestimonialSubmitRequest, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    testimonial = TestimonialService(db).submit(req.model_dump())
    background_tasks.add_task(notify_testimonial, testimonial.id)
    return {"success": True, "message": "Thank you for sharing your story! We'll review it shortly."}


@router.get("/api/testimonials", response_model=List[PublicTestimonial])
def list_published_testimonials(theme: Optional[str] = None, db: Session = Depends(get_db)):
    return TestimonialService(db).list_published(theme)


# --- ADMIN ---

def _get_or_404(service: TestimonialService, testimonial_id: int):
    testimonial = service.get(testimonial_id)
    if not testimonial:
        raise HTTPException(status_code=404, detail="Testimonial not found")
    return testimonial


@router.get("/api/admin/testimonials", response_model=List[TestimonialResponse])
def list_testimonials(
    status: Optional[str] = Query(None, enum=["pending", "approved", "rejected"]),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return TestimonialService(db).list_all(status)


@router.patch("/api/admin/testimonials/{testimonial_id}/status", response_model=TestimonialResponse)
def update_testimonial_status(
    testimonial_id: int, req: TestimonialStatusUpdate, db: Session = Depends(get_db), _: User = Depends(require_admin)
):
    service = TestimonialService(db)
    return service.update_status(_get_or_404(service, testimonial_id), req.status)


@router.patch("/api/admin/testimonials/{testimonial_id}", response_model=TestimonialResponse)
def update_testimonial(
    testimonial_id: int, req: TestimonialUpdate, db: Session = Depends(get_db), _: User = Depends(require_admin)
):
    service = TestimonialService(db)
    return service.update(_get_or_404(service, testimonial_id), req.model_dump(exclude_unset=True))


@router.delete("/api/admin/testimonials/{testimonial_id}")
def delete_testimonial(testimonial_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    service = TestimonialService(db)
    service.soft_delete(_get_or_404(service, testimonial_id))
    return {"success": True}
