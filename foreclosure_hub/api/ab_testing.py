from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from foreclosure_hub.api.auth import require_admin
from foreclosure_hub.core.database import get_db
from foreclosure_hub.models.user import User
from foreclosure_hub.schemas.ab_test import (
    CreateABTestRequest,
    UpdateTestStatusRequest,
    ABTestResponse,
    AssignedVariant,
    TrackEventRequest,
    ABTestStatsResponse,
)
from foreclosure_hub.services.ab_test_service import ABTestService, InvalidEvent

router = APIRouter(tags=["A/B Testing"])


# =========================================================
# 1. PUBLIC
# =========================================================

@router.get("/api/ab-tests/assignment", response_model=AssignedVariant)
def get_variant_assignment(
    form_name: str,
    field_name: str,
    session_id: str = Query(..., min_length=1, max_length=64),
    db: Session = Depends(get_db),
):
    return ABTestService(db).get_assignment(form_name, field_name, session_id)


@router.post("/api/ab-tests/events")
def track_event(req: TrackEventRequest, db: Session = Depends(get_db)):
    try:
        ABTestService(db).track_event(req.test_id, req.variant_id, req.session_id, req.event_type, req.event_data)
    except InvalidEvent as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}


# =========================================================
# 2. ADMIN
# =========================================================

def _get_or_404(service: ABTestService, test_id: int):
    test = service.get_test(test_id)
    if not test:
        raise HTTPException(status_code=404, detail="Test not found")
    return test


@router.post("/api/admin/ab-tests", response_model=ABTestResponse)
def create_test(req: CreateABTestRequest, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return ABTestService(db).create_test(req.model_dump())


@router.get("/api/admin/ab-tests", response_model=List[ABTestResponse])
def list_tests(db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return ABTestService(db).list_tests()


@router.get("/api/admin/ab-tests/{test_id}", response_model=ABTestResponse)
def get_test(test_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return _get_or_404(ABTestService(db), test_id)


@router.patch("/api/admin/ab-tests/{test_id}/status", response_model=ABTestResponse)
def update_test_status(
    test_id: int, req: UpdateTestStatusRequest, db: Session = Depends(get_db), _: User = Depends(require_admin)
):
    service = ABTestService(db)
    return service.update_status(_get_or_404(service, test_id), req.status)


@router.get("/api/admin/ab-tests/{test_id}/stats", response_model=ABTestStatsResponse)
def get_test_statistics(test_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    service = ABTestService(db)
    return service.statistics(_get_or_404(service, test_id))
