from typing import Optional, List

from fastapi import APIRouter, Depends, Query, HTTPException, BackgroundTasks
from sqlalchemy.orm import Session

from foreclosure_hub.api.auth import require_admin
from foreclosure_hub.core.database import get_db
from foreclosure_hub.models.user import User
from foreclosure_hub.schemas.cash_offer import (
    CashOfferSubmitRequest,
    CashOfferResponse,
    CashOfferStatusUpdate,
    CashOfferNotesUpdate,
    CashOfferCounts,
)
from foreclosure_hub.schemas.lead import SubmitResponse
from foreclosure_hub.services.cash_offer_service import CashOfferService, STATUSES
from foreclosure_hub.workers.crm.lead_sync import sync_cash_offer

router = APIRouter(tags=["Cash Offers"])


@router.post("/api/cash-offers", response_model=SubmitResponse)
def submit_cash_offer(req: CashOfferSubmitRequest, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    offer = CashOfferService(db).submit(req.model_dump())
    background_tasks.add_task(sync_cash_offer, offer.id)
    return {"success": True, "message": "Your cash offer request has been submitted successfully!"}


# --- ADMIN ---

def _get_offer_or_404(service: CashOfferService, offer_id: int):
    offer = service.get_offer(offer_id)
    if not offer:
        raise HTTPException(status_code=404, detail="Cash offer request not found")
    return offer


@router.get("/api/admin/cash-offers", response_model=List[CashOfferResponse])
def list_cash_offers(
    status: Optional[str] = Query(None, enum=STATUSES),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return CashOfferService(db).list_offers(status)


@router.get("/api/admin/cash-offers/counts", response_model=CashOfferCounts)
def cash_offer_counts(db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return CashOfferService(db).counts()


@router.get("/api/admin/cash-offers/{offer_id}", response_model=CashOfferResponse)
def get_cash_offer(offer_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return _get_offer_or_404(CashOfferService(db), offer_id)


@router.patch("/api/admin/cash-offers/{offer_id}/status", response_model=CashOfferResponse)
def update_cash_offer_status(
    offer_id: int, req: CashOfferStatusUpdate, db: Session = Depends(get_db), _: User = Depends(require_admin)
):
    service = CashOfferService(db)
    return service.update_status(_get_offer_or_404(service, offer_id), req.status)


@router.patch("/api/admin/cash-offers/{offer_id}/notes", response_model=CashOfferResponse)
def update_cash_offer_notes(
    offer_id: int, req: CashOfferNotesUpdate, db: Session = Depends(get_db), _: User = Depends(require_admin)
):
    service = CashOfferService(db)
    return service.update_notes(_get_offer_or_404(service, offer_id), req.notes)
