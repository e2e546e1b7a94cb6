import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from foreclosure_hub.models.cash_offer import CashOfferRequest

logger = logging.getLogger(__name__)

STATUSES = ["new", "reviewing", "offer_sent", "accepted", "declined", "closed"]


class CashOfferService:
    def __init__(self, db: Session):
        self.db = db

    def submit(self, data: dict) -> CashOfferRequest:
        offer = CashOfferRequest(**data, status="new")
        offer.email = offer.email.lower()
        offer.state = offer.state.upper()
        self.db.add(offer)
        self.db.commit()
        self.db.refresh(offer)
        logger.info(f"🏠 Cash offer request #{offer.id} for {offer.city}, {offer.state}")
        return offer

    def list_offers(self, status: Optional[str] = None):
        query = self.db.query(CashOfferRequest)
        if status:
            query = query.filter(CashOfferRequest.status == status)
        return query.order_by(CashOfferRequest.created_at.desc(), CashOfferRequest.id.desc()).all()

    def get_offer(self, offer_id: int) -> Optional[CashOfferRequest]:
        return self.db.query(CashOfferRequest).filter(CashOfferRequest.id == offer_id).first()

    def counts(self):
        rows = (
            self.db.query(CashOfferRequest.status, func.count(CashOfferRequest.id))
            .group_by(CashOfferRequest.status)
            .all()
        )
        by_status = {s: 0 for s in STATUSES}
        for status, count in rows:
            by_status[status] = count
        return {"total": sum(by_status.values()), "by_status": by_status}

    def update_status(self, offer: CashOfferRequest, status: str) -> CashOfferRequest:
        offer.status = status
        self.db.commit()
        self.db.refresh(offer)
        return offer

    def update_notes(self, offer: CashOfferRequest, notes: str) -> CashOfferRequest:
        offer.internal_notes = notes
        self.db.commit()
        self.db.refresh(offer)
        return offer
