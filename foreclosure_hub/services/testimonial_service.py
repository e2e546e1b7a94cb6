import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from foreclosure_hub.models.testimonial import Testimonial

logger = logging.getLogger(__name__)


class TestimonialService:
    def __init__(self, db: Session):
        self.db = db

    def _active(self):
        return self.db.query(Testimonial).filter(Testimonial.deleted_at.is_(None))

    def submit(self, data: dict) -> Testimonial:
        testimonial = Testimonial(**data, status="pending")
        self.db.add(testimonial)
        self.db.commit()
        self.db.refresh(testimonial)
        logger.info(f"💬 Testimonial #{testimonial.id} submitted by {testimonial.name}")
        return testimonial

    def list_published(self, theme: Optional[str] = None):
        query = self._active().filter(
            Testimonial.status == "approved",
            Testimonial.permission_to_publish == "yes",
        )
        if theme:
            query = query.filter(Testimonial.theme == theme)
        return query.order_by(Testimonial.published_at.desc(), Testimonial.id.desc()).all()

    def list_all(self, status: Optional[str] = None):
        query = self._active()
        if status:
            query = query.filter(Testimonial.status == status)
        return query.order_by(Testimonial.created_at.desc(), Testimonial.id.desc()).all()

    def get(self, testimonial_id: int) -> Optional[Testimonial]:
        return self._active().filter(Testimonial.id == testimonial_id).first()

    def update_status(self, testimonial: Testimonial, status: str) -> Testimonial:
        testimonial.status = status
        if status == "approved" and not testimonial.published_at:
            testimonial.published_at = datetime.utcnow()
        elif status != "approved":
            testimonial.published_at = None
        self.db.commit()
        self.db.refresh(testimonial)
        return testimonial

    def update(self, testimonial: Testimonial, changes: dict) -> Testimonial:
        for field, value in changes.items():
            setattr(testimonial, field, value)
        self.db.commit()
        self.db.refresh(testimonial)
        return testimonial

    def soft_delete(self, testimonial: Testimonial):
        testimonial.deleted_at = datetime.utcnow()
        self.db.commit()
