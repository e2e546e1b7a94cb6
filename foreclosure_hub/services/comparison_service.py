import logging
from typing import Optional

from sqlalchemy.orm import Session

from foreclosure_hub.models.comparison import ComparisonHistory
from foreclosure_hub.services import valuation_service, sale_options_service

logger = logging.getLogger(__name__)

PROPERTY_FIELDS = ["zip_code", "property_type", "square_feet", "bedrooms", "bathrooms", "condition"]


class NoEstimate(ValueError):
    pass


def build_report(details: dict) -> dict:
    """Valuation of the property plus the sale options at that value."""
    valuation = valuation_service.estimate_value(**{f: details[f] for f in PROPERTY_FIELDS})
    if valuation["estimated_value"] <= 0:
        raise NoEstimate("Not enough property information to estimate a value")
    comparison = sale_options_service.compare_sale_options(
        valuation["estimated_value"], details["mortgage_balance"]
    )
    return {"valuation": valuation, "comparison": comparison}


class ComparisonService:
    def __init__(self, db: Session):
        self.db = db

    def save(self, user_id: int, details: dict) -> ComparisonHistory:
        report = build_report(details)
        estimated = report["valuation"]["estimated_value"]
        entry = ComparisonHistory(
            user_id=user_id,
            property_address=details.get("property_address"),
            **{f: details[f] for f in PROPERTY_FIELDS},
            estimated_value=estimated,
            mortgage_balance=details["mortgage_balance"],
            equity=estimated - details["mortgage_balance"],
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        logger.info(f"💾 Saved comparison {entry.id} for user {user_id}")
        return entry

    def list_for_user(self, user_id: int):
        return (
            self.db.query(ComparisonHistory)
            .filter(ComparisonHistory.user_id == user_id)
            .order_by(ComparisonHistory.created_at.desc(), ComparisonHistory.id.desc())
            .all()
        )

    def get(self, comparison_id: int, user_id: int) -> Optional[ComparisonHistory]:
        # Another user's comparison is reported as missing
        return self.db.query(ComparisonHistory).filter(
            ComparisonHistory.id == comparison_id,
            ComparisonHistory.user_id == user_id,
        ).first()

    def delete(self, comparison_id: int, user_id: int) -> bool:
        entry = self.get(comparison_id, user_id)
        if not entry:
            return False
        self.db.delete(entry)
        self.db.commit()
        return True

    @staticmethod
    def detail(entry: ComparisonHistory) -> dict:
        comparison = sale_options_service.compare_sale_options(entry.estimated_value, entry.mortgage_balance)
        return {**{c.name: getattr(entry, c.name) for c in entry.__table__.columns}, "comparison": comparison}
