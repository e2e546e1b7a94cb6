"""
Form-field A/B testing: sticky weighted assignment, event log and a
two-proportion z-test of each treatment against the control.
"""
import json
import logging
import math
import random
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from foreclosure_hub.models.ab_test import ABTest, ABTestVariant, ABTestAssignment, ABTestEvent

logger = logging.getLogger(__name__)

SIGNIFICANCE_LEVEL = 0.05


class InvalidEvent(ValueError):
    pass


def pick_weighted(variants: list, rng=random):
    total = sum(v.traffic_weight or 0 for v in variants)
    if total <= 0:
        return variants[0]
    point = rng.random() * total
    cumulative = 0
    for v in variants:
        cumulative += v.traffic_weight or 0
        if point < cumulative:
            return v
    return variants[-1]


def normal_cdf(x: float) -> float:
    return 0.5 * (1 + math.erf(x / math.sqrt(2)))


def two_proportion_test(control_conv: int, control_n: int, treat_conv: int, treat_n: int) -> dict:
    if control_n == 0 or treat_n == 0:
        return {"z_score": 0.0, "p_value": 1.0, "is_significant": False, "improvement": 0.0}

    p1 = control_conv / control_n
    p2 = treat_conv / treat_n
    pooled = (control_conv + treat_conv) / (control_n + treat_n)
    se = math.sqrt(pooled * (1 - pooled) * (1 / control_n + 1 / treat_n))

    if se == 0:
        z = 0.0
        p_value = 1.0
    else:
        z = (p2 - p1) / se
        p_value = 2 * (1 - normal_cdf(abs(z)))

    return {
        "z_score": round(z, 4),
        "p_value": round(p_value, 4),
        "is_significant": p_value < SIGNIFICANCE_LEVEL,
        "improvement": round((p2 - p1) / p1 * 100, 2) if p1 > 0 else 0.0,
    }


def _rate(part: int, whole: int) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


class ABTestService:
    def __init__(self, db: Session, rng=None):
        self.db = db
        self.rng = rng or random

    # ---------------------------------------------------------
    # 1. ADMIN
    # ---------------------------------------------------------
    def create_test(self, data: dict) -> ABTest:
        variants = data.pop("variants")
        test = ABTest(**data, status="draft")
        test.variants = [ABTestVariant(**v) for v in variants]
        self.db.add(test)
        self.db.commit()
        self.db.refresh(test)
        logger.info(f"🧪 Created A/B test #{test.id} on {test.form_name}.{test.field_name}")
        return test

    def list_tests(self):
        return self.db.query(ABTest).order_by(ABTest.created_at.desc(), ABTest.id.desc()).all()

    def get_test(self, test_id: int) -> Optional[ABTest]:
        return self.db.query(ABTest).filter(ABTest.id == test_id).first()

    def update_status(self, test: ABTest, status: str) -> ABTest:
        test.status = status
        self.db.commit()
        self.db.refresh(test)
        return test

    # ---------------------------------------------------------
    # 2. PUBLIC: ASSIGNMENT & EVENTS
    # ---------------------------------------------------------
    def get_assignment(self, form_name: str, field_name: str, session_id: str):
        test = self.db.query(ABTest).filter(
            ABTest.form_name == form_name,
            ABTest.field_name == field_name,
            ABTest.status == "active",
        ).order_by(ABTest.id.desc()).first()
        if not test or not test.variants:
            return {"has_test": False, "test_id": None, "variant": None}

        assignment = self.db.query(ABTestAssignment).filter(
            ABTestAssignment.test_id == test.id,
            ABTestAssignment.session_id == session_id,
        ).first()

        if not assignment:
            variant = pick_weighted(test.variants, self.rng)
            assignment = ABTestAssignment(test_id=test.id, variant_id=variant.id, session_id=session_id)
            self.db.add(assignment)
            try:
                self.db.commit()
            except IntegrityError:
                # Concurrent first request for the same session won the insert
                self.db.rollback()
                assignment = self.db.query(ABTestAssignment).filter(
                    ABTestAssignment.test_id == test.id,
                    ABTestAssignment.session_id == session_id,
                ).first()

        variant = next(v for v in test.variants if v.id == assignment.variant_id)
        return {"has_test": True, "test_id": test.id, "variant": variant}

    def track_event(self, test_id: int, variant_id: int, session_id: str, event_type: str, event_data=None):
        variant = self.db.query(ABTestVariant).filter(
            ABTestVariant.id == variant_id,
            ABTestVariant.test_id == test_id,
        ).first()
        if not variant:
            raise InvalidEvent(f"Variant {variant_id} does not belong to test {test_id}")

        self.db.add(ABTestEvent(
            test_id=test_id,
            variant_id=variant_id,
            session_id=session_id,
            event_type=event_type,
            event_data=json.dumps(event_data) if event_data is not None else None,
        ))
        self.db.commit()

    # ---------------------------------------------------------
    # 3. STATISTICS
    # ---------------------------------------------------------
    def statistics(self, test: ABTest):
        rows = (
            self.db.query(ABTestEvent.variant_id, ABTestEvent.event_type, func.count(ABTestEvent.id))
            .filter(ABTestEvent.test_id == test.id)
            .group_by(ABTestEvent.variant_id, ABTestEvent.event_type)
            .all()
        )
        counts = {}
        for variant_id, event_type, count in rows:
            counts.setdefault(variant_id, {})[event_type] = count

        variants = []
        for v in sorted(test.variants, key=lambda x: x.id):
            c = counts.get(v.id, {})
            impressions = c.get("impression", 0)
            focuses = c.get("focus", 0)
            errors = c.get("validation_error", 0)
            conversions = c.get("form_success", 0)
            variants.append({
                "variant_id": v.id,
                "name": v.name,
                "is_control": bool(v.is_control),
                "impressions": impressions,
                "focuses": focuses,
                "errors": errors,
                "submissions": c.get("form_submit", 0),
                "conversions": conversions,
                "engagement_rate": _rate(focuses, impressions),
                "error_rate": _rate(errors, focuses),
                "conversion_rate": _rate(conversions, impressions),
            })

        control = next((v for v in variants if v["is_control"]), variants[0] if variants else None)
        significance = []
        for v in variants:
            if control is None or v is control:
                continue
            result = two_proportion_test(
                control["conversions"], control["impressions"],
                v["conversions"], v["impressions"],
            )
            significance.append({"variant_id": v["variant_id"], "treatment_name": v["name"], **result})

        return {"test_id": test.id, "variants": variants, "significance": significance}
