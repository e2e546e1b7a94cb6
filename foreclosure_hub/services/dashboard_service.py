from sqlalchemy.orm import Session
from sqlalchemy import func
from datetime import datetime, timedelta, date

from foreclosure_hub.models.lead import Lead
from foreclosure_hub.models.cash_offer import CashOfferRequest
from foreclosure_hub.models.testimonial import Testimonial
from foreclosure_hub.models.link import LinkClick
from foreclosure_hub.models.resource_download import ResourceDownload

# metric name -> (model, timestamp column)
METRICS = {
    "new_leads": (Lead, Lead.created_at),
    "cash_offers": (CashOfferRequest, CashOfferRequest.created_at),
    "testimonials": (Testimonial, Testimonial.created_at),
    "link_clicks": (LinkClick, LinkClick.clicked_at),
    "resource_downloads": (ResourceDownload, ResourceDownload.created_at),
}

DATE_RANGES = ["24h", "7d", "30d"]


class DashboardService:
    def __init__(self, db: Session):
        self.db = db

    def _get_date_range(self, range_key: str, now: datetime = None):
        now = now or datetime.utcnow()
        if range_key == "24h":
            return now - timedelta(hours=24), now
        elif range_key == "30d":
            return now - timedelta(days=30), now
        return now - timedelta(days=7), now

    def _calculate_growth(self, current: int, previous: int):
        if previous == 0:
            return 100.0 if current > 0 else 0.0
        return round(((current - previous) / previous) * 100, 1)

    def _get_metric(self, model, column, start, end):
        """Counts rows in [start, end] and in the equally long period before it"""
        curr = self.db.query(func.count(model.id)).filter(column >= start, column <= end).scalar() or 0

        duration = end - start
        prev_start = start - duration
        prev = self.db.query(func.count(model.id)).filter(column >= prev_start, column < start).scalar() or 0

        return {
            "value": curr,
            "previous_value": prev,
            "percentage_change": self._calculate_growth(curr, prev),
            "trend": "up" if curr >= prev else "down",
        }

    # --- MAIN LOGIC ---

    def get_kpis(self, date_range: str, now: datetime = None):
        start, end = self._get_date_range(date_range, now)
        data = {
            name: self._get_metric(model, column, start, end)
            for name, (model, column) in METRICS.items()
        }
        return {"date_range": date_range, "data": data}

    def _daily_counts(self, model, column, start: datetime):
        day = func.date(column)
        rows = (
            self.db.query(day, func.count(model.id))
            .filter(column >= start)
            .group_by(day)
            .all()
        )
        # func.date comes back as a date on Postgres and a string on SQLite
        return {str(d)[:10]: count for d, count in rows}

    def get_series(self, date_range: str, now: datetime = None):
        start, end = self._get_date_range(date_range, now)
        first_day: date = start.date()
        days = [first_day + timedelta(days=i) for i in range((end.date() - first_day).days + 1)]

        series = []
        for name, (model, column) in METRICS.items():
            counts = self._daily_counts(model, column, start)
            series.append({
                "metric": name,
                "points": [
                    {"date": d, "label": d.strftime("%b %d"), "value": counts.get(d.isoformat(), 0)}
                    for d in days
                ],
            })
        return {"date_range": date_range, "series": series}
