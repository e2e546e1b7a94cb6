from pydantic import BaseModel
from typing import List, Optional
from datetime import date

# --- GENERIC BUILDING BLOCKS ---
class MetricChange(BaseModel):
    value: int
    previous_value: int
    percentage_change: float
    trend: str # 'up', 'down'

class SeriesPoint(BaseModel):
    date: date
    label: str # "Feb 10"
    value: int

# --- API RESPONSES ---
class DashboardKPIs(BaseModel):
    new_leads: MetricChange
    cash_offers: MetricChange
    testimonials: MetricChange
    link_clicks: MetricChange
    resource_downloads: MetricChange

class KpiResponse(BaseModel):
    date_range: str
    data: DashboardKPIs

class MetricSeries(BaseModel):
    metric: str
    points: List[SeriesPoint]

class SeriesResponse(BaseModel):
    date_range: str
    series: List[MetricSeries]

class LinkExpirationReport(BaseModel):
    deactivated: int
    expiring: int
    errors: List[str]
    ran_at: Optional[str] = None
