from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict
from datetime import datetime

class UtmFields(BaseModel):
    utm_source: Optional[str] = Field(None, max_length=100)
    utm_medium: Optional[str] = Field(None, max_length=100)
    utm_campaign: Optional[str] = Field(None, max_length=100)
    utm_term: Optional[str] = Field(None, max_length=100)
    utm_content: Optional[str] = Field(None, max_length=100)

class CreateLinkRequest(UtmFields):
    original_url: str = Field(..., min_length=1)
    custom_alias: Optional[str] = Field(None, min_length=3, max_length=100, pattern=r"^[A-Za-z0-9_-]+$")
    title: Optional[str] = Field(None, max_length=255)
    expires_at: Optional[datetime] = None
    campaign_id: Optional[int] = None

class UpdateLinkRequest(UtmFields):
    original_url: Optional[str] = None
    title: Optional[str] = Field(None, max_length=255)
    expires_at: Optional[datetime] = None
    is_active: Optional[bool] = None

    @field_validator("original_url", "is_active")
    @classmethod
    def not_null(cls, v):
        # Omit the field to leave it unchanged; null is not a value here
        if v is None:
            raise ValueError("may not be null")
        return v

class ReactivateRequest(BaseModel):
    expires_at: Optional[datetime] = None

class LinkResponse(BaseModel):
    id: int
    original_url: str
    short_code: str
    custom_alias: Optional[str] = None
    short_url: Optional[str] = None
    title: Optional[str] = None
    clicks: int
    created_by: Optional[str] = None
    expires_at: Optional[datetime] = None
    is_active: bool
    campaign_id: Optional[int] = None
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    utm_term: Optional[str] = None
    utm_content: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# --- ANALYTICS ---
class CountBucket(BaseModel):
    label: str
    count: int

class LinkStatsResponse(BaseModel):
    link: LinkResponse
    total_clicks: int
    unique_visitors: int
    clicks_by_day: List[CountBucket]
    clicks_by_device: List[CountBucket]
    clicks_by_browser: List[CountBucket]
    top_referers: List[CountBucket]

class ExpiringLinksResponse(BaseModel):
    days: int
    links: List[LinkResponse]
