from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"

class CreateCampaignRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    color: str = Field("#3b82f6", pattern=HEX_COLOR)

class UpdateCampaignRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    color: Optional[str] = Field(None, pattern=HEX_COLOR)

    @field_validator("name", "color")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v

class AssignLinkRequest(BaseModel):
    link_id: int

class CampaignResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    color: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class CampaignStats(BaseModel):
    campaign_id: int
    total_links: int
    active_links: int
    total_clicks: int
