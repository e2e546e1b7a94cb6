from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional, Dict, Literal
from datetime import date, datetime

VariantName = Literal["standard", "detailed"]

# --- 1. MILESTONES ---
class Milestone(BaseModel):
    id: str
    title: str
    date: date
    days_from_notice: int
    description: str
    action_items: List[str]
    urgency: Literal["critical", "warning", "safe"]
    status: Literal["past", "current", "upcoming"]

class UrgencyAlert(BaseModel):
    level: str # 'time_to_act', 'running_out', 'urgent', 'critical'
    message: str

# --- 2. CALCULATOR ---
class TimelineRequest(BaseModel):
    notice_date: date
    variant: VariantName = "standard"

class TimelineEmailRequest(TimelineRequest):
    email: EmailStr
    first_name: Optional[str] = None

class TimelineResponse(BaseModel):
    notice_date: date
    variant: str
    milestones: List[Milestone]
    days_until_sale: int
    alert: UrgencyAlert

# --- 3. SAVED TIMELINE & PROGRESS ---
class TimelineProgress(BaseModel):
    total_actions: int
    completed_actions: int
    completion_percentage: int
    progress_map: Dict[str, bool]

class SavedTimelineResponse(BaseModel):
    id: int
    notice_date: date
    variant: str
    milestones: List[Milestone]
    progress: TimelineProgress
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ActionUpdateRequest(BaseModel):
    milestone_id: str
    action_index: int = Field(..., ge=0)
    completed: bool

class Recommendation(BaseModel):
    id: str
    title: str
    description: str
    priority: Literal["high", "medium", "low"]
    action_url: Optional[str] = None
    action_text: Optional[str] = None

class RecommendationsResponse(BaseModel):
    recommendations: List[Recommendation]
