from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional, Literal
from datetime import datetime

LeadStatus = Literal["new", "contacted", "qualified", "closed"]
NoteType = Literal["general", "status_change", "call", "email", "meeting"]

# --- 1. PUBLIC FORMS ---
class LeadSubmitRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=10, max_length=20)
    property_zip: str = Field(..., min_length=5, max_length=10)
    sms_consent: bool = False
    source: Optional[str] = Field(None, max_length=255)

class ContactFormRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=10, max_length=20)
    property_zip: Optional[str] = Field(None, max_length=10)
    message: Optional[str] = None

class SubmitResponse(BaseModel):
    success: bool
    message: Optional[str] = None

# --- 2. ADMIN ---
class LeadResponse(BaseModel):
    id: int
    first_name: str
    email: str
    phone: str
    property_zip: str
    sms_consent: str
    source: Optional[str] = None
    status: str
    notes: Optional[str] = None
    crm_contact_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class LeadStatusUpdate(BaseModel):
    status: LeadStatus

class LeadNotesUpdate(BaseModel):
    notes: str

class LeadNoteCreate(BaseModel):
    note: str = Field(..., min_length=1)
    note_type: NoteType = "general"

class LeadNoteResponse(BaseModel):
    id: int
    lead_id: int
    note: str
    note_type: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class LeadExportRequest(BaseModel):
    # None = export every lead
    lead_ids: Optional[List[int]] = None
