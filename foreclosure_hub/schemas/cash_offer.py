from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Literal, Dict
from datetime import datetime

CashOfferStatus = Literal["new", "reviewing", "offer_sent", "accepted", "declined", "closed"]
PropertyCondition = Literal["excellent", "good", "fair", "poor"]

class CashOfferSubmitRequest(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str = Field(..., min_length=10, max_length=20)
    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=2, max_length=2)
    zip_code: str = Field(..., min_length=5, max_length=10)
    bedrooms: int = Field(..., ge=0, le=50)
    bathrooms: int = Field(..., ge=0, le=50)
    square_feet: int = Field(..., gt=0)
    year_built: int = Field(..., ge=1800, le=2100)
    condition: PropertyCondition
    additional_notes: Optional[str] = None

class CashOfferResponse(BaseModel):
    id: int
    full_name: str
    email: str
    phone: str
    street: str
    city: str
    state: str
    zip_code: str
    bedrooms: int
    bathrooms: int
    square_feet: int
    year_built: int
    condition: str
    additional_notes: Optional[str] = None
    status: str
    internal_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class CashOfferStatusUpdate(BaseModel):
    status: CashOfferStatus

class CashOfferNotesUpdate(BaseModel):
    notes: str

class CashOfferCounts(BaseModel):
    total: int
    by_status: Dict[str, int]
