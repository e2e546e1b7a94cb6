from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, Literal
from datetime import datetime

TestimonialStatus = Literal["pending", "approved", "rejected"]
TestimonialTheme = Literal[
    "loan_modification",
    "foreclosure_prevention",
    "short_sale",
    "cash_offer",
    "deed_in_lieu",
    "bankruptcy_alternative",
    "job_loss",
    "medical_emergency",
    "divorce",
    "other",
]

class TestimonialSubmitRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=100)
    situation: str = Field(..., min_length=1, max_length=200)
    story: str = Field(..., min_length=50)
    outcome: str = Field(..., min_length=20)
    permission_to_publish: Literal["yes", "no"]
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v):
        # The form posts "" when the optional field is left empty
        return v or None

class TestimonialUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = Field(None, min_length=1, max_length=100)
    situation: Optional[str] = Field(None, min_length=1, max_length=200)
    story: Optional[str] = Field(None, min_length=50)
    outcome: Optional[str] = Field(None, min_length=20)
    theme: Optional[TestimonialTheme] = None

    @field_validator("name", "location", "situation", "story", "outcome")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v

class TestimonialStatusUpdate(BaseModel):
    status: TestimonialStatus

class TestimonialResponse(BaseModel):
    id: int
    name: str
    location: str
    situation: str
    story: str
    outcome: str
    permission_to_publish: str
    email: Optional[str] = None
    phone: Optional[str] = None
    status: str
    theme: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class PublicTestimonial(BaseModel):
    id: int
    name: str
    location: str
    situation: str
    story: str
    outcome: str
    theme: Optional[str] = None
    published_at: Optional[datetime] = None

    class Config:
        from_attributes = True
