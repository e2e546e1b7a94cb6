from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship
from foreclosure_hub.core.database import Base


class Lead(Base):
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, index=True)

    first_name = Column(String(100), nullable=False)
    email = Column(String(320), nullable=False, index=True)
    phone = Column(String(20), nullable=False)
    property_zip = Column(String(10), nullable=False)

    sms_consent = Column(String(3), default="no") # 'yes', 'no'
    source = Column(String(255), default="landing_page")

    # Status Flow: 'new' -> 'contacted' -> 'qualified' -> 'closed'
    status = Column(String(20), default="new", index=True)

    notes = Column(Text, nullable=True)

    # Set once the CRM upsert succeeds
    crm_contact_id = Column(String(64), nullable=True)

    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    lead_notes = relationship("LeadNote", back_populates="lead", cascade="all, delete-orphan")


class LeadNote(Base):
    __tablename__ = "lead_notes"

    id = Column(Integer, primary_key=True, index=True)

    lead_id = Column(Integer, ForeignKey("leads.id"), nullable=False, index=True)
    note = Column(Text, nullable=False)

    # 'general', 'status_change', 'call', 'email', 'meeting'
    note_type = Column(String(20), default="general")
    created_by = Column(String(100))

    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    lead = relationship("Lead", back_populates="lead_notes")
