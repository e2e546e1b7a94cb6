from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP
from foreclosure_hub.core.database import Base

class CashOfferRequest(Base):
    __tablename__ = "cash_offer_requests"

    id = Column(Integer, primary_key=True, index=True)

    # Contact
    full_name = Column(String(200), nullable=False)
    email = Column(String(320), nullable=False)
    phone = Column(String(20), nullable=False)

    # Property
    street = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(2), nullable=False)
    zip_code = Column(String(10), nullable=False)
    bedrooms = Column(Integer, nullable=False)
    bathrooms = Column(Integer, nullable=False)
    square_feet = Column(Integer, nullable=False)
    year_built = Column(Integer, nullable=False)
    condition = Column(String(20), nullable=False) # 'excellent', 'good', 'fair', 'poor'
    additional_notes = Column(Text, nullable=True)

    # 'new', 'reviewing', 'offer_sent', 'accepted', 'declined', 'closed'
    status = Column(String(20), default="new", index=True)
    internal_notes = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)
