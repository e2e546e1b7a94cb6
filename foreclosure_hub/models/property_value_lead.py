from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP
from foreclosure_hub.core.database import Base

class PropertyValueLead(Base):
    """Contact captured before the property value estimate is shown."""
    __tablename__ = "property_value_leads"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(100), nullable=False)
    email = Column(String(320), nullable=False, index=True)

    ip_address = Column(String(45))
    user_agent = Column(Text)

    access_granted_at = Column(TIMESTAMP, default=datetime.utcnow)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
