from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP
from sqlalchemy.orm import relationship
from foreclosure_hub.core.database import Base


class Campaign(Base):
    """A named group of shortened links (e.g. "Facebook Ads Q1")."""
    __tablename__ = "campaigns"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(7), default="#3b82f6")

    created_by = Column(String(320), nullable=True)

    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    links = relationship("ShortenedLink", back_populates="campaign")
