from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP
from foreclosure_hub.core.database import Base

class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(100), nullable=False)
    location = Column(String(100), nullable=False)
    situation = Column(String(200), nullable=False)
    story = Column(Text, nullable=False)
    outcome = Column(Text, nullable=False)
    permission_to_publish = Column(String(3), default="no") # 'yes', 'no'

    email = Column(String(320), nullable=True)
    phone = Column(String(20), nullable=True)

    status = Column(String(20), default="pending", index=True) # 'pending', 'approved', 'rejected'
    theme = Column(String(50), nullable=True)

    published_at = Column(TIMESTAMP, nullable=True)
    deleted_at = Column(TIMESTAMP, nullable=True)

    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)
