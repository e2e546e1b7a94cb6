from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship
from foreclosure_hub.core.database import Base


# ---------------------------------------------------------
# 1. SHORTENED LINKS
# ---------------------------------------------------------
class ShortenedLink(Base):
    __tablename__ = "shortened_links"

    id = Column(Integer, primary_key=True, index=True)

    original_url = Column(Text, nullable=False)
    short_code = Column(String(20), unique=True, nullable=False, index=True)
    custom_alias = Column(String(100), unique=True, nullable=True)

    title = Column(String(255), nullable=True)
    clicks = Column(Integer, default=0)
    created_by = Column(String(320), nullable=True)

    expires_at = Column(TIMESTAMP, nullable=True) # NULL = never expires
    is_active = Column(Boolean, default=True)

    campaign_id = Column(Integer, ForeignKey("campaigns.id"), nullable=True)

    # Appended to the destination on redirect
    utm_source = Column(String(100))
    utm_medium = Column(String(100))
    utm_campaign = Column(String(100))
    utm_term = Column(String(100))
    utm_content = Column(String(100))

    deleted_at = Column(TIMESTAMP, nullable=True)

    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    campaign = relationship("Campaign", back_populates="links")


# ---------------------------------------------------------
# 2. LINK CLICKS (The Tracking Log)
# ---------------------------------------------------------
class LinkClick(Base):
    __tablename__ = "link_clicks"

    id = Column(Integer, primary_key=True, index=True)

    short_code = Column(String(20), nullable=False, index=True)

    ip_address = Column(String(45))
    user_agent = Column(Text)
    referer = Column(Text)
    session_id = Column(String(255))

    device_type = Column(String(50)) # 'mobile', 'tablet', 'desktop'
    browser = Column(String(50))
    os = Column(String(50))

    clicked_at = Column(TIMESTAMP, default=datetime.utcnow, index=True)
