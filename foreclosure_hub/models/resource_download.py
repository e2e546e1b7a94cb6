from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, TIMESTAMP
from foreclosure_hub.core.database import Base

class ResourceDownload(Base):
    __tablename__ = "resource_downloads"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(100), nullable=False)
    email = Column(String(320), nullable=False)

    resource_name = Column(String(200), nullable=False) # e.g. "Texas Foreclosure Survival Guide"
    resource_file = Column(String(200), nullable=False) # e.g. "/pdfs/Foreclosure_Survival_Guide.pdf"

    ip_address = Column(String(45))
    user_agent = Column(Text)

    created_at = Column(TIMESTAMP, default=datetime.utcnow)
