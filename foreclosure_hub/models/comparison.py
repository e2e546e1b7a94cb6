from datetime import datetime
from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey
from foreclosure_hub.core.database import Base

class ComparisonHistory(Base):
    """A sale-options comparison a signed-in homeowner saved for later."""
    __tablename__ = "comparison_history"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Property
    property_address = Column(String(255), nullable=True)
    zip_code = Column(String(10), nullable=False)
    property_type = Column(String(50), nullable=False) # 'single_family', 'condo', 'townhouse', 'multi_family'
    square_feet = Column(Integer, nullable=False)
    bedrooms = Column(Integer, nullable=False)
    bathrooms = Column(Integer, nullable=False)
    condition = Column(String(50), nullable=False) # 'excellent', 'good', 'fair', 'poor'

    # Results at save time; the options are recomputed from these on read
    estimated_value = Column(Integer, nullable=False)
    mortgage_balance = Column(Integer, nullable=False)
    equity = Column(Integer, nullable=False)

    created_at = Column(TIMESTAMP, default=datetime.utcnow)
