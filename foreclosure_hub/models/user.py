from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, TIMESTAMP
from foreclosure_hub.core.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    email = Column(String(320), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    full_name = Column(String)

    role = Column(String, default="user") # 'user', 'admin'

    is_active = Column(Boolean, default=True)

    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    last_login = Column(TIMESTAMP)
