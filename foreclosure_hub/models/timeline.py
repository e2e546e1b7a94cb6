from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, Date, TIMESTAMP, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from foreclosure_hub.core.database import Base


# ---------------------------------------------------------
# 1. USER TIMELINE (The Seed Date)
# ---------------------------------------------------------
class UserTimeline(Base):
    __tablename__ = "user_timelines"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    # Milestones are recomputed from these two columns on every read
    notice_date = Column(Date, nullable=False)
    variant = Column(String(20), default="standard")

    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    progress = relationship("TimelineActionProgress", back_populates="timeline", cascade="all, delete-orphan")


# ---------------------------------------------------------
# 2. ACTION PROGRESS (One Checkbox per Action Item)
# ---------------------------------------------------------
class TimelineActionProgress(Base):
    __tablename__ = "timeline_action_progress"
    __table_args__ = (
        UniqueConstraint("timeline_id", "milestone_id", "action_index", name="uq_timeline_action"),
    )

    id = Column(Integer, primary_key=True, index=True)

    timeline_id = Column(Integer, ForeignKey("user_timelines.id"), nullable=False, index=True)
    milestone_id = Column(String(64), nullable=False)
    action_index = Column(Integer, nullable=False)

    completed = Column(Boolean, default=False)
    completed_at = Column(TIMESTAMP, nullable=True)

    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    timeline = relationship("UserTimeline", back_populates="progress")
