import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session

from foreclosure_hub.core.config import settings
from foreclosure_hub.models.timeline import UserTimeline, TimelineActionProgress
from foreclosure_hub.models.user import User
from foreclosure_hub.services import timeline_service
from foreclosure_hub.services.crm_service import CrmService

logger = logging.getLogger(__name__)


class TimelineNotFound(Exception):
    pass


class InvalidAction(Exception):
    pass


class UserTimelineService:
    def __init__(self, db: Session, crm: Optional[CrmService] = None):
        self.db = db
        self.crm = crm or CrmService()

    def _get(self, user_id: int) -> Optional[UserTimeline]:
        return self.db.query(UserTimeline).filter(UserTimeline.user_id == user_id).first()

    def _completed_map(self, timeline: UserTimeline) -> dict[str, bool]:
        return {
            timeline_service.progress_key(p.milestone_id, p.action_index): bool(p.completed)
            for p in timeline.progress
        }

    def _serialize(self, timeline: UserTimeline, today: Optional[date] = None):
        milestones = timeline_service.generate_timeline(timeline.notice_date, timeline.variant, today=today)
        return {
            "id": timeline.id,
            "notice_date": timeline.notice_date,
            "variant": timeline.variant,
            "milestones": milestones,
            "progress": timeline_service.summarize_progress(milestones, self._completed_map(timeline)),
            "created_at": timeline.created_at,
            "updated_at": timeline.updated_at,
        }

    # ---------------------------------------------------------
    # 1. SAVE / GET / DELETE
    # ---------------------------------------------------------
    def save(self, user: User, notice_date: date, variant: str = timeline_service.DEFAULT_VARIANT):
        milestones = timeline_service.generate_timeline(notice_date, variant)

        timeline = self._get(user.id)
        if timeline:
            timeline.notice_date = notice_date
            timeline.variant = variant
        else:
            timeline = UserTimeline(user_id=user.id, notice_date=notice_date, variant=variant)
            self.db.add(timeline)

        self.db.commit()
        self.db.refresh(timeline)
        logger.info(f"[Timeline] Saved timeline for user {user.id} (notice {notice_date}, {variant})")

        ok, result = self.crm.track_timeline_saved(
            email=user.email,
            first_name=(user.full_name or user.email).split(" ")[0],
            notice_date=notice_date,
            milestones=milestones,
        )
        if not ok:
            logger.warning(f"[Timeline] CRM tracking skipped for user {user.id}: {result}")

        return self._serialize(timeline)

    def get(self, user_id: int, today: Optional[date] = None):
        timeline = self._get(user_id)
        if not timeline:
            return None
        return self._serialize(timeline, today=today)

    def delete(self, user_id: int) -> bool:
        timeline = self._get(user_id)
        if not timeline:
            return False
        self.db.delete(timeline)
        self.db.commit()
        return True

    # ---------------------------------------------------------
    # 2. ACTION PROGRESS
    # ---------------------------------------------------------
    def update_action(self, user: User, milestone_id: str, action_index: int, completed: bool):
        timeline = self._get(user.id)
        if not timeline:
            raise TimelineNotFound("No timeline saved yet")

        milestones = timeline_service.generate_timeline(timeline.notice_date, timeline.variant)
        milestone = next((m for m in milestones if m["id"] == milestone_id), None)
        if milestone is None:
            raise InvalidAction(f"Unknown milestone: {milestone_id}")
        if action_index >= len(milestone["action_items"]):
            raise InvalidAction(f"Milestone {milestone_id} has no action {action_index}")

        row = self.db.query(TimelineActionProgress).filter(
            TimelineActionProgress.timeline_id == timeline.id,
            TimelineActionProgress.milestone_id == milestone_id,
            TimelineActionProgress.action_index == action_index,
        ).first()
        if not row:
            row = TimelineActionProgress(
                timeline_id=timeline.id,
                milestone_id=milestone_id,
                action_index=action_index,
            )
            self.db.add(row)

        row.completed = completed
        row.completed_at = datetime.utcnow() if completed else None
        self.db.commit()
        self.db.refresh(timeline)

        result = self._serialize(timeline)

        if completed:
            ok, error = self.crm.track_timeline_progress(
                email=user.email,
                action_completed=milestone["action_items"][action_index],
                milestone_title=milestone["title"],
                completion_percentage=result["progress"]["completion_percentage"],
            )
            if not ok:
                logger.warning(f"[Timeline] CRM progress tracking skipped for user {user.id}: {error}")

        return result

    # ---------------------------------------------------------
    # 3. RECOMMENDATIONS
    # ---------------------------------------------------------
    def recommendations(self, user_id: int, today: Optional[date] = None):
        timeline = self._get(user_id)
        if not timeline:
            return timeline_service.build_recommendations(None, {}, None, settings.CONTACT_PHONE, today=today)

        milestones = timeline_service.generate_timeline(timeline.notice_date, timeline.variant, today=today)
        return timeline_service.build_recommendations(
            milestones,
            self._completed_map(timeline),
            timeline.notice_date,
            settings.CONTACT_PHONE,
            today=today,
        )
