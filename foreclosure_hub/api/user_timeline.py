from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from foreclosure_hub.api.auth import get_current_user
from foreclosure_hub.core.database import get_db
from foreclosure_hub.models.user import User
from foreclosure_hub.schemas.timeline import (
    TimelineRequest,
    ActionUpdateRequest,
    SavedTimelineResponse,
    RecommendationsResponse,
)
from foreclosure_hub.services.user_timeline_service import UserTimelineService, TimelineNotFound, InvalidAction

router = APIRouter(prefix="/api/my-timeline", tags=["My Timeline"])


@router.get("", response_model=Optional[SavedTimelineResponse])
def get_my_timeline(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return UserTimelineService(db).get(user.id)


@router.put("", response_model=SavedTimelineResponse)
def save_my_timeline(req: TimelineRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return UserTimelineService(db).save(user, req.notice_date, req.variant)


@router.delete("")
def delete_my_timeline(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if not UserTimelineService(db).delete(user.id):
        raise HTTPException(status_code=404, detail="No timeline saved")
    return {"success": True}


@router.post("/actions", response_model=SavedTimelineResponse)
def update_action(req: ActionUpdateRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        return UserTimelineService(db).update_action(user, req.milestone_id, req.action_index, req.completed)
    except TimelineNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidAction as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/recommendations", response_model=RecommendationsResponse)
def get_recommendations(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"recommendations": UserTimelineService(db).recommendations(user.id)}
