from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from foreclosure_hub.api.auth import get_current_user
from foreclosure_hub.core.database import get_db
from foreclosure_hub.models.user import User
from foreclosure_hub.schemas.calculator import ComparisonReportRequest, SavedComparisonResponse, SavedComparisonDetail
from foreclosure_hub.services.comparison_service import ComparisonService, NoEstimate

router = APIRouter(prefix="/api/my-comparisons", tags=["My Comparisons"])


@router.post("", response_model=SavedComparisonDetail)
def save_comparison(req: ComparisonReportRequest, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    service = ComparisonService(db)
    try:
        entry = service.save(user.id, req.model_dump())
    except NoEstimate as e:
        raise HTTPException(status_code=422, detail=str(e))
    return service.detail(entry)


@router.get("", response_model=List[SavedComparisonResponse])
def list_comparisons(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return ComparisonService(db).list_for_user(user.id)


@router.get("/{comparison_id}", response_model=SavedComparisonDetail)
def get_comparison(comparison_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    service = ComparisonService(db)
    entry = service.get(comparison_id, user.id)
    if not entry:
        raise HTTPException(status_code=404, detail="Comparison not found")
    return service.detail(entry)


@router.delete("/{comparison_id}")
def delete_comparison(comparison_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if not ComparisonService(db).delete(comparison_id, user.id):
        raise HTTPException(status_code=404, detail="Comparison not found")
    return {"success": True}
