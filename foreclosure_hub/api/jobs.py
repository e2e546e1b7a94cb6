from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from foreclosure_hub.api.auth import require_admin
from foreclosure_hub.core.database import get_db
from foreclosure_hub.models.user import User
from foreclosure_hub.schemas.dashboard import LinkExpirationReport
from foreclosure_hub.workers.links.expiration_worker import check_link_expiration

router = APIRouter(prefix="/api/admin/jobs", tags=["Jobs"])


# Manual trigger (admin)
@router.post("/link-expiration", response_model=LinkExpirationReport)
def run_link_expiration_now(db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return check_link_expiration(db)
