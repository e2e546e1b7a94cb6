from typing import Optional, List

from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.orm import Session

from foreclosure_hub.api.auth import require_admin
from foreclosure_hub.core.config import settings
from foreclosure_hub.core.database import get_db
from foreclosure_hub.models.campaign import Campaign
from foreclosure_hub.models.user import User
from foreclosure_hub.schemas.link import (
    CreateLinkRequest,
    UpdateLinkRequest,
    LinkResponse,
    LinkStatsResponse,
    ExpiringLinksResponse,
    ReactivateRequest,
)
from foreclosure_hub.services.link_service import (
    LinkService, InvalidUrl, InvalidExpiry, AliasTaken, CodeGenerationFailed, short_url
)

router = APIRouter(prefix="/api/admin/links", tags=["Link Shortener"])


def link_response(link) -> LinkResponse:
    data = LinkResponse.model_validate(link)
    data.short_url = short_url(link)
    return data


def _get_or_404(service: LinkService, link_id: int):
    link = service.get(link_id)
    if not link:
        raise HTTPException(status_code=404, detail="Link not found")
    return link


@router.post("", response_model=LinkResponse)
def create_link(req: CreateLinkRequest, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    if req.campaign_id is not None and not db.query(Campaign).filter(Campaign.id == req.campaign_id).first():
        raise HTTPException(status_code=404, detail="Campaign not found")
    try:
        link = LinkService(db).create_link(req.model_dump(), created_by=admin.email)
    except InvalidUrl as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AliasTaken as e:
        raise HTTPException(status_code=409, detail=str(e))
    except CodeGenerationFailed as e:
        raise HTTPException(status_code=500, detail=str(e))
    return link_response(link)


@router.get("", response_model=List[LinkResponse])
def list_links(
    include_expired: bool = False,
    campaign_id: Optional[int] = None,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return [link_response(l) for l in LinkService(db).list_links(include_expired, campaign_id)]


@router.get("/expiring", response_model=ExpiringLinksResponse)
def list_expiring_links(
    days: int = Query(settings.LINK_EXPIRY_WARNING_DAYS, ge=1, le=365),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return {"days": days, "links": [link_response(l) for l in LinkService(db).expiring_links(days)]}


@router.get("/{link_id}/stats", response_model=LinkStatsResponse)
def link_stats(link_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    service = LinkService(db)
    link = _get_or_404(service, link_id)
    return {"link": link_response(link), **service.stats(link)}


@router.patch("/{link_id}", response_model=LinkResponse)
def update_link(link_id: int, req: UpdateLinkRequest, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    service = LinkService(db)
    link = _get_or_404(service, link_id)
    try:
        link = service.update_link(link, req.model_dump(exclude_unset=True))
    except (InvalidUrl, InvalidExpiry) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return link_response(link)


@router.post("/{link_id}/reactivate", response_model=LinkResponse)
def reactivate_link(
    link_id: int, req: ReactivateRequest, db: Session = Depends(get_db), _: User = Depends(require_admin)
):
    service = LinkService(db)
    link = _get_or_404(service, link_id)
    try:
        return link_response(service.reactivate(link, req.expires_at))
    except InvalidExpiry as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{link_id}")
def delete_link(link_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    service = LinkService(db)
    service.delete_link(_get_or_404(service, link_id))
    return {"success": True}
