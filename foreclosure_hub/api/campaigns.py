from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from foreclosure_hub.api.auth import require_admin
from foreclosure_hub.core.database import get_db
from foreclosure_hub.models.user import User
from foreclosure_hub.schemas.campaign import (
    CreateCampaignRequest,
    UpdateCampaignRequest,
    AssignLinkRequest,
    CampaignResponse,
    CampaignStats,
)
from foreclosure_hub.schemas.link import LinkResponse
from foreclosure_hub.services.campaign_service import CampaignService
from foreclosure_hub.api.links import link_response
from foreclosure_hub.services.link_service import LinkService

router = APIRouter(prefix="/api/admin/campaigns", tags=["Link Campaigns"])


def _get_or_404(service: CampaignService, campaign_id: int):
    campaign = service.get(campaign_id)
    if not campaign:
        raise HTTPException(status_code=404, detail="Campaign not found")
    return campaign


def _link_or_404(db: Session, link_id: int):
    link = LinkService(db).get(link_id)
    if not link:
        raise HTTPException(status_code=404, detail="Link not found")
    return link


# =========================================================
# 1. CRUD
# =========================================================

@router.post("", response_model=CampaignResponse)
def create_campaign(req: CreateCampaignRequest, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return CampaignService(db).create(req.model_dump(), created_by=admin.email)


@router.get("", response_model=List[CampaignResponse])
def list_campaigns(db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return CampaignService(db).list_campaigns()


@router.get("/{campaign_id}")
def get_campaign_detail(campaign_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    """Campaign with its link stats. Used by the detail page."""
    service = CampaignService(db)
    campaign = _get_or_404(service, campaign_id)
    return {
        "campaign": CampaignResponse.model_validate(campaign),
        "stats": CampaignStats(**service.stats(campaign)),
    }


@router.patch("/{campaign_id}", response_model=CampaignResponse)
def update_campaign(
    campaign_id: int, req: UpdateCampaignRequest, db: Session = Depends(get_db), _: User = Depends(require_admin)
):
    service = CampaignService(db)
    return service.update(_get_or_404(service, campaign_id), req.model_dump(exclude_unset=True))


@router.delete("/{campaign_id}")
def delete_campaign(campaign_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    service = CampaignService(db)
    service.delete(_get_or_404(service, campaign_id))
    return {"success": True}


# =========================================================
# 2. LINKS
# =========================================================

@router.get("/{campaign_id}/links", response_model=List[LinkResponse])
def list_campaign_links(campaign_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    service = CampaignService(db)
    _get_or_404(service, campaign_id)
    return [link_response(l) for l in service.links(campaign_id)]


@router.post("/{campaign_id}/links", response_model=LinkResponse)
def assign_link(
    campaign_id: int, req: AssignLinkRequest, db: Session = Depends(get_db), _: User = Depends(require_admin)
):
    service = CampaignService(db)
    _get_or_404(service, campaign_id)
    return link_response(service.assign_link(_link_or_404(db, req.link_id), campaign_id))


@router.delete("/{campaign_id}/links/{link_id}", response_model=LinkResponse)
def unassign_link(campaign_id: int, link_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    service = CampaignService(db)
    _get_or_404(service, campaign_id)
    link = _link_or_404(db, link_id)
    if link.campaign_id != campaign_id:
        raise HTTPException(status_code=404, detail="Link is not in this campaign")
    return link_response(service.assign_link(link, None))


@router.get("/{campaign_id}/stats", response_model=CampaignStats)
def campaign_stats(campaign_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    service = CampaignService(db)
    return service.stats(_get_or_404(service, campaign_id))
