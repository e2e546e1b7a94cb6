from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from foreclosure_hub.models.campaign import Campaign
from foreclosure_hub.models.link import ShortenedLink


class CampaignService:
    def __init__(self, db: Session):
        self.db = db

    def create(self, data: dict, created_by: Optional[str] = None) -> Campaign:
        campaign = Campaign(**data, created_by=created_by)
        self.db.add(campaign)
        self.db.commit()
        self.db.refresh(campaign)
        return campaign

    def list_campaigns(self):
        return self.db.query(Campaign).order_by(Campaign.created_at.desc(), Campaign.id.desc()).all()

    def get(self, campaign_id: int) -> Optional[Campaign]:
        return self.db.query(Campaign).filter(Campaign.id == campaign_id).first()

    def update(self, campaign: Campaign, changes: dict) -> Campaign:
        for field, value in changes.items():
            setattr(campaign, field, value)
        self.db.commit()
        self.db.refresh(campaign)
        return campaign

    def delete(self, campaign: Campaign):
        # Links survive; they just leave the campaign
        self.db.query(ShortenedLink).filter(ShortenedLink.campaign_id == campaign.id).update(
            {ShortenedLink.campaign_id: None}, synchronize_session=False
        )
        self.db.delete(campaign)
        self.db.commit()

    def assign_link(self, link: ShortenedLink, campaign_id: Optional[int]) -> ShortenedLink:
        link.campaign_id = campaign_id
        self.db.commit()
        self.db.refresh(link)
        return link

    def links(self, campaign_id: int):
        return (
            self.db.query(ShortenedLink)
            .filter(ShortenedLink.campaign_id == campaign_id, ShortenedLink.deleted_at.is_(None))
            .order_by(ShortenedLink.created_at.desc(), ShortenedLink.id.desc())
            .all()
        )

    def stats(self, campaign: Campaign):
        base = self.db.query(ShortenedLink).filter(
            ShortenedLink.campaign_id == campaign.id,
            ShortenedLink.deleted_at.is_(None),
        )
        return {
            "campaign_id": campaign.id,
            "total_links": base.count(),
            "active_links": base.filter(ShortenedLink.is_active.is_(True)).count(),
            "total_clicks": base.with_entities(func.coalesce(func.sum(ShortenedLink.clicks), 0)).scalar() or 0,
        }
