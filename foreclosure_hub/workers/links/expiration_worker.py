import logging
import math
from datetime import datetime

from foreclosure_hub.core.config import settings
from foreclosure_hub.core.database import SessionLocal
from foreclosure_hub.models.link import ShortenedLink
from foreclosure_hub.services.email_service import EmailService
from foreclosure_hub.services.link_service import LinkService

logger = logging.getLogger(__name__)


def _plural(n: int) -> str:
    return "" if n == 1 else "s"


def check_link_expiration(db, now: datetime = None, email_service: EmailService = None) -> dict:
    """
    Deactivates links whose expiry has passed and warns the owner about links
    expiring within LINK_EXPIRY_WARNING_DAYS. Returns {deactivated, expiring, errors}.
    """
    now = now or datetime.utcnow()
    email_service = email_service or EmailService()
    days = settings.LINK_EXPIRY_WARNING_DAYS
    report = {"deactivated": 0, "expiring": 0, "errors": [], "ran_at": now.isoformat()}

    logger.info("⏳ [LinkExpiration] Starting expiration check...")

    # 1. Deactivate expired links
    expired = db.query(ShortenedLink).filter(
        ShortenedLink.deleted_at.is_(None),
        ShortenedLink.is_active.is_(True),
        ShortenedLink.expires_at.isnot(None),
        ShortenedLink.expires_at <= now,
    ).all()

    if expired:
        try:
            for link in expired:
                link.is_active = False
            db.commit()
            report["deactivated"] = len(expired)
            logger.info(f"🔒 [LinkExpiration] Deactivated {len(expired)} expired links")
        except Exception as e:
            db.rollback()
            logger.error(f"❌ [LinkExpiration] Could not deactivate expired links: {e}")
            report["errors"].append(f"deactivate: {e}")
            expired = []

    if expired:
        lines = "\n".join(
            f"- {l.title or l.short_code} ({l.short_code}) - expired on {l.expires_at.strftime('%m/%d/%Y')}"
            for l in expired
        )
        ok, error = email_service.notify_owner(
            db,
            f"{len(expired)} Shortened Link{_plural(len(expired))} Expired",
            "The following shortened links have been automatically deactivated due to expiration:\n\n"
            f"{lines}\n\nYou can reactivate these links from the admin dashboard if needed.",
        )
        if not ok:
            report["errors"].append(f"notify expired: {error}")

    # 2. Warn about links expiring soon
    expiring = LinkService(db).expiring_links(days=days, now=now)
    report["expiring"] = len(expiring)

    if expiring:
        items = []
        for l in expiring:
            days_left = math.ceil((l.expires_at - now).total_seconds() / 86400)
            items.append(
                f"- {l.title or l.short_code} ({l.short_code}) - expires in {days_left} day{_plural(days_left)} "
                f"({l.expires_at.strftime('%m/%d/%Y')})"
            )
        ok, error = email_service.notify_owner(
            db,
            f"{len(expiring)} Shortened Link{_plural(len(expiring))} Expiring Soon",
            f"The following shortened links will expire within the next {days} days:\n\n"
            + "\n".join(items)
            + "\n\nPlease review and extend expiration dates if needed from the admin dashboard.",
        )
        if not ok:
            report["errors"].append(f"notify expiring: {error}")

    logger.info(
        f"✅ [LinkExpiration] Done: {report['deactivated']} deactivated, {report['expiring']} expiring soon"
    )
    return report


def run():
    """Scheduler entry point: owns its session."""
    db = SessionLocal()
    try:
        return check_link_expiration(db)
    except Exception as e:
        db.rollback()
        logger.error(f"❌ [LinkExpiration] Job failed: {e}")
    finally:
        db.close()
