import logging
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Optional
from urllib.parse import urlparse, urlencode, parse_qsl, urlunparse

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from foreclosure_hub.core.config import settings
from foreclosure_hub.models.link import ShortenedLink, LinkClick

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_letters + string.digits
CODE_LENGTH = 6
MAX_CODE_ATTEMPTS = 10

UTM_FIELDS = ["utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content"]


class InvalidUrl(ValueError):
    pass


class AliasTaken(Exception):
    pass


class CodeGenerationFailed(Exception):
    pass


class InvalidExpiry(ValueError):
    pass


# ---------------------------------------------------------
# HELPERS
# ---------------------------------------------------------
def normalize_url(raw: str) -> str:
    url = raw.strip()
    if "://" not in url:
        url = "https://" + url
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname or " " in parsed.netloc:
        raise InvalidUrl(f"Invalid URL: {raw}")
    return url


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Stored timestamps are naive UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def generate_code() -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def apply_utm(original_url: str, link_utms: dict, request_utms: dict) -> str:
    """
    Link UTMs are applied first; UTMs on the incoming request override them.
    Only the overridden UTM keys are replaced, every other query pair is kept as is.
    """
    overrides = {}
    for source in (link_utms, request_utms):
        for key in UTM_FIELDS:
            if source.get(key):
                overrides[key] = source[key]

    parsed = urlparse(original_url)
    pairs, placed = [], set()
    for key, value in parse_qsl(parsed.query, keep_blank_values=True):
        if key in overrides:
            # The first occurrence takes the new value, repeats are dropped
            if key in placed:
                continue
            value = overrides[key]
            placed.add(key)
        pairs.append((key, value))
    pairs += [(key, value) for key, value in overrides.items() if key not in placed]
    return urlunparse(parsed._replace(query=urlencode(pairs)))


def parse_user_agent(user_agent: Optional[str]):
    """Returns (device_type, browser, os) from a raw User-Agent header."""
    ua = (user_agent or "").lower()
    if not ua:
        return "unknown", "unknown", "unknown"

    if "ipad" in ua or "tablet" in ua or ("android" in ua and "mobile" not in ua):
        device = "tablet"
    elif "mobile" in ua or "iphone" in ua:
        device = "mobile"
    else:
        device = "desktop"

    # Order matters: Edge and Opera also advertise Chrome, Chrome advertises Safari
    if "edg/" in ua:
        browser = "Edge"
    elif "opr/" in ua or "opera" in ua:
        browser = "Opera"
    elif "firefox" in ua or "fxios" in ua:
        browser = "Firefox"
    elif "chrome" in ua or "crios" in ua:
        browser = "Chrome"
    elif "safari" in ua:
        browser = "Safari"
    else:
        browser = "Other"

    if "iphone" in ua or "ipad" in ua:
        os_name = "iOS"
    elif "android" in ua:
        os_name = "Android"
    elif "windows" in ua:
        os_name = "Windows"
    elif "mac os" in ua or "macintosh" in ua:
        os_name = "macOS"
    elif "linux" in ua:
        os_name = "Linux"
    else:
        os_name = "Other"

    return device, browser, os_name


def short_url(link: ShortenedLink) -> str:
    return f"{settings.SHORT_LINK_BASE_URL.rstrip('/')}/l/{link.custom_alias or link.short_code}"


class LinkService:
    def __init__(self, db: Session):
        self.db = db

    def _live(self):
        return self.db.query(ShortenedLink).filter(ShortenedLink.deleted_at.is_(None))

    def _code_in_use(self, code: str) -> bool:
        # Deleted links keep their codes reserved
        return self.db.query(ShortenedLink.id).filter(
            or_(ShortenedLink.short_code == code, ShortenedLink.custom_alias == code)
        ).first() is not None

    # ---------------------------------------------------------
    # 1. CREATE / UPDATE / DELETE
    # ---------------------------------------------------------
    def create_link(self, data: dict, created_by: Optional[str] = None) -> ShortenedLink:
        data = dict(data)
        data["original_url"] = normalize_url(data["original_url"])
        data["expires_at"] = to_naive_utc(data.get("expires_at"))

        alias = data.get("custom_alias")
        if alias and self._code_in_use(alias):
            raise AliasTaken(f"Alias '{alias}' is already in use")

        for _ in range(MAX_CODE_ATTEMPTS):
            code = generate_code()
            if not self._code_in_use(code):
                break
        else:
            logger.error("[Links] Could not generate a unique short code")
            raise CodeGenerationFailed("Could not generate a unique short code")

        link = ShortenedLink(**data, short_code=code, created_by=created_by, clicks=0, is_active=True)
        self.db.add(link)
        self.db.commit()
        self.db.refresh(link)
        logger.info(f"🔗 Created short link {code} -> {link.original_url}")
        return link

    def update_link(self, link: ShortenedLink, changes: dict) -> ShortenedLink:
        changes = dict(changes)
        if "original_url" in changes:
            changes["original_url"] = normalize_url(changes["original_url"] or "")
        if "expires_at" in changes:
            changes["expires_at"] = to_naive_utc(changes["expires_at"])

        # Switching a link back on follows the same expiry rule as reactivate()
        if changes.get("is_active") and not link.is_active:
            expires_at = changes.get("expires_at", link.expires_at)
            if expires_at is not None and expires_at <= datetime.utcnow():
                raise InvalidExpiry("Link has expired; set a future expiry to reactivate it")

        for field, value in changes.items():
            setattr(link, field, value)
        self.db.commit()
        self.db.refresh(link)
        return link

    def delete_link(self, link: ShortenedLink):
        link.deleted_at = datetime.utcnow()
        link.is_active = False
        self.db.commit()

    def reactivate(self, link: ShortenedLink, expires_at: Optional[datetime] = None) -> ShortenedLink:
        expires_at = to_naive_utc(expires_at)
        if expires_at is not None and expires_at <= datetime.utcnow():
            raise InvalidExpiry("New expiry must be in the future")
        link.is_active = True
        link.expires_at = expires_at
        self.db.commit()
        self.db.refresh(link)
        return link

    # ---------------------------------------------------------
    # 2. QUERIES
    # ---------------------------------------------------------
    def get(self, link_id: int) -> Optional[ShortenedLink]:
        return self._live().filter(ShortenedLink.id == link_id).first()

    def resolve(self, code: str) -> Optional[ShortenedLink]:
        return self._live().filter(
            or_(ShortenedLink.short_code == code, ShortenedLink.custom_alias == code)
        ).first()

    def list_links(self, include_expired: bool = False, campaign_id: Optional[int] = None):
        query = self._live()
        if not include_expired:
            now = datetime.utcnow()
            query = query.filter(
                ShortenedLink.is_active.is_(True),
                or_(ShortenedLink.expires_at.is_(None), ShortenedLink.expires_at > now),
            )
        if campaign_id is not None:
            query = query.filter(ShortenedLink.campaign_id == campaign_id)
        return query.order_by(ShortenedLink.created_at.desc(), ShortenedLink.id.desc()).all()

    def expiring_links(self, days: int = 7, now: Optional[datetime] = None):
        now = now or datetime.utcnow()
        return self._live().filter(
            ShortenedLink.is_active.is_(True),
            ShortenedLink.expires_at.isnot(None),
            ShortenedLink.expires_at > now,
            ShortenedLink.expires_at <= now + timedelta(days=days),
        ).order_by(ShortenedLink.expires_at.asc()).all()

    @staticmethod
    def is_expired(link: ShortenedLink, now: Optional[datetime] = None) -> bool:
        return link.expires_at is not None and link.expires_at < (now or datetime.utcnow())

    # ---------------------------------------------------------
    # 3. REDIRECT & TRACKING
    # ---------------------------------------------------------
    def redirect_url(self, link: ShortenedLink, request_utms: dict) -> str:
        link_utms = {key: getattr(link, key) for key in UTM_FIELDS}
        return apply_utm(link.original_url, link_utms, request_utms)

    def track_click(self, link: ShortenedLink, ip_address=None, user_agent=None, referer=None, session_id=None):
        """Records the click. Failures are logged and swallowed so the redirect still happens."""
        try:
            device, browser, os_name = parse_user_agent(user_agent)
            link.clicks = (link.clicks or 0) + 1
            self.db.add(LinkClick(
                short_code=link.short_code,
                ip_address=ip_address,
                user_agent=user_agent,
                referer=referer,
                session_id=session_id,
                device_type=device,
                browser=browser,
                os=os_name,
            ))
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"[Links] Failed to track click for {link.short_code}: {e}")

    # ---------------------------------------------------------
    # 4. ANALYTICS
    # ---------------------------------------------------------
    def _grouped(self, column, code: str, limit: Optional[int] = None):
        query = (
            self.db.query(column, func.count(LinkClick.id))
            .filter(LinkClick.short_code == code)
            .group_by(column)
            .order_by(func.count(LinkClick.id).desc())
        )
        if limit:
            query = query.limit(limit)
        return [{"label": str(label) if label else "direct", "count": count} for label, count in query.all()]

    def stats(self, link: ShortenedLink):
        code = link.short_code
        total = self.db.query(func.count(LinkClick.id)).filter(LinkClick.short_code == code).scalar() or 0
        unique = self.db.query(func.count(func.distinct(LinkClick.ip_address))).filter(
            LinkClick.short_code == code
        ).scalar() or 0

        day = func.date(LinkClick.clicked_at)
        by_day = (
            self.db.query(day, func.count(LinkClick.id))
            .filter(LinkClick.short_code == code)
            .group_by(day)
            .order_by(day)
            .all()
        )

        return {
            "total_clicks": total,
            "unique_visitors": unique,
            "clicks_by_day": [{"label": str(d)[:10], "count": c} for d, c in by_day],
            "clicks_by_device": self._grouped(LinkClick.device_type, code),
            "clicks_by_browser": self._grouped(LinkClick.browser, code),
            "top_referers": self._grouped(LinkClick.referer, code, limit=10),
        }
