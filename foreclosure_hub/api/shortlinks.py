import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from foreclosure_hub.core.config import settings
from foreclosure_hub.core.database import get_db
from foreclosure_hub.services.link_service import LinkService, UTM_FIELDS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Short Links"])

PAGE = """<!DOCTYPE html>
<html>
<head>
  <title>{title} - EnterActDFW</title>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <style>
    body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; display: flex;
           align-items: center; justify-content: center; min-height: 100vh; margin: 0;
           background: {background}; color: white; }}
    .container {{ text-align: center; padding: 2rem; max-width: 500px; }}
    h1 {{ font-size: 3rem; margin: 0 0 1rem 0; }}
    p {{ font-size: 1.2rem; margin: 0 0 2rem 0; opacity: 0.9; }}
    a {{ display: inline-block; padding: 0.75rem 2rem; background: white; color: #333;
        text-decoration: none; border-radius: 8px; font-weight: 600; }}
  </style>
</head>
<body>
  <div class="container">
    <h1>{heading}</h1>
    <p>{message}</p>
    <a href="{site}">Visit EnterActDFW</a>
  </div>
</body>
</html>"""


def _page(status_code: int, title: str, heading: str, message: str, background: str) -> HTMLResponse:
    html = PAGE.format(title=title, heading=heading, message=message, background=background, site=settings.SITE_URL)
    return HTMLResponse(content=html, status_code=status_code)


def not_found_page():
    return _page(
        404, "Link Not Found", "404",
        "This shortened link doesn't exist or has been removed.",
        "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
    )


def expired_page():
    return _page(
        410, "Link Expired", "Link Expired",
        "This shortened link has expired and is no longer available.",
        "linear-gradient(135deg, #f093fb 0%, #f5576c 100%)",
    )


@router.get("/l/{code}", include_in_schema=False)
def follow_short_link(code: str, request: Request, db: Session = Depends(get_db)):
    service = LinkService(db)
    link = service.resolve(code)
    if not link:
        return not_found_page()

    if not link.is_active or service.is_expired(link):
        return expired_page()

    request_utms = {key: request.query_params.get(key) for key in UTM_FIELDS}
    target = service.redirect_url(link, request_utms)

    service.track_click(
        link,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        referer=request.headers.get("referer"),
        session_id=request.cookies.get("session_id"),
    )

    return RedirectResponse(url=target, status_code=302)
