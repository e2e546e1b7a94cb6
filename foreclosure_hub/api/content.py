from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from foreclosure_hub.schemas.content import PostSummary, Post, FaqEntry, SearchResponse
from foreclosure_hub.services import content_service

router = APIRouter(prefix="/api/content", tags=["Content"])


@router.get("/posts", response_model=List[PostSummary])
def list_posts(category: Optional[str] = None):
    return content_service.list_posts(category)


@router.get("/posts/{slug}", response_model=Post)
def get_post(slug: str):
    post = content_service.get_post(slug)
    if not post:
        raise HTTPException(status_code=404, detail="Article not found")
    return post


@router.get("/faq", response_model=List[FaqEntry])
def list_faq(category: Optional[str] = None):
    return content_service.list_faq(category)


@router.get("/search", response_model=SearchResponse)
def search(q: str = Query(..., min_length=1, max_length=200)):
    return content_service.search(q)
