from pydantic import BaseModel
from typing import List, Optional

class PostSummary(BaseModel):
    slug: str
    title: str
    category: str
    excerpt: str
    published_date: str
    read_minutes: int
    tags: List[str]

class Post(PostSummary):
    body: List[str]
    related: List[str] = []

class FaqEntry(BaseModel):
    question: str
    answer: str
    category: Optional[str] = None

class SearchResponse(BaseModel):
    query: str
    posts: List[PostSummary]
    faq: List[FaqEntry]
