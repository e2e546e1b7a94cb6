from typing import Optional

from foreclosure_hub.content.library import POSTS, FAQ

SUMMARY_FIELDS = ("slug", "title", "category", "excerpt", "published_date", "read_minutes", "tags")


def _summary(post: dict) -> dict:
    return {field: post[field] for field in SUMMARY_FIELDS}


def list_posts(category: Optional[str] = None) -> list[dict]:
    posts = [p for p in POSTS if not category or p["category"] == category]
    return [_summary(p) for p in sorted(posts, key=lambda p: p["published_date"], reverse=True)]


def get_post(slug: str) -> Optional[dict]:
    return next((dict(p) for p in POSTS if p["slug"] == slug), None)


def list_faq(category: Optional[str] = None) -> list[dict]:
    return [f for f in FAQ if not category or f["category"] == category]


def search(query: str) -> dict:
    """Case-insensitive match on every word of the query."""
    words = [w for w in query.lower().split() if w]

    def matches(*texts):
        haystack = " ".join(texts).lower()
        return all(w in haystack for w in words)

    if not words:
        return {"query": query, "posts": [], "faq": []}

    posts = [
        _summary(p) for p in POSTS
        if matches(p["title"], p["excerpt"], " ".join(p["tags"]), " ".join(p["body"]))
    ]
    faq = [f for f in FAQ if matches(f["question"], f["answer"])]
    return {"query": query, "posts": posts, "faq": faq}
