from datetime import datetime, timezone
from email.utils import format_datetime
from sqlalchemy.orm import Session
from sqlalchemy import select, func, desc, or_
from .models import Article, Source

def matches_search(q: str | None):
    """Case-insensitive substring filter over title, description and source name.

    An empty term matches everything. `%` and `_` in the term are literal.
    """
    if not q:
        return None
    term = q.lower()
    return or_(
        func.lower(Article.title).contains(term, autoescape=True),
        func.lower(Article.description).contains(term, autoescape=True),
        func.lower(Source.name).contains(term, autoescape=True),
    )

def _timestamp(dt: datetime | None) -> int:
    if dt is None:
        return 0
    return int(dt.replace(tzinfo=timezone.utc).timestamp())

def search_articles(db: Session, q: str | None = None, limit: int | None = None):
    stmt = (
        select(Article, Source.name)
        .join(Source, Article.source_id == Source.id)
        .order_by(desc(Article.published_at), desc(Article.id))
    )
    cond = matches_search(q)
    if cond is not None:
        stmt = stmt.where(cond)
    if limit:
        stmt = stmt.limit(limit)
    out = []
    for a, sname in db.execute(stmt).all():
        out.append({
            "source": sname,
            "title": a.title,
            "pub_date": a.pub_date or "",
            "description": a.description or "",
            "link": a.link,
            "timestamp": _timestamp(a.published_at),
        })
    return out

def last_updated(db: Session) -> str:
    ts = db.execute(select(func.max(Source.last_modified))).scalar_one_or_none()
    if ts is None:
        ts = datetime.now(timezone.utc)
    elif ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return format_datetime(ts)

def build_index_context(db: Session, q: str | None = None) -> dict:
    search_term = q or ""
    articles = search_articles(db, q=search_term)
    return {
        "search_term": search_term,
        "has_search": bool(search_term),
        "article_count": len(articles),
        "articles": articles,
        "last_updated": last_updated(db),
    }
