from celery import Celery
from celery.utils.log import get_task_logger
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from .settings import settings
from .db import SessionLocal
from .ingest.rss import fetch_rss, FeedError
from .models import Source, Article
import hashlib

log = get_task_logger(__name__)

celery_app = Celery(__name__, broker=settings.REDIS_URL, backend=settings.REDIS_URL)
celery_app.conf.timezone = "UTC"

celery_app.conf.beat_schedule = {
    "refresh-news": {
        "task": "cryptonews.workers.task_refresh_news",
        "schedule": settings.REFRESH_INTERVAL_SECONDS,
    },
}

def schedule_now():
    task_refresh_news.delay()

def article_hash(title: str, link: str) -> bytes:
    return hashlib.sha256((title + link).encode()).digest()

def _upsert_articles(db: Session, articles: list[dict], source_id: int) -> int:
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    seen: set[bytes] = set()
    added = 0
    for n in articles:
        h = article_hash(n.get("title", ""), n.get("link", ""))
        if h in seen:
            continue
        seen.add(h)
        # unique hash_sha256 rejects rows already stored, including by an overlapping refresh
        try:
            with db.begin_nested():
                db.add(Article(
                    source_id=source_id,
                    title=n["title"],
                    link=n["link"],
                    description=n.get("description", ""),
                    pub_date=n.get("pub_date", ""),
                    published_at=n.get("published_at") or now,
                    fetched_at=now,
                    hash_sha256=h,
                ))
        except IntegrityError:
            continue
        added += 1
    db.commit()
    return added

def refresh_source(db: Session, source: Source) -> int:
    result = fetch_rss(source)
    added = _upsert_articles(db, result.articles, source.id)
    source.last_etag = result.etag
    source.last_modified = datetime.now(timezone.utc).replace(tzinfo=None)
    db.add(source)
    db.commit()
    return added

def refresh_all(db: Session) -> int:
    total = 0
    sources = db.execute(select(Source).where(Source.enabled == True)).scalars().all()  # noqa: E712
    for s in sources:
        try:
            added = refresh_source(db, s)
        except FeedError as exc:
            db.rollback()
            log.warning("Error fetching from %s: %s", s.name, exc)
            continue
        log.info("%s: %d new article(s)", s.name, added)
        total += added
    return total

@celery_app.task(name="cryptonews.workers.task_refresh_news")
def task_refresh_news():
    log.info("Refreshing news...")
    db = SessionLocal()
    try:
        return refresh_all(db)
    finally:
        db.close()
