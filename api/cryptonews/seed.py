import logging
from sqlalchemy.orm import Session
from sqlalchemy import select
from .db import SessionLocal, init_db
from .models import Source
from .settings import settings

log = logging.getLogger(__name__)

NEWS_SOURCES = [
    ("CoinDesk", "https://www.coindesk.com/arc/outboundfeeds/rss/"),
    ("CryptoSlate", "https://cryptoslate.com/feed/"),
    ("Cointelegraph", "https://cointelegraph.com/rss"),
]

def ensure_source(db: Session, name: str, endpoint: str, interval: int | None = None):
    interval = interval or settings.REFRESH_INTERVAL_SECONDS
    existing = db.execute(select(Source).where(Source.name == name)).scalar_one_or_none()
    if existing:
        # Update in place if anything changed so seeds converge
        changed = False
        if existing.endpoint != endpoint:
            existing.endpoint = endpoint; existing.last_etag = None; changed = True
        if existing.poll_interval_seconds != interval:
            existing.poll_interval_seconds = interval; changed = True
        if changed:
            db.add(existing); db.commit(); db.refresh(existing)
        return existing
    s = Source(
        name=name,
        endpoint=endpoint,
        poll_interval_seconds=interval,
        enabled=True,
    )
    db.add(s); db.commit(); db.refresh(s)
    return s

def seed_sources(db: Session) -> list[Source]:
    return [ensure_source(db, name, url) for name, url in NEWS_SOURCES]

def main():
    logging.basicConfig(level=settings.LOG_LEVEL)
    init_db()
    db = SessionLocal()
    try:
        sources = seed_sources(db)
        log.info("Seeded %d sources", len(sources))
    finally:
        db.close()

if __name__ == "__main__":
    main()
