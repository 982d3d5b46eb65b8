import os
import tempfile
from datetime import datetime

_tmpdir = tempfile.mkdtemp(prefix="cryptonews_test_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmpdir, 'test.db')}"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from cryptonews.db import Base, SessionLocal, engine, init_db  # noqa: E402
from cryptonews.main import app  # noqa: E402
from cryptonews.models import Article, Source  # noqa: E402
from cryptonews.workers import article_hash  # noqa: E402


@pytest.fixture
def db():
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_source(db):
    def _make(name="CoinDesk", endpoint="https://example.com/rss", enabled=True):
        s = Source(name=name, endpoint=endpoint, enabled=enabled)
        db.add(s)
        db.commit()
        db.refresh(s)
        return s
    return _make


@pytest.fixture
def make_article(db):
    def _make(source, title, published_at, description="", link=None, pub_date=""):
        link = link or f"https://example.com/{title.lower().replace(' ', '-')}"
        a = Article(
            source_id=source.id,
            title=title,
            link=link,
            description=description,
            pub_date=pub_date,
            published_at=published_at,
            fetched_at=datetime(2024, 1, 1),
            hash_sha256=article_hash(title, link),
        )
        db.add(a)
        db.commit()
        return a
    return _make
