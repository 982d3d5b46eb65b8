import logging
import requests, feedparser
from bs4 import BeautifulSoup
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, List, NamedTuple, Optional
from urllib.parse import urlsplit
from ..settings import settings

log = logging.getLogger(__name__)


class FeedError(Exception):
    """A feed could not be turned into articles."""

    def __init__(self, source_name: str, message: str):
        super().__init__(f"{source_name}: {message}")
        self.source_name = source_name


class FeedFetchError(FeedError):
    pass


class FeedParseError(FeedError):
    pass


class FeedResult(NamedTuple):
    articles: List[Dict[str, Any]]
    etag: Optional[str]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)

def _parse_pub_date(raw: Optional[str]) -> datetime:
    """RFC 2822 date as naive UTC; the current time when missing or unparseable."""
    if not raw:
        return _utcnow()
    try:
        dt = parsedate_to_datetime(raw)
    except (TypeError, ValueError):
        return _utcnow()
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)

def summarize(html: str, limit: int | None = None) -> str:
    limit = settings.DESCRIPTION_MAX_CHARS if limit is None else limit
    text = BeautifulSoup(html or "", "lxml").get_text(" ")
    text = " ".join(text.split())
    return text[:limit] + "..."

def _entry_html(e) -> str:
    html = e.get("summary", "") or e.get("description", "")
    if html:
        return html
    for c in e.get("content", []):
        if isinstance(c, dict) and c.get("value"):
            return c["value"]
    return ""

def _is_web_link(link: str) -> bool:
    return urlsplit(link).scheme.lower() in ("http", "https")

def parse_entries(content: bytes, source_name: str) -> List[Dict[str, Any]]:
    feed = feedparser.parse(content)
    if feed.bozo and not feed.entries:
        raise FeedParseError(source_name, f"malformed feed ({feed.get('bozo_exception')})")

    out = []
    for e in feed.entries:
        title = (e.get("title") or "").strip()
        link = (e.get("link") or "").strip()
        if not title or not link:
            continue
        if not _is_web_link(link):
            log.debug("%s: skipping entry with non-web link %r", source_name, link)
            continue
        pub_date = e.get("published") or e.get("updated") or ""
        out.append({
            "title": title,
            "link": link,
            "description": summarize(_entry_html(e)),
            "pub_date": pub_date,
            "published_at": _parse_pub_date(pub_date),
        })
    return out

def fetch_rss(source) -> FeedResult:
    headers = {"User-Agent": settings.USER_AGENT}
    if source.last_etag:
        headers["If-None-Match"] = source.last_etag
    try:
        r = requests.get(source.endpoint, timeout=settings.HTTP_TIMEOUT_SECONDS, headers=headers)
    except requests.RequestException as exc:
        raise FeedFetchError(source.name, f"request failed: {exc}") from exc
    if r.status_code == 304:
        log.debug("%s: not modified", source.name)
        return FeedResult([], source.last_etag)
    if not 200 <= r.status_code < 300:
        raise FeedFetchError(source.name, f"HTTP {r.status_code} from {source.endpoint}")

    articles = parse_entries(r.content, source.name)
    return FeedResult(articles, r.headers.get("ETag"))
