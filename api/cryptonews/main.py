import logging
from fastapi import FastAPI, Depends, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session
from datetime import datetime, timezone
from .db import SessionLocal, init_db
from .schemas import ArticleOut, HealthOut, RefreshOut
from .search import search_articles, build_index_context
from .settings import settings
from .templates import render
from .workers import schedule_now  # for manual triggers

log = logging.getLogger(__name__)

app = FastAPI(title="Crypto News Aggregator")

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@app.on_event("startup")
def startup_event():
    logging.basicConfig(level=settings.LOG_LEVEL)
    log.info("Starting Cryptocurrency News Aggregator...")
    init_db()

@app.get("/", response_class=HTMLResponse)
def index(db: Session = Depends(get_db), q: str | None = Query(None)):
    return render("index.html", build_index_context(db, q))

@app.get("/api/news", response_model=list[ArticleOut])
def api_news(db: Session = Depends(get_db), q: str | None = Query(None)):
    return search_articles(db, q=q)

@app.post("/admin/refresh", response_model=RefreshOut)
def admin_refresh():
    schedule_now()
    return {"status": "scheduled"}

@app.get("/healthz", response_model=HealthOut)
def healthz():
    return {"status": "ok", "time": datetime.now(timezone.utc).isoformat()}

def run():
    import uvicorn
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)

if __name__ == "__main__":
    run()
