from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from .settings import settings

class Base(DeclarativeBase):
    pass

def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")

def _connect_args(url: str) -> dict:
    # SQLite connections are shared with the server's threadpool
    if _is_sqlite(url):
        return {"check_same_thread": False}
    return {}

def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=_connect_args(settings.DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

if _is_sqlite(settings.DATABASE_URL):
    @event.listens_for(engine, "connect")
    def _sqlite_on_connect(dbapi_conn, connection_record):
        # SQLite's built-in lower() only folds ASCII
        dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)

def init_db():
    # Tables are created via models import side-effect
    from . import models  # noqa
    Base.metadata.create_all(bind=engine)
