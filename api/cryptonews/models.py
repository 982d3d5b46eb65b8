from sqlalchemy import Column, Integer, Text, Boolean, ForeignKey, TIMESTAMP, LargeBinary
from sqlalchemy.orm import relationship
from .db import Base

class Source(Base):
    __tablename__ = "sources"
    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    endpoint = Column(Text, nullable=False)
    enabled = Column(Boolean, default=True)
    poll_interval_seconds = Column(Integer, default=300)
    last_etag = Column(Text)
    last_modified = Column(TIMESTAMP)  # last successful fetch, UTC

class Article(Base):
    __tablename__ = "articles"
    id = Column(Integer, primary_key=True)
    source_id = Column(Integer, ForeignKey("sources.id"), nullable=False)
    title = Column(Text, nullable=False)
    link = Column(Text, nullable=False)
    description = Column(Text, default="")
    pub_date = Column(Text, default="")  # as published by the feed
    published_at = Column(TIMESTAMP, index=True)
    fetched_at = Column(TIMESTAMP)
    hash_sha256 = Column(LargeBinary, unique=True)

    source = relationship("Source")
