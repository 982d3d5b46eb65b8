from pydantic import BaseModel

class ArticleOut(BaseModel):
    title: str
    link: str
    description: str
    source: str
    pub_date: str
    timestamp: int

class HealthOut(BaseModel):
    status: str
    time: str

class RefreshOut(BaseModel):
    status: str
