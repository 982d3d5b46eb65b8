from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./cryptonews.db"

    REDIS_URL: str = "redis://localhost:6379/0"

    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8080

    REFRESH_INTERVAL_SECONDS: int = 300
    HTTP_TIMEOUT_SECONDS: int = 30
    USER_AGENT: str = "crypto-news-aggregator/0.1"

    DESCRIPTION_MAX_CHARS: int = 200

    LOG_LEVEL: str = "INFO"

settings = Settings()
