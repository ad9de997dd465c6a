from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = None
    PGHOST: Optional[str] = None
    PGDATABASE: str = "transport_booking"
    PGUSER: str = "postgres"
    PGPASSWORD: str = ""
    PGSSLMODE: str = "require"
    SQL_ECHO: bool = False

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Application
    PROJECT_NAME: str = "Transport Booking System"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.PGHOST:
            return f"postgresql://{self.PGUSER}:{self.PGPASSWORD}@{self.PGHOST}/{self.PGDATABASE}?sslmode={self.PGSSLMODE}"
        return "sqlite:///./transport_booking.db"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
