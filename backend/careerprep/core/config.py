"""
Application Configuration
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from functools import lru_cache


class Settings(BaseSettings):
    """Application Settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra='ignore'
    )

    # App Configuration
    APP_NAME: str = "CareerPrep"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Database Configuration
    DATABASE_URL: str

    # JWT Configuration
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days

    # Passwords
    PASSWORD_MIN_LENGTH: int = 6
    BCRYPT_ROUNDS: int = 12

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # File Upload
    UPLOAD_DIR: str = "/app/uploads"
    MAX_UPLOAD_SIZE: int = 10485760  # 10MB
    ALLOWED_MIME_TYPES: List[str] = ["application/pdf"]

    # OpenAI
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    PARSING_VERSION: str = "1.0.0"

    # Job search (SerpAPI google_jobs)
    SERPAPI_KEY: Optional[str] = None
    SERPAPI_URL: str = "https://serpapi.com/search.json"
    SERPAPI_LOCATION: str = "India"
    JOB_SEARCH_TIMEOUT: float = 30.0

    # Job Matching
    JOB_MATCH_SAVE_LIMIT: int = 20
    JOB_MATCH_RESPONSE_LIMIT: int = 10
    JOB_SUGGESTION_LIMIT: int = 5

    # Fit buckets on the 0-100 match score
    FIT_THRESHOLDS: dict = {
        "excellent": 80,
        "good": 60,
        "moderate": 40,
    }

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
