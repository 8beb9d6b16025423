# telework/core/config.py
from typing import List

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Telework Management API"
    API_V1_STR: str = "/api/v1"

    DATABASE_URL: str
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    CORS_ORIGINS: List[str] = ["*"]

    # Request/comment bounds shared by the DTOs and the lifecycle checks
    REASON_MIN_LENGTH: int = 10
    REASON_MAX_LENGTH: int = 500
    COMMENT_MAX_LENGTH: int = 500

    DAY_NAME_LOCALE: str = "fr"
    SEED_DEMO_DATA: bool = False
    LOG_LEVEL: str = "INFO"


settings = Settings()
