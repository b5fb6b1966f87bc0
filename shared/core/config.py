import os
from typing import List, Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

    DB_USER: Optional[str] = os.getenv("DB_USER")
    DB_PASS: Optional[str] = os.getenv("DB_PASS")
    DB_HOST: Optional[str] = os.getenv("DB_HOST")
    DB_PORT: Optional[str] = os.getenv("DB_PORT")
    ASSET_DB_NAME: Optional[str] = os.getenv("ASSET_DB_NAME")
    # full URL override, e.g. sqlite:///./assets.db for local runs
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: List[str] = ["http://localhost:8080"]

    # Asset tag generation retries on a (org_id, asset_tag) collision
    ASSET_TAG_RETRY_LIMIT: int = int(os.getenv("ASSET_TAG_RETRY_LIMIT", 5))
    IMPORT_PREVIEW_MAX_ROWS: int = int(
        os.getenv("IMPORT_PREVIEW_MAX_ROWS", 100))

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()

ASSET_DATABASE_URL = settings.DATABASE_URL or (
    f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.ASSET_DB_NAME}"
)
