import os
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(ROOT_DIR / ".env")


class Settings:
    APP_TITLE: str = os.getenv("APP_TITLE", "Habitgrid API")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./habitgrid.db")
    AUTO_CREATE_SCHEMA: bool = os.getenv("AUTO_CREATE_SCHEMA", "1") == "1"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    CORS_ORIGINS: list[str] = [
        item.strip()
        for item in os.getenv("CORS_ORIGINS", "*").split(",")
        if item.strip()
    ]


settings = Settings()
