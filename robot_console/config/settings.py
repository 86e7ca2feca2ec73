from pydantic_settings import BaseSettings
import os
import sys
from dotenv import load_dotenv
from loguru import logger

load_dotenv()


class Settings(BaseSettings):
    # Backend REST API
    BACKEND_API_URL: str = os.getenv("BACKEND_API_URL", "http://localhost:3000")
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "10"))
    PAGE_SIZE: int = int(os.getenv("PAGE_SIZE", "15"))

    # Realtime event channel
    REALTIME_URL: str = os.getenv("REALTIME_URL", "http://localhost:3003")
    REALTIME_ENABLED: bool = True
    REALTIME_RECONNECT_ATTEMPTS: int = 5
    REALTIME_RECONNECT_DELAY: float = 1.0

    # Dashboard
    DASHBOARD_REFRESH_MS: int = 3000
    NOTIFICATION_REFRESH_MS: int = 5000
    DISPLAY_TIMEZONE: str = os.getenv("DISPLAY_TIMEZONE", "Asia/Ho_Chi_Minh")

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()


def configure_logging(level=None):
    """Route loguru output to stderr at the configured level"""
    logger.remove()
    logger.add(sys.stderr, level=(level or settings.LOG_LEVEL).upper())
