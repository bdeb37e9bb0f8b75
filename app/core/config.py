"""
Application configuration settings
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    PROJECT_NAME: str = "Tax Intake Routing API"
    VERSION: str = "1.0.0"
    # In-memory by default: nothing survives a restart unless a file URL is configured
    DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    TAX_YEAR: int = 2025
    SEED_STAFF_DIRECTORY: bool = True
    DOCUMENT_REMINDER_DELAY_HOURS: int = 24
    BATCH_REMINDER_LEAD_HOURS: int = 48
    DEFAULT_APPOINTMENT_TYPE: str = "virtual"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
