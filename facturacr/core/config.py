"""
Configuration management for the Costa Rica electronic document toolkit
"""
from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Project info
    PROJECT_NAME: str = "Costa Rica Electronic Documents"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # Consecutive number defaults
    DEFAULT_HEADQUARTERS: str = "001"
    DEFAULT_TERMINAL: str = "00001"

    # Offset applied to naive datetimes before emission (Costa Rica is UTC-6)
    DEFAULT_UTC_OFFSET_HOURS: int = -6

    # Regulation cited by every document
    REGULATION_NUMBER: str = "DGT-R-48-2016"
    REGULATION_DATE: str = "07-10-2016 08:00:00"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Only json and text formatters exist."""
        if v.lower() not in ("json", "text"):
            raise ValueError("LOG_FORMAT must be 'json' or 'text'")
        return v.lower()

    model_config = ConfigDict(
        env_file=[".env.local", ".env"],
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
