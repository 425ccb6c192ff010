"""
Application settings using Pydantic BaseSettings.
"""

from typing import Any, List, Optional, Union

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    APP_NAME: str = "FixItNow Job Lifecycle Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: Union[str, List[str]] = "*"

    # Database
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_SERVER: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    DATABASE_URL: Optional[str] = None
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20
    DATABASE_ECHO: bool = False

    # Redis / Queue
    REDIS_URL: str = "redis://localhost:6379/0"
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/0"
    CELERY_TASK_TIME_LIMIT: int = 600  # 10 minutes
    CELERY_TASK_SOFT_TIME_LIMIT: int = 480  # 8 minutes

    # Pricing and billing
    DEFAULT_CURRENCY: str = "INR"
    COMMISSION_RATE: float = 0.10
    CASH_COMMISSION_RATE: Optional[float] = None
    INVOICE_TAX_RATE: float = 0.18
    INVOICE_DUE_DAYS: int = 7
    MIN_PAYOUT_AMOUNT: float = 100.0

    # Concurrency
    OPTIMISTIC_LOCK_MAX_RETRIES: int = 3

    # Background tasks
    OVERDUE_INVOICE_CHECK_INTERVAL_SECONDS: int = 3600
    OVERDUE_INVOICE_BATCH_SIZE: int = 200

    # Monitoring
    ENABLE_METRICS: bool = True

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str):
            if v == "*":
                return ["*"]
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, list):
            return v
        return ["*"]

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> Any:
        if isinstance(v, str):
            return v
        # Build from individual components if DATABASE_URL is not provided
        values = info.data
        user = values.get("POSTGRES_USER") or "fixitnow"
        password = values.get("POSTGRES_PASSWORD") or "fixitnow"
        host = values.get("POSTGRES_SERVER") or "localhost"
        db = values.get("POSTGRES_DB") or "fixitnow"
        return f"postgresql+asyncpg://{user}:{password}@{host}:5432/{db}"

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ["development", "staging", "production", "test"]:
            raise ValueError(
                "Environment must be one of: development, staging, production, test"
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("COMMISSION_RATE", "CASH_COMMISSION_RATE", "INVOICE_TAX_RATE")
    @classmethod
    def validate_rate(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not 0 <= v <= 1:
            raise ValueError("Rates must be between 0 and 1")
        return v

    @property
    def cash_commission_rate(self) -> float:
        """Commission rate applied to cash-settled jobs."""
        if self.CASH_COMMISSION_RATE is None:
            return self.COMMISSION_RATE
        return self.CASH_COMMISSION_RATE

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "extra": "ignore",
        "validate_default": True,
    }


# Global settings instance
settings = Settings()
