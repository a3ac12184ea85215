"""
ShiftSync - Configuration Settings

This module handles all application configuration using Pydantic Settings.
Environment variables are loaded from .env file.
"""

from datetime import date
from decimal import Decimal
from functools import lru_cache
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ===========================================
    # APPLICATION CONFIGURATION
    # ===========================================
    app_name: str = "ShiftSync"
    app_env: str = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # ===========================================
    # DATABASE CONFIGURATION
    # Any SQLAlchemy async URL works; SQLite is the single-tenant default.
    # ===========================================
    database_url: str = "sqlite+aiosqlite:///./shiftsync.db"

    # ===========================================
    # JWT AUTHENTICATION
    # ===========================================
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 480

    # ===========================================
    # PAYROLL & ATTENDANCE RULES
    # ===========================================
    hourly_ot_rate: Decimal = Decimal("5")
    week_off_hourly_rate: Decimal = Decimal("5")
    holiday_bonus_flat: Decimal = Decimal("50")
    proration_divisor: int = 30
    week_off_weekday: int = 6  # date.weekday(): Monday=0 ... Sunday=6
    standard_shift_hours: Decimal = Decimal("8")
    default_leave_balance: int = 30
    currency: str = "AED"

    # ===========================================
    # REFERENCE DATA
    # ===========================================
    default_companies: List[str] = Field(default_factory=lambda: [
        "Al Reem Cosmetics & Beauty Equipments Trading",
        "Al Reem Henna And Beauty Saloon. Branch",
        "Al Reem Henna & Beauty Saloon",
        "Al Reem Henna And Beauty Saloon Branch 2",
        "Salina Henna & Beauty Saloon",
        "Naqsh Al Reem Heena & Beauty",
        "Bait Al Reem Hena And Beauty Saloon O.P.C L.L.C",
        "Saloon Bait Alnaqsha L L C",
    ])
    # Holidays the earnings calculator always knows about, stored or not
    default_public_holidays: List[date] = Field(default_factory=lambda: [
        date(2025, 12, 2),
        date(2025, 12, 25),
    ])

    # ===========================================
    # SYSTEM USERS
    # ===========================================
    default_admin_username: str = "admin"
    default_admin_password: str = "admin123"
    default_admin_name: str = "System Administrator"
    creator_username: Optional[str] = None
    creator_password: Optional[str] = None
    creator_name: str = "Creator"

    # ===========================================
    # CORS SETTINGS
    # ===========================================
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:8000"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins string into list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env.lower() == "development"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to avoid reading .env file on every call.
    """
    return Settings()


# Export settings instance
settings = get_settings()
