"""Pricing Service Configuration"""

from typing import Optional
from functools import lru_cache

from pydantic_settings import BaseSettings

from ..models.pricing import PricingMode


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Bookstore Pricing"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Pricing mode: "local" never contacts the backend
    pricing_mode: PricingMode = PricingMode.LOCAL

    # Backend (membership pricing + stacked discount APIs)
    api_base_url: str = "http://localhost:5197"
    api_timeout: float = 10.0  # seconds
    api_token: Optional[str] = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def api_enabled(self) -> bool:
        """Check if API-assisted pricing is switched on"""
        return self.pricing_mode == PricingMode.API


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
