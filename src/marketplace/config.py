"""Marketplace policy settings.

Loaded from environment variables prefixed with ``MARKETPLACE_`` (and from a
``.env`` file when present). Protean's own infrastructure configuration lives in
``domain.toml``; this module only carries business policy and API auth knobs.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MarketplaceSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MARKETPLACE_",
        env_file=".env",
        extra="ignore",
    )

    # Ordering policy
    tax_rate: float = Field(0.18, ge=0.0, description="Tax applied to the order subtotal (GST)")
    return_window_days: int = Field(7, ge=0, description="Days after delivery during which returns are accepted")
    order_number_prefix: str = Field("LL", description="Prefix of human-facing order numbers")
    currency: str = Field("INR", max_length=3)

    # API
    jwt_secret: str = Field("change-me-in-production", description="HS256 secret used to verify bearer tokens")
    jwt_algorithm: str = "HS256"
    default_page_size: int = Field(10, ge=1)
    max_page_size: int = Field(100, ge=1)
    dashboard_recent_orders: int = Field(10, ge=1)


@lru_cache
def get_settings() -> MarketplaceSettings:
    """Return the cached settings instance."""
    return MarketplaceSettings()
