"""
Configuration management for the Deal Splitter.

Values come from environment variables (optionally a .env file).
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Application configuration."""

    # Environment (dev, staging, prod)
    environment: str = "dev"
    port: int = 8080

    # External services
    tracker_api_url: str = "https://tracker.polarize.gg/api/v1"
    exchange_rate_url: str = "https://open.er-api.com/v6/latest/USD"
    request_timeout: float = 10.0
    live_exchange_rates: bool = True

    # Calculation settings
    restore_stake: bool = False

    # Export settings
    csv_locale: str = "en"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            environment=os.environ.get("ENVIRONMENT", "dev"),
            port=int(os.environ.get("PORT", 8080)),
            tracker_api_url=os.environ.get("TRACKER_API_URL", cls.tracker_api_url),
            exchange_rate_url=os.environ.get("EXCHANGE_RATE_URL", cls.exchange_rate_url),
            request_timeout=float(os.environ.get("REQUEST_TIMEOUT", cls.request_timeout)),
            live_exchange_rates=_env_bool("LIVE_EXCHANGE_RATES", True),
            restore_stake=_env_bool("RESTORE_STAKE", False),
            csv_locale=os.environ.get("CSV_LOCALE", "en"),
        )


_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config
