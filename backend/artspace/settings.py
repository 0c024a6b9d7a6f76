"""Application settings and configuration."""
import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from artspace.config_store import ConfigStore


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "ArtSphere API"
    app_version: str = "0.1.0"
    debug: bool = False
    api_v1_prefix: str = "/v1"

    # Storage (one SQLite file plays the role of the browser profile)
    database_url: str = "sqlite:///./artspace.db"
    database_echo: bool = False
    storage_quota_bytes: int = 5 * 1024 * 1024  # same order as browser local storage
    seed_demo_data: bool = True


    # Gemini (artwork descriptions and placeholder images)
    gemini_api_key: str = ""
    llm_default_text_model: str = "gemini-2.0-flash"
    llm_backup_text_model: str = "gemini-2.5-flash"
    llm_default_image_model: str = "gemini-2.5-flash-image"
    generation_timeout_s: float = 30.0

    # Images stored inline as data URLs; keep them small
    image_max_width: int = 800
    image_jpeg_quality: int = 70

    # Checkout
    checkout_processing_delay_s: float = 0.0  # simulated gateway latency
    reopen_artwork_on_cancel: bool = True


# Config file path: CONFIG_FILE env or default backend/config.yaml (config file is master over env)
_config_file = os.environ.get("CONFIG_FILE") or str(
    Path(__file__).resolve().parent.parent / "config.yaml"
)
_config_store = ConfigStore(Settings, _config_file)


class _SettingsProxy:
    """Proxy so 'settings.attr' always returns the current value from the config store."""

    def __getattr__(self, name: str):
        return getattr(_config_store.get_settings(), name)


settings: Settings = _SettingsProxy()  # type: ignore[assignment]


def get_settings() -> Settings:
    """Return current Settings snapshot."""
    return _config_store.get_settings()
