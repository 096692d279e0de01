"""
Configuration utilities and settings for announce.
Handles environment variables, settings validation and transport defaults.
"""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

from announce.version import __version__

logger = structlog.get_logger()


class AnnounceSettings(BaseSettings):
    """
    Runtime settings with validation.

    All settings are loaded from ANNOUNCE_* environment variables or a .env
    file. None of them are required; every value has a working default.
    """

    # HTTP transport
    http_timeout: int = Field(
        default=30,
        description="Total timeout in seconds for one HTTP call. Must be between 1 and 300 seconds.",
        ge=1,
        le=300
    )
    user_agent: str = Field(
        default=f"announce/{__version__}",
        description="User-Agent header sent with every HTTP request."
    )

    # Dispatch
    max_concurrent_sends: int = Field(
        default=4,
        description="Maximum number of destinations sent concurrently in best-effort mode. Must be between 1 and 64.",
        ge=1,
        le=64
    )
    default_policy: str = Field(
        default="fail_fast",
        description="Dispatch policy used when the caller does not pass one: fail_fast or best_effort."
    )

    # Logging
    log_level: str = Field(
        default="info",
        description="Logging level: debug, info, warning, error, critical"
    )

    # Discord
    discord_webhook_base: str = Field(
        default="https://discord.com/api/webhooks",
        description="Base URL that webhook id and token are appended to."
    )

    # Desktop notification bus
    dbus_app_name: str = Field(
        default="Announce",
        description="Application name used when the dbus:// URI carries none."
    )
    dbus_app_icon: str = Field(
        default="dialog-information",
        description="Icon name used when the dbus:// URI carries none."
    )
    dbus_summary: str = Field(
        default="Announce",
        description="Notification summary used when the message carries no description."
    )
    dbus_expire_timeout: int = Field(
        default=-1,
        description="Expiry in milliseconds; -1 leaves it to the notification server, 0 never expires.",
        ge=-1
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level setting."""
        valid_levels = ['debug', 'info', 'warning', 'error', 'critical']
        if v.lower() not in valid_levels:
            raise ValueError(
                f"Invalid log_level '{v}'. Must be one of: {', '.join(valid_levels)}"
            )
        return v.lower()

    @field_validator('default_policy')
    @classmethod
    def validate_default_policy(cls, v):
        """Validate dispatch policy setting."""
        valid_policies = ['fail_fast', 'best_effort']
        if v.lower() not in valid_policies:
            raise ValueError(
                f"Invalid default_policy '{v}'. Must be one of: {', '.join(valid_policies)}"
            )
        return v.lower()

    @field_validator('discord_webhook_base')
    @classmethod
    def validate_webhook_base(cls, v):
        """Strip trailing slashes so path joining stays predictable."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError(f"discord_webhook_base must be an http(s) URL, got '{v}'")
        return v.rstrip('/')

    model_config = SettingsConfigDict(
        env_prefix="ANNOUNCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


# Global settings instance
_settings: Optional[AnnounceSettings] = None


def get_settings() -> AnnounceSettings:
    """Get global settings instance."""
    global _settings
    if _settings is None:
        _settings = AnnounceSettings()
    return _settings


def reload_settings() -> AnnounceSettings:
    """Reload settings from environment variables.

    Forces a reload of all settings by recreating the global settings instance.
    Useful after environment variable changes.

    Returns:
        Newly loaded AnnounceSettings instance.
    """
    global _settings
    _settings = AnnounceSettings()
    logger.debug("Settings reloaded", log_level=_settings.log_level)
    return _settings
