"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )
    app_timezone: str = Field(
        default="Africa/Nairobi",
        description="IANA timezone (or UTC±HH:MM offset) used for stored datetimes",
    )

    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending notification emails",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of notification emails",
        min_length=3,
    )
    twilio_account_sid: str | None = Field(default=None, description="Twilio account SID")
    twilio_auth_token: str | None = Field(default=None, description="Twilio auth token")
    twilio_sms_number: str | None = Field(
        default=None, description="Sender number used for SMS notifications"
    )

    compliance_warning_days: int = Field(default=30, gt=0)
    compliance_high_days: int = Field(default=7, ge=0)
    maintenance_mileage_interval_km: int = Field(default=10_000, gt=0)
    maintenance_mileage_warning_km: int = Field(default=8_000, gt=0)
    maintenance_interval_days: int = Field(default=90, gt=0)
    maintenance_warning_days: int = Field(default=75, gt=0)
    maintenance_due_window_days: int = Field(default=30, ge=0)
    maintenance_due_high_days: int = Field(default=7, ge=0)
    fuel_lookback_days: int = Field(default=7, gt=0)
    fuel_efficiency_floor_kmpl: float = Field(default=2.0, ge=0)
    fuel_relative_threshold: float = Field(default=0.8, gt=0, le=1)
    notification_ttl_days: int = Field(
        default=7,
        description="Days after which generated fleet notifications expire",
        gt=0,
    )

    @model_validator(mode="after")
    def _validate_channel_pairs(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        if self.maintenance_mileage_warning_km > self.maintenance_mileage_interval_km:
            raise ValueError(
                "MAINTENANCE_MILEAGE_WARNING_KM cannot exceed MAINTENANCE_MILEAGE_INTERVAL_KM"
            )
        if self.maintenance_warning_days > self.maintenance_interval_days:
            raise ValueError(
                "MAINTENANCE_WARNING_DAYS cannot exceed MAINTENANCE_INTERVAL_DAYS"
            )
        return self

    @property
    def sms_enabled(self) -> bool:
        return bool(
            self.twilio_account_sid and self.twilio_auth_token and self.twilio_sms_number
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
