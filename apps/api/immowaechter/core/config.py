"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from immowaechter.core.constants import NOTIFICATION_LOOKAHEAD_DAYS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENV: str = "dev"

    # App Version (format: a.bc.de - major.feature.patch)
    VERSION: str = "0.01.00"

    # Database (Supabase Postgres in production)
    DATABASE_URL: str = "sqlite+pysqlite:///./immowaechter.db"

    # Reference timezone for "today" in reminder sweeps
    TIMEZONE: str = "Europe/Vienna"

    # Cron trigger (Authorization: Bearer <CRON_SECRET>)
    CRON_SECRET: str = ""

    # Resend
    RESEND_API_KEY: str = ""
    EMAIL_FROM: str = "ImmoWächter <noreply@immowaechter.at>"

    # Public site (links in emails)
    APP_URL: str = "https://www.immowaechter.at"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Error Tracking (optional, set in production)
    SENTRY_DSN: str = ""

    # Rate Limiting (requests per minute)
    RATE_LIMIT_API: int = 60

    # Record Supplier window
    NOTIFICATION_LOOKAHEAD_DAYS: int = NOTIFICATION_LOOKAHEAD_DAYS

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def resend_configured(self) -> bool:
        return bool(self.RESEND_API_KEY)


settings = Settings()
