import os
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process-wide configuration, read once at startup from the environment and .env.
    Instances are frozen; build a new one instead of mutating.
    """

    HOST: str = "0.0.0.0"
    PORT: int = 4000
    LOG_LEVEL: str = "INFO"

    # Admin access
    ADMIN_PASSWORD: Optional[str] = None
    ADMIN_TOKEN_SECRET: Optional[str] = None
    ADMIN_TOKEN_TTL_HOURS: int = 12
    ADMIN_PAGE_URL: str = "https://mag599746-bot.github.io/oneoffrental2/admin.html"

    # Comma-separated; empty allows every origin
    ALLOWED_ORIGINS: str = ""
    MAX_BODY_BYTES: int = 1024 * 1024

    # Outbound mail relay
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 465
    SMTP_USER: Optional[str] = None
    SMTP_PASS: Optional[str] = None
    SMTP_FROM: Optional[str] = None
    ADMIN_EMAIL: Optional[str] = None
    SMTP_TIMEOUT_SECONDS: float = 10.0

    # NCP SENS gateway
    SENS_SERVICE_ID: Optional[str] = None
    SENS_ACCESS_KEY: Optional[str] = None
    SENS_SECRET_KEY: Optional[str] = None
    SENS_FROM_NUMBER: Optional[str] = None
    ADMIN_PHONE: Optional[str] = None
    SMS_TIMEOUT_SECONDS: float = 10.0

    # Storage
    DATABASE_URL: Optional[str] = None
    PG_SSL: bool = True
    PG_SSL_ROOT_CERT: Optional[str] = None
    SQLITE_PATH: str = "./data.sqlite"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600  # Recycle connections after 1 hour

    model_config = SettingsConfigDict(
        env_file=os.path.join(os.path.dirname(__file__), ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def email_configured(self) -> bool:
        return all([self.SMTP_HOST, self.SMTP_USER, self.SMTP_PASS, self.SMTP_FROM, self.ADMIN_EMAIL])

    @property
    def sms_configured(self) -> bool:
        return all([
            self.SENS_SERVICE_ID,
            self.SENS_ACCESS_KEY,
            self.SENS_SECRET_KEY,
            self.SENS_FROM_NUMBER,
            self.ADMIN_PHONE,
        ])

    @property
    def uses_postgres(self) -> bool:
        return bool(self.DATABASE_URL and self.DATABASE_URL.strip())


def load_settings() -> Settings:
    """Build the settings object for this process."""
    return Settings()
