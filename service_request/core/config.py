"""Application settings loaded from environment variables."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "DO_NOT_USE_THIS_IN_PRODUCTION_CHANGE_IT_NOW"


class Settings(BaseSettings):
    app_name: str = "Service Request API"
    app_version: str = "0.1.0"
    api_prefix: str = "/api"
    database_url: str = "sqlite:///./service_requests.db"
    frontend_url: str = "http://localhost:3000"
    log_level: str = "INFO"
    service_name: str = "service-request-api"

    # Admin dashboard credentials
    admin_username: str = "admin"
    admin_password: str = "password123"
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"

    # Notification email
    admin_email: str = "admin@example.com"
    sender_email: str = "default@example.com"
    notifier_backend: str = "sendgrid"  # sendgrid|smtp
    notifier_timeout: float = 15.0
    sendgrid_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("sendgrid_api_key", "email_pass"),
    )
    sendgrid_api_url: str = "https://api.sendgrid.com/v3/mail/send"
    smtp_host: str = "localhost"
    smtp_port: int = 25
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = False

    task_queue_join_timeout: float = 5.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()

__all__ = ["settings", "Settings", "DEFAULT_JWT_SECRET"]
