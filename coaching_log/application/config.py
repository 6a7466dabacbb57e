"""Application configuration using Pydantic Settings."""

from pathlib import Path
from typing import Annotated, Any, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    List settings are read from the environment as comma-separated values,
    e.g. ``ADMIN_EMAILS=coach@example.com,lead@example.com``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "coaching-log"
    app_version: str = "0.1.0"
    debug: bool = False

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    cors_allow_origins: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"])
    max_body_bytes: int = 1_000_000

    # Logging
    log_level: str = "INFO"

    # Storage
    data_dir: Path = Path("data")
    state_file_name: str = "state.json"

    # Emails allowed to use the API; empty allows everyone
    admin_emails: Annotated[List[str], NoDecode] = Field(default_factory=list)

    @field_validator("cors_allow_origins", "admin_emails", mode="before")
    @classmethod
    def _split_csv(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("admin_emails")
    @classmethod
    def _normalize_emails(cls, value: List[str]) -> List[str]:
        return [email.strip().lower() for email in value if email.strip()]

    @property
    def state_file(self) -> Path:
        """Full path of the JSON state file."""
        return self.data_dir / self.state_file_name


# Create a singleton instance
settings = Settings()
