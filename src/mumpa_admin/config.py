"""Configuration management - environment-driven settings and YAML reference data."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Service account fields, in the order Firebase expects them
FIREBASE_ENV_FIELDS = (
    "firebase_type",
    "firebase_project_id",
    "firebase_private_key_id",
    "firebase_private_key",
    "firebase_client_email",
    "firebase_client_id",
    "firebase_auth_uri",
    "firebase_token_uri",
    "firebase_auth_provider_x509_cert_url",
    "firebase_client_x509_cert_url",
)


class Settings(BaseSettings):
    """Application settings from environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8000, description="Bind port")

    # Firebase service account (split into env vars, as deployed on Vercel)
    firebase_type: str = Field(default="", description="Service account type")
    firebase_project_id: str = Field(default="", description="Firebase project id")
    firebase_private_key_id: str = Field(default="")
    firebase_private_key: str = Field(default="", description="PEM key, may contain escaped newlines")
    firebase_client_email: str = Field(default="")
    firebase_client_id: str = Field(default="")
    firebase_auth_uri: str = Field(default="")
    firebase_token_uri: str = Field(default="")
    firebase_auth_provider_x509_cert_url: str = Field(default="")
    firebase_client_x509_cert_url: str = Field(default="")
    firebase_credentials_file: Path | None = Field(
        default=None,
        description="Service account JSON file; takes precedence over the split env vars",
    )
    firebase_storage_bucket: str = Field(default="mumpabackend.firebasestorage.app")

    # Data
    data_dir: Path = Field(default=Path("data"), description="Directory for JSON persistence")
    redis_url: str | None = Field(default=None, description="Redis URL for cloud persistence")

    # HTTP API smoke checks
    api_base_url: str = Field(default="https://api.munpa.online", description="Backend base URL")
    api_timeout: float = Field(default=5.0, description="Request timeout in seconds")
    jwt_secret: str = Field(default="", description="HS256 secret shared with the backend")

    def missing_firebase_vars(self) -> list[str]:
        """Names of the service account env vars that are not set."""
        return [name.upper() for name in FIREBASE_ENV_FIELDS if not getattr(self, name)]

    @property
    def firebase_configured(self) -> bool:
        if self.firebase_credentials_file is not None:
            return True
        return not self.missing_firebase_vars()

    def firebase_service_account(self) -> dict[str, str]:
        """Service account dict built from env vars. Raises ValueError if incomplete."""
        missing = self.missing_firebase_vars()
        if missing:
            raise ValueError(f"Missing Firebase environment variables: {', '.join(missing)}")
        account = {name.removeprefix("firebase_"): getattr(self, name) for name in FIREBASE_ENV_FIELDS}
        # Vercel stores the key with literal \n sequences and sometimes quoted
        account["private_key"] = (
            self.firebase_private_key.replace("\\n", "\n").replace('"', "").strip()
        )
        return account


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Load YAML config file."""
    if not config_path.exists():
        return {}
    with config_path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()


@lru_cache
def get_vaccine_schedules(config_dir_str: str = "") -> dict[str, Any]:
    """Load national vaccine schedule definitions from config."""
    if not config_dir_str:
        config_dir = Path(__file__).parent.parent.parent / "config"
    else:
        config_dir = Path(config_dir_str)
    return load_yaml_config(config_dir / "vaccine_schedules.yaml")
