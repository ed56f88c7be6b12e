"""
Configuration and settings for the contacts service.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=(".env", "env/.env"), env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")
    log_level: str = Field(default="INFO")

    # Database (Postgres expected)
    db_url: Optional[str] = Field(default=None)

    # S3-compatible storage (OCI Object Storage)
    oci_s3_endpoint: Optional[str] = Field(default=None)
    oci_s3_region: Optional[str] = Field(default=None)
    oci_s3_access_key: Optional[str] = Field(default=None)
    oci_s3_secret_key: Optional[str] = Field(default=None)
    oci_bucket_name: Optional[str] = Field(default=None)

    # Sessions / OIDC (Authentik)
    session_secret: str = Field(default="change-me")
    authentik_client_id: Optional[str] = Field(default=None)
    authentik_client_secret: Optional[str] = Field(default=None)
    authentik_discovery_url: Optional[str] = Field(default=None)
    auth_callback_url: str = Field(
        default="http://localhost:33500/api/auth/callback?provider=openid-connect"
    )
    frontend_url: str = Field(default="http://localhost:5173")

    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"]
    )

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)

    @property
    def storage_configured(self) -> bool:
        """True when any object storage variable is set."""
        return any(
            (
                self.oci_s3_endpoint,
                self.oci_s3_region,
                self.oci_s3_access_key,
                self.oci_s3_secret_key,
                self.oci_bucket_name,
            )
        )

    @property
    def oidc_configured(self) -> bool:
        return bool(
            self.authentik_client_id
            and self.authentik_client_secret
            and self.authentik_discovery_url
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
