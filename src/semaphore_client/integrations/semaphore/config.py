"""Semaphore connection configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

from semaphore_client.integrations.semaphore.exceptions import SemaphoreConfigError

DEFAULT_API_VERSION = "v1alpha"


class SemaphoreConfig(BaseModel):
    """Connection parameters for the Semaphore API.

    Passed explicitly to every client and manager; nothing is read from
    process-wide state after construction.
    """

    model_config = ConfigDict(extra="forbid")

    host: str = Field(..., description="Organization host, e.g. myorg.semaphoreci.com")
    token: SecretStr = Field(..., description="Semaphore API token")
    api_version: str = Field(default=DEFAULT_API_VERSION, description="Default API version")
    user_id: str | None = Field(
        default=None, description="Value of X-Semaphore-User-ID; generated per request if unset"
    )
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Strip scheme and trailing slashes; the client always speaks HTTPS."""
        for prefix in ("https://", "http://"):
            if v.startswith(prefix):
                v = v[len(prefix) :]
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("host must not be empty")
        return v

    @field_validator("api_version")
    @classmethod
    def validate_api_version(cls, v: str) -> str:
        """Validate API version is a single path segment."""
        if not v or "/" in v:
            raise ValueError("api_version must be a non-empty path segment")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the config file path.

        Returns:
            Path to the config file (~/.config/sem/config.yaml).
        """
        return Path.home() / ".config" / "sem" / "config.yaml"

    @classmethod
    def load(cls) -> SemaphoreConfig:
        """Load configuration from environment or file.

        Priority:
        1. Environment variables (SEMAPHORE_API_TOKEN, SEMAPHORE_HOST,
           SEMAPHORE_API_VERSION, SEMAPHORE_USER_ID)
        2. Config file (~/.config/sem/config.yaml)

        Returns:
            Loaded configuration.

        Raises:
            SemaphoreConfigError: If configuration is missing or invalid.
        """
        if env_token := os.environ.get("SEMAPHORE_API_TOKEN"):
            env_host = os.environ.get("SEMAPHORE_HOST")
            if not env_host:
                raise SemaphoreConfigError(
                    "SEMAPHORE_HOST must be set together with SEMAPHORE_API_TOKEN",
                )
            data: dict[str, Any] = {"host": env_host, "token": env_token}
            if api_version := os.environ.get("SEMAPHORE_API_VERSION"):
                data["api_version"] = api_version
            if user_id := os.environ.get("SEMAPHORE_USER_ID"):
                data["user_id"] = user_id
            return cls._from_dict(data)

        config_path = cls.get_config_path()
        if not config_path.exists():
            raise SemaphoreConfigError(
                "Semaphore not configured. Set SEMAPHORE_API_TOKEN and SEMAPHORE_HOST.",
                details=f"Config file not found: {config_path}",
            )

        try:
            with config_path.open() as f:
                file_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SemaphoreConfigError(
                "Invalid config file format",
                details=str(e),
            ) from e

        if not isinstance(file_data, dict) or "token" not in file_data:
            raise SemaphoreConfigError(
                "Invalid config file",
                details="Missing 'token' in config file",
            )

        return cls._from_dict(file_data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> SemaphoreConfig:
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise SemaphoreConfigError("Invalid Semaphore configuration", details=str(e)) from e

    def save(self) -> None:
        """Save configuration to file.

        Creates the config directory if it doesn't exist.
        Sets file permissions to 600 (owner read/write only).
        """
        config_path = self.get_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data: dict[str, Any] = {
            "host": self.host,
            "token": self.token.get_secret_value(),
            "api_version": self.api_version,
        }
        if self.user_id:
            data["user_id"] = self.user_id

        with config_path.open("w") as f:
            yaml.safe_dump(data, f, default_flow_style=False)

        config_path.chmod(0o600)

    @classmethod
    def exists(cls) -> bool:
        """Check if configuration exists.

        Returns:
            True if config file exists or the token environment variable is set.
        """
        if os.environ.get("SEMAPHORE_API_TOKEN"):
            return True
        return cls.get_config_path().exists()
