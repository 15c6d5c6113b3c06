"""
Configuration management for the VSS auth probe.

Loads configuration from YAML with no implicit defaults: every required
value must be present in the file or loading fails.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import httpx
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_PATH_ENV_VAR = "VSS_PROBE_CONFIG_PATH"
BASE_URL_ENV_VAR = "VSS_URL"
DEFAULT_CONFIG_FILENAME = "config.yaml"


class VssConfig(BaseModel):
    """Target server connection configuration."""

    model_config = ConfigDict(extra="forbid")
    base_url: str
    list_key_versions_path: str
    timeout_seconds: float = Field(gt=0)

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as exc:
            msg = f"Invalid base_url {value!r}: {exc}"
            raise ValueError(msg) from exc
        if url.scheme not in ("http", "https") or not url.host:
            msg = f"Invalid base_url {value!r}: expected an http(s) URL with a host"
            raise ValueError(msg)
        if url.port is not None and not 0 < url.port <= 65535:
            msg = f"Invalid base_url {value!r}: port must be 1-65535"
            raise ValueError(msg)
        return value

    @property
    def list_key_versions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}{self.list_key_versions_path}"


class SigningConfig(BaseModel):
    """Token claims and trusted key configuration."""

    model_config = ConfigDict(extra="forbid")
    trusted_private_key_path: str
    algorithm: Literal["RS256", "RS384", "RS512", "PS256", "PS384", "PS512"]
    subject: str
    validity_seconds: int = Field(gt=0)


class RequestConfig(BaseModel):
    """Fixed ListKeyVersionsRequest payload."""

    model_config = ConfigDict(extra="forbid")
    store_id: str
    key_prefix: str | None = None
    page_size: int | None = None
    page_token: str | None = None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")
    level: str
    directory: str | None = None


class Settings(BaseModel):
    """
    Root configuration container.

    Unknown keys are rejected at every level.
    """

    model_config = ConfigDict(extra="forbid")
    vss: VssConfig
    signing: SigningConfig
    request: RequestConfig
    logging: LoggingConfig


def get_config_path(explicit: Path | None = None) -> Path:
    """Determine configuration file path.

    Order: explicit path, then the ``VSS_PROBE_CONFIG_PATH`` env var, then
    ``config.yaml`` in the working directory.
    """
    if explicit is not None:
        return explicit
    from_env = os.environ.get(CONFIG_PATH_ENV_VAR)
    if from_env:
        return Path(from_env)
    return Path.cwd() / DEFAULT_CONFIG_FILENAME


def load_settings(config_path: Path | None = None) -> Settings:
    """Load and validate settings from YAML.

    A relative ``trusted_private_key_path`` is resolved against the directory
    holding the config file.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the file is not a YAML mapping.
        pydantic.ValidationError: If required values are missing or invalid.
    """
    config_path = get_config_path(config_path)
    raw = yaml.safe_load(config_path.read_text())
    if not isinstance(raw, dict):
        msg = f"Invalid config file: {config_path}"
        raise ValueError(msg)

    settings = Settings(**raw)

    key_path = Path(settings.signing.trusted_private_key_path)
    if not key_path.is_absolute():
        key_path = (config_path.parent / key_path).resolve()
    return settings.model_copy(
        update={"signing": settings.signing.model_copy(update={"trusted_private_key_path": str(key_path)})}
    )


def apply_overrides(
    settings: Settings,
    base_url: str | None = None,
    key_path: str | None = None,
    log_level: str | None = None,
) -> Settings:
    """Return settings with command-line (or ``VSS_URL``) overrides applied."""
    if base_url is None:
        base_url = os.environ.get(BASE_URL_ENV_VAR) or None

    updates: dict[str, BaseModel] = {}
    if base_url is not None:
        updates["vss"] = VssConfig(**{**settings.vss.model_dump(), "base_url": base_url})
    if key_path is not None:
        resolved = str(Path(key_path).resolve())
        updates["signing"] = settings.signing.model_copy(update={"trusted_private_key_path": resolved})
    if log_level is not None:
        updates["logging"] = settings.logging.model_copy(update={"level": log_level})
    return settings.model_copy(update=updates)
