from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings


DEFAULT_API_BASE = "https://localhost:8443"


class EnvSettings(BaseSettings):
    """Runtime settings provided via environment variables."""

    config_file: Optional[str] = Field(default=None, alias="RH_CONFIG_FILE")

    # Overrides backend.api_base from the config file; the --api-base flag wins over both.
    api_base: Optional[str] = Field(default=None, alias="RH_API_BASE")

    # Optional auth for the HTTP surface (ignored by the stdio transport)
    internal_api_key: Optional[SecretStr] = Field(default=None, alias="RH_INTERNAL_API_KEY")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {
        "extra": "ignore",
        "case_sensitive": True,
    }


class BackendConfig(BaseModel):
    api_base: str = DEFAULT_API_BASE

    # Per-call timeout; a timed out call fails as RequestFailed and is not retried.
    timeout_s: float = 30.0

    # The control API ships with a self-signed certificate.
    verify_tls: bool = False


class ResolverConfig(BaseModel):
    # If true, a session name matching more than one session on a host is an error
    # instead of resolving to the first listed match.
    strict_session_names: bool = True


class ServerInfoConfig(BaseModel):
    name: str = "remote-hosts-mcp-client"
    version: str = "1.0.0"
    protocol_version: str = "2024-11-05"


class AppConfig(BaseModel):
    backend: BackendConfig = Field(default_factory=BackendConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    server: ServerInfoConfig = Field(default_factory=ServerInfoConfig)


def load_config(path: Optional[str]) -> AppConfig:
    if not path:
        return AppConfig()

    import yaml

    if not os.path.exists(path):
        raise RuntimeError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as e:
        raise RuntimeError(f"Invalid config file {path}: {e}") from e


def resolve_config(
    env: EnvSettings,
    config_file: Optional[str] = None,
    api_base: Optional[str] = None,
) -> AppConfig:
    """Build the effective configuration.

    Precedence, lowest first: model defaults, YAML file, environment, command line.
    """
    cfg = load_config(config_file or env.config_file)
    override = api_base or env.api_base
    if override:
        cfg = cfg.model_copy(
            update={"backend": cfg.backend.model_copy(update={"api_base": override})}
        )
    return cfg
