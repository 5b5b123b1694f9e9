"""Account validator configuration models."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class ValidatorConfig(BaseModel):
    """Runtime settings for account validation."""

    model_config = ConfigDict(extra="forbid")

    request_timeout: int = 30
    probe_limit: int = 1
    default_kubeconfig: str | None = None
    service_host_env: str = "KUBERNETES_SERVICE_HOST"
    service_port_env: str = "KUBERNETES_SERVICE_PORT"

    @field_validator("request_timeout")
    @classmethod
    def validate_request_timeout(cls, v: int) -> int:
        """Validate request_timeout is positive."""
        if v <= 0:
            raise ValueError("request_timeout must be positive")
        return v

    @field_validator("probe_limit")
    @classmethod
    def validate_probe_limit(cls, v: int) -> int:
        """Validate probe_limit is at least one."""
        if v < 1:
            raise ValueError("probe_limit must be at least 1")
        return v

    @field_validator("default_kubeconfig")
    @classmethod
    def validate_default_kubeconfig(cls, v: str | None) -> str | None:
        """Expand ~ in the default kubeconfig path."""
        if v is None:
            return None
        return str(Path(v).expanduser())

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> ValidatorConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            KAV_TIMEOUT: Per-request timeout in seconds
            KAV_PROBE_LIMIT: Page size requested by the access probe
            KAV_KUBECONFIG: Kubeconfig used for the API host fallback
        """
        config_dict = base_config.copy() if base_config else {}

        if timeout := os.environ.get("KAV_TIMEOUT"):
            config_dict["request_timeout"] = int(timeout)

        if limit := os.environ.get("KAV_PROBE_LIMIT"):
            config_dict["probe_limit"] = int(limit)

        if kubeconfig := os.environ.get("KAV_KUBECONFIG"):
            config_dict["default_kubeconfig"] = kubeconfig

        return cls.model_validate(config_dict)
