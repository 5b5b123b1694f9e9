"""Shared pytest fixtures for kube_account_validator tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
import yaml
from typer.testing import CliRunner

from kube_account_validator.integrations.kubernetes.models import (
    AuthInfoCredential,
    ConnectionDescriptor,
    ParsedKubeconfig,
)

DEFAULT_LOCATION = "kubernetes.config.kube_config.KUBE_CONFIG_DEFAULT_LOCATION"

KUBECONFIG_YAML = """
apiVersion: v1
kind: Config
current-context: dev
clusters:
- name: dev-cluster
  cluster:
    server: https://dev.example.com:6443
    certificate-authority-data: ZGV2LWNh
- name: prod-cluster
  cluster:
    server: https://prod.example.com:6443
    insecure-skip-tls-verify: true
users:
- name: dev-user
  user:
    token: dev-token
- name: prod-user
  user:
    token: prod-token
contexts:
- name: dev
  context:
    cluster: dev-cluster
    user: dev-user
- name: prod
  context:
    cluster: prod-cluster
    user: prod-user
    namespace: apps
"""

DEV_HOST = "https://dev.example.com:6443"
PROD_HOST = "https://prod.example.com:6443"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def kubeconfig_text() -> str:
    """Kubeconfig with ``dev`` (current) and ``prod`` contexts."""
    return KUBECONFIG_YAML


@pytest.fixture
def kubeconfig_dict(kubeconfig_text: str) -> dict[str, Any]:
    """The sample kubeconfig as a plain dictionary."""
    data: dict[str, Any] = yaml.safe_load(kubeconfig_text)
    return data


@pytest.fixture
def parsed_kubeconfig(kubeconfig_text: str) -> ParsedKubeconfig:
    """The sample kubeconfig parsed."""
    return ParsedKubeconfig.from_bytes(kubeconfig_text)


@pytest.fixture
def kubeconfig_file(tmp_path: Path, kubeconfig_text: str) -> Path:
    """The sample kubeconfig written to an absolute path."""
    path = tmp_path / "kubeconfig.yaml"
    path.write_text(kubeconfig_text)
    return path


@pytest.fixture
def descriptor() -> ConnectionDescriptor:
    """A resolved descriptor for the sample dev context."""
    return ConnectionDescriptor(
        host=DEV_HOST,
        credential=AuthInfoCredential(auth_info={"token": "dev-token"}),
    )


@pytest.fixture
def default_location(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    """Point the kubernetes client's default kubeconfig location at some files."""

    def _set(*paths: Path) -> None:
        monkeypatch.setattr(DEFAULT_LOCATION, os.pathsep.join(str(p) for p in paths))

    return _set


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Clear environment variables and the default kubeconfig location."""
    monkeypatch.setattr(DEFAULT_LOCATION, str(tmp_path / "no-default-kubeconfig"))
    for key in list(os.environ.keys()):
        if key.startswith("KAV_"):
            monkeypatch.delenv(key, raising=False)
    for key in ("KUBECONFIG", "KUBERNETES_SERVICE_HOST", "KUBERNETES_SERVICE_PORT"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None]:
    """Restore root handlers and structlog defaults after each test."""
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    yield
    root.handlers = original_handlers
    structlog.reset_defaults()
