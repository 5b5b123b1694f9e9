"""Unit tests for collaborator helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from kube_account_validator.integrations.kubernetes.collaborators import (
    ConfigBundle,
    DirectoryConfigBundle,
    ValidationContext,
    is_encrypted_secret,
)
from kube_account_validator.integrations.kubernetes.config import ValidatorConfig


@pytest.mark.unit
@pytest.mark.kubernetes
class TestIsEncryptedSecret:
    """Tests for is_encrypted_secret."""

    @pytest.mark.parametrize(
        "reference",
        [
            "encrypted:s3!r:us-west-2!b:bucket!f:kubeconfig",
            "encryptedFile:vault!e:secret!n:kube!k:config",
        ],
    )
    def test_encrypted_references(self, reference: str) -> None:
        """Secret indirections are recognised."""
        assert is_encrypted_secret(reference)

    @pytest.mark.parametrize("reference", ["/etc/kube/config", "kubeconfig", "encrypted"])
    def test_plain_references(self, reference: str) -> None:
        """Paths and names are not secret indirections."""
        assert not is_encrypted_secret(reference)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestDirectoryConfigBundle:
    """Tests for DirectoryConfigBundle."""

    def test_reads_file_content(self, tmp_path: Path) -> None:
        """Existing files are returned as bytes."""
        (tmp_path / "kubecfg").write_bytes(b"kind: Config")
        bundle = DirectoryConfigBundle(tmp_path)
        assert bundle.get_file_content("kubecfg") == b"kind: Config"

    def test_missing_file_returns_none(self, tmp_path: Path) -> None:
        """Missing files yield None."""
        assert DirectoryConfigBundle(tmp_path).get_file_content("absent") is None

    def test_satisfies_protocol(self, tmp_path: Path) -> None:
        """DirectoryConfigBundle is a ConfigBundle."""
        assert isinstance(DirectoryConfigBundle(tmp_path), ConfigBundle)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestValidationContext:
    """Tests for ValidationContext defaults."""

    def test_defaults(self) -> None:
        """All collaborators are unavailable by default."""
        context = ValidationContext()
        assert context.config == ValidatorConfig()
        assert context.secret_context is None
        assert context.secret_decoder is None
        assert context.config_bundle is None
        assert context.owner_lookup is None
        assert context.service_account_resolver is None
