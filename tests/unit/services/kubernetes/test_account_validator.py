"""Unit tests for AccountValidator."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from kubernetes.client import ApiException
from structlog.testing import capture_logs

from kube_account_validator.integrations.kubernetes.client import KubernetesClient
from kube_account_validator.integrations.kubernetes.collaborators import ValidationContext
from kube_account_validator.integrations.kubernetes.exceptions import (
    AccessDeniedError,
    ConflictingNamespaceScopeError,
    NoAuthProvidedError,
    ProbeError,
)
from kube_account_validator.integrations.kubernetes.models import (
    Account,
    AccountAuth,
    ConnectionDescriptor,
)
from kube_account_validator.services.kubernetes.account_validator import (
    AccountValidator,
    ValidationOutcome,
)
from tests.conftest import PROD_HOST


@pytest.fixture
def mock_client_cls() -> Generator[MagicMock]:
    """Patch KubernetesClient as used by the access validator."""
    with patch(
        "kube_account_validator.services.kubernetes.access_validator.KubernetesClient"
    ) as mock_cls:
        client = mock_cls.return_value.__enter__.return_value
        client.timeout = 30
        client.translate_api_exception.side_effect = KubernetesClient.translate_api_exception
        yield mock_cls


@pytest.mark.unit
@pytest.mark.kubernetes
class TestAccountValidator:
    """Tests for AccountValidator.validate."""

    def test_default_context(self) -> None:
        """A validator without arguments uses an empty context."""
        assert AccountValidator().context == ValidationContext()

    def test_validated(self, mock_client_cls: MagicMock, kubeconfig_file: Path) -> None:
        """A resolvable account with access is validated."""
        account = Account(
            name="prod",
            settings={"context": "prod", "namespaces": ["apps"]},
            auth=AccountAuth(kubeconfig_file=str(kubeconfig_file)),
        )

        with capture_logs() as logs:
            outcome = AccountValidator().validate(account)

        assert outcome == ValidationOutcome.VALIDATED
        descriptor: ConnectionDescriptor = mock_client_cls.call_args.args[0]
        assert descriptor.host == PROD_HOST
        client = mock_client_cls.return_value.__enter__.return_value
        client.core_v1.list_namespaced_pod.assert_called_once_with(
            namespace="apps", limit=1, _request_timeout=30
        )
        assert any(
            log["event"] == "account_validated" and log["account"] == "prod" for log in logs
        )

    def test_skipped(self, mock_client_cls: MagicMock) -> None:
        """A service account without an owning record is skipped without probing."""
        account = Account(name="a", auth=AccountAuth(use_service_account=True))

        with patch(
            "kube_account_validator.services.kubernetes.service_account."
            "ServiceAccountCredentialBuilder.build",
            return_value=None,
        ):
            outcome = AccountValidator().validate(account)

        assert outcome == ValidationOutcome.SKIPPED
        mock_client_cls.assert_not_called()

    def test_namespace_conflict_checked_first(self, mock_client_cls: MagicMock) -> None:
        """Conflicting namespace settings fail before credentials are resolved."""
        account = Account(
            name="a",
            settings={"namespaces": ["apps"], "omitNamespaces": ["kube-system"]},
            auth=AccountAuth(kubeconfig_file="/does/not/exist"),
        )

        with pytest.raises(ConflictingNamespaceScopeError):
            AccountValidator().validate(account)
        mock_client_cls.assert_not_called()

    def test_resolution_failure_sets_account(self, mock_client_cls: MagicMock) -> None:
        """Errors raised without an account name get one."""
        with capture_logs() as logs, pytest.raises(NoAuthProvidedError) as exc_info:
            AccountValidator().validate(Account(name="a", auth=AccountAuth()))

        assert exc_info.value.account == "a"
        assert any(
            log["event"] == "account_validation_failed" and log["log_level"] == "warning"
            for log in logs
        )
        mock_client_cls.assert_not_called()

    def test_probe_failure(self, mock_client_cls: MagicMock, kubeconfig_file: Path) -> None:
        """Probe errors propagate."""
        client = mock_client_cls.return_value.__enter__.return_value
        client.core_v1.list_namespace.side_effect = ApiException(status=401, reason="Unauthorized")
        account = Account(name="a", auth=AccountAuth(kubeconfig_file=str(kubeconfig_file)))

        with pytest.raises(AccessDeniedError) as exc_info:
            AccountValidator().validate(account)
        assert exc_info.value.account == "a"

    def test_validator_is_reusable(
        self, mock_client_cls: MagicMock, kubeconfig_file: Path
    ) -> None:
        """One instance validates many accounts independently."""
        validator = AccountValidator()
        first = Account(name="a", auth=AccountAuth(kubeconfig_file=str(kubeconfig_file)))
        second = Account(name="b", auth=AccountAuth())

        assert validator.validate(first) == ValidationOutcome.VALIDATED
        with pytest.raises(NoAuthProvidedError):
            validator.validate(second)
        assert validator.validate(first) == ValidationOutcome.VALIDATED

    def test_oauth_scopes_without_google_credentials(
        self,
        kubeconfig_dict: dict[str, Any],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """An OAuth account whose gcp credentials cannot load fails with ProbeError."""
        monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", str(tmp_path / "absent.json"))
        account = Account(
            name="gke",
            settings={"oAuthScopes": ["a", "b"]},
            auth=AccountAuth(kubeconfig=kubeconfig_dict),
        )

        with pytest.raises(ProbeError) as exc_info:
            AccountValidator(ValidationContext()).validate(account)

        assert "unable to build kubernetes client" in str(exc_info.value)
        assert exc_info.value.account == "gke"
        assert exc_info.value.__cause__ is not None
