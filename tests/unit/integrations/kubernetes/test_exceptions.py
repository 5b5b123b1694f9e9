"""Unit tests for account validation exceptions."""

from __future__ import annotations

import pytest

from kube_account_validator.integrations.kubernetes.exceptions import (
    AccessDeniedError,
    AccountValidationError,
    ConflictingNamespaceScopeError,
    CredentialLoadError,
    MergeError,
    NoAuthProvidedError,
    NoServiceAccountNameError,
    NoValidCredentialSourceError,
    ProbeError,
)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestAccountValidationError:
    """Test AccountValidationError base exception."""

    def test_init_minimal(self) -> None:
        """Test initialization with minimal arguments."""
        error = AccountValidationError("Something went wrong")
        assert error.message == "Something went wrong"
        assert error.account is None
        assert error.namespace is None
        assert error.reference is None
        assert error.original_error is None

    def test_str_message_only(self) -> None:
        """Test string representation with message only."""
        assert str(AccountValidationError("Test error")) == "Test error"

    def test_str_complete(self) -> None:
        """Test string representation with all context."""
        error = AccountValidationError(
            "error loading kubeconfigFile",
            account="prod",
            namespace="spinnaker",
            reference="/etc/kube/prod",
            original_error=FileNotFoundError("no such file"),
        )
        assert str(error) == (
            "error loading kubeconfigFile [account=prod] (namespace: spinnaker) "
            "(reference: /etc/kube/prod): no such file"
        )


@pytest.mark.unit
@pytest.mark.kubernetes
class TestErrorKinds:
    """Test the specific error kinds."""

    def test_conflicting_namespace_scope_names_both_fields(self) -> None:
        """The message names both namespace settings."""
        error = ConflictingNamespaceScopeError(account="prod")
        assert '"namespaces"' in str(error)
        assert '"omitNamespaces"' in str(error)
        assert error.account == "prod"

    def test_no_auth_provided_default_message(self) -> None:
        """Test default message."""
        assert "auth needs to be defined" in str(NoAuthProvidedError())

    def test_no_valid_credential_source_default_message(self) -> None:
        """Test default message."""
        assert "no valid kubeconfig file" in str(NoValidCredentialSourceError())

    def test_no_service_account_name_namespace(self) -> None:
        """Test namespace is reported."""
        error = NoServiceAccountNameError(namespace="spinnaker")
        assert "(namespace: spinnaker)" in str(error)

    def test_credential_load_and_merge_are_account_errors(self) -> None:
        """Test hierarchy."""
        assert issubclass(CredentialLoadError, AccountValidationError)
        assert issubclass(MergeError, AccountValidationError)

    def test_probe_error_with_status(self) -> None:
        """Test status code is appended."""
        error = ProbeError("error listing pods", account="prod", namespace="ns1", status_code=500)
        assert str(error) == "error listing pods [account=prod] (namespace: ns1) (status: 500)"

    def test_access_denied_is_probe_error(self) -> None:
        """Test AccessDeniedError inherits from ProbeError."""
        error = AccessDeniedError("error listing namespaces", status_code=403)
        assert isinstance(error, ProbeError)
        assert error.status_code == 403
