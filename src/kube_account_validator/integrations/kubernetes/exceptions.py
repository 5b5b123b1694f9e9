"""Account validation exceptions."""

from __future__ import annotations


class AccountValidationError(Exception):
    """Base exception for Kubernetes account validation.

    Attributes:
        message: Human-readable error message.
        account: Name of the account being validated (if known).
        namespace: Namespace involved in the failure (if applicable).
        reference: Credential reference that produced the failure, such as a
            kubeconfig path or secret name.
        original_error: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        account: str | None = None,
        namespace: str | None = None,
        reference: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize AccountValidationError.

        Args:
            message: Human-readable error message.
            account: Account name.
            namespace: Namespace involved.
            reference: Originating credential reference.
            original_error: Underlying cause.
        """
        super().__init__(message)
        self.message = message
        self.account = account
        self.namespace = namespace
        self.reference = reference
        self.original_error = original_error

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.account:
            parts.append(f"[account={self.account}]")
        if self.namespace:
            parts.append(f"(namespace: {self.namespace})")
        if self.reference:
            parts.append(f"(reference: {self.reference})")
        text = " ".join(parts)
        if self.original_error is not None:
            text += f": {self.original_error}"
        return text


class ConflictingNamespaceScopeError(AccountValidationError):
    """Raised when both ``namespaces`` and ``omitNamespaces`` are supplied."""

    def __init__(self, account: str | None = None) -> None:
        super().__init__(
            message='at most one of "namespaces" and "omitNamespaces" can be supplied',
            account=account,
        )


class NoAuthProvidedError(AccountValidationError):
    """Raised when an account declares no credential source at all."""

    def __init__(
        self,
        message: str = "kubernetes auth needs to be defined",
        account: str | None = None,
    ) -> None:
        super().__init__(message=message, account=account)


class NoValidCredentialSourceError(AccountValidationError):
    """Raised when the settings fallback finds no usable kubeconfig."""

    def __init__(
        self,
        message: str = (
            "no valid kubeconfig file, kubeconfig content or service account information found"
        ),
        account: str | None = None,
    ) -> None:
        super().__init__(message=message, account=account)


class NoServiceAccountNameError(AccountValidationError):
    """Raised when the owning record has no service account name configured."""

    def __init__(
        self,
        message: str = "no service account name configured for the owning service",
        namespace: str | None = None,
    ) -> None:
        super().__init__(message=message, namespace=namespace)


class CredentialLoadError(AccountValidationError):
    """Raised when reading, decrypting or parsing a chosen credential source fails.

    Always carries the originating reference for diagnosability.
    """


class MergeError(AccountValidationError):
    """Raised when overrides cannot be merged into a usable connection."""


class InvalidSettingsError(AccountValidationError):
    """Raised when the account settings document holds fields of the wrong type."""


class ProbeError(AccountValidationError):
    """Raised when the live access probe fails.

    Attributes:
        status_code: HTTP status code from the API server (if any).
    """

    def __init__(
        self,
        message: str,
        account: str | None = None,
        namespace: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize ProbeError.

        Args:
            message: Human-readable error message.
            account: Account name.
            namespace: Probed namespace, if the probe was namespaced.
            status_code: HTTP status code returned by the API server.
            original_error: Underlying cause.
        """
        super().__init__(
            message=message,
            account=account,
            namespace=namespace,
            original_error=original_error,
        )
        self.status_code = status_code

    def __str__(self) -> str:
        """Return string representation including the status code."""
        base = super().__str__()
        if self.status_code:
            return f"{base} (status: {self.status_code})"
        return base


class AccessDeniedError(ProbeError):
    """Raised when the probe is rejected with 401 or 403."""
