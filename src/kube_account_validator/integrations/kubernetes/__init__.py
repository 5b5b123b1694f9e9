"""Kubernetes integration - API client, configuration, models and collaborators."""

from kube_account_validator.integrations.kubernetes.client import (
    KubernetesClient,
    KubernetesSecretReader,
)
from kube_account_validator.integrations.kubernetes.collaborators import (
    ConfigBundle,
    DirectoryConfigBundle,
    OwnerLookup,
    SecretContext,
    SecretDecoder,
    SecretReader,
    ServiceAccountResolver,
    ValidationContext,
    is_encrypted_secret,
)
from kube_account_validator.integrations.kubernetes.config import ValidatorConfig
from kube_account_validator.integrations.kubernetes.exceptions import (
    AccessDeniedError,
    AccountValidationError,
    ConflictingNamespaceScopeError,
    CredentialLoadError,
    InvalidSettingsError,
    MergeError,
    NoAuthProvidedError,
    NoServiceAccountNameError,
    NoValidCredentialSourceError,
    ProbeError,
)

__all__ = [
    "AccessDeniedError",
    "AccountValidationError",
    "ConfigBundle",
    "ConflictingNamespaceScopeError",
    "CredentialLoadError",
    "DirectoryConfigBundle",
    "InvalidSettingsError",
    "KubernetesClient",
    "KubernetesSecretReader",
    "MergeError",
    "NoAuthProvidedError",
    "NoServiceAccountNameError",
    "NoValidCredentialSourceError",
    "OwnerLookup",
    "ProbeError",
    "SecretContext",
    "SecretDecoder",
    "SecretReader",
    "ServiceAccountResolver",
    "ValidationContext",
    "ValidatorConfig",
    "is_encrypted_secret",
]
