"""Account, kubeconfig and connection models."""

from kube_account_validator.integrations.kubernetes.models.account import (
    Account,
    AccountAuth,
    AuthSettings,
    CredentialSource,
    OwnerRecord,
    SecretInNamespaceReference,
)
from kube_account_validator.integrations.kubernetes.models.kubeconfig import (
    AuthInfoCredential,
    BearerTokenCredential,
    ConfigOverrides,
    ConnectionDescriptor,
    KubeContext,
    NamedAuthInfo,
    NamedCluster,
    NamedContext,
    ParsedKubeconfig,
    TLSConfig,
)

__all__ = [
    "Account",
    "AccountAuth",
    "AuthInfoCredential",
    "AuthSettings",
    "BearerTokenCredential",
    "ConfigOverrides",
    "ConnectionDescriptor",
    "CredentialSource",
    "KubeContext",
    "NamedAuthInfo",
    "NamedCluster",
    "NamedContext",
    "OwnerRecord",
    "ParsedKubeconfig",
    "SecretInNamespaceReference",
    "TLSConfig",
]
