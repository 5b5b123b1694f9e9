"""Kubernetes account validation services.

Each stage of account validation lives in its own module: namespace settings
checks, kubeconfig loading, overrides, service account credentials,
credential source selection and the live access probe.
"""

from kube_account_validator.services.kubernetes.access_validator import AccessValidator
from kube_account_validator.services.kubernetes.account_validator import (
    AccountValidator,
    ValidationOutcome,
)
from kube_account_validator.services.kubernetes.credential_resolver import (
    CredentialSourceResolver,
)
from kube_account_validator.services.kubernetes.kubeconfig_loader import (
    KubeconfigLoader,
    load_default_kubeconfig,
    parse_kubeconfig,
)
from kube_account_validator.services.kubernetes.overrides import (
    build_overrides,
    merge_overrides,
    resolve_kubeconfig,
)
from kube_account_validator.services.kubernetes.service_account import (
    ServiceAccountCredentialBuilder,
)
from kube_account_validator.services.kubernetes.settings_validator import (
    validate_namespace_settings,
)

__all__ = [
    "AccessValidator",
    "AccountValidator",
    "CredentialSourceResolver",
    "KubeconfigLoader",
    "ServiceAccountCredentialBuilder",
    "ValidationOutcome",
    "build_overrides",
    "load_default_kubeconfig",
    "merge_overrides",
    "parse_kubeconfig",
    "resolve_kubeconfig",
    "validate_namespace_settings",
]
