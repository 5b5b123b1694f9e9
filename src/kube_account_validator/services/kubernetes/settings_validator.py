"""Namespace scope checks on account settings."""

from __future__ import annotations

from kube_account_validator.integrations.kubernetes.exceptions import (
    ConflictingNamespaceScopeError,
)
from kube_account_validator.integrations.kubernetes.models import Account
from kube_account_validator.utils.settings import get_string_list_or_empty


def validate_namespace_settings(account: Account) -> None:
    """Reject accounts that both include and omit namespaces.

    Missing or malformed ``namespaces``/``omitNamespaces`` entries count as
    empty.

    Raises:
        ConflictingNamespaceScopeError: If both lists are non-empty.
    """
    namespaces = get_string_list_or_empty(account.settings, "namespaces")
    omit_namespaces = get_string_list_or_empty(account.settings, "omitNamespaces")
    if namespaces and omit_namespaces:
        raise ConflictingNamespaceScopeError(account=account.name)
