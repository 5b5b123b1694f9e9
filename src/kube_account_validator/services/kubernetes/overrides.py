"""Kubeconfig overrides and context resolution.

Overrides come from an account's auth settings and are applied on top of a
parsed kubeconfig when its context is resolved into a connection descriptor.
"""

from __future__ import annotations

from typing import Any

import structlog

from kube_account_validator.integrations.kubernetes.exceptions import MergeError
from kube_account_validator.integrations.kubernetes.models import (
    AuthInfoCredential,
    AuthSettings,
    ConfigOverrides,
    ConnectionDescriptor,
    KubeContext,
    ParsedKubeconfig,
    TLSConfig,
)

logger = structlog.get_logger()

OAUTH_AUTH_PROVIDER = "gcp"
CA_KEYS = ("certificate-authority", "certificate-authority-data")


def build_overrides(kubeconfig: ParsedKubeconfig, settings: AuthSettings) -> ConfigOverrides:
    """Build overrides from auth settings.

    Each setting is applied independently:

    - ``context`` always becomes the current-context override.
    - ``user`` overrides the auth-info only if the kubeconfig defines it.
    - ``cluster`` overrides the cluster only if the kubeconfig defines it.
    - ``oAuthScopes`` overrides the auth-info with a generated auth-provider
      entry, taking precedence over ``user``.

    Unknown ``user`` or ``cluster`` names are skipped with a warning.

    Args:
        kubeconfig: Parsed kubeconfig the names refer to.
        settings: Account auth settings.

    Returns:
        The overrides to apply when resolving the kubeconfig.
    """
    current_context = settings.context
    auth_info: dict[str, Any] | None = None
    cluster_info: dict[str, Any] | None = None

    if settings.user:
        auth_infos = kubeconfig.auth_info_map
        if settings.user in auth_infos:
            auth_info = dict(auth_infos[settings.user])
        else:
            logger.warning("override_user_not_found", user=settings.user)

    if settings.cluster:
        clusters = kubeconfig.cluster_map
        if settings.cluster in clusters:
            cluster_info = dict(clusters[settings.cluster])
        else:
            logger.warning("override_cluster_not_found", cluster=settings.cluster)

    if settings.oauth_scopes:
        auth_info = {
            "auth-provider": {
                "name": OAUTH_AUTH_PROVIDER,
                "config": {"scopes": ",".join(settings.oauth_scopes)},
            }
        }

    return ConfigOverrides(
        current_context=current_context,
        auth_info=auth_info,
        cluster_info=cluster_info,
    )


def _merge_entry(base: dict[str, Any], override: dict[str, Any] | None) -> dict[str, Any]:
    """Overlay the non-empty fields of ``override`` onto a copy of ``base``."""
    merged = dict(base)
    for key, value in (override or {}).items():
        if value:
            merged[key] = value
    return merged


def _merge_cluster(base: dict[str, Any], override: dict[str, Any] | None) -> dict[str, Any]:
    merged = _merge_entry(base, override)
    # A CA from the override turns verification back on unless it also skips it.
    if override and any(override.get(key) for key in CA_KEYS):
        merged["insecure-skip-tls-verify"] = bool(override.get("insecure-skip-tls-verify"))
    return merged


def merge_overrides(
    kubeconfig: ParsedKubeconfig,
    overrides: ConfigOverrides,
    reference: str | None = None,
) -> ConnectionDescriptor:
    """Resolve a kubeconfig context into a connection descriptor.

    The context is the override context, else the kubeconfig's current
    context. Its cluster and auth-info are looked up by name, then the
    non-empty fields of any explicit overrides are laid over them field by
    field. Fields the override leaves empty keep the context's values.

    Args:
        kubeconfig: Parsed kubeconfig.
        overrides: Overrides to apply.
        reference: Origin of the kubeconfig, for error messages.

    Returns:
        The resolved connection descriptor.

    Raises:
        MergeError: If the selected context does not exist or the resolved
            cluster has no server.
    """
    context_name = overrides.current_context or kubeconfig.current_context
    contexts = kubeconfig.context_map

    if context_name and context_name not in contexts:
        raise MergeError(
            message=f"context was not found for specified context: {context_name}",
            reference=reference,
        )
    context = contexts.get(context_name, KubeContext())

    cluster = _merge_cluster(
        kubeconfig.cluster_map.get(context.cluster, {}), overrides.cluster_info
    )
    auth_info = _merge_entry(
        kubeconfig.auth_info_map.get(context.user, {}), overrides.auth_info
    )

    server = cluster.get("server")
    if not server:
        if not context_name:
            message = "no configuration has been provided: no current context is set"
        else:
            message = f"cluster has no server defined for context: {context_name}"
        raise MergeError(message=message, reference=reference)

    logger.debug("resolved_kubeconfig_context", context=context_name, host=server)
    return ConnectionDescriptor(
        host=server,
        tls=TLSConfig(
            ca_file=cluster.get("certificate-authority"),
            ca_data=cluster.get("certificate-authority-data"),
            insecure_skip_tls_verify=bool(cluster.get("insecure-skip-tls-verify", False)),
        ),
        credential=AuthInfoCredential(auth_info=dict(auth_info)),
    )


def resolve_kubeconfig(
    kubeconfig: ParsedKubeconfig,
    settings: AuthSettings,
    reference: str | None = None,
) -> ConnectionDescriptor:
    """Build overrides from ``settings`` and merge them onto ``kubeconfig``."""
    return merge_overrides(kubeconfig, build_overrides(kubeconfig, settings), reference)
