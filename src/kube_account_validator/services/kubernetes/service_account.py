"""Connection descriptors from in-cluster service account identity."""

from __future__ import annotations

import os
import ssl

from kube_account_validator.integrations.kubernetes.exceptions import (
    AccountValidationError,
    CredentialLoadError,
    NoServiceAccountNameError,
)
from kube_account_validator.integrations.kubernetes.models import (
    BearerTokenCredential,
    ConfigOverrides,
    ConnectionDescriptor,
    OwnerRecord,
    TLSConfig,
)
from kube_account_validator.services.kubernetes.base import ValidationStage
from kube_account_validator.services.kubernetes.kubeconfig_loader import load_default_kubeconfig
from kube_account_validator.services.kubernetes.overrides import merge_overrides

SERVICE_ACCOUNT_NAME_SETTING = "kubernetes.serviceAccountName"


def join_host_port(host: str, port: str) -> str:
    """Join host and port, bracketing IPv6 literals."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


class ServiceAccountCredentialBuilder(ValidationStage):
    """Builds a descriptor from the owning service's service account.

    No kubeconfig auth-info is involved: the descriptor carries the service
    account's bearer token, its CA bundle when loadable, and the API server
    host of the environment the validator runs in.
    """

    _entity_name: str = "service_account"

    def build(self, owner: OwnerRecord | None = None) -> ConnectionDescriptor | None:
        """Build the descriptor for the owning record's service account.

        Args:
            owner: The owning record, if the caller already has it.

        Returns:
            The descriptor, or None when no owning record exists, meaning
            validation is skipped.

        Raises:
            NoServiceAccountNameError: If the owner has no service account name.
            CredentialLoadError: If the identity material cannot be resolved.
        """
        owner = self._ensure_owner(owner)
        if owner is None:
            self._log.info("owner_not_found_skipping_validation")
            return None

        name = owner.get_setting_string(SERVICE_ACCOUNT_NAME_SETTING)
        if not name:
            raise NoServiceAccountNameError(namespace=owner.namespace)

        resolver = self._context.service_account_resolver
        if resolver is None:
            raise CredentialLoadError(
                message="no service account resolver available",
                namespace=owner.namespace,
                reference=name,
            )
        try:
            token, ca_path = resolver.resolve(name, owner.namespace)
        except AccountValidationError:
            raise
        except Exception as e:
            raise CredentialLoadError(
                message="error resolving service account",
                namespace=owner.namespace,
                reference=name,
                original_error=e,
            ) from e

        tls = TLSConfig(ca_file=ca_path) if self._can_load_ca(ca_path) else TLSConfig()
        host = self.api_server_host()
        self._log.debug("built_service_account_descriptor", service_account=name, host=host)
        return ConnectionDescriptor(
            host=host,
            tls=tls,
            credential=BearerTokenCredential(token=token),
        )

    def _ensure_owner(self, owner: OwnerRecord | None) -> OwnerRecord | None:
        """Reuse the supplied owner or look it up in the secret context namespace."""
        if owner is not None:
            return owner
        secret_context = self._require_secret_context("look up the owning record")
        lookup = self._context.owner_lookup
        if lookup is None:
            raise CredentialLoadError(
                message="no owner lookup available",
                namespace=secret_context.namespace,
            )
        return lookup.find_owner(secret_context.namespace)

    def _can_load_ca(self, ca_path: str) -> bool:
        """Check that ``ca_path`` loads as a certificate pool.

        A failure is logged and tolerated: the descriptor is still usable
        against an API server with a publicly trusted certificate.
        """
        if not ca_path:
            self._log.warning("ca_bundle_missing")
            return False
        try:
            ssl.create_default_context(cafile=ca_path)
        except OSError as e:
            self._log.warning("ca_bundle_load_failed", ca_path=ca_path, error=str(e))
            return False
        return True

    def api_server_host(self) -> str:
        """Resolve the API server host of the environment.

        Uses the in-cluster service host and port environment variables when
        both are set, otherwise the host of the default kubeconfig's current
        context.

        Raises:
            CredentialLoadError: If no default kubeconfig can be loaded.
            MergeError: If the default kubeconfig has no usable context.
        """
        config = self._context.config
        host = os.environ.get(config.service_host_env, "")
        port = os.environ.get(config.service_port_env, "")
        if host and port:
            return f"https://{join_host_port(host, port)}"

        # not running in cluster
        kubeconfig = load_default_kubeconfig(config.default_kubeconfig)
        return merge_overrides(kubeconfig, ConfigOverrides(), reference="default kubeconfig").host
