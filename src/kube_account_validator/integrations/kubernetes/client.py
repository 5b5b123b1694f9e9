"""Kubernetes API client built from a connection descriptor.

Wraps the official kubernetes Python client so that every validation call gets
its own ``ApiClient`` configured from a resolved ``ConnectionDescriptor``,
never from the process-wide default configuration.
"""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING, Any

import structlog

from kube_account_validator.integrations.kubernetes.exceptions import (
    AccessDeniedError,
    AccountValidationError,
    CredentialLoadError,
    ProbeError,
)

if TYPE_CHECKING:
    from kubernetes.client import ApiClient, CoreV1Api

    from kube_account_validator.integrations.kubernetes.models import ConnectionDescriptor

logger = structlog.get_logger()


class KubernetesClient:
    """Single-connection Kubernetes API client.

    Example:
        ```python
        with KubernetesClient(descriptor, request_timeout=10) as client:
            client.core_v1.list_namespace(limit=1, _request_timeout=client.timeout)
        ```
    """

    def __init__(self, descriptor: ConnectionDescriptor, request_timeout: int = 30) -> None:
        """Initialize the client from a descriptor.

        Args:
            descriptor: Resolved connection descriptor.
            request_timeout: Timeout in seconds applied to each API request.

        Raises:
            ProbeError: If the descriptor cannot be turned into an API client.
        """
        self._descriptor = descriptor
        self._timeout = request_timeout
        self._core_v1: CoreV1Api | None = None
        self._api_client = self._build_api_client()

        logger.debug("kubernetes_client_initialized", host=descriptor.host)

    def _build_api_client(self) -> ApiClient:
        """Create an ``ApiClient`` from the descriptor's kubeconfig rendering."""
        from kubernetes.config.kube_config import new_client_from_config_dict

        try:
            return new_client_from_config_dict(
                config_dict=self._descriptor.to_kubeconfig_dict(),
                persist_config=False,
            )
        except Exception as e:
            # Auth providers can fail with their own exception types while loading.
            raise ProbeError(
                message="unable to build kubernetes client from connection descriptor",
                original_error=e,
            ) from e

    @property
    def core_v1(self) -> CoreV1Api:
        """Get CoreV1Api instance (namespaces, pods, secrets)."""
        if self._core_v1 is None:
            from kubernetes.client import CoreV1Api

            self._core_v1 = CoreV1Api(api_client=self._api_client)
        return self._core_v1

    @property
    def timeout(self) -> int:
        """Get the configured request timeout."""
        return self._timeout

    @staticmethod
    def translate_api_exception(
        e: Exception,
        message: str,
        account: str | None = None,
        namespace: str | None = None,
    ) -> AccountValidationError:
        """Translate a failed API call into a probe error.

        Args:
            e: The original exception (typically ApiException).
            message: Description of the call that failed.
            account: Account being validated.
            namespace: Namespace the call targeted, if any.

        Returns:
            ``AccessDeniedError`` for 401/403 responses, ``ProbeError`` otherwise.
        """
        from kubernetes.client import ApiException

        if not isinstance(e, ApiException):
            return ProbeError(
                message=message,
                account=account,
                namespace=namespace,
                original_error=e,
            )

        error_cls = AccessDeniedError if e.status in (401, 403) else ProbeError
        return error_cls(
            message=message,
            account=account,
            namespace=namespace,
            status_code=e.status,
            original_error=e,
        )

    def close(self) -> None:
        """Close the underlying API client."""
        self._core_v1 = None
        self._api_client.close()
        logger.debug("kubernetes_client_closed")

    def __enter__(self) -> KubernetesClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()


class KubernetesSecretReader:
    """``SecretReader`` backed by ``CoreV1Api.read_namespaced_secret``."""

    def __init__(self, request_timeout: int = 30) -> None:
        self._timeout = request_timeout

    def get_secret_string(
        self,
        descriptor: ConnectionDescriptor,
        namespace: str,
        name: str,
        key: str,
    ) -> str:
        """Read and base64-decode one key of a secret.

        Raises:
            CredentialLoadError: If the secret cannot be read or lacks ``key``.
        """
        reference = f"{namespace}/{name}:{key}"
        with KubernetesClient(descriptor, request_timeout=self._timeout) as client:
            try:
                secret = client.core_v1.read_namespaced_secret(
                    name=name,
                    namespace=namespace,
                    _request_timeout=client.timeout,
                )
            except Exception as e:
                raise CredentialLoadError(
                    message="error reading secret",
                    namespace=namespace,
                    reference=reference,
                    original_error=e,
                ) from e

        data = secret.data or {}
        if key not in data:
            raise CredentialLoadError(
                message=f"secret has no key '{key}'",
                namespace=namespace,
                reference=reference,
            )
        return base64.b64decode(data[key]).decode("utf-8")
