"""Live access check for a resolved account connection."""

from __future__ import annotations

from kube_account_validator.integrations.kubernetes.client import KubernetesClient
from kube_account_validator.integrations.kubernetes.models import Account, ConnectionDescriptor
from kube_account_validator.services.kubernetes.base import ValidationStage
from kube_account_validator.utils.settings import get_string_list_or_empty


class AccessValidator(ValidationStage):
    """Exercises a connection descriptor with exactly one read call.

    Accounts without ``namespaces`` must be able to list namespaces. Accounts
    with ``namespaces`` must be able to list pods in the first one; the other
    namespaces are never queried so the check costs one request regardless of
    configuration size.
    """

    _entity_name: str = "access"

    def validate_access(self, account: Account, descriptor: ConnectionDescriptor) -> None:
        """Run the access probe for ``account``.

        Raises:
            AccessDeniedError: If the API server rejects the credentials.
            ProbeError: If the client cannot be built or the call fails otherwise.
        """
        config = self._context.config
        namespaces = get_string_list_or_empty(account.settings, "namespaces")

        with KubernetesClient(descriptor, request_timeout=config.request_timeout) as client:
            if not namespaces:
                self._log.debug("probing_namespaces", account=account.name)
                try:
                    client.core_v1.list_namespace(
                        limit=config.probe_limit,
                        _request_timeout=client.timeout,
                    )
                except Exception as e:
                    raise client.translate_api_exception(
                        e,
                        message="error listing namespaces",
                        account=account.name,
                    ) from e
            else:
                namespace = namespaces[0]
                self._log.debug("probing_pods", account=account.name, namespace=namespace)
                try:
                    client.core_v1.list_namespaced_pod(
                        namespace=namespace,
                        limit=config.probe_limit,
                        _request_timeout=client.timeout,
                    )
                except Exception as e:
                    raise client.translate_api_exception(
                        e,
                        message="error listing pods",
                        account=account.name,
                        namespace=namespace,
                    ) from e

        self._log.debug("access_probe_succeeded", account=account.name)
