"""Credential source selection for Kubernetes accounts.

Chooses exactly one credential strategy per account and turns it into a
connection descriptor. With a structured ``auth`` block the strategy is picked
by ``AccountAuth.selected_source``; without one, the legacy settings keys
``kubeconfigFile`` and ``kubeconfigContents`` are used.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, cast

from pydantic import ValidationError

from kube_account_validator.integrations.kubernetes.collaborators import ValidationContext
from kube_account_validator.integrations.kubernetes.exceptions import (
    AccountValidationError,
    CredentialLoadError,
    InvalidSettingsError,
    NoAuthProvidedError,
    NoValidCredentialSourceError,
)
from kube_account_validator.integrations.kubernetes.models import (
    Account,
    AccountAuth,
    AuthSettings,
    ConnectionDescriptor,
    CredentialSource,
    OwnerRecord,
    ParsedKubeconfig,
    SecretInNamespaceReference,
)
from kube_account_validator.services.kubernetes.base import ValidationStage
from kube_account_validator.services.kubernetes.kubeconfig_loader import (
    KubeconfigLoader,
    parse_kubeconfig,
)
from kube_account_validator.services.kubernetes.overrides import resolve_kubeconfig
from kube_account_validator.services.kubernetes.service_account import (
    ServiceAccountCredentialBuilder,
)

INLINE_KUBECONFIG_REFERENCE = "auth.kubeconfig"
KUBECONFIG_CONTENTS_REFERENCE = "settings.kubeconfigContents"

Handler = Callable[[Account, AccountAuth, AuthSettings, OwnerRecord | None], Any]


class CredentialSourceResolver(ValidationStage):
    """Resolves an account to a single connection descriptor.

    Precedence, first match wins:

    1. ``auth.kubeconfigFile``
    2. ``auth.kubeconfig`` (inline kubeconfig)
    3. ``auth.kubeconfigSecret``
    4. ``auth.useServiceAccount``
    5. no ``auth`` block: ``kubeconfigFile`` then ``kubeconfigContents`` settings
    """

    _entity_name: str = "credentials"

    def __init__(self, context: ValidationContext) -> None:
        super().__init__(context)
        self._loader = KubeconfigLoader(context)
        self._service_accounts = ServiceAccountCredentialBuilder(context)
        self._handlers: dict[CredentialSource, Handler] = {
            CredentialSource.KUBECONFIG_FILE: self._from_file,
            CredentialSource.INLINE_KUBECONFIG: self._from_inline,
            CredentialSource.KUBECONFIG_SECRET: self._from_secret,
            CredentialSource.SERVICE_ACCOUNT: self._from_service_account,
            CredentialSource.NONE: self._no_source,
        }

    def resolve(
        self,
        account: Account,
        owner: OwnerRecord | None = None,
    ) -> ConnectionDescriptor | None:
        """Resolve the account's credentials.

        Args:
            account: Account to resolve.
            owner: Owning record, if already known (service account path only).

        Returns:
            The connection descriptor, or None when validation should be
            skipped because no owning record exists.

        Raises:
            AccountValidationError: If no usable credential source is found or
                the selected source fails to load.
        """
        settings = self._auth_settings(account)

        if account.auth is None:
            self._log.debug("resolving_credentials", account=account.name, source="settings")
            return self._from_settings(account, settings)

        source = account.auth.selected_source()
        self._log.debug("resolving_credentials", account=account.name, source=str(source))
        return self._handlers[source](account, account.auth, settings, owner)

    def _auth_settings(self, account: Account) -> AuthSettings:
        try:
            return AuthSettings.from_settings(account.settings)
        except ValidationError as e:
            raise InvalidSettingsError(
                message="invalid auth settings",
                account=account.name,
                original_error=e,
            ) from e

    def _from_file(
        self,
        account: Account,
        auth: AccountAuth,
        settings: AuthSettings,
        owner: OwnerRecord | None,
    ) -> ConnectionDescriptor:
        return self._loader.load(auth.kubeconfig_file, settings)

    def _from_inline(
        self,
        account: Account,
        auth: AccountAuth,
        settings: AuthSettings,
        owner: OwnerRecord | None,
    ) -> ConnectionDescriptor:
        try:
            kubeconfig = ParsedKubeconfig.model_validate(auth.kubeconfig)
        except ValidationError as e:
            raise CredentialLoadError(
                message="error converting inline kubeconfig",
                account=account.name,
                reference=INLINE_KUBECONFIG_REFERENCE,
                original_error=e,
            ) from e
        return resolve_kubeconfig(kubeconfig, settings, INLINE_KUBECONFIG_REFERENCE)

    def _from_secret(
        self,
        account: Account,
        auth: AccountAuth,
        settings: AuthSettings,
        owner: OwnerRecord | None,
    ) -> ConnectionDescriptor:
        ref = cast(SecretInNamespaceReference, auth.kubeconfig_secret)
        secret_context = self._require_secret_context("read kubeconfigSecret")
        namespace = ref.namespace or secret_context.namespace
        reference = f"{namespace}/{ref.name}:{ref.key}"
        try:
            content = secret_context.reader.get_secret_string(
                secret_context.descriptor, namespace, ref.name, ref.key
            )
        except AccountValidationError:
            raise
        except Exception as e:
            raise CredentialLoadError(
                message="error reading kubeconfigSecret",
                account=account.name,
                namespace=namespace,
                reference=reference,
                original_error=e,
            ) from e
        kubeconfig = parse_kubeconfig(content, reference)
        return resolve_kubeconfig(kubeconfig, settings, reference)

    def _from_service_account(
        self,
        account: Account,
        auth: AccountAuth,
        settings: AuthSettings,
        owner: OwnerRecord | None,
    ) -> ConnectionDescriptor | None:
        return self._service_accounts.build(owner)

    def _no_source(
        self,
        account: Account,
        auth: AccountAuth,
        settings: AuthSettings,
        owner: OwnerRecord | None,
    ) -> ConnectionDescriptor:
        raise NoAuthProvidedError(account=account.name)

    def _from_settings(self, account: Account, settings: AuthSettings) -> ConnectionDescriptor:
        """Resolve from legacy settings keys when no auth block is declared."""
        if not account.settings:
            raise NoAuthProvidedError(account=account.name)
        if settings.kubeconfig_file:
            return self._loader.load(settings.kubeconfig_file, settings)
        if settings.kubeconfig_contents:
            kubeconfig = parse_kubeconfig(
                settings.kubeconfig_contents, KUBECONFIG_CONTENTS_REFERENCE
            )
            return resolve_kubeconfig(kubeconfig, settings, KUBECONFIG_CONTENTS_REFERENCE)
        raise NoValidCredentialSourceError(account=account.name)
