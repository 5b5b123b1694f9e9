"""Account, auth block and owning record models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kube_account_validator.utils.settings import get_string


class CredentialSource(StrEnum):
    """Credential strategy selected for an account, in precedence order."""

    KUBECONFIG_FILE = "kubeconfigFile"
    INLINE_KUBECONFIG = "kubeconfig"
    KUBECONFIG_SECRET = "kubeconfigSecret"
    SERVICE_ACCOUNT = "useServiceAccount"
    NONE = "none"


class SecretInNamespaceReference(BaseModel):
    """Reference to a key of a secret, optionally in a given namespace."""

    model_config = ConfigDict(extra="forbid")

    name: str
    key: str
    namespace: str = ""


class AccountAuth(BaseModel):
    """Structured auth block of an account.

    At most one field is expected to be populated. When several are,
    ``selected_source`` applies the fixed precedence:
    kubeconfigFile > kubeconfig > kubeconfigSecret > useServiceAccount.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    kubeconfig_file: str = Field(default="", alias="kubeconfigFile")
    kubeconfig: dict[str, Any] | None = None
    kubeconfig_secret: SecretInNamespaceReference | None = Field(
        default=None, alias="kubeconfigSecret"
    )
    use_service_account: bool = Field(default=False, alias="useServiceAccount")

    def selected_source(self) -> CredentialSource:
        """Return the credential source chosen by precedence."""
        if self.kubeconfig_file:
            return CredentialSource.KUBECONFIG_FILE
        if self.kubeconfig is not None:
            return CredentialSource.INLINE_KUBECONFIG
        if self.kubeconfig_secret is not None:
            return CredentialSource.KUBECONFIG_SECRET
        if self.use_service_account:
            return CredentialSource.SERVICE_ACCOUNT
        return CredentialSource.NONE


class AuthSettings(BaseModel):
    """Auth-related view over an account's loosely-typed settings.

    ``user``, ``context`` and ``cluster`` name entries inside a kubeconfig.
    ``serviceAccount`` and ``oAuthServiceAccount`` are accepted for
    compatibility but do not take part in resolution.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    user: str = ""
    context: str = ""
    cluster: str = ""
    service_account: bool = Field(default=False, alias="serviceAccount")
    kubeconfig_file: str = Field(default="", alias="kubeconfigFile")
    kubeconfig_contents: str = Field(default="", alias="kubeconfigContents")
    oauth_service_account: str = Field(default="", alias="oAuthServiceAccount")
    oauth_scopes: list[str] = Field(default_factory=list, alias="oAuthScopes")

    @field_validator(
        "user",
        "context",
        "cluster",
        "kubeconfig_file",
        "kubeconfig_contents",
        "oauth_service_account",
        mode="before",
    )
    @classmethod
    def validate_optional_string(cls, v: Any) -> Any:
        """Treat null strings as unset."""
        return "" if v is None else v

    @field_validator("oauth_scopes", mode="before")
    @classmethod
    def validate_oauth_scopes(cls, v: Any) -> Any:
        """Treat null scopes as empty."""
        return [] if v is None else v

    @classmethod
    def from_settings(cls, settings: dict[str, Any] | None) -> AuthSettings:
        """Build the auth view from an account settings document.

        Raises:
            pydantic.ValidationError: If a field has the wrong type.
        """
        return cls.model_validate(settings or {})


class Account(BaseModel):
    """A named Kubernetes cluster registration."""

    model_config = ConfigDict(extra="ignore")

    name: str
    settings: dict[str, Any] = Field(default_factory=dict)
    auth: AccountAuth | None = None

    @field_validator("settings", mode="before")
    @classmethod
    def validate_settings(cls, v: Any) -> Any:
        """Treat null settings as empty."""
        return {} if v is None else v


class OwnerRecord(BaseModel):
    """The service record that owns an account's cluster registration."""

    model_config = ConfigDict(extra="ignore")

    name: str
    namespace: str
    settings: dict[str, Any] = Field(default_factory=dict)

    def get_setting_string(self, path: str) -> str | None:
        """Get a non-empty string setting by dotted path, or None."""
        try:
            return get_string(self.settings, path)
        except (KeyError, TypeError):
            return None
