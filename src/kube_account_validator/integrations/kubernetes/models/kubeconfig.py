"""Kubeconfig, override and connection descriptor models."""

from __future__ import annotations

from typing import Annotated, Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Names used for the single-context kubeconfig rendered from a descriptor
DESCRIPTOR_ENTRY_NAME = "account"


class NamedCluster(BaseModel):
    """A named cluster entry (endpoint and trust material)."""

    model_config = ConfigDict(extra="ignore")

    name: str
    cluster: dict[str, Any] = Field(default_factory=dict)

    @field_validator("cluster", mode="before")
    @classmethod
    def validate_cluster(cls, v: Any) -> Any:
        """Treat a null cluster body as empty."""
        return {} if v is None else v


class NamedAuthInfo(BaseModel):
    """A named auth-info entry (credentials)."""

    model_config = ConfigDict(extra="ignore")

    name: str
    user: dict[str, Any] = Field(default_factory=dict)

    @field_validator("user", mode="before")
    @classmethod
    def validate_user(cls, v: Any) -> Any:
        """Treat a null user body as empty."""
        return {} if v is None else v


class KubeContext(BaseModel):
    """A cluster and auth-info pair."""

    model_config = ConfigDict(extra="ignore")

    cluster: str = ""
    user: str = ""
    namespace: str | None = None


class NamedContext(BaseModel):
    """A named context entry."""

    model_config = ConfigDict(extra="ignore")

    name: str
    context: KubeContext = Field(default_factory=KubeContext)

    @field_validator("context", mode="before")
    @classmethod
    def validate_context(cls, v: Any) -> Any:
        """Treat a null context body as empty."""
        return {} if v is None else v


class ParsedKubeconfig(BaseModel):
    """Structured kubeconfig document.

    Mirrors the v1 ``Config`` layout: named lists of clusters, users and
    contexts plus a ``current-context`` pointer. Use the ``*_map`` properties
    for lookups by name.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    api_version: str = Field(default="v1", alias="apiVersion")
    kind: str = "Config"
    clusters: list[NamedCluster] = Field(default_factory=list)
    users: list[NamedAuthInfo] = Field(default_factory=list)
    contexts: list[NamedContext] = Field(default_factory=list)
    current_context: str = Field(default="", alias="current-context")
    preferences: dict[str, Any] = Field(default_factory=dict)

    @field_validator("clusters", "users", "contexts", mode="before")
    @classmethod
    def validate_named_lists(cls, v: Any) -> Any:
        """Treat null entry lists as empty."""
        return [] if v is None else v

    @field_validator("preferences", mode="before")
    @classmethod
    def validate_preferences(cls, v: Any) -> Any:
        """Treat null preferences as empty."""
        return {} if v is None else v

    @field_validator("current_context", mode="before")
    @classmethod
    def validate_current_context(cls, v: Any) -> Any:
        """Treat a null current-context as unset."""
        return "" if v is None else v

    @classmethod
    def from_bytes(cls, data: bytes | str) -> ParsedKubeconfig:
        """Parse YAML or JSON kubeconfig text.

        Empty input yields an empty configuration.

        Raises:
            ValueError: If the text is not valid YAML or not a kubeconfig mapping.
        """
        try:
            raw = yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise ValueError(f"invalid kubeconfig YAML: {e}") from e
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ValueError(f"kubeconfig must be a mapping, got {type(raw).__name__}")
        return cls.model_validate(raw)

    @property
    def cluster_map(self) -> dict[str, dict[str, Any]]:
        """Clusters keyed by name."""
        return {c.name: c.cluster for c in self.clusters}

    @property
    def auth_info_map(self) -> dict[str, dict[str, Any]]:
        """Auth-infos keyed by name."""
        return {u.name: u.user for u in self.users}

    @property
    def context_map(self) -> dict[str, KubeContext]:
        """Contexts keyed by name."""
        return {c.name: c.context for c in self.contexts}


class ConfigOverrides(BaseModel):
    """User-declared overrides applied when resolving a kubeconfig context."""

    model_config = ConfigDict(frozen=True)

    current_context: str = ""
    auth_info: dict[str, Any] | None = None
    cluster_info: dict[str, Any] | None = None


class TLSConfig(BaseModel):
    """Trust material for the API server connection."""

    model_config = ConfigDict(frozen=True)

    ca_file: str | None = None
    ca_data: str | None = None
    insecure_skip_tls_verify: bool = False


class BearerTokenCredential(BaseModel):
    """A bare bearer token credential."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["token"] = "token"
    token: str = Field(repr=False)


class AuthInfoCredential(BaseModel):
    """A full kubeconfig auth-info entry."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["auth_info"] = "auth_info"
    auth_info: dict[str, Any] = Field(default_factory=dict, repr=False)


Credential = Annotated[BearerTokenCredential | AuthInfoCredential, Field(discriminator="kind")]


class ConnectionDescriptor(BaseModel):
    """Resolved endpoint, trust material and credential for one account."""

    model_config = ConfigDict(frozen=True)

    host: str
    tls: TLSConfig = Field(default_factory=TLSConfig)
    credential: Credential

    def to_kubeconfig_dict(self) -> dict[str, Any]:
        """Render a single-context kubeconfig carrying this descriptor.

        Returns:
            A v1 kubeconfig dictionary whose current context selects the
            descriptor's cluster and credential.
        """
        cluster: dict[str, Any] = {"server": self.host}
        if self.tls.ca_file:
            cluster["certificate-authority"] = self.tls.ca_file
        if self.tls.ca_data:
            cluster["certificate-authority-data"] = self.tls.ca_data
        if self.tls.insecure_skip_tls_verify:
            cluster["insecure-skip-tls-verify"] = True

        if isinstance(self.credential, BearerTokenCredential):
            user: dict[str, Any] = {"token": self.credential.token}
        else:
            user = dict(self.credential.auth_info)

        return {
            "apiVersion": "v1",
            "kind": "Config",
            "clusters": [{"name": DESCRIPTOR_ENTRY_NAME, "cluster": cluster}],
            "users": [{"name": DESCRIPTOR_ENTRY_NAME, "user": user}],
            "contexts": [
                {
                    "name": DESCRIPTOR_ENTRY_NAME,
                    "context": {"cluster": DESCRIPTOR_ENTRY_NAME, "user": DESCRIPTOR_ENTRY_NAME},
                }
            ],
            "current-context": DESCRIPTOR_ENTRY_NAME,
        }
