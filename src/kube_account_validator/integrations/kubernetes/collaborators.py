"""External collaborators consumed during account validation.

Secret decoding, configuration bundles, owner lookup and service account
resolution live outside this package. They are described here as protocols
and handed to the validator explicitly through a ``ValidationContext``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from kube_account_validator.integrations.kubernetes.config import ValidatorConfig

if TYPE_CHECKING:
    from kube_account_validator.integrations.kubernetes.models import (
        ConnectionDescriptor,
        OwnerRecord,
    )

ENCRYPTED_SECRET_PREFIXES = ("encrypted:", "encryptedFile:")


def is_encrypted_secret(reference: str) -> bool:
    """Return True if ``reference`` is an encrypted-secret indirection."""
    return reference.startswith(ENCRYPTED_SECRET_PREFIXES)


@runtime_checkable
class SecretDecoder(Protocol):
    """Resolves encrypted-secret references to readable local files."""

    def decode_as_file(self, reference: str) -> str:
        """Decode ``reference`` and return the path of a local file holding it."""
        ...


@runtime_checkable
class ConfigBundle(Protocol):
    """Files shipped alongside the account's owning configuration."""

    def get_file_content(self, name: str) -> bytes | None:
        """Return the content of the logical file ``name``, or None if absent."""
        ...


@runtime_checkable
class SecretReader(Protocol):
    """Reads a single key out of a secret resource."""

    def get_secret_string(
        self,
        descriptor: ConnectionDescriptor,
        namespace: str,
        name: str,
        key: str,
    ) -> str:
        """Return the decoded value of ``key`` in secret ``namespace/name``."""
        ...


@runtime_checkable
class OwnerLookup(Protocol):
    """Finds the record owning the account's cluster registration."""

    def find_owner(self, namespace: str) -> OwnerRecord | None:
        """Return the single owning record in ``namespace``, or None."""
        ...


@runtime_checkable
class ServiceAccountResolver(Protocol):
    """Resolves in-cluster service account identity material."""

    def resolve(self, name: str, namespace: str) -> tuple[str, str]:
        """Return the bearer token and CA bundle path of a service account."""
        ...


class DirectoryConfigBundle:
    """A ``ConfigBundle`` backed by a directory on local storage."""

    def __init__(self, base_dir: str | Path) -> None:
        self._base_dir = Path(base_dir)

    def get_file_content(self, name: str) -> bytes | None:
        path = self._base_dir / name
        if not path.is_file():
            return None
        return path.read_bytes()


@dataclass(frozen=True)
class SecretContext:
    """Access to secrets of the namespace the validator runs for.

    Attributes:
        namespace: Namespace secrets and owning records are read from.
        descriptor: Connection used to read secrets.
        reader: Secret reading collaborator.
    """

    namespace: str
    descriptor: ConnectionDescriptor
    reader: SecretReader


@dataclass(frozen=True)
class ValidationContext:
    """Everything a single validation call may consult besides the account.

    Collaborators left as None are treated as unavailable; the operations
    that need them fail immediately instead of falling back.
    """

    config: ValidatorConfig = field(default_factory=ValidatorConfig)
    secret_context: SecretContext | None = None
    secret_decoder: SecretDecoder | None = None
    config_bundle: ConfigBundle | None = None
    owner_lookup: OwnerLookup | None = None
    service_account_resolver: ServiceAccountResolver | None = None
