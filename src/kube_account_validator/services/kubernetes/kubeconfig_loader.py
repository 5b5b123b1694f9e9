"""Kubeconfig loading from files, secret references and configuration bundles."""

from __future__ import annotations

import os
from pathlib import Path

import structlog
import yaml

from kube_account_validator.integrations.kubernetes.collaborators import is_encrypted_secret
from kube_account_validator.integrations.kubernetes.exceptions import CredentialLoadError
from kube_account_validator.integrations.kubernetes.models import (
    AuthSettings,
    ConnectionDescriptor,
    ParsedKubeconfig,
)
from kube_account_validator.services.kubernetes.base import ValidationStage
from kube_account_validator.services.kubernetes.overrides import resolve_kubeconfig

logger = structlog.get_logger()


def parse_kubeconfig(data: bytes | str, reference: str | None = None) -> ParsedKubeconfig:
    """Parse kubeconfig text, reporting failures against ``reference``.

    Raises:
        CredentialLoadError: If the text is not a valid kubeconfig.
    """
    try:
        return ParsedKubeconfig.from_bytes(data)
    except ValueError as e:
        raise CredentialLoadError(
            message="error parsing kubeconfig",
            reference=reference,
            original_error=e,
        ) from e


def _read_file(path: str | Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise CredentialLoadError(
            message="error loading kubeconfigFile",
            reference=str(path),
            original_error=e,
        ) from e


def load_default_kubeconfig(explicit_path: str | None = None) -> ParsedKubeconfig:
    """Load and merge the local default kubeconfig files.

    Uses the kubernetes client's own loading rules: every existing file of
    ``KUBECONFIG`` (else ``~/.kube/config``) is merged, the first definition
    of a cluster, user or context name wins, and the last file that sets
    ``current-context`` decides it.

    Args:
        explicit_path: Load these files instead of the default location.

    Returns:
        The merged kubeconfig.

    Raises:
        CredentialLoadError: If no file can be loaded or a file is invalid.
    """
    from kubernetes.config import kube_config
    from kubernetes.config.config_exception import ConfigException

    paths = explicit_path or kube_config.KUBE_CONFIG_DEFAULT_LOCATION
    try:
        merger = kube_config.KubeConfigMerger(paths)
    except (ConfigException, OSError, yaml.YAMLError, AttributeError, KeyError, TypeError) as e:
        raise CredentialLoadError(
            message="error loading default kubeconfig",
            reference=paths,
            original_error=e,
        ) from e
    if merger.config is None:
        raise CredentialLoadError(
            message="no kubeconfig found by the default loading rules",
            reference=paths,
        )

    raw = dict(merger.config.value)
    for item in ("clusters", "contexts", "users"):
        raw[item] = [node.value for node in raw.get(item) or []]
    try:
        merged = ParsedKubeconfig.model_validate(raw)
    except ValueError as e:
        raise CredentialLoadError(
            message="error parsing kubeconfig",
            reference=paths,
            original_error=e,
        ) from e

    logger.debug("loaded_default_kubeconfig", files=merger.paths)
    return merged


class KubeconfigLoader(ValidationStage):
    """Loads a kubeconfig from a file reference and resolves it.

    A reference is read with exactly one strategy, chosen by its shape:

    1. Encrypted-secret references are decoded to a local file first.
    2. Absolute paths are read from local storage.
    3. Anything else names a file of the account's configuration bundle.
    """

    _entity_name: str = "kubeconfig"

    def read_bytes(self, reference: str) -> bytes:
        """Read the raw kubeconfig bytes behind ``reference``.

        Raises:
            CredentialLoadError: If the reference cannot be read.
        """
        if is_encrypted_secret(reference):
            decoder = self._context.secret_decoder
            if decoder is None:
                raise CredentialLoadError(
                    message="no secret decoder available for kubeconfigFile",
                    reference=reference,
                )
            try:
                path = decoder.decode_as_file(reference)
            except Exception as e:
                raise CredentialLoadError(
                    message="error decoding kubeconfigFile from secret reference",
                    reference=reference,
                    original_error=e,
                ) from e
            self._log.debug("decoded_kubeconfig_reference", path=path)
            return _read_file(path)

        if os.path.isabs(reference):
            return _read_file(reference)

        bundle = self._context.config_bundle
        if bundle is None:
            raise CredentialLoadError(
                message="no configuration files available for kubeconfigFile",
                reference=reference,
            )
        content = bundle.get_file_content(reference)
        if content is None:
            raise CredentialLoadError(
                message="kubeconfigFile not found in configuration files",
                reference=reference,
            )
        return content

    def load(self, reference: str, settings: AuthSettings) -> ConnectionDescriptor:
        """Load the kubeconfig behind ``reference`` and apply settings overrides.

        Args:
            reference: Encrypted-secret reference, absolute path or bundle file name.
            settings: Account auth settings supplying overrides.

        Returns:
            The resolved connection descriptor.

        Raises:
            CredentialLoadError: If the kubeconfig cannot be read or parsed.
            MergeError: If the overrides cannot be applied.
        """
        self._log.debug("loading_kubeconfig", reference=reference)
        kubeconfig = parse_kubeconfig(self.read_bytes(reference), reference)
        return resolve_kubeconfig(kubeconfig, settings, reference)
