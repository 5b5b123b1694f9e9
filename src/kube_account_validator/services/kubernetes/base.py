"""Base class for account validation stages.

Provides shared infrastructure for the stages that turn an account into a
validated connection: the validation context and structured logging.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from kube_account_validator.integrations.kubernetes.exceptions import CredentialLoadError

if TYPE_CHECKING:
    from kube_account_validator.integrations.kubernetes.collaborators import (
        SecretContext,
        ValidationContext,
    )

logger = structlog.get_logger()


class ValidationStage:
    """Base class for validation stages.

    Subclasses set ``_entity_name`` for structured log context.

    Example:
        >>> class AccessValidator(ValidationStage):
        ...     _entity_name = "access"
    """

    _entity_name: str = ""

    def __init__(self, context: ValidationContext) -> None:
        """Initialize the stage.

        Args:
            context: Collaborators and settings for the current validation call.
        """
        self._context = context
        self._log = logger.bind(entity=self._entity_name)

    def _require_secret_context(self, purpose: str) -> SecretContext:
        """Return the secret context or fail immediately when it is unavailable.

        Args:
            purpose: What the secret context is needed for, for the error message.

        Raises:
            CredentialLoadError: If no secret context was supplied.
        """
        secret_context = self._context.secret_context
        if secret_context is None:
            raise CredentialLoadError(message=f"no secret context available to {purpose}")
        return secret_context
