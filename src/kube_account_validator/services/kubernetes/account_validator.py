"""Kubernetes account validation entry point."""

from __future__ import annotations

from enum import StrEnum

import structlog

from kube_account_validator.integrations.kubernetes.collaborators import ValidationContext
from kube_account_validator.integrations.kubernetes.exceptions import AccountValidationError
from kube_account_validator.integrations.kubernetes.models import Account, OwnerRecord
from kube_account_validator.services.kubernetes.access_validator import AccessValidator
from kube_account_validator.services.kubernetes.credential_resolver import (
    CredentialSourceResolver,
)
from kube_account_validator.services.kubernetes.settings_validator import (
    validate_namespace_settings,
)

logger = structlog.get_logger()


class ValidationOutcome(StrEnum):
    """Successful validation outcomes."""

    VALIDATED = "validated"
    SKIPPED = "skipped"


class AccountValidator:
    """Validates Kubernetes accounts.

    Each call checks namespace settings, resolves credentials and probes the
    cluster once, stopping at the first failure. Nothing is cached between
    calls, so one instance can validate many accounts.

    Example:
        ```python
        validator = AccountValidator(ValidationContext(config=ValidatorConfig.from_env()))
        validator.validate(Account(name="prod", auth=AccountAuth(kubeconfigFile="/k/prod")))
        ```
    """

    def __init__(self, context: ValidationContext | None = None) -> None:
        """Initialize the validator.

        Args:
            context: Collaborators and settings. Defaults to an empty context
                with default configuration.
        """
        self._context = context or ValidationContext()

    @property
    def context(self) -> ValidationContext:
        """Get the validation context."""
        return self._context

    def validate(self, account: Account, owner: OwnerRecord | None = None) -> ValidationOutcome:
        """Validate one account.

        Args:
            account: Account to validate.
            owner: Owning record, if already known to the caller.

        Returns:
            ``VALIDATED`` after a successful probe, or ``SKIPPED`` when the
            service account path found no owning record.

        Raises:
            AccountValidationError: On the first failing step. The error's
                ``account`` is always set.
        """
        log = logger.bind(account=account.name)
        try:
            validate_namespace_settings(account)
            descriptor = CredentialSourceResolver(self._context).resolve(account, owner)
            if descriptor is None:
                log.info("account_validation_skipped")
                return ValidationOutcome.SKIPPED
            AccessValidator(self._context).validate_access(account, descriptor)
        except AccountValidationError as e:
            if e.account is None:
                e.account = account.name
            log.warning("account_validation_failed", error=str(e))
            raise

        log.info("account_validated", host=descriptor.host)
        return ValidationOutcome.VALIDATED
