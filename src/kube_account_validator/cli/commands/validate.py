"""Validate command for checking accounts against their clusters."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from kube_account_validator.integrations.kubernetes.client import KubernetesSecretReader
from kube_account_validator.integrations.kubernetes.collaborators import (
    DirectoryConfigBundle,
    SecretContext,
    ValidationContext,
)
from kube_account_validator.integrations.kubernetes.config import ValidatorConfig
from kube_account_validator.integrations.kubernetes.exceptions import AccountValidationError
from kube_account_validator.integrations.kubernetes.models import Account, ConfigOverrides
from kube_account_validator.services.kubernetes.account_validator import AccountValidator
from kube_account_validator.services.kubernetes.kubeconfig_loader import load_default_kubeconfig
from kube_account_validator.services.kubernetes.overrides import merge_overrides

console = Console()
logger = structlog.get_logger()

STATUS_STYLES = {
    "validated": "green",
    "skipped": "yellow",
    "failed": "red",
}


def load_accounts(path: Path) -> list[Account]:
    """Load accounts from a YAML file.

    The file holds a single account, a list of accounts, or a mapping with
    an ``accounts`` list.

    Raises:
        ValueError: If the file is not valid YAML or an account is malformed.
    """
    try:
        raw: Any = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"invalid YAML in {path}: {e}") from e

    if isinstance(raw, dict) and "accounts" in raw:
        raw = raw["accounts"]
    if isinstance(raw, dict):
        raw = [raw]
    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain an account or a list of accounts")

    try:
        return [Account.model_validate(item) for item in raw]
    except ValidationError as e:
        raise ValueError(f"invalid account in {path}: {e}") from e


def _build_secret_context(config: ValidatorConfig, namespace: str) -> SecretContext:
    """Secret access through the local default kubeconfig."""
    descriptor = merge_overrides(
        load_default_kubeconfig(config.default_kubeconfig),
        ConfigOverrides(),
        reference="default kubeconfig",
    )
    return SecretContext(
        namespace=namespace,
        descriptor=descriptor,
        reader=KubernetesSecretReader(request_timeout=config.request_timeout),
    )


def validate(
    accounts_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="YAML file with the accounts to validate.",
    ),
    files_dir: Path | None = typer.Option(
        None,
        "--files-dir",
        help="Directory for kubeconfig files referenced by relative name. "
        "Defaults to the accounts file's directory.",
    ),
    namespace: str | None = typer.Option(
        None,
        "--namespace",
        "-n",
        help="Namespace to read kubeconfig secrets from, using the default kubeconfig.",
    ),
    timeout: int | None = typer.Option(
        None,
        "--timeout",
        help="Per-request timeout in seconds.",
    ),
) -> None:
    """Validate Kubernetes accounts and report their status."""
    try:
        config = ValidatorConfig.from_env(
            {"request_timeout": timeout} if timeout is not None else None
        )
        accounts = load_accounts(accounts_file)
        secret_context = _build_secret_context(config, namespace) if namespace else None
    except (ValueError, AccountValidationError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2) from e

    context = ValidationContext(
        config=config,
        secret_context=secret_context,
        config_bundle=DirectoryConfigBundle(files_dir or accounts_file.parent),
    )
    validator = AccountValidator(context)

    table = Table(title="Kubernetes Account Validation")
    table.add_column("Account", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Details", style="dim")

    failed = 0
    for account in accounts:
        try:
            outcome = str(validator.validate(account))
            details = ""
        except AccountValidationError as e:
            outcome = "failed"
            details = escape(str(e))
            failed += 1
        table.add_row(account.name, f"[{STATUS_STYLES[outcome]}]{outcome}[/]", details)

    console.print(table)
    logger.info("validation_complete", accounts=len(accounts), failed=failed)

    if failed:
        raise typer.Exit(1)
