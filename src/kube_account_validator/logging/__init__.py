"""Logging configuration for kube_account_validator."""

from kube_account_validator.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
