"""Utility functions for kube_account_validator."""

from kube_account_validator.utils.settings import (
    get_path,
    get_string,
    get_string_list,
    get_string_list_or_empty,
)

__all__ = [
    "get_path",
    "get_string",
    "get_string_list",
    "get_string_list_or_empty",
]
