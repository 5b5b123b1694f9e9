"""Kubernetes account credential resolution and access validation."""

__version__ = "0.1.0"
