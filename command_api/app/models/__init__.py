"""Persisted entities."""

from .command import Command  # noqa: F401
