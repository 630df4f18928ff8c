"""Exceptions raised by the management services."""

from __future__ import annotations


class ManagementServiceError(RuntimeError):
    """Raised when a write operation cannot be completed."""


class RecordNotFoundError(ManagementServiceError):
    """Raised when the targeted row does not exist."""


class DuplicateRecordError(ManagementServiceError):
    """Raised when a row with the same natural key already exists."""
