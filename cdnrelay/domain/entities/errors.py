"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class AssetNotFoundError(DomainError):
    """Raised when a stored asset cannot be found."""

    def __init__(self, asset_id: str, details: Optional[Dict[str, Any]] = None):
        message = f"Asset {asset_id} not found"
        super().__init__(message, details)


class AssetValidationError(DomainError):
    """Raised when an uploaded asset or asset name is rejected."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class AssetStorageError(DomainError):
    """Raised when the asset store cannot complete an operation."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
