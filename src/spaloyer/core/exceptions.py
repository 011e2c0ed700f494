"""
Exception hierarchy for the spaloyer application.

Every error carries a human readable message and a ``details`` mapping
naming the path, key or bucket involved so that failures are actionable.
"""

from typing import Dict, Optional


class SpaloyerError(Exception):
    """Base exception for all spaloyer errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(SpaloyerError):
    """Raised when the transfer configuration is invalid or incomplete."""
    pass


class BucketAlreadyExists(SpaloyerError):
    """Raised by the object store when the target bucket is already there."""
    pass


class BucketProvisioningError(SpaloyerError):
    """Raised when the target bucket cannot be created."""
    pass


class UploadError(SpaloyerError):
    """Base class for errors that abort a directory upload."""
    pass


class TraversalError(UploadError):
    """Raised when a directory entry cannot be listed or stat'ed."""
    pass


class FileOpenError(UploadError):
    """Raised when a visited file cannot be opened for reading."""
    pass


class TransferError(UploadError):
    """Raised when the object store rejects or fails a transfer."""
    pass


class UploadCancelled(UploadError):
    """Raised when the run is interrupted before the walk completes."""
    pass
