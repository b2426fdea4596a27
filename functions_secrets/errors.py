"""Errors raised while encrypting and uploading secrets"""
from typing import Any, Dict, Optional


class FunctionsSecretsError(Exception):
    """Base exception for secrets upload errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(FunctionsSecretsError):
    """Raised when a required setting is missing or invalid."""
    pass


class NetworkError(FunctionsSecretsError):
    """Raised when the RPC endpoint cannot be reached."""
    pass


class EncryptionError(FunctionsSecretsError):
    """Raised when secrets cannot be encrypted."""
    pass


class UploadError(FunctionsSecretsError):
    """Raised when the gateways reject or fail the upload."""
    pass


class ToolkitError(FunctionsSecretsError):
    """Raised when the Functions toolkit process fails."""

    def __init__(self, message: str, method: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.method = method
