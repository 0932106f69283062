"""Custom exceptions for Synaptic Store."""

from typing import Any, Dict, Optional


class StoreError(Exception):
    """Base exception for all Synaptic Store errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [self.message]
        if self.error_code:
            parts.append(f"(code: {self.error_code})")
        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ConfigurationError(StoreError):
    """Raised when there's a configuration issue."""

    def __init__(self, message: str, config_key: Optional[str] = None) -> None:
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, "CONFIGURATION_ERROR", details)


class ValidationError(StoreError):
    """Raised when caller-supplied data validation fails."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class BackendError(StoreError):
    """Raised when a host key-value store fails."""

    def __init__(self, message: str, backend: Optional[str] = None) -> None:
        details = {"backend": backend} if backend else {}
        super().__init__(message, "BACKEND_ERROR", details)


class QuotaExceededError(BackendError):
    """Raised when a host store refuses a new entry because it is full."""

    def __init__(self, backend: str, max_entries: int) -> None:
        super().__init__(
            f"Storage quota exceeded ({max_entries} entries)", backend
        )
        self.error_code = "QUOTA_EXCEEDED"
        self.details["max_entries"] = max_entries


class DecodeError(StoreError):
    """Raised when a stored value is not a valid envelope."""

    def __init__(self, message: str, raw: Optional[str] = None) -> None:
        details = {"raw": raw} if raw is not None else {}
        super().__init__(message, "DECODE_ERROR", details)
