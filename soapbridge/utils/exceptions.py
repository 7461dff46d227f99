"""
Exception hierarchy and error helpers for soapbridge.

Provides:
- A base exception with error codes and categories
- Encoding, configuration and transport errors
- Safe error message formatting (no credential leak)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RETRYABLE = "retryable"
    REMOTE = "remote"
    FATAL = "fatal"


class SoapBridgeError(Exception):
    """Base exception for all soapbridge errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigurationError(SoapBridgeError):
    """Invalid client configuration (unknown charset, unreadable config file)."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="CONFIG_ERROR", category=ErrorCategory.CONFIGURATION, details=details)


class EncodingViolationError(SoapBridgeError):
    """Raised under the ``raise`` diagnostic policy when parameters had to be dropped."""

    def __init__(self, operation: str, diagnostics: list[Any]):
        first = diagnostics[0] if diagnostics else None
        summary = getattr(first, "message", "invalid parameters")
        if len(diagnostics) > 1:
            summary += f" (+{len(diagnostics) - 1} more)"
        super().__init__(
            f"Invalid parameters for '{operation}': {summary}",
            code="ENCODING_VIOLATION",
            category=ErrorCategory.VALIDATION,
            details={"operation": operation, "count": len(diagnostics)},
        )
        self.operation = operation
        self.diagnostics = list(diagnostics)


class TransportError(SoapBridgeError):
    """Network, HTTP or protocol failure while invoking a remote operation."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "TRANSPORT_ERROR",
        status_code: int | None = None,
        retryable: bool = False,
    ) -> None:
        category = ErrorCategory.RETRYABLE if retryable else ErrorCategory.FATAL
        super().__init__(
            message,
            code=code,
            category=category,
            details={"status_code": status_code, "retryable": retryable},
        )
        self.status_code = status_code
        self.retryable = retryable


class RemoteFault(TransportError):
    """SOAP fault returned by the remote service."""

    def __init__(
        self,
        fault_code: str,
        fault_string: str,
        *,
        detail: Any = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(
            f"remote fault {fault_code}: {fault_string}",
            code="REMOTE_FAULT",
            status_code=status_code,
            retryable=False,
        )
        self.category = ErrorCategory.REMOTE
        self.fault_code = fault_code
        self.fault_string = fault_string
        self.detail = detail
        self.details["fault_code"] = fault_code


_SENSITIVE_PATTERNS = [
    re.compile(r"(access[_-]?token|api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"<]+)['\"]?", re.IGNORECASE),
    re.compile(r"<(access_token)>[^<]*</\1>", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"[a-zA-Z0-9]{32,}"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove credentials from messages before they are logged."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized
