"""Utility functions for soapbridge."""

from soapbridge.utils.exceptions import (
    ConfigurationError,
    EncodingViolationError,
    ErrorCategory,
    RemoteFault,
    SoapBridgeError,
    TransportError,
    sanitize_error_message,
)

__all__ = [
    "SoapBridgeError",
    "ConfigurationError",
    "EncodingViolationError",
    "TransportError",
    "RemoteFault",
    "ErrorCategory",
    "sanitize_error_message",
]
