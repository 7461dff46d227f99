"""
soapbridge - marshalling client for SOAP services with a fixed wire vocabulary.

Native values (scalars, mappings, lists, records) are encoded into the
service's Scalar/Array/Map/Entity shapes and responses are decoded back,
converting strings between the caller's charset and UTF-8 on the way.
"""

from soapbridge.client import CallOutcome, SoapClient
from soapbridge.codec import ABSENT, Diagnostic, DiagnosticPolicy, Record
from soapbridge.config import ClientConfig, load_config
from soapbridge.transport import CallableTransport, HttpSoapTransport, Transport
from soapbridge.utils.exceptions import (
    ConfigurationError,
    EncodingViolationError,
    RemoteFault,
    SoapBridgeError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "CallOutcome",
    "CallableTransport",
    "ClientConfig",
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticPolicy",
    "EncodingViolationError",
    "HttpSoapTransport",
    "Record",
    "RemoteFault",
    "SoapBridgeError",
    "SoapClient",
    "Transport",
    "TransportError",
    "load_config",
]
