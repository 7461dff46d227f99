"""Transports that carry encoded calls to the remote service."""

from .base import CallableTransport, Transport
from .http import HttpSoapTransport

__all__ = ["CallableTransport", "HttpSoapTransport", "Transport"]
