"""Pytest hooks and fixtures."""

from typing import Any

import pytest
from loguru import logger

from soapbridge.client import SoapClient


class RecordingTransport:
    """Transport double: records every invocation and replays canned responses."""

    def __init__(self, response: Any = None):
        self.response = response if response is not None else {}
        self.calls: list[tuple[str, Any]] = []

    def invoke(self, operation: str, argument: Any) -> Any:
        self.calls.append((operation, argument))
        if isinstance(self.response, BaseException):
            raise self.response
        return self.response

    @property
    def last_payload(self) -> dict:
        return self.calls[-1][1].to_payload()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def make_client(transport):
    """Build a client wired to the recording transport."""

    def _make(**overrides: Any) -> SoapClient:
        overrides.setdefault("access_token", "tok-123")
        return SoapClient(transport=transport, **overrides)

    return _make


@pytest.fixture
def log_messages():
    """Capture loguru messages at WARNING and above."""
    messages: list[str] = []
    sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(sink_id)
