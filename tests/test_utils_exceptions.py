from soapbridge.codec.diagnostics import NULL_VALUE, Diagnostic
from soapbridge.utils.exceptions import (
    ConfigurationError,
    EncodingViolationError,
    ErrorCategory,
    RemoteFault,
    SoapBridgeError,
    TransportError,
    sanitize_error_message,
)


def test_base_error_formatting() -> None:
    err = SoapBridgeError("boom", code="X", details={"a": 1})
    assert str(err) == "[X] boom"
    assert err.to_dict() == {"error": "X", "message": "boom", "category": "fatal", "details": {"a": 1}}


def test_configuration_error_carries_field() -> None:
    err = ConfigurationError("bad charset", field="charset")
    assert err.category is ErrorCategory.CONFIGURATION
    assert err.details == {"field": "charset"}
    assert ConfigurationError("no field").details == {}


def test_encoding_violation_summarises_diagnostics() -> None:
    diagnostics = [
        Diagnostic(NULL_VALUE, "NULL values are not supported.", ("m", "a")),
        Diagnostic(NULL_VALUE, "NULL values are not supported.", ("m", "b")),
    ]
    err = EncodingViolationError("GetProfile", diagnostics)
    assert err.category is ErrorCategory.VALIDATION
    assert err.operation == "GetProfile"
    assert err.diagnostics == diagnostics
    assert "(+1 more)" in err.message
    assert err.details == {"operation": "GetProfile", "count": 2}


def test_transport_error_category_follows_retryability() -> None:
    assert TransportError("x", retryable=True).category is ErrorCategory.RETRYABLE
    assert TransportError("x").category is ErrorCategory.FATAL


def test_remote_fault_is_a_transport_error() -> None:
    fault = RemoteFault("Server", "internal", detail="trace", status_code=500)
    assert isinstance(fault, TransportError)
    assert fault.category is ErrorCategory.REMOTE
    assert fault.details["fault_code"] == "Server"
    assert str(fault) == "[REMOTE_FAULT] remote fault Server: internal"


def test_sanitize_error_message_hides_credentials() -> None:
    assert "secret-tok" not in sanitize_error_message("failed with access_token=secret-tok")
    assert "abc" not in sanitize_error_message("<access_token>abc</access_token>")
    assert sanitize_error_message("plain message") == "plain message"
