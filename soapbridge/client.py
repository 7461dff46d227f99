"""SOAP client: encodes native parameters, invokes the transport, decodes the result."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from loguru import logger

from soapbridge.codec.charset import CharsetCodec
from soapbridge.codec.decoder import ResultDecoder
from soapbridge.codec.diagnostics import (
    INVALID_PARAMETERS,
    Diagnostic,
    DiagnosticCollector,
    DiagnosticPolicy,
)
from soapbridge.codec.encoder import ParameterEncoder
from soapbridge.codec.values import WireEntity, WireScalar
from soapbridge.config.loader import build_config
from soapbridge.config.schema import PARAM_ACCESS_TOKEN, ClientConfig
from soapbridge.transport.base import Transport
from soapbridge.transport.http import HttpSoapTransport
from soapbridge.utils.exceptions import EncodingViolationError


@dataclass(slots=True)
class CallOutcome:
    """Decoded result of one call plus the parameters that were dropped on the way out."""

    result: Any
    diagnostics: list[Diagnostic] = field(default_factory=list)


class SoapClient:
    """Marshalling client for one service endpoint.

    Operations can be called explicitly (``client.call("GetProfile", {...})``)
    or as attributes (``client.GetProfile({...})``).
    """

    PARAM_ACCESS_TOKEN = PARAM_ACCESS_TOKEN

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: Transport | None = None,
        on_diagnostic: Callable[[Diagnostic], None] | None = None,
        **overrides: Any,
    ):
        if overrides or config is None:
            data = config.model_dump() if config is not None else {}
            data.update(overrides)
            config = build_config(data)
        self.config = config
        self.policy = DiagnosticPolicy(self.config.diagnostic_policy)
        self.on_diagnostic = on_diagnostic
        self.codec = CharsetCodec(self.config.charset)
        self.encoder = ParameterEncoder(self.codec, self.policy, on_diagnostic)
        self.decoder = ResultDecoder(self.codec)
        self.transport: Transport = transport or HttpSoapTransport(
            self.config.url,
            namespace=self.config.target_namespace,
            timeout=self.config.timeout,
        )

    def call(self, operation: str, params: Any = None) -> Any:
        """Invoke a remote operation and return its decoded result."""
        return self.call_with_diagnostics(operation, params).result

    def call_with_diagnostics(self, operation: str, params: Any = None) -> CallOutcome:
        """Like ``call`` but also report which parameters could not be encoded."""
        collector = DiagnosticCollector(self.policy, self.on_diagnostic)
        if params is None:
            bag: Mapping[Any, Any] = {}
        elif isinstance(params, Mapping):
            bag = params
        else:
            collector.report(INVALID_PARAMETERS, "Invalid parameters, a mapping is required.")
            bag = {}

        encoded = self.encoder.encode_params(bag)
        diagnostics = collector.items + encoded.diagnostics
        if diagnostics and self.policy is DiagnosticPolicy.RAISE:
            raise EncodingViolationError(operation, diagnostics)

        argument = encoded.value
        self._inject_credential(argument)

        logger.debug("Calling {} with {} parameter(s)", operation, len(argument.fields))
        raw = self.transport.invoke(operation, argument)
        return CallOutcome(self.decoder.decode_response(raw), diagnostics)

    def _inject_credential(self, argument: WireEntity) -> None:
        """Add the configured access token unless the caller supplied a non-null one."""
        fields = argument.fields
        # identity charsets leave bytes names untouched; the wire name is text
        for name in [n for n in fields if isinstance(n, bytes)]:
            if name.decode("utf-8", errors="replace") == PARAM_ACCESS_TOKEN:
                supplied = fields.pop(name)
                if PARAM_ACCESS_TOKEN not in fields:
                    fields[PARAM_ACCESS_TOKEN] = supplied
        current = fields.get(PARAM_ACCESS_TOKEN)
        if current is None or (isinstance(current, WireScalar) and current.value is None):
            fields[PARAM_ACCESS_TOKEN] = WireScalar(self.config.access_token)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)

        def operation(params: Any = None) -> Any:
            return self.call(name, params)

        operation.__name__ = name
        return operation

    def __repr__(self) -> str:
        return f"SoapClient(url={self.config.url!r}, charset={self.config.charset!r})"
