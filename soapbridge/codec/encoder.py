"""Parameter encoder: native values → wire shapes.

Top-level parameters may be scalars, mappings (sent as Map), lists (sent as
Array) or records (sent as Entity). The wire format only allows shallow
structures, so anything nested deeper than it can express is dropped and a
diagnostic is recorded; encoding always carries on with the rest.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Callable

from soapbridge.codec.charset import CharsetCodec
from soapbridge.codec.diagnostics import (
    COMPLEX_KEY,
    NESTED_LIST,
    NESTED_MAP,
    NESTED_OBJECT,
    NULL_VALUE,
    UNSUPPORTED_VALUE,
    Diagnostic,
    DiagnosticCollector,
    DiagnosticPolicy,
)
from soapbridge.codec.values import (
    ValueKind,
    WireArray,
    WireEntity,
    WireMap,
    WirePair,
    WireScalar,
    WireValue,
    classify_value,
    is_string,
    is_valid_key,
    record_fields,
)


@dataclass(slots=True)
class EncodeResult:
    """Encoded wire value plus every structural violation found on the way."""

    value: WireValue
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


class ParameterEncoder:
    def __init__(
        self,
        codec: CharsetCodec,
        policy: DiagnosticPolicy | str = DiagnosticPolicy.LOG,
        on_diagnostic: Callable[[Diagnostic], None] | None = None,
    ):
        self.codec = codec
        self.policy = DiagnosticPolicy(policy)
        self.on_diagnostic = on_diagnostic

    def _collector(self) -> DiagnosticCollector:
        return DiagnosticCollector(self.policy, self.on_diagnostic)

    def _convert(self, value: Any) -> Any:
        return self.codec.to_wire(value) if is_string(value) else value

    def encode_params(self, bag: Mapping[Any, Any]) -> EncodeResult:
        """Encode a parameter bag into the entity passed to the transport."""
        collector = self._collector()
        entity = WireEntity()
        for key, value in bag.items():
            path = (key,)
            if not is_valid_key(key):
                collector.report(COMPLEX_KEY, "Complex keys are not supported.", path)
                continue
            encoded = self._encode_value(value, path, collector)
            if encoded is not None:
                entity.fields[self._convert(key)] = encoded
        return EncodeResult(entity, collector.items)

    def encode_assoc(self, mapping: Mapping[Any, Any]) -> EncodeResult:
        collector = self._collector()
        return EncodeResult(self._encode_assoc(mapping, (), collector), collector.items)

    def encode_array(self, values: Sequence[Any]) -> EncodeResult:
        collector = self._collector()
        return EncodeResult(self._encode_array(values, (), collector), collector.items)

    def encode_object(self, record: Any) -> EncodeResult:
        collector = self._collector()
        return EncodeResult(self._encode_object(record, (), collector), collector.items)

    def _encode_value(self, value: Any, path: tuple[Any, ...], collector: DiagnosticCollector) -> WireValue | None:
        kind = classify_value(value)
        if kind is ValueKind.MAPPING:
            return self._encode_assoc(value, path, collector)
        if kind is ValueKind.LIST:
            return self._encode_array(value, path, collector)
        if kind is ValueKind.RECORD:
            return self._encode_object(value, path, collector)
        if kind is ValueKind.UNSUPPORTED:
            collector.report(UNSUPPORTED_VALUE, f"Values of type {type(value).__name__} are not supported.", path)
            return None
        return WireScalar(self._convert(value))

    def _encode_assoc(self, mapping: Mapping[Any, Any], path: tuple[Any, ...], collector: DiagnosticCollector) -> WireMap:
        """Mapping → Map: a sequence of scalar key/value pairs."""
        result = WireMap()
        for key, value in mapping.items():
            where = path + (key,)
            if not is_valid_key(key):
                collector.report(COMPLEX_KEY, "Complex keys are not supported.", where)
                continue
            kind = classify_value(value)
            if kind is ValueKind.NULL:
                collector.report(NULL_VALUE, "NULL values are not supported.", where)
                continue
            if kind is ValueKind.RECORD:
                collector.report(NESTED_OBJECT, "Nested objects are not supported.", where)
                continue
            if kind is ValueKind.MAPPING:
                collector.report(NESTED_MAP, "Nested associative arrays are not supported.", where)
                continue
            if kind is ValueKind.LIST:
                collector.report(NESTED_LIST, "Arrays inside associative arrays are not supported.", where)
                continue
            if kind is ValueKind.UNSUPPORTED:
                collector.report(UNSUPPORTED_VALUE, f"Values of type {type(value).__name__} are not supported.", where)
                continue
            result.pair.append(WirePair(WireScalar(self._convert(key)), WireScalar(self._convert(value))))
        return result

    def _encode_array(self, values: Sequence[Any], path: tuple[Any, ...], collector: DiagnosticCollector) -> WireArray:
        """List → Array of scalars and entities."""
        result = WireArray()
        for index, value in enumerate(values):
            where = path + (index,)
            kind = classify_value(value)
            if kind is ValueKind.RECORD:
                result.item.append(self._encode_object(value, where, collector))
            elif kind is ValueKind.LIST:
                collector.report(NESTED_LIST, "Arrays of arrays are not supported.", where)
            elif kind is ValueKind.MAPPING:
                collector.report(NESTED_MAP, "Associative arrays inside arrays are not supported.", where)
            elif kind is ValueKind.UNSUPPORTED:
                collector.report(UNSUPPORTED_VALUE, f"Values of type {type(value).__name__} are not supported.", where)
            else:
                result.item.append(WireScalar(self._convert(value)))
        return result

    def _encode_object(self, record: Any, path: tuple[Any, ...], collector: DiagnosticCollector) -> WireEntity:
        """Record → Entity. Fields may carry one level of Map, never another record."""
        result = WireEntity()
        for name, value in record_fields(record):
            where = path + (name,)
            if not is_valid_key(name):
                collector.report(COMPLEX_KEY, "Complex keys are not supported.", where)
                continue
            kind = classify_value(value)
            if kind is ValueKind.NULL:
                collector.report(NULL_VALUE, "NULL values are not supported.", where)
                continue
            if kind is ValueKind.RECORD:
                collector.report(NESTED_OBJECT, "Nested objects are not supported.", where)
                continue
            if kind is ValueKind.MAPPING:
                encoded: WireValue = self._encode_assoc(value, where, collector)
            elif kind is ValueKind.LIST:
                encoded = self._encode_array(value, where, collector)
            elif kind is ValueKind.UNSUPPORTED:
                collector.report(UNSUPPORTED_VALUE, f"Values of type {type(value).__name__} are not supported.", where)
                continue
            else:
                encoded = WireScalar(self._convert(value))
            result.fields[self._convert(name)] = encoded
        return result
