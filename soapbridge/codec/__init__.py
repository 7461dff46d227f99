"""Encode/decode engine between native values and wire shapes."""

from .charset import DEFAULT_NATIVE_CHARSET, WIRE_CHARSET, CharsetCodec, from_wire, get_codec, to_wire
from .decoder import ResultDecoder, classify, to_wire_tree
from .diagnostics import Diagnostic, DiagnosticCollector, DiagnosticPolicy
from .encoder import EncodeResult, ParameterEncoder
from .values import (
    ABSENT,
    Record,
    ValueKind,
    WireArray,
    WireCollection,
    WireEntity,
    WireMap,
    WirePair,
    WireScalar,
    WireValue,
    classify_value,
)

__all__ = [
    "ABSENT",
    "CharsetCodec",
    "DEFAULT_NATIVE_CHARSET",
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticPolicy",
    "EncodeResult",
    "ParameterEncoder",
    "Record",
    "ResultDecoder",
    "ValueKind",
    "WIRE_CHARSET",
    "WireArray",
    "WireCollection",
    "WireEntity",
    "WireMap",
    "WirePair",
    "WireScalar",
    "WireValue",
    "classify",
    "classify_value",
    "from_wire",
    "get_codec",
    "to_wire",
    "to_wire_tree",
]
