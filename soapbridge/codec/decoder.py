"""Result decoder: raw transport responses → wire shapes → native values.

A response is classified by which fields it carries, in a fixed order:

    item                            → Array
    pair                            → Map
    start, length, total and items  → Collection
    value                           → Scalar
    anything else                   → Entity

The order matters: a response carrying both ``item`` and ``value`` is an
Array. Decoding never raises on a structurally valid response.
"""

from __future__ import annotations

from typing import Any

from soapbridge.codec.charset import CharsetCodec
from soapbridge.codec.values import (
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
    is_string,
    record_fields,
)

COLLECTION_FIELDS = ("start", "length", "total", "items")


def _fields_of(raw: Any) -> dict[Any, Any] | None:
    if classify_value(raw) in (ValueKind.MAPPING, ValueKind.RECORD):
        return dict(record_fields(raw))
    return None


def _members(raw: Any) -> list[Any]:
    """Normalize a field that may hold nothing, one element or a list of elements."""
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return [raw]


def to_wire_tree(raw: Any) -> WireValue:
    """Structural conversion of a nested raw value, without shape detection."""
    fields = _fields_of(raw)
    if fields is not None:
        return WireEntity({name: to_wire_tree(value) for name, value in fields.items()})
    if isinstance(raw, (list, tuple)):
        return WireArray([to_wire_tree(value) for value in raw])
    return WireScalar(raw)


def classify(raw: Any) -> WireValue:
    """Determine which of the five wire shapes a raw response represents."""
    if isinstance(raw, (list, tuple)):
        return WireArray([to_wire_tree(value) for value in raw])
    fields = _fields_of(raw)
    if fields is None:
        return WireEntity() if raw is None else WireScalar(raw)

    if "item" in fields:
        return WireArray([to_wire_tree(value) for value in _members(fields["item"])])

    if "pair" in fields:
        pairs: list[WirePair] = []
        for raw_pair in _members(fields["pair"]):
            pair_fields = _fields_of(raw_pair) or {}
            if pair_fields.get("key") is None:
                continue
            pairs.append(WirePair(WireScalar(pair_fields.get("key")), WireScalar(pair_fields.get("value"))))
        return WireMap(pairs)

    if all(name in fields for name in COLLECTION_FIELDS):
        containers = _fields_of(fields["items"]) or {}
        items: dict[Any, list[WireValue]] = {}
        for name, members in containers.items():
            items.setdefault(name, []).extend(to_wire_tree(member) for member in _members(members))
        return WireCollection(fields["start"], fields["length"], fields["total"], items)

    if "value" in fields:
        return WireScalar(fields["value"])

    return WireEntity({name: to_wire_tree(value) for name, value in fields.items()})


class ResultDecoder:
    def __init__(self, codec: CharsetCodec):
        self.codec = codec

    def _convert(self, value: Any) -> Any:
        return self.codec.from_wire(value) if is_string(value) else value

    def decode_response(self, raw: Any) -> Any:
        """Classify a raw transport response and decode it into native values."""
        return self.decode(classify(raw))

    def decode(self, wire: WireValue) -> Any:
        if isinstance(wire, WireArray):
            return [self._decode_tree(value) for value in wire.item]

        if isinstance(wire, WireMap):
            result: dict[Any, Any] = {}
            for pair in wire.pair:
                result[self._convert(pair.key.value)] = self._convert(pair.value.value)
            return result

        if isinstance(wire, WireCollection):
            flattened = [self._decode_tree(member) for members in wire.items.values() for member in members]
            return Record(start=wire.start, length=wire.length, total=wire.total, items=flattened)

        if isinstance(wire, WireScalar):
            return self._convert(wire.value)

        # Entity: the protocol wraps a single named result in a container object.
        if not wire.fields:
            return ABSENT
        first = next(iter(wire.fields.values()))
        return self._decode_tree(first)

    def decode_object(self, entity: WireEntity) -> Record:
        """Field-wise decode of an entity, converting names and string values."""
        return Record({self._convert(name): self._decode_tree(value) for name, value in entity.fields.items()})

    def _decode_tree(self, wire: WireValue) -> Any:
        if isinstance(wire, WireEntity):
            return self.decode_object(wire)
        if isinstance(wire, WireArray):
            return [self._decode_tree(value) for value in wire.item]
        if isinstance(wire, WireScalar):
            return self._convert(wire.value)
        return self.decode(wire)
