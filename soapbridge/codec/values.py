"""Native and wire value model shared by the encoder and the decoder."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class ValueKind(str, Enum):
    """Native value kinds, discriminated by Python type."""

    NULL = "null"
    SCALAR = "scalar"
    LIST = "list"
    MAPPING = "mapping"
    RECORD = "record"
    UNSUPPORTED = "unsupported"


class _Sentinel(Enum):
    ABSENT = "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return self.value


ABSENT = _Sentinel.ABSENT
"""Result of decoding an entity response that carries no fields at all."""


class Record:
    """Named-field structured value.

    Field names are usually ``str`` and readable as attributes. Decoded records
    under a non-UTF-8 charset carry ``bytes`` names, so item access is the
    general form. Helpers are underscored, as on namedtuple, so that fields
    such as ``items`` or ``values`` stay reachable as attributes.
    """

    __slots__ = ("_data",)

    def __init__(self, fields: Mapping[Any, Any] | None = None, /, **kwargs: Any):
        data: dict[Any, Any] = dict(fields or {})
        data.update(kwargs)
        object.__setattr__(self, "_data", data)

    def __getattr__(self, name: str) -> Any:
        if name == "_data":
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        self._data[name] = value

    def __getitem__(self, name: Any) -> Any:
        return self._data[name]

    def __setitem__(self, name: Any, value: Any) -> None:
        self._data[name] = value

    def __contains__(self, name: Any) -> bool:
        return name in self._data

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def _asdict(self) -> dict[Any, Any]:
        return dict(self._data)

    def __reduce__(self) -> tuple[Any, ...]:
        # rebuilt through __init__: __setattr__ needs _data to exist
        return (Record, (self._data,))

    def __repr__(self) -> str:
        inner = ", ".join(
            f"{k}={v!r}" if isinstance(k, str) and k.isidentifier() else f"{k!r}: {v!r}"
            for k, v in self._data.items()
        )
        return f"Record({inner})"


_SCALAR_TYPES = (str, bytes, bool, int, float)


def is_string(value: Any) -> bool:
    return isinstance(value, (str, bytes))


def is_valid_key(key: Any) -> bool:
    """Keys and field names must be strings or integers (bool is not an integer here)."""
    if isinstance(key, bool):
        return False
    return isinstance(key, (str, bytes, int))


def classify_value(value: Any) -> ValueKind:
    """Return the native kind of a value.

    Record is checked before Mapping and bool is a scalar like any other;
    a list is a list regardless of what it contains.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, _SCALAR_TYPES):
        return ValueKind.SCALAR
    if isinstance(value, Record):
        return ValueKind.RECORD
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.LIST
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return ValueKind.RECORD
    if hasattr(value, "__dict__") and not callable(value):
        return ValueKind.RECORD
    return ValueKind.UNSUPPORTED


def record_fields(value: Any) -> list[tuple[Any, Any]]:
    """Return ``(name, value)`` pairs of a record-like value in declaration order."""
    if isinstance(value, Record):
        return list(value._asdict().items())
    if isinstance(value, Mapping):
        return list(value.items())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
    if hasattr(value, "__dict__"):
        return list(vars(value).items())
    return []


@dataclass(slots=True)
class WireScalar:
    value: Any = None

    def to_payload(self) -> Any:
        return self.value


@dataclass(slots=True)
class WireArray:
    item: list[WireValue] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {"item": [v.to_payload() for v in self.item]}


@dataclass(slots=True)
class WirePair:
    key: WireScalar
    value: WireScalar

    def to_payload(self) -> dict[str, Any]:
        return {"key": self.key.to_payload(), "value": self.value.to_payload()}


@dataclass(slots=True)
class WireMap:
    pair: list[WirePair] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {"pair": [p.to_payload() for p in self.pair]}


@dataclass(slots=True)
class WireCollection:
    start: Any
    length: Any
    total: Any
    items: dict[Any, list[WireValue]] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return {
            "start": self.start,
            "length": self.length,
            "total": self.total,
            "items": {name: [v.to_payload() for v in members] for name, members in self.items.items()},
        }


@dataclass(slots=True)
class WireEntity:
    fields: dict[Any, WireValue] = field(default_factory=dict)

    def __contains__(self, name: Any) -> bool:
        return name in self.fields

    def to_payload(self) -> dict[Any, Any]:
        return {name: v.to_payload() for name, v in self.fields.items()}


WireValue = Union[WireScalar, WireArray, WireMap, WireCollection, WireEntity]
