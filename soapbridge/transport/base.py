"""Transport contract for invoking remote operations."""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

from soapbridge.codec.values import WireEntity


@runtime_checkable
class Transport(Protocol):
    """Performs one remote call: named operation, one wire argument, one raw result.

    The result is whatever the protocol stack produced (nested mappings,
    attribute objects, lists and scalars). Failures are raised as-is.
    """

    def invoke(self, operation: str, argument: WireEntity) -> Any: ...


class CallableTransport:
    """Adapts ``fn(operation, payload)`` to the Transport contract.

    Useful to plug in an existing SOAP stack, e.g.
    ``CallableTransport(lambda op, payload: service[op](**payload))``.
    """

    def __init__(self, fn: Callable[[str, dict[Any, Any]], Any]):
        self.fn = fn

    def invoke(self, operation: str, argument: WireEntity) -> Any:
        return self.fn(operation, argument.to_payload())
