"""Structured diagnostics for parameters dropped during encoding."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from loguru import logger

COMPLEX_KEY = "COMPLEX_KEY"
NULL_VALUE = "NULL_VALUE"
NESTED_OBJECT = "NESTED_OBJECT"
NESTED_MAP = "NESTED_MAP"
NESTED_LIST = "NESTED_LIST"
UNSUPPORTED_VALUE = "UNSUPPORTED_VALUE"
INVALID_PARAMETERS = "INVALID_PARAMETERS"


class DiagnosticPolicy(str, Enum):
    """What to do with structural violations found while encoding."""

    LOG = "log"
    RAISE = "raise"
    IGNORE = "ignore"


@dataclass(slots=True, frozen=True)
class Diagnostic:
    """One dropped parameter: what was wrong and where it sat."""

    code: str
    message: str
    path: tuple[Any, ...] = ()

    @property
    def location(self) -> str:
        return format_path(self.path)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "path": list(self.path)}


def format_path(path: tuple[Any, ...]) -> str:
    if not path:
        return "<params>"
    parts: list[str] = []
    for part in path:
        if isinstance(part, int) and not isinstance(part, bool):
            parts.append(f"[{part}]")
        else:
            text = part.decode("latin-1") if isinstance(part, bytes) else str(part)
            parts.append(f".{text}" if parts else text)
    return "".join(parts)


class DiagnosticCollector:
    """Per-call sink for diagnostics; logs and forwards according to the policy."""

    def __init__(
        self,
        policy: DiagnosticPolicy | str = DiagnosticPolicy.LOG,
        on_diagnostic: Callable[[Diagnostic], None] | None = None,
    ):
        self.policy = DiagnosticPolicy(policy)
        self.on_diagnostic = on_diagnostic
        self.items: list[Diagnostic] = []

    def report(self, code: str, message: str, path: tuple[Any, ...] = ()) -> Diagnostic:
        diagnostic = Diagnostic(code=code, message=message, path=path)
        self.items.append(diagnostic)
        if self.policy is DiagnosticPolicy.LOG:
            logger.warning("Invalid parameter at {}: {}", diagnostic.location, message)
        if self.on_diagnostic is not None:
            self.on_diagnostic(diagnostic)
        return diagnostic

    def __len__(self) -> int:
        return len(self.items)

    def __bool__(self) -> bool:
        return bool(self.items)
