"""Field-scoped validation errors.

Errors are collected in the order checks run. Callers map them onto whatever
reporting format they need; an empty list is the only success signal.
"""

from __future__ import annotations

import typing as t
from dataclasses import dataclass
from enum import Enum


VPC_ID_PATH = "networks.vpc.id"
ELASTIC_IP_ALLOCATION_ID_PATH = "networks.zones[].elasticIPAllocationID"


class ErrorKind(str, Enum):
    """Validation error taxonomy."""
    NOT_FOUND = "NotFound"
    INVALID = "Invalid"
    INTERNAL = "Internal"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ErrorKind.NOT_FOUND: "Not found",
    ErrorKind.INVALID: "Invalid value",
    ErrorKind.INTERNAL: "Internal error",
}


@dataclass(frozen=True)
class ValidationError:
    kind: ErrorKind
    field_path: str
    bad_value: t.Optional[str]
    detail: str

    def __str__(self) -> str:
        parts = [self.field_path, self.kind.description]
        if self.bad_value is not None:
            parts.append(f'"{self.bad_value}"')
        if self.detail:
            parts.append(self.detail)
        return ": ".join(parts)


class FieldErrorAggregator:
    """Ordered, append-only collector of ``ValidationError`` entries."""

    def __init__(self) -> None:
        self._errors: t.List[ValidationError] = []

    def not_found(self, field_path: str, bad_value: t.Optional[str], detail: str) -> ValidationError:
        return self._append(ErrorKind.NOT_FOUND, field_path, bad_value, detail)

    def invalid(self, field_path: str, bad_value: t.Optional[str], detail: str) -> ValidationError:
        return self._append(ErrorKind.INVALID, field_path, bad_value, detail)

    def internal(self, field_path: str, detail: str) -> ValidationError:
        return self._append(ErrorKind.INTERNAL, field_path, None, detail)

    def extend(self, errors: t.Iterable[ValidationError]) -> None:
        self._errors.extend(errors)

    def has_kind(self, *kinds: ErrorKind) -> bool:
        return any(e.kind in kinds for e in self._errors)

    def to_list(self) -> t.List[ValidationError]:
        # Copy so callers cannot mutate the collected history
        return list(self._errors)

    def _append(
        self,
        kind: ErrorKind,
        field_path: str,
        bad_value: t.Optional[str],
        detail: str,
    ) -> ValidationError:
        err = ValidationError(kind=kind, field_path=field_path, bad_value=bad_value, detail=detail)
        self._errors.append(err)
        return err

    def __iter__(self) -> t.Iterator[ValidationError]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)


def format_errors(errors: t.Iterable[ValidationError]) -> str:
    """Render errors one per line, in collection order."""
    return "\n".join(f"  • {e}" for e in errors)
