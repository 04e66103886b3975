"""
rules/predicates.py

Reusable threshold predicates.

Each predicate names the single metric group it reads through ``groups`` so
the engine can hand it a view restricted to that group. Numeric predicates
compare normalized ``Decimal`` values; a non-numeric value raises
``TypeError`` instead of silently comparing as false.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from metrics.types import MetricGroup


def _threshold(value: int | float | str | Decimal) -> Decimal:
    if isinstance(value, bool):
        raise TypeError("Thresholds must be numeric, not boolean.")
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _number(group: str, field: str, value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, Decimal)):
        raise TypeError(f"{group}.{field} is not numeric: {value!r}")
    return Decimal(value)


@dataclass(frozen=True)
class _FieldPredicate:
    group: str
    field: str

    @property
    def groups(self) -> tuple[str, ...]:
        return (self.group,)

    def _read(self, view: Mapping[str, MetricGroup]) -> Any:
        return view[self.group][self.field]


@dataclass(frozen=True)
class Above(_FieldPredicate):
    """True when ``group.field > threshold``."""

    threshold: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "threshold", _threshold(self.threshold))

    def __call__(self, view: Mapping[str, MetricGroup]) -> bool:
        return _number(self.group, self.field, self._read(view)) > self.threshold


@dataclass(frozen=True)
class Below(_FieldPredicate):
    """True when ``group.field < threshold``."""

    threshold: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "threshold", _threshold(self.threshold))

    def __call__(self, view: Mapping[str, MetricGroup]) -> bool:
        return _number(self.group, self.field, self._read(view)) < self.threshold


@dataclass(frozen=True)
class IsFalse(_FieldPredicate):
    """True only when the field is the boolean ``False``."""

    def __call__(self, view: Mapping[str, MetricGroup]) -> bool:
        value = self._read(view)
        if not isinstance(value, bool):
            raise TypeError(f"{self.group}.{self.field} is not boolean: {value!r}")
        return value is False


@dataclass(frozen=True)
class ExceedsField(_FieldPredicate):
    """True when ``group.field > group.other_field``."""

    other_field: str

    def __call__(self, view: Mapping[str, MetricGroup]) -> bool:
        group = view[self.group]
        left = _number(self.group, self.field, group[self.field])
        right = _number(self.group, self.other_field, group[self.other_field])
        return left > right
