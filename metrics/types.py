"""
metrics/types.py

Metric group schema and the immutable MetricGroup mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from metrics.normalizer import FIELD_KINDS, FieldKind, freeze, normalize_value, to_serializable
from pipeline.errors import MalformedResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupSpec:
    """
    Expected shape of one metric group.

    ``fields`` maps each expected field name to its kind. An empty mapping
    declares a free-form group whose payload is copied as-is.
    """

    name: str
    fields: Mapping[str, FieldKind] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("GroupSpec.name must be a non-empty string.")
        unknown = sorted(kind for kind in self.fields.values() if kind not in FIELD_KINDS)
        if unknown:
            raise ValueError(f"GroupSpec '{self.name}' declares unknown field kinds: {unknown}.")
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def free_form(self) -> bool:
        return not self.fields


class MetricGroup(Mapping[str, Any]):
    """
    Named, read-only mapping of field name to normalized metric value.
    """

    __slots__ = ("_name", "_values")

    def __init__(self, name: str, values: Mapping[str, Any]) -> None:
        self._name = name
        self._values = MappingProxyType(dict(values))

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"MetricGroup({self._name!r}, {dict(self._values)!r})"

    def to_serializable(self) -> dict[str, Any]:
        return {key: to_serializable(value) for key, value in self._values.items()}


def build_group(spec: GroupSpec, payload: Any) -> MetricGroup:
    """Validate *payload* against *spec* and return a normalized MetricGroup.

    Fields not declared by the spec are dropped.

    Raises:
        MalformedResponse: If the payload is not a mapping, misses a declared
            field, or carries a value that cannot be coerced to its kind.
    """
    if not isinstance(payload, Mapping):
        raise MalformedResponse(
            f"Metric group '{spec.name}' must be an object, got {type(payload).__name__}."
        )

    if spec.free_form:
        try:
            return MetricGroup(spec.name, {str(k): freeze(v) for k, v in payload.items()})
        except ValueError as exc:
            raise MalformedResponse(f"Metric group '{spec.name}': {exc}.") from exc

    missing = [name for name in spec.fields if name not in payload]
    if missing:
        raise MalformedResponse(
            f"Metric group '{spec.name}' is missing fields: {', '.join(missing)}."
        )

    extra = sorted(set(payload) - set(spec.fields))
    if extra:
        logger.debug("Dropping undeclared fields group=%s fields=%s", spec.name, extra)

    values: dict[str, Any] = {}
    for name, kind in spec.fields.items():
        try:
            values[name] = normalize_value(kind, payload[name])
        except ValueError as exc:
            raise MalformedResponse(f"Metric group '{spec.name}' field '{name}': {exc}.") from exc
    return MetricGroup(spec.name, values)
