"""
metrics/normalizer.py

Deterministic value normalization for raw metric payloads.

On-chain amounts arrive as arbitrary-precision integers, decimal strings,
hex strings, or serialized BigNumber objects. Every numeric value is turned
into a ``Decimal`` so rule thresholds never compare against a truncated
float. Fields declared as ``wei`` are scaled down by 18 decimals before
any comparison.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, localcontext
from types import MappingProxyType
from typing import Any, Literal

FieldKind = Literal["number", "wei", "bool", "text", "timestamp", "json"]

FIELD_KINDS: frozenset[str] = frozenset({"number", "wei", "bool", "text", "timestamp", "json"})

WEI_DECIMALS: int = 18

# Wide enough for uint256 values with 18 fractional digits.
_PRECISION: int = 96

_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}


def to_decimal(value: Any) -> Decimal:
    """Convert a raw numeric value into an exact ``Decimal``.

    Accepted inputs: ``int``, ``Decimal``, ``float``, decimal or ``0x`` hex
    strings, and BigNumber-style mappings carrying a ``hex`` key.

    Raises:
        ValueError: If the value is not numeric. Booleans are rejected.
    """
    if isinstance(value, bool):
        raise ValueError(f"expected numeric value, got boolean {value!r}")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"expected finite numeric value, got {value!r}")
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return to_decimal(Decimal(repr(value)))
    if isinstance(value, Mapping) and isinstance(value.get("hex"), str):
        return to_decimal(value["hex"])
    if isinstance(value, str):
        text = value.strip()
        if text.lower().startswith(("0x", "-0x")):
            try:
                return Decimal(int(text, 16))
            except ValueError as exc:
                raise ValueError(f"invalid hex quantity {value!r}") from exc
        try:
            parsed = Decimal(text)
        except InvalidOperation as exc:
            raise ValueError(f"expected numeric value, got {value!r}") from exc
        return to_decimal(parsed)
    raise ValueError(f"expected numeric value, got {type(value).__name__}")


def from_wei(value: Any) -> Decimal:
    """Scale an 18-decimal fixed-point quantity down to token units."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return to_decimal(value).scaleb(-WEI_DECIMALS)


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"expected boolean value, got {value!r}")


def to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, Decimal)) and not isinstance(value, bool):
        return canonical_decimal(Decimal(value))
    raise ValueError(f"expected text value, got {type(value).__name__}")


def to_timestamp(value: Any) -> datetime:
    """Parse unix seconds or an ISO-8601 string into an aware UTC datetime."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        try:
            seconds = to_decimal(text)
        except ValueError:
            normalized = text[:-1] + "+00:00" if text.endswith("Z") else text
            try:
                parsed = datetime.fromisoformat(normalized)
            except ValueError as exc:
                raise ValueError(f"invalid timestamp {value!r}") from exc
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    else:
        seconds = to_decimal(value)
    try:
        return datetime.fromtimestamp(int(seconds), tz=timezone.utc)
    except (OverflowError, OSError) as exc:
        raise ValueError(f"timestamp out of range: {value!r}") from exc


def freeze(value: Any) -> Any:
    """Recursively convert nested payloads into read-only structures.

    Floats become ``Decimal``; mappings become read-only proxies; lists
    become tuples.
    """
    if isinstance(value, float):
        return to_decimal(value)
    if isinstance(value, Mapping):
        return MappingProxyType({str(k): freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


_CONVERTERS = {
    "number": to_decimal,
    "wei": from_wei,
    "bool": to_bool,
    "text": to_text,
    "timestamp": to_timestamp,
    "json": freeze,
}


def normalize_value(kind: FieldKind, value: Any) -> Any:
    """Normalize one raw field value according to its declared kind.

    Raises:
        ValueError: If the value cannot be coerced to *kind*.
    """
    converter = _CONVERTERS.get(kind)
    if converter is None:
        raise ValueError(f"unknown field kind '{kind}'")
    if value is None:
        raise ValueError("value is missing (null)")
    return converter(value)


def canonical_decimal(value: Decimal) -> str:
    """Render a ``Decimal`` as a plain string without exponent or trailing zeros."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        normalized = value.normalize()
    if normalized == 0:
        return "0"
    return format(normalized, "f")


def to_serializable(value: Any) -> Any:
    """Convert a normalized metric value into its canonical JSON form.

    Numbers become decimal strings so big integers survive the round trip;
    booleans stay booleans; datetimes become ISO-8601 UTC strings.
    """
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, (int, Decimal)):
        return canonical_decimal(Decimal(value))
    if isinstance(value, float):
        return canonical_decimal(to_decimal(value))
    if isinstance(value, datetime):
        aware = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        return aware.astimezone(timezone.utc).isoformat()
    if isinstance(value, Mapping):
        return {str(k): to_serializable(v) for k, v in value.items()}
    if isinstance(value, Sequence):
        return [to_serializable(item) for item in value]
    return str(value)
