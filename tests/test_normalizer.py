"""
tests/test_normalizer.py

Unit tests for metric value normalization and MetricGroup construction.

Coverage
--------
- Numeric coercion from ints, floats, strings, hex and BigNumber objects
- 18-decimal wei scaling without precision loss
- Boolean, text and timestamp coercion
- Canonical serialization of normalized values
- GroupSpec validation and build_group shape checks
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from types import MappingProxyType

import pytest

from metrics.normalizer import (
    canonical_decimal,
    freeze,
    from_wei,
    normalize_value,
    to_bool,
    to_decimal,
    to_serializable,
    to_timestamp,
)
from metrics.types import GroupSpec, MetricGroup, build_group
from pipeline.errors import MalformedResponse


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


class TestToDecimal:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (42, Decimal(42)),
            ("42.50", Decimal("42.50")),
            (" 7 ", Decimal(7)),
            (0.1, Decimal("0.1")),
            ("0x10", Decimal(16)),
            ({"type": "BigNumber", "hex": "0x0de0b6b3a7640000"}, Decimal(10**18)),
            (Decimal("3.14"), Decimal("3.14")),
        ],
    )
    def test_accepted_inputs(self, raw: object, expected: Decimal) -> None:
        assert to_decimal(raw) == expected

    def test_float_uses_shortest_repr(self) -> None:
        """0.1 must not become 0.1000000000000000055511151231257827."""
        assert str(to_decimal(0.1)) == "0.1"

    def test_big_integers_are_exact(self) -> None:
        value = 2**256 - 1
        assert to_decimal(value) == Decimal(value)
        assert to_decimal(str(value)) == Decimal(value)

    @pytest.mark.parametrize("raw", [True, False, "abc", None, [1], "NaN", "Infinity", "0xZZ"])
    def test_rejects_non_numeric(self, raw: object) -> None:
        with pytest.raises(ValueError):
            to_decimal(raw)


class TestFromWei:
    def test_one_token(self) -> None:
        assert from_wei(10**18) == Decimal(1)

    def test_fractional_amount(self) -> None:
        assert from_wei("150000000000000000") == Decimal("0.15")

    def test_uint256_max_keeps_every_digit(self) -> None:
        value = 2**256 - 1
        scaled = from_wei(value)
        assert scaled.as_tuple().digits == Decimal(value).as_tuple().digits
        assert scaled.as_tuple().exponent == -18

    def test_hex_quantity(self) -> None:
        assert from_wei(hex(5 * 10**17)) == Decimal("0.5")


# ---------------------------------------------------------------------------
# Other kinds
# ---------------------------------------------------------------------------


class TestOtherKinds:
    @pytest.mark.parametrize(
        "raw, expected",
        [(True, True), (False, False), ("true", True), ("FALSE", False), ("1", True), ("no", False)],
    )
    def test_to_bool(self, raw: object, expected: bool) -> None:
        assert to_bool(raw) is expected

    @pytest.mark.parametrize("raw", [1, 0, "maybe", None])
    def test_to_bool_rejects_non_boolean(self, raw: object) -> None:
        with pytest.raises(ValueError):
            to_bool(raw)

    def test_timestamp_from_unix_seconds(self) -> None:
        assert to_timestamp(1_700_000_000) == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_timestamp_from_iso_string(self) -> None:
        parsed = to_timestamp("2025-11-01T00:00:00Z")
        assert parsed == datetime(2025, 11, 1, tzinfo=timezone.utc)
        assert parsed.tzinfo is not None

    def test_timestamp_from_digit_string(self) -> None:
        assert to_timestamp("1700000000") == to_timestamp(1_700_000_000)

    @pytest.mark.parametrize("raw", ["1700000000.5", " 1700000000.0 ", "1.7e9"])
    def test_timestamp_from_decimal_string(self, raw: str) -> None:
        assert to_timestamp(raw) == to_timestamp(Decimal(raw.strip()))

    def test_timestamp_rejects_garbage(self) -> None:
        with pytest.raises(ValueError, match="invalid timestamp"):
            to_timestamp("next tuesday")

    def test_freeze_is_recursive_and_read_only(self) -> None:
        frozen = freeze({"a": [1, {"b": 0.5}]})
        assert isinstance(frozen, MappingProxyType)
        assert frozen["a"][1]["b"] == Decimal("0.5")
        with pytest.raises(TypeError):
            frozen["a"] = 2  # type: ignore[index]

    def test_normalize_value_rejects_null(self) -> None:
        with pytest.raises(ValueError, match="missing"):
            normalize_value("number", None)

    def test_normalize_value_rejects_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="unknown field kind"):
            normalize_value("percent", 5)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class TestSerialization:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (Decimal("1.500"), "1.5"),
            (Decimal("1E+3"), "1000"),
            (Decimal("0.000"), "0"),
            (Decimal("-2.50"), "-2.5"),
        ],
    )
    def test_canonical_decimal(self, value: Decimal, expected: str) -> None:
        assert canonical_decimal(value) == expected

    def test_to_serializable_shapes(self) -> None:
        payload = {
            "n": Decimal("12.50"),
            "flag": False,
            "when": datetime(2025, 1, 1, tzinfo=timezone.utc),
            "items": (Decimal(1), "x"),
            "nested": MappingProxyType({"k": 3}),
        }
        assert to_serializable(payload) == {
            "n": "12.5",
            "flag": False,
            "when": "2025-01-01T00:00:00+00:00",
            "items": ["1", "x"],
            "nested": {"k": "3"},
        }


# ---------------------------------------------------------------------------
# GroupSpec / build_group
# ---------------------------------------------------------------------------


class TestBuildGroup:
    @pytest.fixture()
    def spec(self) -> GroupSpec:
        return GroupSpec("liquidityAnalysis", {"slippageRisk": "number", "reserve": "wei", "paused": "bool"})

    def test_builds_normalized_group(self, spec: GroupSpec) -> None:
        group = build_group(spec, {"slippageRisk": 2.1, "reserve": str(10**18), "paused": False})
        assert isinstance(group, MetricGroup)
        assert group.name == "liquidityAnalysis"
        assert group["slippageRisk"] == Decimal("2.1")
        assert group["reserve"] == Decimal(1)
        assert group["paused"] is False

    def test_group_is_read_only(self, spec: GroupSpec) -> None:
        group = build_group(spec, {"slippageRisk": 1, "reserve": 0, "paused": True})
        with pytest.raises(TypeError):
            group["slippageRisk"] = 99  # type: ignore[index]

    def test_undeclared_fields_are_dropped(self, spec: GroupSpec) -> None:
        group = build_group(spec, {"slippageRisk": 1, "reserve": 0, "paused": True, "extra": 5})
        assert "extra" not in group
        assert len(group) == 3

    def test_missing_field_is_malformed(self, spec: GroupSpec) -> None:
        with pytest.raises(MalformedResponse, match="slippageRisk"):
            build_group(spec, {"reserve": 0, "paused": True})

    def test_uncoercible_value_is_malformed(self, spec: GroupSpec) -> None:
        with pytest.raises(MalformedResponse, match="paused") as exc_info:
            build_group(spec, {"slippageRisk": 1, "reserve": 0, "paused": "sometimes"})
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_non_mapping_payload_is_malformed(self, spec: GroupSpec) -> None:
        with pytest.raises(MalformedResponse, match="must be an object"):
            build_group(spec, [1, 2, 3])

    def test_free_form_group_copies_payload(self) -> None:
        group = build_group(GroupSpec("poolStats"), {"swapCount": 42, "ratio": 0.5})
        assert group["swapCount"] == 42
        assert group["ratio"] == Decimal("0.5")

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), [float("-inf")]])
    def test_free_form_non_finite_value_is_malformed(self, bad: object) -> None:
        with pytest.raises(MalformedResponse, match="poolStats") as exc_info:
            build_group(GroupSpec("poolStats"), {"swapCount": 42, "ratio": bad})
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_unknown_field_kind_rejected(self) -> None:
        with pytest.raises(ValueError, match="unknown field kinds"):
            GroupSpec("bad", {"x": "percent"})  # type: ignore[dict-item]

    def test_to_serializable(self, spec: GroupSpec) -> None:
        group = build_group(spec, {"slippageRisk": "2.10", "reserve": str(15 * 10**17), "paused": True})
        assert group.to_serializable() == {"slippageRisk": "2.1", "reserve": "1.5", "paused": True}
