"""
Contract tests for the report catalog.
"""

from __future__ import annotations

import pytest

from metrics.types import GroupSpec
from pipeline.errors import UnknownReportType
from rules.base import FINDING, RECOMMENDATION, ReportDefinition, Rule, finding
from rules.catalog import CATALOG, CATALOG_VERSION, get_definition, report_types
from rules.predicates import Above

EXPECTED_LAYOUT = {
    "audit": ("audit", "liquidity-audit"),
    "compliance": ("compliance", "liquidity-compliance"),
    "cost": ("cost", "liquidity-cost-analysis"),
    "performance": ("performance", "liquidity-performance"),
    "security": ("security", "liquidity-security"),
    "user-analytics": ("analytics", "liquidity-user-analytics"),
    "engagement": ("engagement", "liquidity-engagement"),
    "optimization": ("optimization", "optimization"),
    "liquidity-optimization": ("optimization", "liquidity-optimization"),
    "pool-analytics": ("reports", "pool-analytics"),
    "simulation": ("simulation", "liquidity-simulation"),
}


def test_catalog_registers_every_report_type() -> None:
    assert set(report_types()) == set(EXPECTED_LAYOUT)
    assert CATALOG_VERSION


@pytest.mark.parametrize("report_type, layout", sorted(EXPECTED_LAYOUT.items()))
def test_artifact_layout(report_type: str, layout: tuple[str, str]) -> None:
    definition = get_definition(report_type)
    assert (definition.directory, definition.file_prefix) == layout


def test_catalog_is_read_only() -> None:
    with pytest.raises(TypeError):
        CATALOG["extra"] = CATALOG["audit"]  # type: ignore[index]


def test_every_rule_has_one_output_class() -> None:
    for definition in CATALOG.values():
        for rule in definition.rules:
            assert rule.output in (FINDING, RECOMMENDATION)
            assert set(rule.groups) <= set(definition.group_names)


def test_rule_ids_are_globally_unique() -> None:
    ids = [rule.rule_id for definition in CATALOG.values() for rule in definition.rules]
    assert len(ids) == len(set(ids))


def test_unknown_report_type_lists_supported_values() -> None:
    with pytest.raises(UnknownReportType, match='"audit"'):
        get_definition("weekly")


def test_rule_requires_predicate_or_after_findings() -> None:
    with pytest.raises(ValueError):
        Rule(rule_id="r", output=FINDING, message="m")
    with pytest.raises(ValueError):
        Rule(rule_id="r", output=FINDING, message="m", predicate=Above("g", "f", 1), after_findings=True)


def test_rule_rejects_unknown_output_class() -> None:
    with pytest.raises(ValueError, match="output class"):
        Rule(rule_id="r", output="warning", message="m", predicate=Above("g", "f", 1))  # type: ignore[arg-type]


def test_rule_groups_default_to_predicate_groups() -> None:
    rule = finding("r", "m", Above("riskAssessment", "totalRiskScore", 70))
    assert rule.groups == ("riskAssessment",)


def test_definition_rejects_rules_over_unfetched_groups() -> None:
    with pytest.raises(ValueError, match="reads groups not fetched"):
        ReportDefinition(
            report_type="broken",
            directory="broken",
            file_prefix="broken",
            groups=(GroupSpec("a"),),
            rules=(finding("broken.r", "m", Above("b", "x", 1)),),
        )
