"""
rules/catalog.py

Read-only registry of report definitions, keyed by report type tag.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pipeline.errors import UnknownReportType
from rules.audit_rules import AUDIT_REPORT
from rules.base import ReportDefinition
from rules.compliance_rules import COMPLIANCE_REPORT
from rules.cost_rules import COST_REPORT
from rules.engagement_rules import ENGAGEMENT_REPORT
from rules.liquidity_optimization_rules import LIQUIDITY_OPTIMIZATION_REPORT
from rules.optimization_rules import OPTIMIZATION_REPORT
from rules.performance_rules import PERFORMANCE_REPORT
from rules.pool_analytics_rules import POOL_ANALYTICS_REPORT
from rules.security_rules import SECURITY_REPORT
from rules.simulation_rules import SIMULATION_REPORT
from rules.user_analytics_rules import USER_ANALYTICS_REPORT

# Bump whenever a threshold, message, or output class changes.
CATALOG_VERSION: str = "2.0.0"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

CATALOG: Mapping[str, ReportDefinition] = MappingProxyType(
    {
        definition.report_type: definition
        for definition in (
            AUDIT_REPORT,
            COMPLIANCE_REPORT,
            COST_REPORT,
            PERFORMANCE_REPORT,
            SECURITY_REPORT,
            USER_ANALYTICS_REPORT,
            ENGAGEMENT_REPORT,
            OPTIMIZATION_REPORT,
            LIQUIDITY_OPTIMIZATION_REPORT,
            POOL_ANALYTICS_REPORT,
            SIMULATION_REPORT,
        )
    }
)


def report_types(catalog: Mapping[str, ReportDefinition] = CATALOG) -> tuple[str, ...]:
    return tuple(catalog)


def get_definition(
    report_type: str,
    catalog: Mapping[str, ReportDefinition] = CATALOG,
) -> ReportDefinition:
    """Return the definition registered for *report_type*.

    Raises:
        UnknownReportType: If *report_type* is not registered.
    """
    definition = catalog.get(report_type)
    if definition is None:
        supported = ", ".join(f'"{k}"' for k in catalog)
        raise UnknownReportType(
            f"Unsupported report type '{report_type}'. Supported values: {supported}."
        )
    return definition
