"""
reporting/builder.py

Assembles a Report from fetched metric groups and rule output.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime, timezone

from metrics.types import MetricGroup
from reporting.schema import DeploymentMetadata, Report, RuleErrorEntry
from rules.catalog import CATALOG_VERSION
from rules.engine import RuleOutput


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReportBuilder:
    """
    Pure assembly: no business logic, no I/O.

    The clock is injectable so that a fixed instant yields a byte-identical
    report.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = utc_now,
        catalog_version: str = CATALOG_VERSION,
    ) -> None:
        self._clock = clock
        self._catalog_version = catalog_version

    def build(
        self,
        subject_id: str,
        metric_groups: Mapping[str, MetricGroup],
        rule_output: RuleOutput,
        *,
        report_type: str,
        deployment: DeploymentMetadata | None = None,
    ) -> Report:
        """
        Normalize every metric value to its serializable form and return the report.

        Numbers become decimal strings, booleans stay booleans, timestamps
        become ISO-8601 UTC strings. Group order follows *metric_groups*.
        """
        return Report(
            report_type=report_type,
            catalog_version=self._catalog_version,
            subject_id=subject_id,
            generated_at=self._clock(),
            deployment=deployment,
            metric_groups={name: group.to_serializable() for name, group in metric_groups.items()},
            findings=rule_output.findings,
            recommendations=rule_output.recommendations,
            rule_errors=tuple(
                RuleErrorEntry(rule_id=error.rule_id, error=error.reason)
                for error in rule_output.rule_errors
            ),
        )
