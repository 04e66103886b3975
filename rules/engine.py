"""
rules/engine.py

Evaluates the rule catalog against fetched metric groups.

Evaluation is deterministic: the same groups always yield the same
findings and recommendations, in rule declaration order. A rule whose
groups were not fetched is skipped; it is neither true nor false. A rule
whose predicate raises is recorded as an evaluation error and skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from metrics.types import MetricGroup
from pipeline.errors import RuleEvaluationError
from rules.base import FINDING, ReportDefinition, Rule
from rules.catalog import CATALOG, get_definition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleOutput:
    """
    Result of evaluating one report type.

    Attributes:
        findings: Finding messages, deduplicated, in declaration order.
        recommendations: Recommendation messages, deduplicated, in declaration order.
        rule_errors: Rules whose predicate failed on an unexpected value.
        skipped_rules: Ids of rules skipped because a group was absent.
    """

    findings: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    rule_errors: tuple[RuleEvaluationError, ...] = ()
    skipped_rules: tuple[str, ...] = ()


class RuleEngine:
    """
    Stateless evaluator over a read-only rule catalog.

    One instance may be shared across concurrent pipeline runs.
    """

    def __init__(self, catalog: Mapping[str, ReportDefinition] | None = None) -> None:
        self._catalog = catalog if catalog is not None else CATALOG

    def definition(self, report_type: str) -> ReportDefinition:
        return get_definition(report_type, self._catalog)

    def evaluate(self, report_type: str, metric_groups: Mapping[str, MetricGroup]) -> RuleOutput:
        """
        Evaluate every rule registered for *report_type*.

        Parameters
        ----------
        report_type:
            Registered report type tag.
        metric_groups:
            Fetched groups keyed by name. Groups not used by this report
            type are ignored.

        Raises
        ------
        UnknownReportType
            If *report_type* is not registered.
        """
        definition = self.definition(report_type)

        findings: list[str] = []
        recommendations: list[str] = []
        errors: list[RuleEvaluationError] = []
        skipped: list[str] = []

        for rule in definition.rules:
            if rule.after_findings:
                fired = bool(findings)
            else:
                missing = [name for name in rule.groups if name not in metric_groups]
                if missing:
                    skipped.append(rule.rule_id)
                    logger.debug(
                        "Rule skipped rule_id=%s missing_groups=%s",
                        rule.rule_id,
                        ",".join(missing),
                    )
                    continue
                try:
                    fired = self._check(rule, metric_groups)
                except RuleEvaluationError as exc:
                    errors.append(exc)
                    logger.warning("%s", exc)
                    continue

            if fired:
                target = findings if rule.output == FINDING else recommendations
                if rule.message not in target:
                    target.append(rule.message)

        return RuleOutput(
            findings=tuple(findings),
            recommendations=tuple(recommendations),
            rule_errors=tuple(errors),
            skipped_rules=tuple(skipped),
        )

    @staticmethod
    def _check(rule: Rule, metric_groups: Mapping[str, MetricGroup]) -> bool:
        view = MappingProxyType({name: metric_groups[name] for name in rule.groups})
        try:
            return bool(rule.predicate(view))
        except Exception as exc:
            raise RuleEvaluationError(rule.rule_id, f"{type(exc).__name__}: {exc}") from exc
