"""
rules/base.py

Declarative rule and report-type definitions.

A rule is a stateless predicate over the metric groups it names, paired with
the message it contributes when the predicate holds. Every rule belongs to
exactly one output class: a *finding* (an observed condition) or a
*recommendation* (an action to take).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Literal

from metrics.types import GroupSpec, MetricGroup

OutputClass = Literal["finding", "recommendation"]

FINDING: OutputClass = "finding"
RECOMMENDATION: OutputClass = "recommendation"

Predicate = Callable[[Mapping[str, MetricGroup]], bool]


@dataclass(frozen=True)
class Rule:
    """
    One threshold check.

    ``groups`` defaults to the groups declared by the predicate (see
    :mod:`rules.predicates`). A rule declared with ``after_findings=True``
    has no predicate: it fires when any earlier rule of the same report
    type produced a finding.
    """

    rule_id: str
    output: OutputClass
    message: str
    predicate: Predicate | None = None
    groups: tuple[str, ...] = ()
    after_findings: bool = False

    def __post_init__(self) -> None:
        if not self.rule_id.strip():
            raise ValueError("Rule.rule_id must be a non-empty string.")
        if self.output not in (FINDING, RECOMMENDATION):
            raise ValueError(f"Rule '{self.rule_id}' has invalid output class '{self.output}'.")
        if not self.message.strip():
            raise ValueError(f"Rule '{self.rule_id}' must declare a message.")
        if self.after_findings == (self.predicate is not None):
            raise ValueError(
                f"Rule '{self.rule_id}' must declare exactly one of predicate or after_findings."
            )
        if self.predicate is not None and not self.groups:
            declared = tuple(getattr(self.predicate, "groups", ()))
            object.__setattr__(self, "groups", declared)
            if not declared:
                raise ValueError(f"Rule '{self.rule_id}' does not declare the groups it reads.")


def finding(rule_id: str, message: str, predicate: Predicate, *groups: str) -> Rule:
    return Rule(rule_id=rule_id, output=FINDING, message=message, predicate=predicate, groups=groups)


def recommendation(rule_id: str, message: str, predicate: Predicate, *groups: str) -> Rule:
    return Rule(
        rule_id=rule_id,
        output=RECOMMENDATION,
        message=message,
        predicate=predicate,
        groups=groups,
    )


@dataclass(frozen=True)
class ReportDefinition:
    """
    One row of the rule catalog: everything needed to produce one report type.

    Attributes:
        report_type: Tag used on the command line and stamped into the report.
        directory: Artifact directory, relative to the reports root.
        file_prefix: Artifact file name prefix.
        groups: Metric groups to fetch, in report order.
        rules: Rules in declaration order; output order follows this order.
        title: Human-readable name for progress output.
    """

    report_type: str
    directory: str
    file_prefix: str
    groups: tuple[GroupSpec, ...]
    rules: tuple[Rule, ...] = ()
    title: str = ""

    def __post_init__(self) -> None:
        names = [spec.name for spec in self.groups]
        if len(names) != len(set(names)):
            raise ValueError(f"Report type '{self.report_type}' declares a metric group twice.")

        rule_ids = [rule.rule_id for rule in self.rules]
        if len(rule_ids) != len(set(rule_ids)):
            raise ValueError(f"Report type '{self.report_type}' declares a rule id twice.")

        for rule in self.rules:
            undeclared = [name for name in rule.groups if name not in names]
            if undeclared:
                raise ValueError(
                    f"Rule '{rule.rule_id}' reads groups not fetched by "
                    f"'{self.report_type}': {', '.join(undeclared)}."
                )

    @property
    def group_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.groups)
