"""
pipeline/errors.py

Exception hierarchy shared by every stage of the report pipeline.

Fetch-stage and persistence-stage errors are fatal to the current run.
Rule evaluation errors are recorded on the report and never abort a run.
"""

from __future__ import annotations


class ReportPipelineError(Exception):
    """Base exception for report pipeline failures."""


class ConfigurationError(ReportPipelineError):
    """Raised when required settings are missing or invalid."""


class UnknownReportType(ReportPipelineError):
    """Raised when a report type tag is not registered in the rule catalog."""


# ---------------------------------------------------------------------------
# Fetch stage
# ---------------------------------------------------------------------------


class MetricSourceError(ReportPipelineError):
    """Base exception for metric source failures."""


class UnreachableSource(MetricSourceError):
    """Raised when the underlying metric provider cannot be reached."""


class UnknownSubject(MetricSourceError):
    """Raised when the requested pool does not exist at the provider."""


class MalformedResponse(MetricSourceError):
    """Raised when a metric group does not match its expected field set."""


# ---------------------------------------------------------------------------
# Evaluation stage
# ---------------------------------------------------------------------------


class RuleEvaluationError(ReportPipelineError):
    """A rule predicate failed on an unexpected value shape.

    Attributes:
        rule_id: Identifier of the rule that could not be evaluated.
        reason: Human-readable description of the underlying failure.
    """

    def __init__(self, rule_id: str, message: str) -> None:
        self.rule_id = rule_id
        self.reason = message
        super().__init__(f"Rule '{rule_id}' could not be evaluated: {message}")


# ---------------------------------------------------------------------------
# Persistence stage
# ---------------------------------------------------------------------------


class PersistenceError(ReportPipelineError):
    """Raised when a report artifact cannot be written or read back."""
