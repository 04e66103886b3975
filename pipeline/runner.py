"""
pipeline/runner.py

Orchestrates one report run: fetch, evaluate, build, persist.

Each call to :meth:`PipelineRunner.run` is an independent, single-shot run
for one pool and one report type. The runner keeps no per-run state on
itself, so concurrent runs for different report types may share one
runner instance. Contains no fetching, rule or persistence logic of its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from metrics.base import MetricSource
from reporting.builder import ReportBuilder
from reporting.logging_utils import log_event
from reporting.schema import DeploymentMetadata, Report
from reporting.sink import ReportSink
from rules.engine import RuleEngine, RuleOutput

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    EVALUATING = "evaluating"
    BUILDING = "building"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


# Strictly sequential; any active state may fail.
_NEXT_STATE: dict[RunState, RunState] = {
    RunState.IDLE: RunState.FETCHING,
    RunState.FETCHING: RunState.EVALUATING,
    RunState.EVALUATING: RunState.BUILDING,
    RunState.BUILDING: RunState.PERSISTING,
    RunState.PERSISTING: RunState.DONE,
}

_TERMINAL_STATES = frozenset({RunState.DONE, RunState.FAILED})


class InvalidTransition(RuntimeError):
    """Raised when a run attempts a transition outside the state machine."""


@dataclass(frozen=True)
class PipelineResult:
    """
    Terminal outcome of one run.

    ``artifact_path`` and ``report`` are only set when ``state`` is DONE.
    ``error`` holds the originating exception when ``state`` is FAILED.
    """

    report_type: str
    subject_id: str
    state: RunState
    history: tuple[RunState, ...]
    artifact_path: Path | None = None
    report: Report | None = None
    rule_output: RuleOutput | None = None
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.state is RunState.DONE


class _RunTracker:
    """Per-run state holder enforcing the transition table."""

    def __init__(self, report_type: str, subject_id: str) -> None:
        self.report_type = report_type
        self.subject_id = subject_id
        self.state = RunState.IDLE
        self.history: list[RunState] = [RunState.IDLE]

    def advance(self, target: RunState) -> None:
        if _NEXT_STATE.get(self.state) is not target:
            raise InvalidTransition(f"Cannot move run from {self.state.value} to {target.value}.")
        self._enter(target)

    def fail(self) -> None:
        if self.state in _TERMINAL_STATES:
            raise InvalidTransition(f"Run already finished in state {self.state.value}.")
        self._enter(RunState.FAILED)

    def _enter(self, target: RunState) -> None:
        self.state = target
        self.history.append(target)
        log_event(
            logger,
            logging.DEBUG,
            "report_run_state",
            report_type=self.report_type,
            subject_id=self.subject_id,
            state=target.value,
        )


class PipelineRunner:
    """
    Coordinates MetricSource, RuleEngine, ReportBuilder and ReportSink.

    Every component failure moves the run straight to FAILED with the
    original exception preserved on the result; nothing is retried.
    """

    def __init__(
        self,
        *,
        source: MetricSource,
        sink: ReportSink,
        engine: RuleEngine | None = None,
        builder: ReportBuilder | None = None,
        deployment: DeploymentMetadata | None = None,
    ) -> None:
        self._source = source
        self._sink = sink
        self._engine = engine or RuleEngine()
        self._builder = builder or ReportBuilder()
        self._deployment = deployment

    def run(self, subject_id: str, report_type: str) -> PipelineResult:
        """
        Produce and persist one report.

        Args:
            subject_id: Pool address the report is generated for.
            report_type: Registered report type tag.

        Returns:
            A PipelineResult in state DONE or FAILED. Exceptions raised by
            components are captured on the result rather than propagated.
        """
        tracker = _RunTracker(report_type, subject_id)
        rule_output: RuleOutput | None = None
        try:
            definition = self._engine.definition(report_type)

            tracker.advance(RunState.FETCHING)
            metric_groups = self._source.fetch(subject_id, definition.groups)

            tracker.advance(RunState.EVALUATING)
            rule_output = self._engine.evaluate(report_type, metric_groups)

            tracker.advance(RunState.BUILDING)
            report = self._builder.build(
                subject_id,
                metric_groups,
                rule_output,
                report_type=report_type,
                deployment=self._deployment,
            )

            tracker.advance(RunState.PERSISTING)
            artifact_path = self._sink.persist(report, report_type)

            tracker.advance(RunState.DONE)
        except Exception as exc:
            failed_in = tracker.state
            tracker.fail()
            log_event(
                logger,
                logging.ERROR,
                "report_run_failed",
                report_type=report_type,
                subject_id=subject_id,
                stage=failed_in.value,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return PipelineResult(
                report_type=report_type,
                subject_id=subject_id,
                state=tracker.state,
                history=tuple(tracker.history),
                rule_output=rule_output,
                error=exc,
            )

        log_event(
            logger,
            logging.INFO,
            "report_run_completed",
            report_type=report_type,
            subject_id=subject_id,
            artifact=str(artifact_path),
            findings=len(report.findings),
            recommendations=len(report.recommendations),
            rule_errors=len(report.rule_errors),
        )
        return PipelineResult(
            report_type=report_type,
            subject_id=subject_id,
            state=tracker.state,
            history=tuple(tracker.history),
            artifact_path=artifact_path,
            report=report,
            rule_output=rule_output,
        )
