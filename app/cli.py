"""
Generate liquidity pool reports from the command line.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from collections.abc import Sequence

from app.config import get_metric_source_settings, get_report_settings
from app.deployments import resolve_subject
from app.sources import build_metric_source
from pipeline.errors import ConfigurationError
from pipeline.runner import PipelineResult, PipelineRunner
from reporting.sink import ReportSink
from rules.catalog import report_types

ALL_REPORT_TYPES = "all"


def _configure_logging(log_level: str) -> None:
    """
    Configure root logging once for the CLI process.
    """

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate liquidity pool analysis reports.")
    parser.add_argument(
        "--report-type",
        dest="report_type",
        choices=[*report_types(), ALL_REPORT_TYPES],
        default=ALL_REPORT_TYPES,
        help="Report type to generate, or 'all' for every registered type.",
    )
    parser.add_argument(
        "--subject",
        dest="subject",
        default=None,
        help="Pool address. Defaults to POOL_ADDRESS, then the deployment file.",
    )
    parser.add_argument(
        "--source",
        dest="source",
        choices=["http", "snapshot"],
        default=None,
        help="Metric source override (defaults to METRICS_SOURCE).",
    )
    parser.add_argument(
        "--snapshot",
        dest="snapshot",
        default=None,
        help="Snapshot file for the snapshot source. Implies --source snapshot.",
    )
    parser.add_argument(
        "--output-dir",
        dest="output_dir",
        default=None,
        help="Root directory for report artifacts (defaults to REPORTS_ROOT_DIR).",
    )
    return parser


def _print_result(result: PipelineResult) -> None:
    report = result.report
    if report is None:
        return
    print(f"  Report saved to: {result.artifact_path}")
    if report.findings:
        print("  Findings:")
        for finding in report.findings:
            print(f"    - {finding}")
    if report.recommendations:
        print("  Recommendations:")
        for recommendation in report.recommendations:
            print(f"    - {recommendation}")
    if not report.findings and not report.recommendations:
        print("  No findings or recommendations.")
    for rule_error in report.rule_errors:
        print(f"  Rule error ({rule_error.rule_id}): {rule_error.error}")


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        report_settings = get_report_settings()
        source_settings = get_metric_source_settings()
        _configure_logging(report_settings.log_level)

        if args.snapshot:
            source_settings = dataclasses.replace(
                source_settings,
                kind="snapshot",
                snapshot_path=args.snapshot,
            )
        elif args.source:
            source_settings = dataclasses.replace(source_settings, kind=args.source)

        subject_id, deployment = resolve_subject(report_settings, args.subject)
        source = build_metric_source(source_settings)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    sink = ReportSink(args.output_dir or report_settings.reports_root_dir)
    runner = PipelineRunner(source=source, sink=sink, deployment=deployment)

    selected = report_types() if args.report_type == ALL_REPORT_TYPES else (args.report_type,)
    exit_code = 0
    for report_type in selected:
        print(f"Generating {report_type} report for {subject_id}...")
        result = runner.run(subject_id, report_type)
        if result.succeeded:
            _print_result(result)
            continue
        exit_code = 1
        print(
            f"{report_type} report failed during {result.history[-2].value}: "
            f"{type(result.error).__name__}: {result.error}",
            file=sys.stderr,
        )

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
