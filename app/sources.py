"""
Metric source factory.
"""

from __future__ import annotations

import logging

from app.config import MetricSourceSettings
from metrics.base import MetricSource
from metrics.http_source import HttpMetricSource
from metrics.memory import CompositeMetricSource
from metrics.scenarios import ScenarioMetricSource
from metrics.snapshot_source import SnapshotMetricSource
from pipeline.errors import ConfigurationError

logger = logging.getLogger(__name__)


def build_primary_source(settings: MetricSourceSettings) -> MetricSource:
    """
    Build the pool metric provider selected by METRICS_SOURCE.
    """

    if settings.kind == "http":
        return HttpMetricSource(
            base_url=settings.base_url,
            api_key=settings.api_key,
            timeout_seconds=settings.timeout_seconds,
            max_workers=settings.fetch_concurrency,
        )
    if settings.kind == "snapshot":
        return SnapshotMetricSource(settings.snapshot_path)
    raise ConfigurationError(f"Unsupported metric source '{settings.kind}'.")


def build_metric_source(settings: MetricSourceSettings) -> MetricSource:
    """
    Compose the simulation presets in front of the configured provider.

    Scenario groups are always served locally; every other group goes to
    the primary source.
    """

    primary = build_primary_source(settings)
    logger.info("Metric source configured kind=%s allow_partial=%s", settings.kind, settings.allow_partial)
    return CompositeMetricSource(
        [ScenarioMetricSource(), primary],
        allow_partial=settings.allow_partial,
    )
