"""
app/config.py

Environment-driven settings for report runs.

Nothing about the pool is hardcoded: the pool address, where metrics come
from and where reports go are all supplied per environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from app.env import load_env_files
from pipeline.errors import ConfigurationError

_ALLOWED_METRIC_SOURCES = {"http", "snapshot"}


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class MetricSourceSettings:
    """
    Where metric groups are fetched from.
    """

    kind: str = "http"
    base_url: str = "http://127.0.0.1:8545/metrics"
    api_key: str | None = None
    snapshot_path: str = "metrics_snapshot.json"
    timeout_seconds: float = 15.0
    fetch_concurrency: int = 4
    allow_partial: bool = False


@dataclass(frozen=True)
class ReportSettings:
    """
    Subject and output settings for report runs.
    """

    pool_address: str | None = None
    deployments_file: str = "deployments.json"
    reports_root_dir: str = "."
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_metric_source_settings() -> MetricSourceSettings:
    """
    Return cached metric source settings from environment variables.

    Raises ConfigurationError if METRICS_SOURCE names an unknown source.
    """

    kind = _get_str_env("METRICS_SOURCE", "http").lower()
    if kind not in _ALLOWED_METRIC_SOURCES:
        raise ConfigurationError(
            f"METRICS_SOURCE '{kind}' is not valid. "
            f"Allowed values: {sorted(_ALLOWED_METRIC_SOURCES)}."
        )
    return MetricSourceSettings(
        kind=kind,
        base_url=_get_str_env("METRICS_API_BASE_URL", "http://127.0.0.1:8545/metrics"),
        api_key=_get_optional_str_env("METRICS_API_KEY"),
        snapshot_path=_get_str_env("METRICS_SNAPSHOT_PATH", "metrics_snapshot.json"),
        timeout_seconds=max(1.0, _get_float_env("METRICS_HTTP_TIMEOUT_SECONDS", 15.0)),
        fetch_concurrency=max(1, _get_int_env("METRICS_FETCH_CONCURRENCY", 4)),
        allow_partial=_get_bool_env("METRICS_ALLOW_PARTIAL", False),
    )


@lru_cache(maxsize=1)
def get_report_settings() -> ReportSettings:
    """
    Return cached report run settings from environment variables.
    """

    return ReportSettings(
        pool_address=_get_optional_str_env("POOL_ADDRESS"),
        deployments_file=_get_str_env("DEPLOYMENTS_FILE", "deployments.json"),
        reports_root_dir=_get_str_env("REPORTS_ROOT_DIR", "."),
        log_level=_get_str_env("LOG_LEVEL", "INFO").upper(),
    )
