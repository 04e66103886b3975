"""Persisted report contract."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeploymentMetadata(BaseModel):
    """Deployment details recorded by the pool deploy scripts."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    network: str | None = None
    chain_id: int | None = None
    deployer: str | None = None
    pool: str | None = None
    token0: str | None = None
    token1: str | None = None


class RuleErrorEntry(BaseModel):
    """A rule that could not be evaluated. Not a finding."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    rule_id: str = Field(min_length=1)
    error: str


class Report(BaseModel):
    """Immutable report artifact for one pool and one report type."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        str_strip_whitespace=True,
    )

    report_type: str = Field(min_length=1)
    catalog_version: str = Field(min_length=1)
    subject_id: str = Field(min_length=1)
    generated_at: datetime
    deployment: DeploymentMetadata | None = None
    metric_groups: dict[str, dict[str, Any]]
    findings: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    rule_errors: tuple[RuleErrorEntry, ...] = ()

    @field_validator("generated_at")
    @classmethod
    def _require_timezone(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            raise ValueError("generated_at must be timezone-aware")
        return value
