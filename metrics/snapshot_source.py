"""
metrics/snapshot_source.py

Metric source that reads a JSON snapshot file exported from the chain.

Snapshot layout::

    {
      "subjects": {
        "0xPoolAddress": {
          "auditSummary": {"poolType": "weighted", ...},
          ...
        }
      }
    }

Pool addresses are matched case-insensitively.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from metrics.base import MetricSource
from pipeline.errors import MalformedResponse, UnknownSubject, UnreachableSource


class MetricSnapshot(BaseModel):
    """Top-level shape of a snapshot file."""

    model_config = ConfigDict(extra="ignore")

    subjects: dict[str, dict[str, Any]]


class SnapshotMetricSource(MetricSource):
    """
    Serve metric groups from a snapshot file.

    The file is read on every fetch so a long-lived process always sees the
    latest export.
    """

    source = "snapshot"

    def __init__(self, path: str | Path, *, allow_partial: bool = False) -> None:
        super().__init__(allow_partial=allow_partial)
        self._path = Path(path)

    def _fetch_raw(self, subject_id: str, group_names: Sequence[str]) -> Mapping[str, Any]:
        snapshot = self._load()
        subjects = {address.lower(): groups for address, groups in snapshot.subjects.items()}
        groups = subjects.get(subject_id.lower())
        if groups is None:
            raise UnknownSubject(f"{self.source}: pool {subject_id} is not present in {self._path}.")
        return {name: groups[name] for name in group_names if name in groups}

    def _load(self) -> MetricSnapshot:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise UnreachableSource(f"{self.source}: cannot read snapshot {self._path}.") from exc

        try:
            data = json.loads(raw, parse_float=Decimal)
        except ValueError as exc:
            raise MalformedResponse(f"{self.source}: snapshot {self._path} is not valid JSON.") from exc

        try:
            return MetricSnapshot.model_validate(data)
        except ValidationError as exc:
            errors = "; ".join(
                f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in exc.errors()
            )
            raise MalformedResponse(f"{self.source}: snapshot {self._path} is invalid: {errors}") from exc
