"""
metrics/base.py

Abstract metric source: the boundary to whatever provider holds pool metrics.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from metrics.types import GroupSpec, MetricGroup, build_group
from pipeline.errors import MalformedResponse, UnknownSubject

logger = logging.getLogger(__name__)


class MetricSource(ABC):
    """
    Contract for metric providers.

    Subclasses implement :meth:`_fetch_raw` and return plain payloads keyed by
    group name. Shape validation and value normalization happen once, here,
    so every concrete source yields identical MetricGroup objects for the same
    raw data.
    """

    source: str = "metric_source"

    def __init__(self, *, allow_partial: bool = False) -> None:
        self._allow_partial = allow_partial

    def serves(self, group_name: str) -> bool:
        """Return True if this source can provide *group_name*."""
        return True

    def fetch(self, subject_id: str, groups: Sequence[GroupSpec]) -> dict[str, MetricGroup]:
        """
        Fetch and normalize the requested metric groups for one pool.

        Parameters
        ----------
        subject_id:
            Pool address (or other subject identifier).
        groups:
            Group schemas in the order the caller wants them returned.

        Returns
        -------
        dict
            ``{group_name: MetricGroup}`` in the order of *groups*. With
            ``allow_partial`` enabled, groups the provider did not return
            are left out instead of failing the fetch.

        Raises
        ------
        UnreachableSource
            The provider could not be reached.
        UnknownSubject
            The provider does not know *subject_id*.
        MalformedResponse
            A group is missing or does not match its schema.
        """
        subject = (subject_id or "").strip()
        if not subject:
            raise UnknownSubject("Subject identifier must be a non-empty string.")

        names = [spec.name for spec in groups]
        raw: Mapping[str, Any] = self._fetch_raw(subject, names)

        fetched: dict[str, MetricGroup] = {}
        for spec in groups:
            if spec.name not in raw:
                if self._allow_partial:
                    logger.warning(
                        "Metric group missing source=%s subject=%s group=%s",
                        self.source,
                        subject,
                        spec.name,
                    )
                    continue
                raise MalformedResponse(
                    f"{self.source}: metric group '{spec.name}' was not returned for {subject}."
                )
            fetched[spec.name] = build_group(spec, raw[spec.name])
        return fetched

    @abstractmethod
    def _fetch_raw(self, subject_id: str, group_names: Sequence[str]) -> Mapping[str, Any]:
        """
        Return raw payloads keyed by group name for *subject_id*.
        """
