"""
In-memory and composite metric sources.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from metrics.base import MetricSource
from pipeline.errors import UnknownSubject


class StaticMetricSource(MetricSource):
    """
    Serve metric groups from an in-memory ``{subject: {group: payload}}`` mapping.
    """

    source = "static"

    def __init__(
        self,
        subjects: Mapping[str, Mapping[str, Any]],
        *,
        allow_partial: bool = False,
    ) -> None:
        super().__init__(allow_partial=allow_partial)
        self._subjects = {address.lower(): dict(groups) for address, groups in subjects.items()}

    def _fetch_raw(self, subject_id: str, group_names: Sequence[str]) -> Mapping[str, Any]:
        groups = self._subjects.get(subject_id.lower())
        if groups is None:
            raise UnknownSubject(f"{self.source}: pool {subject_id} is unknown.")
        return {name: groups[name] for name in group_names if name in groups}


class CompositeMetricSource(MetricSource):
    """
    Route each metric group to the first source that serves it.

    Sources are consulted in the order given, so specialised sources (for
    example the built-in simulation scenarios) go before the general one.
    Validation runs once, in this source, against the merged payloads.
    A subject is only checked by the sources its groups are routed to, so a
    request served entirely by ScenarioMetricSource succeeds for any pool.
    """

    source = "composite"

    def __init__(self, sources: Sequence[MetricSource], *, allow_partial: bool = False) -> None:
        if not sources:
            raise ValueError("CompositeMetricSource requires at least one source.")
        super().__init__(allow_partial=allow_partial)
        self._sources = tuple(sources)

    def serves(self, group_name: str) -> bool:
        return any(source.serves(group_name) for source in self._sources)

    def _fetch_raw(self, subject_id: str, group_names: Sequence[str]) -> Mapping[str, Any]:
        routed: dict[int, list[str]] = {}
        for name in group_names:
            for index, source in enumerate(self._sources):
                if source.serves(name):
                    routed.setdefault(index, []).append(name)
                    break

        merged: dict[str, Any] = {}
        for index, names in routed.items():
            merged.update(self._sources[index]._fetch_raw(subject_id, names))
        return {name: merged[name] for name in group_names if name in merged}
