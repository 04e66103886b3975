"""
metrics/http_source.py

Metric source backed by an HTTP JSON gateway in front of the pool contract.

Each metric group is one endpoint:

    GET {base_url}/pools/{pool_address}/metrics/{group_name}

Independent groups are requested concurrently and joined before the caller
sees any result. Requests are never retried; re-running the report is the
retry.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import Any

import requests

from metrics.base import MetricSource
from pipeline.errors import MalformedResponse, UnknownSubject, UnreachableSource

logger = logging.getLogger(__name__)


class HttpMetricSource(MetricSource):
    """
    Fetch metric groups from a JSON gateway using ``requests``.
    """

    source = "http"

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str | None = None,
        timeout_seconds: float = 15.0,
        max_workers: int = 4,
        session: requests.Session | None = None,
        allow_partial: bool = False,
    ) -> None:
        super().__init__(allow_partial=allow_partial)
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._max_workers = max(1, max_workers)
        self._session = session or requests.Session()

    def _fetch_raw(self, subject_id: str, group_names: Sequence[str]) -> Mapping[str, Any]:
        if len(group_names) <= 1 or self._max_workers == 1:
            return {name: self._get_group(subject_id, name) for name in group_names}

        workers = min(self._max_workers, len(group_names))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="metric-fetch") as pool:
            futures = [(name, pool.submit(self._get_group, subject_id, name)) for name in group_names]
            return {name: future.result() for name, future in futures}

    def _get_group(self, subject_id: str, group_name: str) -> Any:
        """
        Request one metric group and return its parsed JSON body.
        """

        url = f"{self._base_url}/pools/{subject_id}/metrics/{group_name}"
        try:
            response = self._session.get(url, headers=self._headers(), timeout=self._timeout_seconds)
        except (requests.Timeout, requests.ConnectionError) as exc:
            logger.error("Metric request failed source=%s url=%s error=%s", self.source, url, exc)
            raise UnreachableSource(f"{self.source}: could not reach {url}.") from exc

        status_code = response.status_code
        if status_code == 404:
            raise UnknownSubject(f"{self.source}: pool {subject_id} is unknown to the metrics gateway.")
        if status_code >= 400:
            logger.error(
                "Metric request rejected source=%s status=%s url=%s",
                self.source,
                status_code,
                url,
            )
            raise UnreachableSource(f"{self.source}: gateway returned HTTP {status_code} for {url}.")

        try:
            return response.json(parse_float=Decimal)
        except ValueError as exc:
            raise MalformedResponse(f"{self.source}: response for '{group_name}' was not valid JSON.") from exc

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers
