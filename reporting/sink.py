"""
reporting/sink.py

Filesystem persistence for report artifacts.

Layout: one directory per report type under a root directory, each report
in its own JSON file::

    {root}/{directory}/{file_prefix}-{epoch_millis}-{sequence}.json

``sequence`` is a process-wide counter, so two reports generated within
the same millisecond still get distinct names. Files are written to a
temporary name in the target directory and hard-linked into place only
once fully written. Linking never replaces an existing file, so a name
already taken by another process is skipped. An aborted write leaves
nothing behind.
"""

from __future__ import annotations

import itertools
import logging
import os
import tempfile
import threading
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from pipeline.errors import PersistenceError
from reporting.schema import Report
from rules.base import ReportDefinition
from rules.catalog import CATALOG, get_definition

logger = logging.getLogger(__name__)

_sequence = itertools.count(1)
_sequence_lock = threading.Lock()


def _next_sequence() -> int:
    with _sequence_lock:
        return next(_sequence)


def artifact_name(file_prefix: str, report: Report, sequence: int) -> str:
    epoch_millis = int(report.generated_at.timestamp() * 1000)
    return f"{file_prefix}-{epoch_millis}-{sequence:04d}.json"


class ReportSink:
    """
    Writes reports as uniquely named JSON artifacts.
    """

    def __init__(
        self,
        root_dir: str | Path = ".",
        *,
        catalog: Mapping[str, ReportDefinition] | None = None,
    ) -> None:
        self._root_dir = Path(root_dir)
        self._catalog = catalog if catalog is not None else CATALOG

    @property
    def root_dir(self) -> Path:
        return self._root_dir

    def persist(self, report: Report, report_type_tag: str) -> Path:
        """
        Write *report* under the directory registered for *report_type_tag*.

        Returns the final artifact path. An existing artifact is never
        overwritten, even by another process writing the same report type.

        Raises:
            UnknownReportType: If the tag is not registered.
            PersistenceError: If the directory or file cannot be written.
        """
        definition = get_definition(report_type_tag, self._catalog)
        target_dir = self._root_dir / definition.directory
        payload = report.model_dump_json(indent=2)

        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(f"Cannot create report directory {target_dir}.") from exc

        tmp_path: Path | None = None
        final_path = target_dir / artifact_name(definition.file_prefix, report, _next_sequence())
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=target_dir,
                prefix=f".{definition.file_prefix}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_path = Path(handle.name)
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            while True:
                try:
                    os.link(tmp_path, final_path)
                    break
                except FileExistsError:
                    final_path = target_dir / artifact_name(
                        definition.file_prefix, report, _next_sequence()
                    )
        except OSError as exc:
            raise PersistenceError(f"Failed to write report artifact {final_path}.") from exc
        finally:
            if tmp_path is not None and tmp_path.exists():
                try:
                    tmp_path.unlink()
                except OSError:
                    logger.warning("Could not remove temporary report file %s", tmp_path)

        logger.info("Report artifact written path=%s", final_path)
        return final_path

    @staticmethod
    def load(path: str | Path) -> Report:
        """
        Read a persisted report back into a Report.

        Raises:
            PersistenceError: If the file cannot be read or is not a valid report.
        """
        artifact = Path(path)
        try:
            raw = artifact.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Cannot read report artifact {artifact}.") from exc
        try:
            return Report.model_validate_json(raw)
        except ValidationError as exc:
            raise PersistenceError(f"Report artifact {artifact} is not a valid report.") from exc
