from __future__ import annotations

import contextlib
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from models.records import ReadingSet

logger = logging.getLogger(__name__)

SNAPSHOT_NAME_PREFIX = "mackerel-plugin-"


def snapshot_name(prefix: str, program: Optional[str] = None) -> str:
    """Derive the per-plugin file name that keeps plugins in one directory apart."""

    if prefix:
        return SNAPSHOT_NAME_PREFIX + prefix
    exec_name = Path(program if program is not None else sys.argv[0]).name
    if exec_name.startswith(SNAPSHOT_NAME_PREFIX):
        return exec_name
    return SNAPSHOT_NAME_PREFIX + exec_name


def snapshot_path(
    prefix: str,
    workdir: Optional[str] = None,
    program: Optional[str] = None,
) -> Path:
    base = Path(workdir) if workdir else Path(tempfile.gettempdir())
    return base / snapshot_name(prefix, program)


class SnapshotStore:
    """Holds the previous run's readings for one plugin identity.

    Writes go through a temporary file in the same directory followed by a
    rename, so a reader sees either the old or the new snapshot. Overlapping
    writers are not coordinated; the last rename wins.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> ReadingSet:
        """Return the stored snapshot, or an empty one if it cannot be read."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No previous snapshot", extra={"path": str(self.path)})
            return ReadingSet.empty()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "Unable to read previous snapshot",
                extra={"path": str(self.path), "reason": str(exc)},
            )
            return ReadingSet.empty()

        try:
            return ReadingSet.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Ignoring corrupt snapshot",
                extra={"path": str(self.path), "reason": f"{exc.error_count()} validation errors"},
            )
            return ReadingSet.empty()

    def save(self, readings: ReadingSet) -> None:
        """Atomically replace the stored snapshot with ``readings``."""
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        payload = readings.model_dump_json().encode("utf-8")

        fd, tmp_name = tempfile.mkstemp(
            prefix=f"{self.path.name}.", suffix=".tmp", dir=directory
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self.path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            logger.error(
                "Failed to save snapshot",
                extra={"path": str(self.path), "reason": str(exc)},
            )
            raise

        logger.debug(
            "Saved snapshot",
            extra={"path": str(self.path), "value_count": len(readings.values)},
        )

