"""JSON snapshot file holding all tracked state.

The whole state (cycles and logs together) is rewritten after every
mutation; there are no partial writes.  A write goes to a temporary file
in the same directory and is moved into place with ``os.replace`` so a
crash mid-write never leaves a truncated snapshot behind.

A missing, unreadable, or corrupt file loads as an empty snapshot
("no data yet") rather than stopping the app.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from luna.cycle.config_loader import CycleConfig
from luna.cycle.records import Snapshot
from luna.models.snapshot import SnapshotDocument

logger = logging.getLogger("luna.storage")


class SnapshotFile:
    """Load and save the snapshot document at ``path``."""

    def __init__(
        self, path: str | os.PathLike[str], config: CycleConfig | None = None
    ) -> None:
        self.path = Path(path).expanduser()
        self.config = config

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> Snapshot:
        if not self.path.exists():
            logger.info("No snapshot at %s; starting empty", self.path)
            return Snapshot()

        try:
            text = self.path.read_text(encoding="utf-8")
            if not text.strip():
                logger.warning("Snapshot %s is empty; starting empty", self.path)
                return Snapshot()
            snapshot = SnapshotDocument.model_validate_json(text).to_snapshot(self.config)
        except (OSError, ValidationError, ValueError) as exc:
            logger.warning("Could not load snapshot %s (%s); starting empty", self.path, exc)
            return Snapshot()

        logger.info(
            "Loaded %d cycles and %d logs from %s",
            len(snapshot.cycles),
            len(snapshot.logs),
            self.path,
        )
        return snapshot

    def save(self, snapshot: Snapshot) -> None:
        payload = SnapshotDocument.from_snapshot(snapshot).to_json()
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except OSError:
            logger.exception("Failed to write snapshot %s", self.path)
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Saved snapshot v%d to %s", snapshot.version, self.path)
