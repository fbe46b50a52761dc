"""Pydantic models for the persisted snapshot document.

On disk the state is one JSON object with two top-level collections::

    {
      "cycles": [{"startDate": "2024-01-01", "endDate": "2024-01-06"}],
      "logs": {
        "2024-01-01": {"date": "2024-01-01", "flow": "Medium", "mood": [],
                       "symptoms": [], "loveCount": 2, "intimacy": false}
      }
    }

``endDate``, ``flow`` and ``note`` are omitted when unset.  Older files that
lack ``mood``/``symptoms``/``loveCount``/``intimacy`` load with defaults.
"""

from __future__ import annotations

import datetime as dt
import logging
from types import MappingProxyType

from pydantic import Field

from luna.cycle.config_loader import CycleConfig, get_cycle_config
from luna.cycle.dates import days_between
from luna.cycle.records import CycleRecord, DailyLog, Flow, Snapshot, unique
from luna.models.base import CamelBase

logger = logging.getLogger("luna.models.snapshot")


class CycleEntry(CamelBase):
    start_date: dt.date
    end_date: dt.date | None = None


class LogEntry(CamelBase):
    date: dt.date
    flow: Flow | None = None
    mood: list[str] = Field(default_factory=list)
    symptoms: list[str] = Field(default_factory=list)
    note: str | None = None
    love_count: int = Field(default=0, ge=0)
    intimacy: bool = False


class SnapshotDocument(CamelBase):
    cycles: list[CycleEntry] = Field(default_factory=list)
    logs: dict[dt.date, LogEntry] = Field(default_factory=dict)

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> "SnapshotDocument":
        return cls(
            cycles=[
                CycleEntry(start_date=c.start, end_date=c.end) for c in snapshot.cycles
            ],
            logs={
                day: LogEntry(
                    date=log.date,
                    flow=log.flow,
                    mood=list(log.mood),
                    symptoms=list(log.symptoms),
                    note=log.note,
                    love_count=log.love_count,
                    intimacy=log.intimacy,
                )
                for day, log in sorted(snapshot.logs.items())
            },
        )

    def to_snapshot(self, config: CycleConfig | None = None) -> Snapshot:
        """Convert to core records.

        Duplicate start dates keep the last entry.

        Raises:
            ValueError: If a cycle ends before it starts, two starts are
                closer than ``min_cycle_gap_days``, or a closed cycle runs
                into the next one.
        """
        by_start: dict[dt.date, CycleRecord] = {}
        for entry in self.cycles:
            if entry.start_date in by_start:
                logger.warning(
                    "Duplicate cycle start %s in snapshot; keeping the last entry",
                    entry.start_date.isoformat(),
                )
            by_start[entry.start_date] = CycleRecord(
                start=entry.start_date, end=entry.end_date
            )

        cycles = [by_start[k] for k in sorted(by_start)]
        _check_spacing(cycles, (config or get_cycle_config()).cycle.min_cycle_gap_days)

        logs = {
            day: DailyLog(
                date=day,
                flow=entry.flow,
                mood=unique(entry.mood),
                symptoms=unique(entry.symptoms),
                note=entry.note,
                love_count=entry.love_count,
                intimacy=entry.intimacy,
            )
            for day, entry in self.logs.items()
        }
        return Snapshot(
            cycles=tuple(cycles),
            logs=MappingProxyType(logs),
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def _check_spacing(cycles: list[CycleRecord], min_gap: int) -> None:
    for prev, nxt in zip(cycles, cycles[1:]):
        if days_between(nxt.start, prev.start) < min_gap:
            raise ValueError(
                f"Cycles starting {prev.start.isoformat()} and {nxt.start.isoformat()} "
                f"are less than {min_gap} days apart"
            )
        if prev.end is not None and prev.end > nxt.start:
            raise ValueError(
                f"Cycle starting {prev.start.isoformat()} ends {prev.end.isoformat()}, "
                f"after the next cycle starts on {nxt.start.isoformat()}"
            )
