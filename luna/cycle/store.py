"""In-memory cycle store: period records plus per-day logs.

The store is the only place tracked state changes.  Every successful
mutation bumps the snapshot version and hands the new snapshot to the
injected ``on_change`` collaborator (normally the snapshot file writer),
so cycles and logs are always persisted together.

Usage::

    store = CycleStore(on_change=snapshot_file.save)
    store.start_period(date(2024, 1, 1))
    store.end_period(date(2024, 1, 6), store.cycles[-1])
    store.increment_love(date(2024, 1, 6))
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from luna.cycle.config_loader import CycleConfig, get_cycle_config
from luna.cycle.dates import days_between
from luna.cycle.phase_engine import is_period_ongoing
from luna.cycle.records import CycleRecord, DailyLog, Flow, Snapshot, unique

logger = logging.getLogger("luna.cycle.store")

SnapshotListener = Callable[[Snapshot], None]

_OVERWRITE_FIELDS = ("flow", "mood", "symptoms", "note", "intimacy")


class CycleStoreError(ValueError):
    """Raised when a mutation would break a cycle record invariant."""


class CycleStore:
    """Ordered cycle records and the per-date log map, mutated as one unit."""

    def __init__(
        self,
        cycles: Iterable[CycleRecord] = (),
        logs: Mapping[date, DailyLog] | None = None,
        config: CycleConfig | None = None,
        on_change: SnapshotListener | None = None,
    ) -> None:
        self._config = config or get_cycle_config()
        self._on_change = on_change
        self._cycles: list[CycleRecord] = sorted(cycles, key=lambda c: c.start)
        self._logs: dict[date, DailyLog] = dict(logs or {})
        self._version = 0

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def cycles(self) -> tuple[CycleRecord, ...]:
        return tuple(self._cycles)

    @property
    def logs(self) -> Mapping[date, DailyLog]:
        return MappingProxyType(self._logs)

    @property
    def version(self) -> int:
        return self._version

    def get_log(self, on_date: date) -> DailyLog | None:
        return self._logs.get(on_date)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            cycles=tuple(self._cycles),
            logs=MappingProxyType(dict(self._logs)),
            version=self._version,
        )

    def load_snapshot(self, snapshot: Snapshot) -> None:
        """Swap in a loaded snapshot wholesale.  Does not notify listeners."""
        self._cycles = sorted(snapshot.cycles, key=lambda c: c.start)
        self._logs = dict(snapshot.logs)
        self._version = snapshot.version

    # ------------------------------------------------------------------
    # Period mutations
    # ------------------------------------------------------------------

    def start_period(self, on_date: date) -> bool:
        """Record that a period started on ``on_date``.

        A start within ``min_cycle_gap_days`` of an existing record refers to
        that same period: an earlier date moves its start back, an equal or
        later date is ignored.  Otherwise a new open record is inserted.

        Returns:
            True if the collection changed.
        """
        gap = self._config.cycle.min_cycle_gap_days
        nearby = next(
            (
                i
                for i, c in enumerate(self._cycles)
                if abs(days_between(on_date, c.start)) < gap
            ),
            None,
        )

        if nearby is not None:
            existing = self._cycles[nearby]
            if on_date >= existing.start:
                logger.info(
                    "Period start %s already covered by cycle starting %s",
                    on_date.isoformat(),
                    existing.start.isoformat(),
                )
                return False
            self._cycles[nearby] = replace(existing, start=on_date)
            logger.info(
                "Moved cycle start %s back to %s",
                existing.start.isoformat(),
                on_date.isoformat(),
            )
        else:
            self._cycles.append(CycleRecord(start=on_date))
            logger.info("Started new cycle on %s", on_date.isoformat())

        self._cycles.sort(key=lambda c: c.start)
        self._merge_log(on_date, flow=self._config.cycle.default_start_flow)
        self._commit()
        return True

    def end_period(
        self,
        on_date: date,
        active_cycle: CycleRecord | None,
        reference_date: date | None = None,
    ) -> bool:
        """Close ``active_cycle`` on ``on_date`` (the first day without flow).

        Only a period that is still running can be ended: the cycle must be
        ongoing on ``reference_date`` (defaults to ``on_date``), or be open
        with ``on_date`` no later than ``safety_period_limit_days`` after its
        start.  Anything else is ignored.  Ending a period on its own start
        day is treated as a mis-tap and deletes the record outright.

        Returns:
            True if the collection changed.

        Raises:
            CycleStoreError: If ``on_date`` precedes the cycle's start, or
                reaches the start of the next recorded cycle.
        """
        if active_cycle is None:
            logger.info("End period on %s ignored: no active cycle", on_date.isoformat())
            return False

        index = self._index_of(active_cycle.start)
        if index is None:
            logger.info(
                "End period ignored: cycle starting %s is no longer stored",
                active_cycle.start.isoformat(),
            )
            return False

        stored = self._cycles[index]
        limit = self._config.cycle.safety_period_limit_days
        ongoing = is_period_ongoing(stored, reference_date or on_date, self._config)
        in_window = stored.is_open and days_between(on_date, stored.start) <= limit
        if not (ongoing or in_window):
            logger.info(
                "End period on %s ignored: cycle starting %s is not ongoing",
                on_date.isoformat(),
                stored.start.isoformat(),
            )
            return False

        following = self._cycles[index + 1] if index + 1 < len(self._cycles) else None
        if on_date == stored.start:
            del self._cycles[index]
            logger.info("Removed cycle starting %s (same-day end)", on_date.isoformat())
        elif on_date < stored.start:
            raise CycleStoreError(
                f"Cannot end cycle starting {stored.start.isoformat()} "
                f"on earlier date {on_date.isoformat()}"
            )
        elif following is not None and on_date >= following.start:
            raise CycleStoreError(
                f"Cannot end cycle starting {stored.start.isoformat()} on "
                f"{on_date.isoformat()}: next cycle starts {following.start.isoformat()}"
            )
        else:
            self._cycles[index] = replace(stored, end=on_date)
            logger.info(
                "Ended cycle starting %s on %s",
                stored.start.isoformat(),
                on_date.isoformat(),
            )

        self._commit()
        return True

    # ------------------------------------------------------------------
    # Log mutations
    # ------------------------------------------------------------------

    def upsert_log(self, on_date: date, **changes: Any) -> DailyLog:
        """Merge field changes into the log for ``on_date``, creating it if needed.

        Accepted keys:
            flow, mood, symptoms, note, intimacy: overwrite (None clears flow/note).
            love_delta:      added to the love counter (never below zero).
            toggle_intimacy: when True, flips the intimacy flag.

        Returns:
            The stored log after the merge.
        """
        log = self._merge_log(on_date, **changes)
        self._commit()
        return log

    def save_log(self, log: DailyLog) -> DailyLog:
        """Store a log from the editor, keeping the counter already on file.

        The editor never edits ``love_count``, so the stored value wins.
        """
        existing = self._logs.get(log.date)
        saved = replace(
            log,
            mood=unique(log.mood),
            symptoms=unique(log.symptoms),
            love_count=existing.love_count if existing else 0,
        )
        self._logs[log.date] = saved
        logger.info("Saved log for %s", log.date.isoformat())
        self._commit()
        return saved

    def increment_love(self, on_date: date, by: int = 1) -> DailyLog:
        return self.upsert_log(on_date, love_delta=by)

    def toggle_intimacy(self, on_date: date) -> DailyLog:
        return self.upsert_log(on_date, toggle_intimacy=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _index_of(self, start: date) -> int | None:
        for i, c in enumerate(self._cycles):
            if c.start == start:
                return i
        return None

    def _merge_log(self, on_date: date, **changes: Any) -> DailyLog:
        love_delta = int(changes.pop("love_delta", 0) or 0)
        toggle = bool(changes.pop("toggle_intimacy", False))
        unknown = set(changes) - set(_OVERWRITE_FIELDS)
        if unknown:
            raise TypeError(f"Unknown log fields: {sorted(unknown)}")

        log = self._logs.get(on_date) or DailyLog(date=on_date)
        updates: dict[str, Any] = {}
        if "flow" in changes:
            flow = changes["flow"]
            updates["flow"] = Flow(flow) if flow is not None else None
        if "mood" in changes:
            updates["mood"] = unique(changes["mood"] or ())
        if "symptoms" in changes:
            updates["symptoms"] = unique(changes["symptoms"] or ())
        if "note" in changes:
            updates["note"] = changes["note"]
        if "intimacy" in changes:
            updates["intimacy"] = bool(changes["intimacy"])
        if toggle:
            updates["intimacy"] = not updates.get("intimacy", log.intimacy)
        if love_delta:
            updates["love_count"] = max(0, log.love_count + love_delta)

        merged = replace(log, **updates)
        self._logs[on_date] = merged
        return merged

    def _commit(self) -> None:
        self._version += 1
        if self._on_change is not None:
            self._on_change(self.snapshot())
