"""Cycle tracking core for Luna.

Pure date arithmetic over recorded periods and daily logs.  Nothing here
touches the network; persistence is injected into the store.

Modules:
    dates              — Local-calendar formatting, parsing, day differences
    records            — CycleRecord, DailyLog, Snapshot, Flow, CyclePhase
    config_loader      — Load/validate/hot-reload cycle_config.yaml
    store              — Period start/end and log mutations
    phase_engine       — Active cycle, cycle day, ongoing flag, phase
    calendar_projector — Per-date period status and month grids
    session            — Reference clock and the single-actor session
"""

from luna.cycle.config_loader import CycleConfig, get_cycle_config
from luna.cycle.phase_engine import PhaseState, infer_phase
from luna.cycle.records import CyclePhase, CycleRecord, DailyLog, Flow, Snapshot
from luna.cycle.session import CycleSession, ReferenceClock
from luna.cycle.store import CycleStore, CycleStoreError

__all__ = [
    "CycleConfig",
    "get_cycle_config",
    "PhaseState",
    "infer_phase",
    "CyclePhase",
    "CycleRecord",
    "DailyLog",
    "Flow",
    "Snapshot",
    "CycleSession",
    "ReferenceClock",
    "CycleStore",
    "CycleStoreError",
]
