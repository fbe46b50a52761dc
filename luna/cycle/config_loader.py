"""Load, validate, and hot-reload the Luna cycle configuration.

The config lives in ``cycle_config.yaml`` alongside this module.  At startup
it is loaded once and cached.  Call ``reload_cycle_config()`` to re-read from
disk after an edit — no restart required.

Usage::

    from luna.cycle.config_loader import get_cycle_config

    config = get_cycle_config()
    config.cycle.min_cycle_gap_days        # 15
    config.phase_detail(CyclePhase.luteal)  # PhaseDetail(name="Luteal phase", ...)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from luna.cycle.records import CyclePhase, Flow

logger = logging.getLogger("luna.cycle.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "cycle_config.yaml"

_WEEK_STARTS = {"sunday": 6, "monday": 0}


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class CycleRulesConfig:
    """Period bookkeeping rules."""

    min_cycle_gap_days: int = 15
    safety_period_limit_days: int = 10
    default_cycle_length_days: int = 28
    default_start_flow: Flow = Flow.medium


@dataclass
class PhaseDetail:
    """Display copy for one phase (or the awaiting state)."""

    name: str
    description: str
    days_range: str


@dataclass
class PhaseRulesConfig:
    """Cycle-day boundaries and display details per phase."""

    ovulation_start_day: int
    ovulation_end_day: int
    details: dict[CyclePhase, PhaseDetail]
    awaiting: PhaseDetail


@dataclass
class CalendarConfig:
    """Calendar grid settings.

    ``first_weekday`` uses ``date.weekday()`` numbering (Monday = 0).
    """

    first_weekday: int = 6
    love_levels: list[int] = field(default_factory=lambda: [1, 2, 6])


@dataclass
class InsightTextConfig:
    """Canned insight phrases used when remote generation is off or fails."""

    static: dict[CyclePhase, list[str]]
    awaiting: str
    empty_response: str


@dataclass
class CycleConfig:
    """Complete, validated cycle configuration.

    This is the single in-memory representation of cycle_config.yaml.
    The store, phase engine, calendar projector, and insight providers all
    read from this object.
    """

    version: str
    cycle: CycleRulesConfig
    phases: PhaseRulesConfig
    moods: list[str]
    symptoms: list[str]
    calendar: CalendarConfig
    insights: InsightTextConfig
    _raw: dict = field(default_factory=dict, repr=False)

    def phase_detail(self, phase: CyclePhase | None) -> PhaseDetail:
        """Return display details for a phase, or the awaiting details for None."""
        if phase is None:
            return self.phases.awaiting
        return self.phases.details[phase]


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when cycle_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Cycle config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _validate_and_build(raw: dict) -> CycleConfig:
    """Validate the raw YAML dict and construct a CycleConfig.

    Every problem is collected first and reported in a single error.

    Raises:
        ConfigValidationError: If required fields are missing or invalid.
    """
    errors: list[str] = []

    def _positive_int(d: dict, key: str, section: str, default: int) -> int:
        value = d.get(key, default)
        try:
            number = int(value)
        except (TypeError, ValueError):
            errors.append(f"{section}.{key} must be an integer, got {value!r}")
            return default
        if number < 1:
            errors.append(f"{section}.{key} = {number} must be positive")
        return number

    version = str(raw.get("version", "1.0"))

    # ── Cycle rules ──
    c_raw = raw.get("cycle", {}) or {}
    flow_raw = c_raw.get("default_start_flow", Flow.medium.value)
    try:
        start_flow = Flow(flow_raw)
    except ValueError:
        errors.append(
            f"cycle.default_start_flow must be one of "
            f"{[f.value for f in Flow]}, got {flow_raw!r}"
        )
        start_flow = Flow.medium
    cycle = CycleRulesConfig(
        min_cycle_gap_days=_positive_int(c_raw, "min_cycle_gap_days", "cycle", 15),
        safety_period_limit_days=_positive_int(
            c_raw, "safety_period_limit_days", "cycle", 10
        ),
        default_cycle_length_days=_positive_int(
            c_raw, "default_cycle_length_days", "cycle", 28
        ),
        default_start_flow=start_flow,
    )

    # ── Phases ──
    p_raw = raw.get("phases", {}) or {}
    ov_start = _positive_int(p_raw, "ovulation_start_day", "phases", 14)
    ov_end = _positive_int(p_raw, "ovulation_end_day", "phases", 15)
    if ov_end < ov_start:
        errors.append(
            f"phases.ovulation_end_day ({ov_end}) precedes ovulation_start_day ({ov_start})"
        )

    details_raw = p_raw.get("details", {}) or {}
    details: dict[CyclePhase, PhaseDetail] = {}
    for phase in CyclePhase:
        d = details_raw.get(phase.value)
        if not isinstance(d, dict):
            errors.append(f"phases.details.{phase.value} is missing")
            d = {}
        details[phase] = PhaseDetail(
            name=str(d.get("name", phase.value)),
            description=str(d.get("description", "")),
            days_range=str(d.get("days_range", "")),
        )
    aw_raw = p_raw.get("awaiting", {}) or {}
    awaiting = PhaseDetail(
        name=str(aw_raw.get("name", "Unknown phase")),
        description=str(aw_raw.get("description", "")),
        days_range=str(aw_raw.get("days_range", "-")),
    )
    phases = PhaseRulesConfig(
        ovulation_start_day=ov_start,
        ovulation_end_day=ov_end,
        details=details,
        awaiting=awaiting,
    )

    # ── Log options ──
    lo_raw = raw.get("log_options", {}) or {}
    moods = [str(m) for m in lo_raw.get("moods", []) or []]
    symptoms = [str(s) for s in lo_raw.get("symptoms", []) or []]

    # ── Calendar ──
    cal_raw = raw.get("calendar", {}) or {}
    week_start = str(cal_raw.get("week_starts_on", "sunday")).lower()
    if week_start not in _WEEK_STARTS:
        errors.append(
            f"calendar.week_starts_on must be one of {sorted(_WEEK_STARTS)}, got {week_start!r}"
        )
    levels_raw = cal_raw.get("love_levels", [1, 2, 6]) or []
    try:
        love_levels = [int(v) for v in levels_raw]
    except (TypeError, ValueError):
        errors.append(f"calendar.love_levels must be integers, got {levels_raw!r}")
        love_levels = [1, 2, 6]
    if not love_levels or love_levels[0] < 1 or any(
        b <= a for a, b in zip(love_levels, love_levels[1:])
    ):
        errors.append(
            f"calendar.love_levels must be strictly ascending positive integers, got {love_levels}"
        )
    calendar = CalendarConfig(
        first_weekday=_WEEK_STARTS.get(week_start, 6),
        love_levels=love_levels,
    )

    # ── Insights ──
    in_raw = raw.get("insights", {}) or {}
    static_raw = in_raw.get("static", {}) or {}
    static: dict[CyclePhase, list[str]] = {}
    for phase in CyclePhase:
        phrases = [str(p) for p in static_raw.get(phase.value, []) or []]
        if not phrases:
            errors.append(f"insights.static.{phase.value} needs at least one phrase")
        static[phase] = phrases
    insights = InsightTextConfig(
        static=static,
        awaiting=str(in_raw.get("awaiting", "")),
        empty_response=str(in_raw.get("empty_response", "")),
    )

    if errors:
        raise ConfigValidationError(
            f"cycle_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return CycleConfig(
        version=version,
        cycle=cycle,
        phases=phases,
        moods=moods,
        symptoms=symptoms,
        calendar=calendar,
        insights=insights,
        _raw=raw,
    )


def load_cycle_config(path: Path | None = None) -> CycleConfig:
    """Load and validate the cycle config from disk.

    Args:
        path: Override path to YAML. Uses the bundled cycle_config.yaml by default.

    Returns:
        Validated CycleConfig instance.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded cycle config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: CycleConfig | None = None
_config_lock = threading.Lock()


def get_cycle_config() -> CycleConfig:
    """Return the global CycleConfig singleton, loading it on first call."""
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_cycle_config()
    return _config


def reload_cycle_config(path: Path | None = None) -> CycleConfig:
    """Reload the cycle config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is
    re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_cycle_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded cycle config: %s → %s", old_version, new_config.version)
    return new_config
