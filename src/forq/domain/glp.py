"""Domain models for GLP-1 medication tracking."""

from dataclasses import dataclass
from datetime import datetime

SEVERITIES = ("none", "mild", "moderate", "severe")
PROGRESSION_STATUSES = ("upcoming", "current", "completed")


@dataclass(frozen=True)
class MedicationInfo:
    """The medication a user is on; one row per user."""

    user_id: int
    name: str
    current_dose: str
    injection_day: str
    start_date: datetime
    id: int | None = None


@dataclass(frozen=True)
class DoseRecord:
    """A dose the user has taken."""

    id: int
    user_id: int
    timestamp: datetime
    dose: str
    notes: str | None = None


@dataclass(frozen=True)
class SideEffectRecord:
    id: int
    user_id: int
    name: str
    severity: str
    timestamp: datetime
    notes: str | None = None


@dataclass(frozen=True)
class AppetiteRecord:
    id: int
    user_id: int
    timestamp: datetime
    hunger_level: int
    cravings_intensity: int
    notes: str | None = None


@dataclass(frozen=True)
class WeightRecord:
    id: int
    user_id: int
    timestamp: datetime
    weight: float
    unit: str


@dataclass(frozen=True)
class DoseProgressionRecord:
    """One titration phase of a dosing schedule."""

    id: int
    user_id: int
    phase: int
    dose: str
    start_date: datetime
    status: str
    end_date: datetime | None = None


@dataclass(frozen=True)
class GlpSummary:
    """Everything the tracker screen needs in one payload."""

    medication: MedicationInfo | None
    recent_doses: list[DoseRecord]
    recent_side_effects: list[SideEffectRecord]
    recent_appetite_logs: list[AppetiteRecord]
    recent_weight_entries: list[WeightRecord]
    dose_progression: list[DoseProgressionRecord]
    notifications_enabled: bool
    next_dose_at: datetime | None
