"""GLP-1 medication tracking."""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol

from forq.domain.errors import NotFoundError, ValidationFailedError
from forq.domain.glp import (
    PROGRESSION_STATUSES,
    SEVERITIES,
    AppetiteRecord,
    DoseProgressionRecord,
    DoseRecord,
    GlpSummary,
    MedicationInfo,
    SideEffectRecord,
    WeightRecord,
)

_DEFAULT_INTERVAL_DAYS = 7
_SCALE_MAX = 10
_WEIGHT_UNITS = {"kg", "lbs"}
_DIGITS_RE = re.compile(r"\d+")


class GlpRepository(Protocol):
    """Persistence interface for GLP-1 tracking tables."""

    def get_medication(self, user_id: int) -> MedicationInfo | None:
        """Return the user's medication info, if set."""

    def save_medication(self, info: MedicationInfo) -> MedicationInfo:
        """Insert or update the user's medication info."""

    def list_doses(self, user_id: int, limit: int) -> list[DoseRecord]:
        """Return doses, newest first."""

    def create_dose(self, payload: dict[str, object]) -> DoseRecord:
        """Record a dose."""

    def list_side_effects(self, user_id: int, limit: int) -> list[SideEffectRecord]:
        """Return side effects, newest first."""

    def get_side_effect(self, side_effect_id: int) -> SideEffectRecord | None:
        """Return a side effect by id."""

    def create_side_effect(self, payload: dict[str, object]) -> SideEffectRecord:
        """Record a side effect."""

    def update_side_effect(
        self, side_effect_id: int, payload: dict[str, object]
    ) -> SideEffectRecord:
        """Update a side effect."""

    def list_appetite_logs(self, user_id: int, limit: int) -> list[AppetiteRecord]:
        """Return appetite logs, newest first."""

    def create_appetite_log(self, payload: dict[str, object]) -> AppetiteRecord:
        """Record an appetite log."""

    def list_weight_entries(self, user_id: int, limit: int) -> list[WeightRecord]:
        """Return weight entries, newest first."""

    def create_weight_entry(self, payload: dict[str, object]) -> WeightRecord:
        """Record a weight entry."""

    def list_progression(self, user_id: int) -> list[DoseProgressionRecord]:
        """Return titration phases ordered by phase."""

    def get_progression(self, progression_id: int) -> DoseProgressionRecord | None:
        """Return a titration phase by id."""

    def create_progression(self, payload: dict[str, object]) -> DoseProgressionRecord:
        """Record a titration phase."""

    def update_progression(
        self, progression_id: int, payload: dict[str, object]
    ) -> DoseProgressionRecord:
        """Update a titration phase."""

    def get_notifications_enabled(self, user_id: int) -> bool | None:
        """Return the notification flag, or None when never set."""

    def set_notifications_enabled(self, user_id: int, enabled: bool) -> None:
        """Insert or update the notification flag."""


def next_dose_date(
    medication: MedicationInfo | None, last_dose: DoseRecord | None
) -> datetime | None:
    """Estimate the next dose from the last one and the schedule text.

    "Every N days" schedules use N; anything else is treated as weekly.
    """
    if medication is None or last_dose is None or not medication.injection_day:
        return None
    interval = _DEFAULT_INTERVAL_DAYS
    if "every" in medication.injection_day.lower():
        match = _DIGITS_RE.search(medication.injection_day)
        if match:
            interval = int(match.group())
    return last_dose.timestamp + timedelta(days=interval)


@dataclass
class GlpService:
    """Application service for medication, dose and symptom tracking."""

    repository: GlpRepository
    summary_dose_limit: int = 10
    summary_entry_limit: int = 20

    def get_medication(self, user_id: int) -> MedicationInfo | None:
        return self.repository.get_medication(user_id)

    def save_medication(  # noqa: PLR0913
        self,
        user_id: int,
        name: str,
        current_dose: str,
        injection_day: str,
        start_date: datetime,
    ) -> MedicationInfo:
        """Create or replace the user's medication info."""
        if not name or not current_dose or not injection_day:
            raise ValidationFailedError(
                "name, current_dose and injection_day are required"
            )
        existing = self.repository.get_medication(user_id)
        return self.repository.save_medication(
            MedicationInfo(
                id=existing.id if existing else None,
                user_id=user_id,
                name=name,
                current_dose=current_dose,
                injection_day=injection_day,
                start_date=start_date,
            )
        )

    def list_doses(self, user_id: int, limit: int = 50) -> list[DoseRecord]:
        return self.repository.list_doses(user_id, limit)

    def record_dose(
        self, user_id: int, timestamp: datetime, dose: str, notes: str | None = None
    ) -> DoseRecord:
        if not dose:
            raise ValidationFailedError("dose is required")
        return self.repository.create_dose(
            {
                "user_id": user_id,
                "timestamp": timestamp.isoformat(),
                "dose": dose,
                "notes": notes,
            }
        )

    def list_side_effects(
        self, user_id: int, limit: int = 50
    ) -> list[SideEffectRecord]:
        return self.repository.list_side_effects(user_id, limit)

    def record_side_effect(  # noqa: PLR0913
        self,
        user_id: int,
        name: str,
        severity: str,
        timestamp: datetime,
        notes: str | None = None,
    ) -> SideEffectRecord:
        if not name:
            raise ValidationFailedError("name is required")
        _check_severity(severity)
        return self.repository.create_side_effect(
            {
                "user_id": user_id,
                "name": name,
                "severity": severity,
                "timestamp": timestamp.isoformat(),
                "notes": notes,
            }
        )

    def update_side_effect(
        self,
        side_effect_id: int,
        severity: str | None = None,
        notes: str | None = None,
    ) -> SideEffectRecord:
        if self.repository.get_side_effect(side_effect_id) is None:
            raise NotFoundError("Side effect not found")
        updates: dict[str, object] = {}
        if severity is not None:
            _check_severity(severity)
            updates["severity"] = severity
        if notes is not None:
            updates["notes"] = notes
        return self.repository.update_side_effect(side_effect_id, updates)

    def list_appetite_logs(self, user_id: int, limit: int = 50) -> list[AppetiteRecord]:
        return self.repository.list_appetite_logs(user_id, limit)

    def record_appetite(
        self,
        user_id: int,
        timestamp: datetime,
        hunger_level: int,
        cravings_intensity: int,
        notes: str | None = None,
    ) -> AppetiteRecord:
        for label, value in (
            ("hunger_level", hunger_level),
            ("cravings_intensity", cravings_intensity),
        ):
            if not 0 <= value <= _SCALE_MAX:
                raise ValidationFailedError(f"{label} must be between 0 and 10")
        return self.repository.create_appetite_log(
            {
                "user_id": user_id,
                "timestamp": timestamp.isoformat(),
                "hunger_level": hunger_level,
                "cravings_intensity": cravings_intensity,
                "notes": notes,
            }
        )

    def list_weight_entries(self, user_id: int, limit: int = 50) -> list[WeightRecord]:
        return self.repository.list_weight_entries(user_id, limit)

    def record_weight(
        self, user_id: int, timestamp: datetime, weight: float, unit: str
    ) -> WeightRecord:
        if weight <= 0:
            raise ValidationFailedError("weight must be positive")
        if unit not in _WEIGHT_UNITS:
            raise ValidationFailedError("unit must be kg or lbs")
        return self.repository.create_weight_entry(
            {
                "user_id": user_id,
                "timestamp": timestamp.isoformat(),
                "weight": weight,
                "unit": unit,
            }
        )

    def list_progression(self, user_id: int) -> list[DoseProgressionRecord]:
        return self.repository.list_progression(user_id)

    def record_progression(  # noqa: PLR0913
        self,
        user_id: int,
        phase: int,
        dose: str,
        start_date: datetime,
        status: str,
        end_date: datetime | None = None,
    ) -> DoseProgressionRecord:
        _check_status(status)
        return self.repository.create_progression(
            {
                "user_id": user_id,
                "phase": phase,
                "dose": dose,
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat() if end_date else None,
                "status": status,
            }
        )

    def update_progression(
        self,
        progression_id: int,
        status: str | None = None,
        end_date: datetime | None = None,
    ) -> DoseProgressionRecord:
        if self.repository.get_progression(progression_id) is None:
            raise NotFoundError("Dose progression not found")
        updates: dict[str, object] = {}
        if status is not None:
            _check_status(status)
            updates["status"] = status
        if end_date is not None:
            updates["end_date"] = end_date.isoformat()
        return self.repository.update_progression(progression_id, updates)

    def notifications_enabled(self, user_id: int) -> bool:
        return bool(self.repository.get_notifications_enabled(user_id))

    def set_notifications(self, user_id: int, enabled: bool) -> bool:
        self.repository.set_notifications_enabled(user_id, enabled)
        return enabled

    def summary(self, user_id: int) -> GlpSummary:
        """Collect the latest tracking data for a user."""
        medication = self.repository.get_medication(user_id)
        doses = self.repository.list_doses(user_id, self.summary_dose_limit)
        return GlpSummary(
            medication=medication,
            recent_doses=doses,
            recent_side_effects=self.repository.list_side_effects(
                user_id, self.summary_entry_limit
            ),
            recent_appetite_logs=self.repository.list_appetite_logs(
                user_id, self.summary_entry_limit
            ),
            recent_weight_entries=self.repository.list_weight_entries(
                user_id, self.summary_entry_limit
            ),
            dose_progression=self.repository.list_progression(user_id),
            notifications_enabled=self.notifications_enabled(user_id),
            next_dose_at=next_dose_date(medication, doses[0] if doses else None),
        )


def _check_severity(severity: str) -> None:
    if severity not in SEVERITIES:
        raise ValidationFailedError(f"severity must be one of: {', '.join(SEVERITIES)}")


def _check_status(status: str) -> None:
    if status not in PROGRESSION_STATUSES:
        raise ValidationFailedError(
            f"status must be one of: {', '.join(PROGRESSION_STATUSES)}"
        )
