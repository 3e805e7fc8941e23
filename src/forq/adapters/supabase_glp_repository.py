"""Supabase repository for GLP-1 tracking tables."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from forq.adapters.supabase_rows import optional_str, parse_datetime, require_datetime
from forq.domain.glp import (
    AppetiteRecord,
    DoseProgressionRecord,
    DoseRecord,
    MedicationInfo,
    SideEffectRecord,
    WeightRecord,
)
from forq.services.glp import GlpRepository


@dataclass
class SupabaseGlpRepository(GlpRepository):
    """Supabase implementation for the glp_* tables."""

    client: Client

    def get_medication(self, user_id: int) -> MedicationInfo | None:
        response = (
            self.client.table("glp_medication_info")
            .select("*")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_medication(response.data[0])

    def save_medication(self, info: MedicationInfo) -> MedicationInfo:
        """Upsert on the unique user_id column."""
        response = (
            self.client.table("glp_medication_info")
            .upsert(
                {
                    "user_id": info.user_id,
                    "name": info.name,
                    "current_dose": info.current_dose,
                    "injection_day": info.injection_day,
                    "start_date": info.start_date.isoformat(),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save medication info")
        return _parse_medication(response.data[0])

    def list_doses(self, user_id: int, limit: int) -> list[DoseRecord]:
        rows = self._recent("glp_dose_history", user_id, limit)
        return [_parse_dose(row) for row in rows]

    def create_dose(self, payload: dict[str, object]) -> DoseRecord:
        return _parse_dose(self._insert("glp_dose_history", payload))

    def list_side_effects(self, user_id: int, limit: int) -> list[SideEffectRecord]:
        rows = self._recent("glp_side_effects", user_id, limit)
        return [_parse_side_effect(row) for row in rows]

    def get_side_effect(self, side_effect_id: int) -> SideEffectRecord | None:
        row = self._get("glp_side_effects", side_effect_id)
        return _parse_side_effect(row) if row else None

    def create_side_effect(self, payload: dict[str, object]) -> SideEffectRecord:
        return _parse_side_effect(self._insert("glp_side_effects", payload))

    def update_side_effect(
        self, side_effect_id: int, payload: dict[str, object]
    ) -> SideEffectRecord:
        return _parse_side_effect(
            self._update("glp_side_effects", side_effect_id, payload)
        )

    def list_appetite_logs(self, user_id: int, limit: int) -> list[AppetiteRecord]:
        rows = self._recent("glp_appetite_logs", user_id, limit)
        return [_parse_appetite(row) for row in rows]

    def create_appetite_log(self, payload: dict[str, object]) -> AppetiteRecord:
        return _parse_appetite(self._insert("glp_appetite_logs", payload))

    def list_weight_entries(self, user_id: int, limit: int) -> list[WeightRecord]:
        rows = self._recent("glp_weight_entries", user_id, limit)
        return [_parse_weight(row) for row in rows]

    def create_weight_entry(self, payload: dict[str, object]) -> WeightRecord:
        return _parse_weight(self._insert("glp_weight_entries", payload))

    def list_progression(self, user_id: int) -> list[DoseProgressionRecord]:
        response = (
            self.client.table("glp_dose_progression")
            .select("*")
            .eq("user_id", user_id)
            .order("phase", desc=False)
            .execute()
        )
        return [_parse_progression(row) for row in response.data or []]

    def get_progression(self, progression_id: int) -> DoseProgressionRecord | None:
        row = self._get("glp_dose_progression", progression_id)
        return _parse_progression(row) if row else None

    def create_progression(self, payload: dict[str, object]) -> DoseProgressionRecord:
        return _parse_progression(self._insert("glp_dose_progression", payload))

    def update_progression(
        self, progression_id: int, payload: dict[str, object]
    ) -> DoseProgressionRecord:
        return _parse_progression(
            self._update("glp_dose_progression", progression_id, payload)
        )

    def get_notifications_enabled(self, user_id: int) -> bool | None:
        response = (
            self.client.table("glp_notification_settings")
            .select("notifications_enabled")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return bool(response.data[0].get("notifications_enabled"))

    def set_notifications_enabled(self, user_id: int, enabled: bool) -> None:
        self.client.table("glp_notification_settings").upsert(
            {"user_id": user_id, "notifications_enabled": 1 if enabled else 0},
            on_conflict="user_id",
        ).execute()

    def _recent(self, table: str, user_id: int, limit: int) -> list[dict[str, object]]:
        response = (
            self.client.table(table)
            .select("*")
            .eq("user_id", user_id)
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
        return response.data or []

    def _get(self, table: str, row_id: int) -> dict[str, object] | None:
        response = (
            self.client.table(table).select("*").eq("id", row_id).limit(1).execute()
        )
        return response.data[0] if response.data else None

    def _insert(self, table: str, payload: dict[str, object]) -> dict[str, object]:
        response = self.client.table(table).insert(payload).execute()
        if not response.data:
            raise RuntimeError(f"Failed to insert into {table}")
        return response.data[0]

    def _update(
        self, table: str, row_id: int, payload: dict[str, object]
    ) -> dict[str, object]:
        response = (
            self.client.table(table)
            .update({**payload, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", row_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to update {table}")
        return response.data[0]


def _parse_medication(row: dict[str, object]) -> MedicationInfo:
    return MedicationInfo(
        id=int(row["id"]) if row.get("id") is not None else None,
        user_id=int(row["user_id"]),
        name=str(row["name"]),
        current_dose=str(row["current_dose"]),
        injection_day=str(row["injection_day"]),
        start_date=require_datetime(row.get("start_date")),
    )


def _parse_dose(row: dict[str, object]) -> DoseRecord:
    return DoseRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        timestamp=require_datetime(row.get("timestamp")),
        dose=str(row["dose"]),
        notes=optional_str(row.get("notes")),
    )


def _parse_side_effect(row: dict[str, object]) -> SideEffectRecord:
    return SideEffectRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        name=str(row["name"]),
        severity=str(row["severity"]),
        timestamp=require_datetime(row.get("timestamp")),
        notes=optional_str(row.get("notes")),
    )


def _parse_appetite(row: dict[str, object]) -> AppetiteRecord:
    return AppetiteRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        timestamp=require_datetime(row.get("timestamp")),
        hunger_level=int(row["hunger_level"]),
        cravings_intensity=int(row["cravings_intensity"]),
        notes=optional_str(row.get("notes")),
    )


def _parse_weight(row: dict[str, object]) -> WeightRecord:
    return WeightRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        timestamp=require_datetime(row.get("timestamp")),
        weight=float(row["weight"]),
        unit=str(row["unit"]),
    )


def _parse_progression(row: dict[str, object]) -> DoseProgressionRecord:
    return DoseProgressionRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        phase=int(row["phase"]),
        dose=str(row["dose"]),
        start_date=require_datetime(row.get("start_date")),
        end_date=parse_datetime(row.get("end_date")),
        status=str(row["status"]),
    )
