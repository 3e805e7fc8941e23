"""Supabase repository for the food diary."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from forq.adapters.supabase_rows import (
    optional_float,
    optional_str,
    parse_datetime,
    require_datetime,
)
from forq.domain.foods import FoodLogRecord
from forq.services.food_logs import FoodLogRepository


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for food_logs."""

    client: Client

    def list_logs(
        self,
        user_id: int,
        start: datetime | None,
        end: datetime | None,
        meal_type: str | None,
    ) -> list[FoodLogRecord]:
        """Return entries in [start, end), newest first."""
        query = self.client.table("food_logs").select("*").eq("user_id", user_id)
        if start is not None:
            query = query.gte("log_date", start.isoformat())
        if end is not None:
            query = query.lt("log_date", end.isoformat())
        if meal_type is not None:
            query = query.eq("meal_type", meal_type)
        response = query.order("log_date", desc=True).execute()
        return [_parse_log(row) for row in response.data or []]

    def get_log(self, log_id: int) -> FoodLogRecord | None:
        """Return an entry by id, if present."""
        response = (
            self.client.table("food_logs")
            .select("*")
            .eq("id", log_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_log(response.data[0])

    def create_log(self, payload: dict[str, object]) -> FoodLogRecord:
        """Create an entry and return it."""
        response = self.client.table("food_logs").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create food log")
        return _parse_log(response.data[0])

    def update_log(self, log_id: int, payload: dict[str, object]) -> FoodLogRecord:
        """Update an entry and return it."""
        response = (
            self.client.table("food_logs").update(payload).eq("id", log_id).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update food log")
        return _parse_log(response.data[0])

    def delete_log(self, log_id: int) -> None:
        """Delete an entry."""
        self.client.table("food_logs").delete().eq("id", log_id).execute()


def _parse_log(row: dict[str, object]) -> FoodLogRecord:
    food_id = row.get("food_id")
    return FoodLogRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        food_id=int(food_id) if food_id is not None else None,
        meal_type=str(row["meal_type"]),
        log_date=require_datetime(row.get("log_date")),
        servings=float(row.get("servings", 1)),
        total_calories=optional_float(row.get("total_calories")),
        total_protein=optional_float(row.get("total_protein")),
        total_carbs=optional_float(row.get("total_carbs")),
        total_fat=optional_float(row.get("total_fat")),
        notes=optional_str(row.get("notes")),
        created_at=parse_datetime(row.get("created_at")),
    )
