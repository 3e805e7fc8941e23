"""Supabase implementation for saved foods."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from forq.adapters.supabase_rows import optional_float, optional_str, parse_datetime
from forq.domain.foods import FoodRecord
from forq.services.foods import FoodRepository


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for the foods table."""

    client: Client

    def list_foods(  # noqa: PLR0913
        self,
        user_id: int,
        search: str | None,
        category: str | None,
        is_custom: bool | None,
        limit: int,
        offset: int,
    ) -> list[FoodRecord]:
        """Return a user's foods matching the filters, newest first."""
        query = self.client.table("foods").select("*").eq("user_id", user_id)
        if search:
            pattern = f"%{search}%"
            query = query.or_(f"name.ilike.{pattern},brand.ilike.{pattern}")
        if category:
            query = query.eq("category", category)
        if is_custom is not None:
            query = query.eq("is_custom", is_custom)
        response = (
            query.order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def get_food(self, food_id: int) -> FoodRecord | None:
        """Return a food by id, if present."""
        response = (
            self.client.table("foods").select("*").eq("id", food_id).limit(1).execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def find_by_fatsecret_id(self, user_id: int, fatsecret_id: str) -> FoodRecord | None:
        """Return the user's saved copy of an upstream food."""
        response = (
            self.client.table("foods")
            .select("*")
            .eq("user_id", user_id)
            .eq("fatsecret_id", fatsecret_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def create_food(self, user_id: int, payload: dict[str, object]) -> FoodRecord:
        """Create a food row and return it."""
        response = (
            self.client.table("foods").insert({"user_id": user_id, **payload}).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food")
        return _parse_food(response.data[0])

    def update_food(self, food_id: int, payload: dict[str, object]) -> FoodRecord:
        """Update a food row and return it."""
        response = (
            self.client.table("foods")
            .update({**payload, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", food_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update food")
        return _parse_food(response.data[0])

    def delete_food(self, food_id: int) -> None:
        """Delete a food row; favorites cascade in the schema."""
        self.client.table("foods").delete().eq("id", food_id).execute()


def _parse_food(row: dict[str, object]) -> FoodRecord:
    """Parse a foods row into a domain model."""
    return FoodRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        name=str(row.get("name", "")),
        brand=optional_str(row.get("brand")),
        barcode=optional_str(row.get("barcode")),
        fatsecret_id=optional_str(row.get("fatsecret_id")),
        serving_size=optional_float(row.get("serving_size")),
        serving_unit=optional_str(row.get("serving_unit")),
        calories=optional_float(row.get("calories")),
        protein=optional_float(row.get("protein")),
        carbohydrates=optional_float(row.get("carbohydrates")),
        fat=optional_float(row.get("fat")),
        fiber=optional_float(row.get("fiber")),
        sugar=optional_float(row.get("sugar")),
        sodium=optional_float(row.get("sodium")),
        description=optional_str(row.get("description")),
        category=optional_str(row.get("category")),
        is_custom=bool(row.get("is_custom", False)),
        is_verified=bool(row.get("is_verified", False)),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
