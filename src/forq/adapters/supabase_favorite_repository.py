"""Supabase repository for favorite foods."""

from dataclasses import dataclass

from supabase import Client

from forq.adapters.supabase_rows import parse_datetime
from forq.domain.foods import FavoriteRecord
from forq.services.favorites import FavoriteRepository


@dataclass
class SupabaseFavoriteRepository(FavoriteRepository):
    """Supabase implementation for favorite_foods."""

    client: Client

    def list_favorites(self, user_id: int) -> list[FavoriteRecord]:
        response = (
            self.client.table("favorite_foods")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_favorite(row) for row in response.data or []]

    def get_favorite(self, user_id: int, food_id: int) -> FavoriteRecord | None:
        response = (
            self.client.table("favorite_foods")
            .select("*")
            .eq("user_id", user_id)
            .eq("food_id", food_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_favorite(response.data[0])

    def create_favorite(self, user_id: int, food_id: int) -> FavoriteRecord:
        response = (
            self.client.table("favorite_foods")
            .insert({"user_id": user_id, "food_id": food_id})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create favorite")
        return _parse_favorite(response.data[0])

    def delete_favorite(self, user_id: int, food_id: int) -> None:
        self.client.table("favorite_foods").delete().eq("user_id", user_id).eq(
            "food_id", food_id
        ).execute()


def _parse_favorite(row: dict[str, object]) -> FavoriteRecord:
    return FavoriteRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        food_id=int(row["food_id"]),
        created_at=parse_datetime(row.get("created_at")),
    )
