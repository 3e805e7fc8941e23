"""Services for a user's saved and custom foods."""

from dataclasses import dataclass
from typing import Protocol

from forq.domain.errors import NotFoundError, ValidationFailedError
from forq.domain.foods import FoodRecord
from forq.domain.nutrition import CanonicalFoodDetail
from forq.services.normalizer import food_record_payload

_EDITABLE_FIELDS = {
    "name",
    "brand",
    "barcode",
    "serving_size",
    "serving_unit",
    "calories",
    "protein",
    "carbohydrates",
    "fat",
    "fiber",
    "sugar",
    "sodium",
    "description",
    "category",
}


class FoodRepository(Protocol):
    """Persistence interface for saved foods."""

    def list_foods(  # noqa: PLR0913
        self,
        user_id: int,
        search: str | None,
        category: str | None,
        is_custom: bool | None,
        limit: int,
        offset: int,
    ) -> list[FoodRecord]:
        """Return a user's foods, newest first."""

    def get_food(self, food_id: int) -> FoodRecord | None:
        """Return a food by id, if present."""

    def find_by_fatsecret_id(self, user_id: int, fatsecret_id: str) -> FoodRecord | None:
        """Return the user's copy of an upstream food, if saved."""

    def create_food(self, user_id: int, payload: dict[str, object]) -> FoodRecord:
        """Create a food row and return it."""

    def update_food(self, food_id: int, payload: dict[str, object]) -> FoodRecord:
        """Update a food row and return it."""

    def delete_food(self, food_id: int) -> None:
        """Delete a food row."""


@dataclass
class FoodService:
    """Application service for saved foods."""

    repository: FoodRepository

    def list_foods(  # noqa: PLR0913
        self,
        user_id: int,
        search: str | None = None,
        category: str | None = None,
        is_custom: bool | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[FoodRecord]:
        """List a user's foods with optional filters."""
        return self.repository.list_foods(
            user_id, search, category, is_custom, limit, offset
        )

    def get_food(self, food_id: int, user_id: int | None = None) -> FoodRecord:
        """Return a food, optionally checking ownership."""
        food = self.repository.get_food(food_id)
        if food is None or (user_id is not None and food.user_id != user_id):
            raise NotFoundError("Food not found")
        return food

    def create_custom_food(
        self, user_id: int, payload: dict[str, object]
    ) -> FoodRecord:
        """Create a user-defined food."""
        if not payload.get("name"):
            raise ValidationFailedError("name is required")
        values = _editable(payload)
        values.update({"is_custom": True, "is_verified": False})
        return self.repository.create_food(user_id, values)

    def update_food(
        self, food_id: int, user_id: int, payload: dict[str, object]
    ) -> FoodRecord:
        """Update the editable fields of a user's food."""
        self.get_food(food_id, user_id)
        values = _editable(payload)
        if "name" in values and not values["name"]:
            raise ValidationFailedError("name cannot be empty")
        if not values:
            raise ValidationFailedError("No fields to update")
        return self.repository.update_food(food_id, values)

    def delete_food(self, food_id: int, user_id: int) -> None:
        """Delete a user's food."""
        self.get_food(food_id, user_id)
        self.repository.delete_food(food_id)

    def save_from_api(
        self, user_id: int, detail: CanonicalFoodDetail
    ) -> tuple[FoodRecord, bool]:
        """Copy an upstream detail into the user's foods.

        Returns the stored food and whether it already existed.
        """
        existing = self.repository.find_by_fatsecret_id(user_id, detail.food_id)
        if existing:
            return existing, True
        return self.repository.create_food(user_id, food_record_payload(detail)), False


def _editable(payload: dict[str, object]) -> dict[str, object]:
    return {key: value for key, value in payload.items() if key in _EDITABLE_FIELDS}
