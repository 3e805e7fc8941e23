"""Favorite foods."""

from dataclasses import dataclass
from typing import Protocol

from forq.domain.errors import ConflictError, NotFoundError
from forq.domain.foods import FavoriteRecord, FoodRecord
from forq.services.foods import FoodService


class FavoriteRepository(Protocol):
    """Persistence interface for favorites."""

    def list_favorites(self, user_id: int) -> list[FavoriteRecord]:
        """Return a user's favorites, newest first."""

    def get_favorite(self, user_id: int, food_id: int) -> FavoriteRecord | None:
        """Return the favorite linking a user and a food, if any."""

    def create_favorite(self, user_id: int, food_id: int) -> FavoriteRecord:
        """Create a favorite and return it."""

    def delete_favorite(self, user_id: int, food_id: int) -> None:
        """Delete a favorite."""


@dataclass
class FavoriteService:
    """Application service for favorites."""

    repository: FavoriteRepository
    food_service: FoodService

    def list_favorites(self, user_id: int) -> list[tuple[FavoriteRecord, FoodRecord]]:
        """Return favorites paired with their foods, skipping deleted foods."""
        pairs = []
        for favorite in self.repository.list_favorites(user_id):
            try:
                food = self.food_service.get_food(favorite.food_id)
            except NotFoundError:
                continue
            pairs.append((favorite, food))
        return pairs

    def add(self, user_id: int, food_id: int) -> tuple[FavoriteRecord, FoodRecord]:
        """Favorite a food."""
        food = self.food_service.get_food(food_id)
        if self.repository.get_favorite(user_id, food_id):
            raise ConflictError("Food is already in favorites")
        return self.repository.create_favorite(user_id, food_id), food

    def remove(self, user_id: int, food_id: int) -> None:
        """Remove a favorite."""
        if self.repository.get_favorite(user_id, food_id) is None:
            raise NotFoundError("Favorite not found")
        self.repository.delete_favorite(user_id, food_id)
