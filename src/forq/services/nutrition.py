"""Nutrition lookups backed by the FatSecret Platform API."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from forq.adapters.fatsecret_client import FatSecretClient
from forq.domain.errors import FatSecretApiError, ResponseShapeError
from forq.domain.nutrition import (
    CanonicalFoodDetail,
    NutritionPreview,
    ServingOption,
)
from forq.services.cache import Cache
from forq.services.normalizer import (
    build_serving_options,
    find_option,
    normalize_barcode_lookup,
    normalize_detail,
    quantity_to_multiplier,
    scale_nutrition,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

# FatSecret "Invalid ID" error codes for food/recipe lookups.
_NOT_FOUND_CODES = {106}

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Service for FatSecret lookups with caching."""

    fatsecret_client: FatSecretClient
    cache: Cache
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    reference_ttl_seconds: int = 86400

    async def search_foods(
        self, query: str, page: int = 0, max_results: int = 20
    ) -> dict[str, object]:
        """Search foods, returning the raw search payload."""
        return await self._cached(
            f"fatsecret:search:{query.lower()}:{page}:{max_results}",
            lambda: self.fatsecret_client.search_foods(query, page, max_results),
            self.search_ttl_seconds,
        )

    async def autocomplete(self, query: str, max_results: int = 10) -> dict[str, object]:
        """Return autocomplete suggestions for a partial query."""
        return await self.fatsecret_client.autocomplete_foods(query, max_results)

    async def search_recipes(
        self, query: str, page: int = 0, max_results: int = 20
    ) -> dict[str, object]:
        """Search recipes, returning the raw search payload."""
        return await self._cached(
            f"fatsecret:recipes:{query.lower()}:{page}:{max_results}",
            lambda: self.fatsecret_client.search_recipes(query, page, max_results),
            self.search_ttl_seconds,
        )

    async def get_recipe(self, recipe_id: str) -> dict[str, object] | None:
        """Fetch a recipe; None when the id is unknown upstream."""
        try:
            return await self.fatsecret_client.get_recipe(recipe_id)
        except FatSecretApiError as exc:
            if exc.code in _NOT_FOUND_CODES:
                return None
            raise

    async def get_categories(self) -> dict[str, object]:
        """Return all food categories."""
        return await self._cached(
            "fatsecret:categories",
            self.fatsecret_client.get_food_categories,
            self.reference_ttl_seconds,
        )

    async def get_subcategories(
        self, category_id: str | None = None
    ) -> dict[str, object]:
        """Return food sub-categories."""
        return await self._cached(
            f"fatsecret:subcategories:{category_id or '*'}",
            lambda: self.fatsecret_client.get_food_sub_categories(category_id),
            self.reference_ttl_seconds,
        )

    async def get_recipe_types(self) -> dict[str, object]:
        """Return all recipe types."""
        return await self._cached(
            "fatsecret:recipe_types",
            self.fatsecret_client.get_recipe_types,
            self.reference_ttl_seconds,
        )

    async def get_food_detail(self, food_id: str) -> CanonicalFoodDetail | None:
        """Fetch and normalize a food detail; None when the id is unknown."""
        cache_key = f"fatsecret:food:{food_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, CanonicalFoodDetail):
            return cached

        try:
            payload = await self.fatsecret_client.get_food(food_id)
        except FatSecretApiError as exc:
            if exc.code in _NOT_FOUND_CODES:
                return None
            raise
        try:
            detail = normalize_detail(payload)
        except ResponseShapeError:
            _logger.error("food.get returned a search result for food_id=%s", food_id)
            raise
        self.cache.set(cache_key, detail, ttl_seconds=self.food_ttl_seconds)
        return detail

    async def lookup_barcode(self, barcode: str) -> CanonicalFoodDetail | None:
        """Resolve a barcode to a canonical food detail; None when unknown."""
        try:
            payload = await self.fatsecret_client.find_food_id_for_barcode(barcode)
        except FatSecretApiError as exc:
            if exc.code in _NOT_FOUND_CODES:
                return None
            raise
        food_id = normalize_barcode_lookup(payload)
        if food_id is None:
            _logger.info("Barcode %s has no FatSecret match", barcode)
            return None
        return await self.get_food_detail(food_id)

    @staticmethod
    def serving_options(detail: CanonicalFoodDetail) -> list[ServingOption]:
        """Return the selectable serving options for a detail."""
        return build_serving_options(detail.servings)

    def preview(
        self, detail: CanonicalFoodDetail, option_id: str, quantity: str | float
    ) -> NutritionPreview | None:
        """Scale nutrition for an option and quantity; None for an unknown option."""
        option = find_option(self.serving_options(detail), option_id)
        if option is None:
            return None
        multiplier = quantity_to_multiplier(quantity, option)
        return NutritionPreview(
            option=option,
            quantity=float(quantity),
            multiplier=multiplier,
            facts=scale_nutrition(option.serving, multiplier),
        )

    async def _cached(
        self,
        cache_key: str,
        func: "Callable[[], Awaitable[dict[str, object]]]",
        ttl_seconds: int,
    ) -> dict[str, object]:
        cached = self.cache.get(cache_key)
        if isinstance(cached, dict):
            return cached
        payload = await func()
        self.cache.set(cache_key, payload, ttl_seconds=ttl_seconds)
        return payload
