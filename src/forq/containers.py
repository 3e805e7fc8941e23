"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from forq.adapters.fatsecret_client import FatSecretClient, HttpxFatSecretClient
from forq.adapters.supabase_favorite_repository import SupabaseFavoriteRepository
from forq.adapters.supabase_food_log_repository import SupabaseFoodLogRepository
from forq.adapters.supabase_food_repository import SupabaseFoodRepository
from forq.adapters.supabase_glp_repository import SupabaseGlpRepository
from forq.adapters.supabase_user_repository import SupabaseUserRepository
from forq.config import FatSecretCredentials, Settings
from forq.services.cache import InMemoryCache
from forq.services.favorites import FavoriteService
from forq.services.food_logs import FoodLogService
from forq.services.foods import FoodService
from forq.services.glp import GlpService
from forq.services.nutrition import NutritionService
from forq.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    fatsecret_client: FatSecretClient
    nutrition_service: NutritionService
    user_service: UserService
    food_service: FoodService
    food_log_service: FoodLogService
    favorite_service: FavoriteService
    glp_service: GlpService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    credentials = FatSecretCredentials.from_settings(resolved_settings)
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    fatsecret_client = HttpxFatSecretClient.create(
        credentials=credentials,
        base_url=resolved_settings.fatsecret_base_url,
        timeout_seconds=resolved_settings.fatsecret_timeout_seconds,
    )
    nutrition_service = NutritionService(
        fatsecret_client=fatsecret_client,
        cache=InMemoryCache(),
    )
    food_service = FoodService(SupabaseFoodRepository(supabase_client))

    async def close_resources() -> None:
        await fatsecret_client.close()

    return AppContainer(
        settings=resolved_settings,
        fatsecret_client=fatsecret_client,
        nutrition_service=nutrition_service,
        user_service=UserService(SupabaseUserRepository(supabase_client)),
        food_service=food_service,
        food_log_service=FoodLogService(
            repository=SupabaseFoodLogRepository(supabase_client),
            food_service=food_service,
        ),
        favorite_service=FavoriteService(
            repository=SupabaseFavoriteRepository(supabase_client),
            food_service=food_service,
        ),
        glp_service=GlpService(SupabaseGlpRepository(supabase_client)),
        close_resources=close_resources,
    )
