"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

import pytest

from forq.adapters.fatsecret_client import FatSecretClient
from forq.config import Settings
from forq.containers import AppContainer
from forq.domain.errors import FatSecretApiError
from forq.domain.foods import FavoriteRecord, FoodLogRecord, FoodRecord
from forq.domain.glp import (
    AppetiteRecord,
    DoseProgressionRecord,
    DoseRecord,
    MedicationInfo,
    SideEffectRecord,
    WeightRecord,
)
from forq.domain.models import NutritionGoals, UserCredentials, UserRecord
from forq.services.cache import InMemoryCache
from forq.services.favorites import FavoriteRepository, FavoriteService
from forq.services.food_logs import FoodLogRepository, FoodLogService
from forq.services.foods import FoodRepository, FoodService
from forq.services.glp import GlpRepository, GlpService
from forq.services.nutrition import NutritionService
from forq.services.users import UserRepository, UserService


def chicken_food() -> dict[str, object]:
    """A food.get detail object with one household and one metric serving."""
    return {
        "food_id": "33691",
        "food_name": "Chicken Breast",
        "food_type": "Generic",
        "food_url": "https://www.fatsecret.com/calories-nutrition/generic/chicken-breast",
        "servings": {
            "serving": [
                {
                    "serving_id": "1",
                    "serving_description": "1 oz",
                    "number_of_units": "1.000",
                    "calories": "46",
                    "protein": "8.70",
                    "carbohydrate": "0",
                    "fat": "1.00",
                },
                {
                    "serving_id": "2",
                    "serving_description": "100 g",
                    "metric_serving_amount": "100.000",
                    "metric_serving_unit": "g",
                    "number_of_units": "100.000",
                    "calories": "165",
                    "protein": "31.02",
                    "carbohydrate": "0",
                    "fat": "3.57",
                    "fiber": "0",
                    "sugar": "0",
                    "sodium": "74",
                },
            ]
        },
    }


@dataclass
class FakeFatSecretClient(FatSecretClient):
    """Fake FatSecret client with canned payloads and call counters."""

    foods: dict[str, dict[str, object]] = field(
        default_factory=lambda: {"33691": {"food": chicken_food()}}
    )
    barcodes: dict[str, str] = field(default_factory=dict)
    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": {
                "food": [{"food_id": "33691", "food_name": "Chicken Breast"}],
                "max_results": "20",
                "page_number": "0",
                "total_results": "1",
            }
        }
    )
    calls: list[str] = field(default_factory=list)

    async def search_foods(
        self, search_expression: str, page_number: int = 0, max_results: int = 20
    ) -> dict[str, object]:
        self.calls.append("foods.search")
        return self.search_payload

    async def get_food(self, food_id: str) -> dict[str, object]:
        self.calls.append("food.get")
        if food_id not in self.foods:
            raise FatSecretApiError(106, "Invalid ID: food_id")
        return self.foods[food_id]

    async def autocomplete_foods(
        self, expression: str, max_results: int = 10
    ) -> dict[str, object]:
        self.calls.append("foods.autocomplete")
        return {"suggestions": {"suggestion": [f"{expression} breast"]}}

    async def search_recipes(
        self, search_expression: str, page_number: int = 0, max_results: int = 20
    ) -> dict[str, object]:
        self.calls.append("recipes.search")
        return {"recipes": {"recipe": [{"recipe_id": "91", "recipe_name": "Stew"}]}}

    async def get_recipe(self, recipe_id: str) -> dict[str, object]:
        self.calls.append("recipe.get")
        if recipe_id != "91":
            raise FatSecretApiError(106, "Invalid ID: recipe_id")
        return {"recipe": {"recipe_id": "91", "recipe_name": "Stew"}}

    async def get_food_categories(self) -> dict[str, object]:
        self.calls.append("food_categories.get")
        return {"food_categories": {"food_category": []}}

    async def get_food_sub_categories(
        self, food_category_id: str | None = None
    ) -> dict[str, object]:
        self.calls.append("food_sub_categories.get")
        return {"food_sub_categories": {"food_sub_category": []}}

    async def get_recipe_types(self) -> dict[str, object]:
        self.calls.append("recipe_types.get")
        return {"recipe_types": {"recipe_type": ["Main Dish"]}}

    async def find_food_id_for_barcode(self, barcode: str) -> dict[str, object]:
        self.calls.append("food.find_id_for_barcode")
        return {"food_id": {"value": self.barcodes.get(barcode, "0")}}


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[int, UserCredentials] = field(default_factory=dict)

    def get_by_id(self, user_id: int) -> UserRecord | None:
        credentials = self.users.get(user_id)
        return credentials.user if credentials else None

    def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        return next(
            (c for c in self.users.values() if c.user.email == email), None
        )

    def get_credentials_by_username(self, username: str) -> UserCredentials | None:
        return next(
            (c for c in self.users.values() if c.user.username == username), None
        )

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        user = UserRecord(
            id=len(self.users) + 1,
            username=str(payload["username"]),
            email=str(payload["email"]),
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
            profile_picture=None,
            goals=NutritionGoals(),
            created_at=datetime.now(tz=UTC),
        )
        self.users[user.id] = UserCredentials(
            user=user, password_hash=str(payload["password_hash"])
        )
        return user

    def update_user(self, user_id: int, payload: dict[str, object]) -> UserRecord:
        credentials = self.users[user_id]
        goals = credentials.user.goals
        goal_updates = {
            key.removeprefix("goal_"): value
            for key, value in payload.items()
            if key.startswith("goal_")
        }
        profile_updates = {
            key: value for key, value in payload.items() if not key.startswith("goal_")
        }
        user = replace(
            credentials.user,
            goals=replace(goals, **goal_updates),
            **profile_updates,
        )
        self.users[user_id] = replace(credentials, user=user)
        return user


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food repository for tests."""

    foods: dict[int, FoodRecord] = field(default_factory=dict)

    def list_foods(  # noqa: PLR0913
        self,
        user_id: int,
        search: str | None,
        category: str | None,
        is_custom: bool | None,
        limit: int,
        offset: int,
    ) -> list[FoodRecord]:
        results = [
            food
            for food in self.foods.values()
            if food.user_id == user_id
            and (not search or search.lower() in food.name.lower())
            and (not category or food.category == category)
            and (is_custom is None or food.is_custom == is_custom)
        ]
        return list(reversed(results))[offset : offset + limit]

    def get_food(self, food_id: int) -> FoodRecord | None:
        return self.foods.get(food_id)

    def find_by_fatsecret_id(self, user_id: int, fatsecret_id: str) -> FoodRecord | None:
        return next(
            (
                food
                for food in self.foods.values()
                if food.user_id == user_id and food.fatsecret_id == fatsecret_id
            ),
            None,
        )

    def create_food(self, user_id: int, payload: dict[str, object]) -> FoodRecord:
        food = FoodRecord(id=len(self.foods) + 1, user_id=user_id, **payload)
        self.foods[food.id] = food
        return food

    def update_food(self, food_id: int, payload: dict[str, object]) -> FoodRecord:
        food = replace(self.foods[food_id], **payload)
        self.foods[food_id] = food
        return food

    def delete_food(self, food_id: int) -> None:
        self.foods.pop(food_id, None)


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory diary repository for tests."""

    logs: dict[int, FoodLogRecord] = field(default_factory=dict)
    next_id: int = 1

    def list_logs(
        self,
        user_id: int,
        start: datetime | None,
        end: datetime | None,
        meal_type: str | None,
    ) -> list[FoodLogRecord]:
        results = [
            log
            for log in self.logs.values()
            if log.user_id == user_id
            and (start is None or log.log_date >= start)
            and (end is None or log.log_date < end)
            and (meal_type is None or log.meal_type == meal_type)
        ]
        return sorted(results, key=lambda log: log.log_date, reverse=True)

    def get_log(self, log_id: int) -> FoodLogRecord | None:
        return self.logs.get(log_id)

    def create_log(self, payload: dict[str, object]) -> FoodLogRecord:
        values = dict(payload)
        values["log_date"] = datetime.fromisoformat(str(values["log_date"]))
        log = FoodLogRecord(id=self.next_id, **values)
        self.next_id += 1
        self.logs[log.id] = log
        return log

    def update_log(self, log_id: int, payload: dict[str, object]) -> FoodLogRecord:
        values = dict(payload)
        if "log_date" in values:
            values["log_date"] = datetime.fromisoformat(str(values["log_date"]))
        log = replace(self.logs[log_id], **values)
        self.logs[log_id] = log
        return log

    def delete_log(self, log_id: int) -> None:
        self.logs.pop(log_id, None)


@dataclass
class InMemoryFavoriteRepository(FavoriteRepository):
    """In-memory favorites repository for tests."""

    favorites: list[FavoriteRecord] = field(default_factory=list)

    def list_favorites(self, user_id: int) -> list[FavoriteRecord]:
        return [fav for fav in reversed(self.favorites) if fav.user_id == user_id]

    def get_favorite(self, user_id: int, food_id: int) -> FavoriteRecord | None:
        return next(
            (
                fav
                for fav in self.favorites
                if fav.user_id == user_id and fav.food_id == food_id
            ),
            None,
        )

    def create_favorite(self, user_id: int, food_id: int) -> FavoriteRecord:
        favorite = FavoriteRecord(
            id=len(self.favorites) + 1, user_id=user_id, food_id=food_id
        )
        self.favorites.append(favorite)
        return favorite

    def delete_favorite(self, user_id: int, food_id: int) -> None:
        self.favorites = [
            fav
            for fav in self.favorites
            if not (fav.user_id == user_id and fav.food_id == food_id)
        ]


def _parse_timestamps(payload: dict[str, object], *keys: str) -> dict[str, object]:
    values = dict(payload)
    for key in keys:
        if isinstance(values.get(key), str):
            values[key] = datetime.fromisoformat(values[key])
    return values


@dataclass
class InMemoryGlpRepository(GlpRepository):
    """In-memory GLP-1 repository for tests."""

    medications: dict[int, MedicationInfo] = field(default_factory=dict)
    doses: list[DoseRecord] = field(default_factory=list)
    side_effects: dict[int, SideEffectRecord] = field(default_factory=dict)
    appetite_logs: list[AppetiteRecord] = field(default_factory=list)
    weight_entries: list[WeightRecord] = field(default_factory=list)
    progression: dict[int, DoseProgressionRecord] = field(default_factory=dict)
    notifications: dict[int, bool] = field(default_factory=dict)

    def get_medication(self, user_id: int) -> MedicationInfo | None:
        return self.medications.get(user_id)

    def save_medication(self, info: MedicationInfo) -> MedicationInfo:
        saved = replace(info, id=info.id or len(self.medications) + 1)
        self.medications[info.user_id] = saved
        return saved

    def list_doses(self, user_id: int, limit: int) -> list[DoseRecord]:
        return _newest(self.doses, user_id, limit)

    def create_dose(self, payload: dict[str, object]) -> DoseRecord:
        dose = DoseRecord(
            id=len(self.doses) + 1, **_parse_timestamps(payload, "timestamp")
        )
        self.doses.append(dose)
        return dose

    def list_side_effects(self, user_id: int, limit: int) -> list[SideEffectRecord]:
        return _newest(list(self.side_effects.values()), user_id, limit)

    def get_side_effect(self, side_effect_id: int) -> SideEffectRecord | None:
        return self.side_effects.get(side_effect_id)

    def create_side_effect(self, payload: dict[str, object]) -> SideEffectRecord:
        record = SideEffectRecord(
            id=len(self.side_effects) + 1, **_parse_timestamps(payload, "timestamp")
        )
        self.side_effects[record.id] = record
        return record

    def update_side_effect(
        self, side_effect_id: int, payload: dict[str, object]
    ) -> SideEffectRecord:
        record = replace(self.side_effects[side_effect_id], **payload)
        self.side_effects[side_effect_id] = record
        return record

    def list_appetite_logs(self, user_id: int, limit: int) -> list[AppetiteRecord]:
        return _newest(self.appetite_logs, user_id, limit)

    def create_appetite_log(self, payload: dict[str, object]) -> AppetiteRecord:
        record = AppetiteRecord(
            id=len(self.appetite_logs) + 1, **_parse_timestamps(payload, "timestamp")
        )
        self.appetite_logs.append(record)
        return record

    def list_weight_entries(self, user_id: int, limit: int) -> list[WeightRecord]:
        return _newest(self.weight_entries, user_id, limit)

    def create_weight_entry(self, payload: dict[str, object]) -> WeightRecord:
        record = WeightRecord(
            id=len(self.weight_entries) + 1, **_parse_timestamps(payload, "timestamp")
        )
        self.weight_entries.append(record)
        return record

    def list_progression(self, user_id: int) -> list[DoseProgressionRecord]:
        return sorted(
            (p for p in self.progression.values() if p.user_id == user_id),
            key=lambda p: p.phase,
        )

    def get_progression(self, progression_id: int) -> DoseProgressionRecord | None:
        return self.progression.get(progression_id)

    def create_progression(self, payload: dict[str, object]) -> DoseProgressionRecord:
        record = DoseProgressionRecord(
            id=len(self.progression) + 1,
            **_parse_timestamps(payload, "start_date", "end_date"),
        )
        self.progression[record.id] = record
        return record

    def update_progression(
        self, progression_id: int, payload: dict[str, object]
    ) -> DoseProgressionRecord:
        record = replace(
            self.progression[progression_id],
            **_parse_timestamps(payload, "end_date"),
        )
        self.progression[progression_id] = record
        return record

    def get_notifications_enabled(self, user_id: int) -> bool | None:
        return self.notifications.get(user_id)

    def set_notifications_enabled(self, user_id: int, enabled: bool) -> None:
        self.notifications[user_id] = enabled


def _newest(records: list, user_id: int, limit: int) -> list:
    owned = [record for record in records if record.user_id == user_id]
    return sorted(owned, key=lambda record: record.timestamp, reverse=True)[:limit]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        fatsecret_consumer_key="consumer-key",
        fatsecret_consumer_secret="consumer-secret",
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def fatsecret_client() -> FakeFatSecretClient:
    return FakeFatSecretClient()


@pytest.fixture
def food_service() -> FoodService:
    return FoodService(InMemoryFoodRepository())


@pytest.fixture
def container(
    settings: Settings,
    fatsecret_client: FakeFatSecretClient,
    food_service: FoodService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        fatsecret_client=fatsecret_client,
        nutrition_service=NutritionService(
            fatsecret_client=fatsecret_client, cache=InMemoryCache()
        ),
        user_service=UserService(InMemoryUserRepository()),
        food_service=food_service,
        food_log_service=FoodLogService(
            repository=InMemoryFoodLogRepository(), food_service=food_service
        ),
        favorite_service=FavoriteService(
            repository=InMemoryFavoriteRepository(), food_service=food_service
        ),
        glp_service=GlpService(InMemoryGlpRepository()),
        close_resources=close_resources,
    )
