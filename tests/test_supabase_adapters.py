"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from forq.adapters.supabase_favorite_repository import SupabaseFavoriteRepository
from forq.adapters.supabase_food_log_repository import SupabaseFoodLogRepository
from forq.adapters.supabase_food_repository import SupabaseFoodRepository
from forq.adapters.supabase_glp_repository import SupabaseGlpRepository
from forq.adapters.supabase_rows import parse_datetime
from forq.adapters.supabase_user_repository import SupabaseUserRepository
from forq.domain.glp import MedicationInfo


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_columns: str | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None
    last_range: tuple[int, int] | None = None
    last_on_conflict: str | None = None
    actions: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def _start(self, action: str) -> "FakeTable":
        self._action = action
        self.actions.append(action)
        self.last_filters = []
        return self

    def select(self, columns: str = "*") -> "FakeTable":
        self.last_columns = columns
        return self._start("select")

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_payload = payload
        return self._start("insert")

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_payload = payload
        return self._start("update")

    def upsert(self, payload, on_conflict: str = "") -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self._start("upsert")

    def delete(self) -> "FakeTable":
        return self._start("delete")

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lt(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lt", column, value))
        return self

    def or_(self, filters: str) -> "FakeTable":
        self.last_filters.append(("or", "", filters))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def range(self, start: int, end: int) -> "FakeTable":
        self.last_range = (start, end)
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


USER_ROW = {
    "id": 7,
    "username": "ana",
    "email": "ana@example.com",
    "first_name": "Ana",
    "last_name": None,
    "profile_picture": None,
    "goal_calories": 1800,
    "goal_protein": "120.00",
    "goal_carbs": None,
    "goal_fat": 0,
    "created_at": "2024-05-01T08:00:00Z",
}

FOOD_ROW = {
    "id": 3,
    "user_id": 7,
    "name": "Oats",
    "calories": "150.00",
    "protein": "5.00",
    "is_custom": True,
    "is_verified": False,
    "created_at": "2024-05-01T08:00:00+00:00",
}


def test_parse_datetime_accepts_trailing_z() -> None:
    assert parse_datetime("2024-05-01T08:00:00Z") == datetime(
        2024, 5, 1, 8, tzinfo=UTC
    )
    assert parse_datetime(None) is None
    assert parse_datetime("") is None


def test_supabase_user_repository_parses_goals() -> None:
    client = FakeSupabaseClient()
    client.table("users").queue("select", [USER_ROW])

    user = SupabaseUserRepository(client).get_by_id(7)

    assert user is not None
    assert user.goals.calories == 1800
    assert user.goals.protein == 120.0
    assert user.goals.carbs == 250.0
    assert user.goals.fat == 0
    assert user.created_at == datetime(2024, 5, 1, 8, tzinfo=UTC)
    assert "password_hash" not in client.table("users").last_columns


def test_supabase_user_repository_credentials() -> None:
    client = FakeSupabaseClient()
    users = client.table("users")
    users.queue("select", [{**USER_ROW, "password_hash": "$2b$10$hash"}])

    credentials = SupabaseUserRepository(client).get_credentials_by_email(
        "ana@example.com"
    )

    assert credentials is not None
    assert credentials.password_hash == "$2b$10$hash"
    assert users.last_filters == [("eq", "email", "ana@example.com")]
    assert SupabaseUserRepository(client).get_credentials_by_username("x") is None


def test_supabase_user_repository_update_sets_timestamp() -> None:
    client = FakeSupabaseClient()
    users = client.table("users")
    users.queue("update", [{**USER_ROW, "goal_calories": 2100}])

    user = SupabaseUserRepository(client).update_user(7, {"goal_calories": 2100})

    assert user.goals.calories == 2100
    assert "updated_at" in users.last_payload
    assert users.last_filters == [("eq", "id", 7)]


def test_supabase_food_repository_list_filters() -> None:
    client = FakeSupabaseClient()
    foods = client.table("foods")
    foods.queue("select", [FOOD_ROW])

    results = SupabaseFoodRepository(client).list_foods(
        7, search="oat", category="Grains", is_custom=True, limit=10, offset=20
    )

    assert results[0].calories == 150.0
    assert results[0].is_custom is True
    assert ("or", "", "name.ilike.%oat%,brand.ilike.%oat%") in foods.last_filters
    assert ("eq", "category", "Grains") in foods.last_filters
    assert ("eq", "is_custom", True) in foods.last_filters
    assert foods.last_range == (20, 29)
    assert foods.last_order == ("created_at", True)


def test_supabase_food_repository_create_and_delete() -> None:
    client = FakeSupabaseClient()
    foods = client.table("foods")
    foods.queue("insert", [FOOD_ROW])

    repository = SupabaseFoodRepository(client)
    created = repository.create_food(7, {"name": "Oats"})
    repository.delete_food(created.id)

    assert created.name == "Oats"
    assert foods.actions == ["insert", "delete"]
    assert foods.last_filters == [("eq", "id", 3)]


def test_supabase_food_log_repository_range_query() -> None:
    client = FakeSupabaseClient()
    logs = client.table("food_logs")
    logs.queue(
        "select",
        [
            {
                "id": 1,
                "user_id": 7,
                "food_id": 3,
                "meal_type": "lunch",
                "log_date": "2024-05-01T12:00:00Z",
                "servings": "1.50",
                "total_calories": "225.00",
                "total_protein": None,
                "total_carbs": None,
                "total_fat": None,
            }
        ],
    )

    start = datetime(2024, 5, 1, tzinfo=UTC)
    end = datetime(2024, 5, 2, tzinfo=UTC)
    entries = SupabaseFoodLogRepository(client).list_logs(7, start, end, "lunch")

    assert entries[0].servings == 1.5
    assert entries[0].total_calories == 225.0
    assert entries[0].total_protein is None
    assert ("gte", "log_date", start.isoformat()) in logs.last_filters
    assert ("lt", "log_date", end.isoformat()) in logs.last_filters
    assert ("eq", "meal_type", "lunch") in logs.last_filters
    assert logs.last_order == ("log_date", True)


def test_supabase_favorite_repository() -> None:
    client = FakeSupabaseClient()
    favorites = client.table("favorite_foods")
    favorites.queue("insert", [{"id": 1, "user_id": 7, "food_id": 3}])

    repository = SupabaseFavoriteRepository(client)
    created = repository.create_favorite(7, 3)
    missing = repository.get_favorite(7, 4)
    repository.delete_favorite(7, 3)

    assert created.food_id == 3
    assert missing is None
    assert favorites.last_filters == [("eq", "user_id", 7), ("eq", "food_id", 3)]


def test_supabase_glp_repository_medication_upsert() -> None:
    client = FakeSupabaseClient()
    table = client.table("glp_medication_info")
    table.queue(
        "upsert",
        [
            {
                "id": 1,
                "user_id": 7,
                "name": "Semaglutide",
                "current_dose": "0.25mg",
                "injection_day": "Monday",
                "start_date": "2024-03-01",
            }
        ],
    )

    saved = SupabaseGlpRepository(client).save_medication(
        MedicationInfo(
            user_id=7,
            name="Semaglutide",
            current_dose="0.25mg",
            injection_day="Monday",
            start_date=datetime(2024, 3, 1),
        )
    )

    assert saved.id == 1
    assert saved.start_date == datetime(2024, 3, 1)
    assert table.last_on_conflict == "user_id"


def test_supabase_glp_repository_recent_rows() -> None:
    client = FakeSupabaseClient()
    doses = client.table("glp_dose_history")
    doses.queue(
        "select",
        [
            {
                "id": 4,
                "user_id": 7,
                "timestamp": "2024-03-08T09:00:00Z",
                "dose": "0.25mg",
                "notes": None,
            }
        ],
    )

    result = SupabaseGlpRepository(client).list_doses(7, limit=10)

    assert result[0].timestamp == datetime(2024, 3, 8, 9, tzinfo=UTC)
    assert doses.last_order == ("timestamp", True)


def test_supabase_glp_repository_progression_and_notifications() -> None:
    client = FakeSupabaseClient()
    progression = client.table("glp_dose_progression")
    settings = client.table("glp_notification_settings")
    progression.queue(
        "select",
        [
            {
                "id": 1,
                "user_id": 7,
                "phase": 1,
                "dose": "0.25mg",
                "start_date": "2024-03-01",
                "end_date": None,
                "status": "current",
            }
        ],
    )
    settings.queue("select", [{"notifications_enabled": 1}])

    repository = SupabaseGlpRepository(client)
    phases = repository.list_progression(7)
    enabled = repository.get_notifications_enabled(7)
    repository.set_notifications_enabled(7, False)

    assert phases[0].end_date is None
    assert progression.last_order == ("phase", False)
    assert enabled is True
    assert settings.last_payload == {"user_id": 7, "notifications_enabled": 0}
    assert settings.last_on_conflict == "user_id"
    assert repository.get_notifications_enabled(8) is None
