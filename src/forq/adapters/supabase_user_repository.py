"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from forq.adapters.supabase_rows import optional_float, optional_str, parse_datetime
from forq.domain.models import NutritionGoals, UserCredentials, UserRecord
from forq.services.users import UserRepository

_PUBLIC_COLUMNS = (
    "id, username, email, first_name, last_name, profile_picture, "
    "goal_calories, goal_protein, goal_carbs, goal_fat, created_at, updated_at"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_id(self, user_id: int) -> UserRecord | None:
        """Return the user for an id, if present."""
        response = (
            self.client.table("users")
            .select(_PUBLIC_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        """Return the user and password hash for an email."""
        return self._get_credentials("email", email)

    def get_credentials_by_username(self, username: str) -> UserCredentials | None:
        """Return the user and password hash for a username."""
        return self._get_credentials("username", username)

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create a new user row and return it."""
        response = self.client.table("users").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def update_user(self, user_id: int, payload: dict[str, object]) -> UserRecord:
        """Update a user row and return it."""
        response = (
            self.client.table("users")
            .update({**payload, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", user_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user in Supabase")
        return _parse_user(response.data[0])

    def _get_credentials(self, column: str, value: str) -> UserCredentials | None:
        response = (
            self.client.table("users")
            .select(f"{_PUBLIC_COLUMNS}, password_hash")
            .eq(column, value)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserCredentials(
            user=_parse_user(row), password_hash=str(row["password_hash"])
        )


def _parse_user(row: dict[str, object]) -> UserRecord:
    defaults = NutritionGoals()
    return UserRecord(
        id=int(row["id"]),
        username=str(row["username"]),
        email=str(row["email"]),
        first_name=optional_str(row.get("first_name")),
        last_name=optional_str(row.get("last_name")),
        profile_picture=optional_str(row.get("profile_picture")),
        goals=NutritionGoals(
            calories=int(_or_default(row.get("goal_calories"), defaults.calories)),
            protein=_or_default(row.get("goal_protein"), defaults.protein),
            carbs=_or_default(row.get("goal_carbs"), defaults.carbs),
            fat=_or_default(row.get("goal_fat"), defaults.fat),
        ),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )


def _or_default(raw: object, default: float) -> float:
    value = optional_float(raw)
    return default if value is None else value
