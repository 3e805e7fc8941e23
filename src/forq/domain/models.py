"""Domain models for users and their nutrition goals."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class NutritionGoals:
    """Daily nutrition targets for a user."""

    calories: int = 2000
    protein: float = 150.0
    carbs: float = 250.0
    fat: float = 65.0


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database, without credentials."""

    id: int
    username: str
    email: str
    first_name: str | None
    last_name: str | None
    profile_picture: str | None
    goals: NutritionGoals
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class UserCredentials:
    """A user row together with its password hash."""

    user: UserRecord
    password_hash: str
