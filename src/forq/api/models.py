"""Pydantic models for API request bodies.

Field names are snake_case in Python and accept the camelCase keys the
mobile client sends.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(RequestModel):
    username: str = ""
    email: str = ""
    password: str = ""
    first_name: str | None = None
    last_name: str | None = None


class LoginRequest(RequestModel):
    email_or_username: str = ""
    password: str = ""


class VerifyRequest(RequestModel):
    user_id: int


class ProfileUpdate(RequestModel):
    first_name: str | None = None
    last_name: str | None = None
    profile_picture: str | None = None


class GoalsUpdate(RequestModel):
    calories: int | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None


class FoodPayload(RequestModel):
    """Editable food columns; unset fields are left untouched on update."""

    user_id: int
    name: str | None = None
    brand: str | None = None
    barcode: str | None = None
    serving_size: float | None = None
    serving_unit: str | None = None
    calories: float | None = None
    protein: float | None = None
    carbohydrates: float | None = None
    fat: float | None = None
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None
    description: str | None = None
    category: str | None = None

    def values(self) -> dict[str, object]:
        """Return the food columns that were sent."""
        return self.model_dump(exclude={"user_id"}, exclude_unset=True)


class SaveFromApiRequest(RequestModel):
    user_id: int
    fat_secret_food: dict[str, object]


class FoodLogCreate(RequestModel):
    user_id: int
    food_id: int
    meal_type: str
    log_date: datetime
    servings: float = 1.0
    notes: str | None = None


class FoodLogUpdate(RequestModel):
    user_id: int
    servings: float | None = None
    meal_type: str | None = None
    log_date: datetime | None = None
    notes: str | None = None


class FavoriteCreate(RequestModel):
    user_id: int
    food_id: int


class MedicationRequest(RequestModel):
    user_id: int
    name: str
    current_dose: str
    injection_day: str
    start_date: datetime


class DoseRequest(RequestModel):
    user_id: int
    timestamp: datetime
    dose: str
    notes: str | None = None


class SideEffectRequest(RequestModel):
    user_id: int
    name: str
    severity: str
    timestamp: datetime
    notes: str | None = None


class SideEffectUpdate(RequestModel):
    severity: str | None = None
    notes: str | None = None


class AppetiteRequest(RequestModel):
    user_id: int
    timestamp: datetime
    hunger_level: int
    cravings_intensity: int
    notes: str | None = None


class WeightRequest(RequestModel):
    user_id: int
    timestamp: datetime
    weight: float
    unit: str


class ProgressionRequest(RequestModel):
    user_id: int
    phase: int
    dose: str
    start_date: datetime
    status: str
    end_date: datetime | None = None


class ProgressionUpdate(RequestModel):
    status: str | None = None
    end_date: datetime | None = None


class NotificationsRequest(RequestModel):
    user_id: int
    notifications_enabled: bool
