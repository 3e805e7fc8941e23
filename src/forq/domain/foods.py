"""Domain models for saved foods, the food diary and favorites."""

from dataclasses import dataclass
from datetime import datetime

MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")


@dataclass(frozen=True)
class FoodRecord:
    """A food saved by a user, either custom or copied from FatSecret."""

    id: int
    user_id: int
    name: str
    brand: str | None = None
    barcode: str | None = None
    fatsecret_id: str | None = None
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
    is_custom: bool = False
    is_verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class FoodLogRecord:
    """A diary entry with a snapshot of nutrition at logging time."""

    id: int
    user_id: int
    food_id: int | None
    meal_type: str
    log_date: datetime
    servings: float
    total_calories: float | None
    total_protein: float | None
    total_carbs: float | None
    total_fat: float | None
    notes: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class FavoriteRecord:
    """A food pinned by a user for quick access."""

    id: int
    user_id: int
    food_id: int
    created_at: datetime | None = None


@dataclass(frozen=True)
class MacroTotals:
    """Summed macros over a set of diary entries."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    entries: int = 0


@dataclass(frozen=True)
class LogSummary:
    """Diary totals overall and per meal type."""

    totals: MacroTotals
    by_meal_type: dict[str, MacroTotals]
