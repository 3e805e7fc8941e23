"""Food diary logging and summaries."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Protocol

from forq.domain.errors import NotFoundError, ValidationFailedError
from forq.domain.foods import (
    MEAL_TYPES,
    FoodLogRecord,
    FoodRecord,
    LogSummary,
    MacroTotals,
)
from forq.services.foods import FoodService


class FoodLogRepository(Protocol):
    """Persistence interface for diary entries."""

    def list_logs(
        self,
        user_id: int,
        start: datetime | None,
        end: datetime | None,
        meal_type: str | None,
    ) -> list[FoodLogRecord]:
        """Return entries in [start, end), newest first."""

    def get_log(self, log_id: int) -> FoodLogRecord | None:
        """Return an entry by id, if present."""

    def create_log(self, payload: dict[str, object]) -> FoodLogRecord:
        """Create an entry and return it."""

    def update_log(self, log_id: int, payload: dict[str, object]) -> FoodLogRecord:
        """Update an entry and return it."""

    def delete_log(self, log_id: int) -> None:
        """Delete an entry."""


@dataclass
class FoodLogService:
    """Service that snapshots nutrition onto diary entries."""

    repository: FoodLogRepository
    food_service: FoodService

    def list_logs(
        self,
        user_id: int,
        day: date | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        meal_type: str | None = None,
    ) -> list[FoodLogRecord]:
        """List entries for a day or a date range."""
        if meal_type is not None:
            _check_meal_type(meal_type)
        start, end = _resolve_range(day, start, end)
        return self.repository.list_logs(user_id, start, end, meal_type)

    def create_log(  # noqa: PLR0913
        self,
        user_id: int,
        food_id: int,
        meal_type: str,
        log_date: datetime,
        servings: float = 1.0,
        notes: str | None = None,
    ) -> FoodLogRecord:
        """Log servings of a saved food."""
        _check_meal_type(meal_type)
        _check_servings(servings)
        food = self.food_service.get_food(food_id)
        return self.repository.create_log(
            {
                "user_id": user_id,
                "food_id": food_id,
                "meal_type": meal_type,
                "log_date": log_date.isoformat(),
                "servings": servings,
                "notes": notes or None,
                **_totals(food, servings),
            }
        )

    def update_log(  # noqa: PLR0913
        self,
        log_id: int,
        user_id: int,
        servings: float | None = None,
        meal_type: str | None = None,
        log_date: datetime | None = None,
        notes: str | None = None,
    ) -> FoodLogRecord:
        """Update an entry, recomputing totals when servings change."""
        entry = self._get_owned(log_id, user_id)
        updates: dict[str, object] = {}
        if meal_type is not None:
            _check_meal_type(meal_type)
            updates["meal_type"] = meal_type
        if log_date is not None:
            updates["log_date"] = log_date.isoformat()
        if notes is not None:
            updates["notes"] = notes
        if servings is not None:
            _check_servings(servings)
            updates["servings"] = servings
            if entry.food_id is not None:
                food = self.food_service.get_food(entry.food_id)
                updates.update(_totals(food, servings))
        if not updates:
            return entry
        return self.repository.update_log(log_id, updates)

    def delete_log(self, log_id: int, user_id: int) -> None:
        """Delete a user's entry."""
        self._get_owned(log_id, user_id)
        self.repository.delete_log(log_id)

    def summary(
        self,
        user_id: int,
        day: date | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> LogSummary:
        """Sum macros overall and per meal type."""
        start, end = _resolve_range(day, start, end)
        logs = self.repository.list_logs(user_id, start, end, None)
        by_meal: dict[str, MacroTotals] = {}
        for log in logs:
            by_meal[log.meal_type] = _add(
                by_meal.get(log.meal_type, MacroTotals()), log
            )
        totals = MacroTotals()
        for log in logs:
            totals = _add(totals, log)
        return LogSummary(totals=totals, by_meal_type=by_meal)

    def _get_owned(self, log_id: int, user_id: int) -> FoodLogRecord:
        entry = self.repository.get_log(log_id)
        if entry is None or entry.user_id != user_id:
            raise NotFoundError("Food log not found")
        return entry


def _resolve_range(
    day: date | None, start: datetime | None, end: datetime | None
) -> tuple[datetime | None, datetime | None]:
    if day is not None:
        day_start = datetime.combine(day, time.min)
        return day_start, day_start + timedelta(days=1)
    return start, end


def _totals(food: FoodRecord, servings: float) -> dict[str, float | None]:
    def scaled(value: float | None) -> float | None:
        return None if value is None else value * servings

    return {
        "total_calories": scaled(food.calories),
        "total_protein": scaled(food.protein),
        "total_carbs": scaled(food.carbohydrates),
        "total_fat": scaled(food.fat),
    }


def _add(totals: MacroTotals, log: FoodLogRecord) -> MacroTotals:
    return MacroTotals(
        calories=totals.calories + (log.total_calories or 0.0),
        protein=totals.protein + (log.total_protein or 0.0),
        carbs=totals.carbs + (log.total_carbs or 0.0),
        fat=totals.fat + (log.total_fat or 0.0),
        entries=totals.entries + 1,
    )


def _check_meal_type(meal_type: str) -> None:
    if meal_type not in MEAL_TYPES:
        raise ValidationFailedError(
            f"meal_type must be one of: {', '.join(MEAL_TYPES)}"
        )


def _check_servings(servings: float) -> None:
    if servings <= 0:
        raise ValidationFailedError("servings must be positive")
