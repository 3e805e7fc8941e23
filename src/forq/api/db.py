"""CRUD endpoints for users, saved foods, the food diary and favorites."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request, Response, status

from forq.api.models import (
    FavoriteCreate,
    FoodLogCreate,
    FoodLogUpdate,
    FoodPayload,
    GoalsUpdate,
    ProfileUpdate,
    SaveFromApiRequest,
)
from forq.services.normalizer import normalize_detail

if TYPE_CHECKING:
    from forq.containers import AppContainer

router = APIRouter(prefix="/api/db", tags=["db"])


@router.get("/users/{user_id}")
async def get_user(user_id: int, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"user": container.user_service.get_profile(user_id)}


@router.put("/users/{user_id}")
async def update_user(
    user_id: int, body: ProfileUpdate, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    user = container.user_service.update_profile(
        user_id,
        first_name=body.first_name,
        last_name=body.last_name,
        profile_picture=body.profile_picture,
    )
    return {"message": "Profile updated successfully", "user": user}


@router.get("/users/{user_id}/goals")
async def get_goals(user_id: int, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"goals": container.user_service.get_goals(user_id)}


@router.put("/users/{user_id}/goals")
async def update_goals(
    user_id: int, body: GoalsUpdate, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    goals = container.user_service.update_goals(
        user_id,
        calories=body.calories,
        protein=body.protein,
        carbs=body.carbs,
        fat=body.fat,
    )
    return {"message": "Goals updated successfully", "goals": goals}


@router.get("/foods")
async def list_foods(  # noqa: PLR0913
    request: Request,
    user_id: int = Query(alias="userId"),
    search: str | None = None,
    category: str | None = None,
    is_custom: bool | None = Query(default=None, alias="isCustom"),
    limit: int = 50,
    offset: int = 0,
) -> dict[str, object]:
    """List a user's saved foods."""
    container: AppContainer = request.app.state.container
    foods = container.food_service.list_foods(
        user_id,
        search=search,
        category=category,
        is_custom=is_custom,
        limit=limit,
        offset=offset,
    )
    return {"foods": foods}


@router.post("/foods/save-from-api", status_code=status.HTTP_201_CREATED)
async def save_from_api(
    body: SaveFromApiRequest, request: Request, response: Response
) -> dict[str, object]:
    """Copy a FatSecret food detail into the user's foods.

    Answers 200 instead of 201 when the food was already saved.
    """
    container: AppContainer = request.app.state.container
    detail = normalize_detail(body.fat_secret_food)
    food, existed = container.food_service.save_from_api(body.user_id, detail)
    if existed:
        response.status_code = status.HTTP_200_OK
    message = "Food already saved" if existed else "Food saved successfully"
    return {"message": message, "food": food, "already_existed": existed}


@router.get("/foods/{food_id}")
async def get_food(
    food_id: int,
    request: Request,
    user_id: int | None = Query(default=None, alias="userId"),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"food": container.food_service.get_food(food_id, user_id)}


@router.post("/foods", status_code=status.HTTP_201_CREATED)
async def create_food(body: FoodPayload, request: Request) -> dict[str, object]:
    """Create a custom food."""
    container: AppContainer = request.app.state.container
    food = container.food_service.create_custom_food(body.user_id, body.values())
    return {"message": "Food created successfully", "food": food}


@router.put("/foods/{food_id}")
async def update_food(
    food_id: int, body: FoodPayload, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    food = container.food_service.update_food(food_id, body.user_id, body.values())
    return {"message": "Food updated successfully", "food": food}


@router.delete("/foods/{food_id}")
async def delete_food(
    food_id: int, request: Request, user_id: int = Query(alias="userId")
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    container.food_service.delete_food(food_id, user_id)
    return {"message": "Food deleted successfully"}


@router.get("/food-logs")
async def list_food_logs(  # noqa: PLR0913
    request: Request,
    user_id: int = Query(alias="userId"),
    day: date | None = Query(default=None, alias="date"),
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    meal_type: str | None = Query(default=None, alias="mealType"),
) -> dict[str, object]:
    """List diary entries for a day or a date range."""
    container: AppContainer = request.app.state.container
    logs = container.food_log_service.list_logs(
        user_id, day=day, start=start_date, end=end_date, meal_type=meal_type
    )
    return {"logs": logs}


@router.get("/food-logs/summary")
async def food_log_summary(
    request: Request,
    user_id: int = Query(alias="userId"),
    day: date | None = Query(default=None, alias="date"),
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
) -> dict[str, object]:
    """Sum macros overall and per meal type."""
    container: AppContainer = request.app.state.container
    summary = container.food_log_service.summary(
        user_id, day=day, start=start_date, end=end_date
    )
    return {"summary": summary}


@router.post("/food-logs", status_code=status.HTTP_201_CREATED)
async def create_food_log(body: FoodLogCreate, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    log = container.food_log_service.create_log(
        user_id=body.user_id,
        food_id=body.food_id,
        meal_type=body.meal_type,
        log_date=body.log_date,
        servings=body.servings,
        notes=body.notes,
    )
    return {"message": "Food logged successfully", "log": log}


@router.put("/food-logs/{log_id}")
async def update_food_log(
    log_id: int, body: FoodLogUpdate, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    log = container.food_log_service.update_log(
        log_id,
        body.user_id,
        servings=body.servings,
        meal_type=body.meal_type,
        log_date=body.log_date,
        notes=body.notes,
    )
    return {"message": "Food log updated successfully", "log": log}


@router.delete("/food-logs/{log_id}")
async def delete_food_log(
    log_id: int, request: Request, user_id: int = Query(alias="userId")
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    container.food_log_service.delete_log(log_id, user_id)
    return {"message": "Food log deleted successfully"}


@router.get("/favorites")
async def list_favorites(
    request: Request, user_id: int = Query(alias="userId")
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    pairs = container.favorite_service.list_favorites(user_id)
    return {
        "favorites": [
            {"favorite": favorite, "food": food} for favorite, food in pairs
        ]
    }


@router.post("/favorites", status_code=status.HTTP_201_CREATED)
async def add_favorite(body: FavoriteCreate, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    favorite, food = container.favorite_service.add(body.user_id, body.food_id)
    return {"message": "Added to favorites", "favorite": favorite, "food": food}


@router.delete("/favorites/{food_id}")
async def remove_favorite(
    food_id: int, request: Request, user_id: int = Query(alias="userId")
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    container.favorite_service.remove(user_id, food_id)
    return {"message": "Removed from favorites"}
