"""Endpoints proxying the FatSecret Platform API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request

from forq.domain.errors import NotFoundError, ValidationFailedError
from forq.services.normalizer import default_quantity

if TYPE_CHECKING:
    from forq.containers import AppContainer
    from forq.domain.nutrition import ServingOption

router = APIRouter(prefix="/api", tags=["nutrition"])


@router.get("/foods/search")
async def search_foods(
    request: Request,
    query: str | None = None,
    page: int = 0,
    max_results: int = Query(default=20, alias="maxResults"),
) -> dict[str, object]:
    """Search FatSecret foods."""
    container: AppContainer = request.app.state.container
    return await container.nutrition_service.search_foods(
        _require_query(query), page, max_results
    )


@router.get("/foods/autocomplete")
async def autocomplete_foods(
    request: Request,
    query: str | None = None,
    max_results: int = Query(default=10, alias="maxResults"),
) -> dict[str, object]:
    """Return search suggestions for a partial query."""
    container: AppContainer = request.app.state.container
    return await container.nutrition_service.autocomplete(
        _require_query(query), max_results
    )


@router.get("/foods/{food_id}")
async def food_detail(food_id: str, request: Request) -> dict[str, object]:
    """Return a normalized food detail with its serving options."""
    container: AppContainer = request.app.state.container
    service = container.nutrition_service
    detail = await service.get_food_detail(food_id)
    if detail is None:
        raise NotFoundError("Food not found")
    return {
        "food": detail,
        "serving_options": [
            _option_payload(option) for option in service.serving_options(detail)
        ],
    }


@router.get("/foods/{food_id}/nutrition")
async def food_nutrition(
    food_id: str, request: Request, option: str, quantity: str
) -> dict[str, object]:
    """Scale a food's nutrition for a serving option and quantity."""
    container: AppContainer = request.app.state.container
    service = container.nutrition_service
    detail = await service.get_food_detail(food_id)
    if detail is None:
        raise NotFoundError("Food not found")
    try:
        preview = service.preview(detail, option, quantity)
    except ValueError as exc:
        raise ValidationFailedError(str(exc)) from exc
    if preview is None:
        raise NotFoundError(f"Unknown serving option: {option}")
    return {
        "food_id": detail.food_id,
        "option": _option_payload(preview.option),
        "quantity": preview.quantity,
        "multiplier": preview.multiplier,
        "nutrition": preview.facts,
    }


@router.get("/recipes/search")
async def search_recipes(
    request: Request,
    query: str | None = None,
    page: int = 0,
    max_results: int = Query(default=20, alias="maxResults"),
) -> dict[str, object]:
    """Search FatSecret recipes."""
    container: AppContainer = request.app.state.container
    return await container.nutrition_service.search_recipes(
        _require_query(query), page, max_results
    )


@router.get("/recipes/{recipe_id}")
async def recipe_detail(recipe_id: str, request: Request) -> dict[str, object]:
    """Return a raw recipe detail."""
    container: AppContainer = request.app.state.container
    recipe = await container.nutrition_service.get_recipe(recipe_id)
    if recipe is None:
        raise NotFoundError("Recipe not found")
    return recipe


@router.get("/categories")
async def categories(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return await container.nutrition_service.get_categories()


@router.get("/subcategories")
async def subcategories(
    request: Request,
    category_id: str | None = Query(default=None, alias="categoryId"),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return await container.nutrition_service.get_subcategories(category_id)


@router.get("/recipe-types")
async def recipe_types(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return await container.nutrition_service.get_recipe_types()


@router.get("/barcode/{code}")
async def barcode_lookup(code: str, request: Request) -> dict[str, object]:
    """Resolve a barcode to a normalized food detail."""
    container: AppContainer = request.app.state.container
    service = container.nutrition_service
    detail = await service.lookup_barcode(code)
    if detail is None:
        raise NotFoundError("No food found for this barcode")
    return {
        "food": detail,
        "serving_options": [
            _option_payload(option) for option in service.serving_options(detail)
        ],
    }


def _require_query(query: str | None) -> str:
    if not query or not query.strip():
        raise ValidationFailedError("Search query is required")
    return query.strip()


def _option_payload(option: ServingOption) -> dict[str, object]:
    return {
        "id": option.id,
        "label": option.label,
        "is_metric_only": option.is_metric_only,
        "default_quantity": default_quantity(option),
        "serving": option.serving,
    }
