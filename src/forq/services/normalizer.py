"""Normalization of FatSecret payloads into canonical food details.

``food.get`` has been observed to answer in more than one shape, so payloads
are classified once into a ``ParsedUpstreamResponse`` and everything past
that point works with ``CanonicalFoodDetail``.
"""

import math

from forq.domain.errors import (
    FoodDetailIncompleteError,
    ResponseShapeError,
    UnknownResponseFormatError,
)
from forq.domain.nutrition import (
    NUTRIENT_FIELDS,
    CanonicalFoodDetail,
    CanonicalServing,
    DetailResponse,
    NutritionFacts,
    ParsedUpstreamResponse,
    SearchResultMismatch,
    ServingOption,
    UnknownResponse,
)

METRIC_OPTION_PREFIX = "metric_"


def classify_response(raw: object) -> ParsedUpstreamResponse:
    """Decide which known shape an upstream payload has."""
    if not isinstance(raw, dict):
        return UnknownResponse(raw)
    food = raw.get("food")
    if _is_food_object(food) and "foods" not in raw:
        return DetailResponse(food)
    if _is_food_object(raw):
        return DetailResponse(raw)
    foods = raw.get("foods")
    if isinstance(foods, dict) and "food" in foods:
        return SearchResultMismatch(raw)
    return UnknownResponse(raw)


def normalize_detail(raw: object) -> CanonicalFoodDetail:
    """Normalize a ``food.get`` payload into a canonical detail."""
    parsed = classify_response(raw)
    if isinstance(parsed, SearchResultMismatch):
        raise ResponseShapeError(parsed.raw)
    if isinstance(parsed, UnknownResponse):
        raise UnknownResponseFormatError(parsed.raw)

    food = parsed.food
    servings = food.get("servings")
    serving_data = servings.get("serving") if isinstance(servings, dict) else None
    if not serving_data:
        raise FoodDetailIncompleteError(food)
    if isinstance(serving_data, dict):
        serving_data = [serving_data]
    if not isinstance(serving_data, list) or not all(
        isinstance(serving, dict) for serving in serving_data
    ):
        raise UnknownResponseFormatError(raw)

    return CanonicalFoodDetail(
        food_id=str(food["food_id"]),
        name=str(food["food_name"]),
        brand=_optional_str(food.get("brand_name")),
        food_type=_optional_str(food.get("food_type")),
        food_url=_optional_str(food.get("food_url")),
        description=_optional_str(food.get("food_description")),
        servings=tuple(_parse_serving(serving) for serving in serving_data),
    )


def normalize_barcode_lookup(raw: dict[str, object]) -> str | None:
    """Return the food id a barcode resolves to, or None when unknown."""
    food_id = raw.get("food_id")
    if isinstance(food_id, dict):
        food_id = food_id.get("value")
    if food_id in (None, "", "0", 0):
        return None
    return str(food_id)


def build_serving_options(
    servings: tuple[CanonicalServing, ...] | list[CanonicalServing],
) -> list[ServingOption]:
    """Expand servings into selectable options, adding one bare option per unit."""
    options: list[ServingOption] = []
    seen_units: set[str] = set()
    for serving in servings:
        if not serving.has_metric:
            options.append(
                ServingOption(
                    id=serving.serving_id,
                    label=serving.description,
                    serving=serving,
                    is_metric_only=False,
                )
            )
            continue

        amount = round_half_up(float(serving.metric_amount))
        options.append(
            ServingOption(
                id=serving.serving_id,
                label=f"{amount}{serving.metric_unit} ({serving.description})",
                serving=serving,
                is_metric_only=False,
            )
        )
        if serving.metric_unit not in seen_units:
            seen_units.add(serving.metric_unit)
            options.append(
                ServingOption(
                    id=f"{METRIC_OPTION_PREFIX}{serving.metric_unit}",
                    label=serving.metric_unit,
                    serving=serving,
                    is_metric_only=True,
                )
            )
    return options


def find_option(options: list[ServingOption], option_id: str) -> ServingOption | None:
    """Return the option with the given id, if any."""
    for option in options:
        if option.id == option_id:
            return option
    return None


def default_quantity(option: ServingOption) -> str:
    """Quantity pre-filled when an option is selected."""
    return "100" if option.is_metric_only else "1"


def quantity_to_multiplier(quantity: str | float, option: ServingOption) -> float:
    """Convert an entered quantity into a multiplier of the option's serving."""
    value = parse_quantity(quantity)
    if not option.is_metric_only:
        return value
    base_amount = float(option.serving.metric_amount or 0)
    if base_amount <= 0:
        raise ValueError(
            f"Serving {option.serving.serving_id} has no usable metric amount"
        )
    return value / base_amount


def parse_quantity(quantity: str | float) -> float:
    """Parse a user-entered quantity; it must be a positive finite number."""
    try:
        value = float(quantity)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid quantity: {quantity!r}") from exc
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"Quantity must be positive: {quantity!r}")
    return value


def scale_nutrition(serving: CanonicalServing, multiplier: float) -> NutritionFacts:
    """Scale a serving's nutrients by a multiplier and round for display."""
    values = {
        field: round_half_up(serving.amount(field) * multiplier)
        for field in NUTRIENT_FIELDS
    }
    return NutritionFacts(**values)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def food_record_payload(detail: CanonicalFoodDetail) -> dict[str, object]:
    """Map a canonical detail's first serving onto local food columns."""
    serving = detail.servings[0]
    return {
        "name": detail.name,
        "brand": detail.brand,
        "fatsecret_id": detail.food_id,
        "serving_size": _optional_float(serving.metric_amount),
        "serving_unit": serving.metric_unit or serving.description or None,
        "calories": _optional_float(serving.calories),
        "protein": _optional_float(serving.protein),
        "carbohydrates": _optional_float(serving.carbohydrate),
        "fat": _optional_float(serving.fat),
        "fiber": _optional_float(serving.fiber),
        "sugar": _optional_float(serving.sugar),
        "sodium": _optional_float(serving.sodium),
        "description": detail.description,
        "category": detail.food_type,
        "is_custom": False,
        "is_verified": True,
    }


def _is_food_object(value: object) -> bool:
    return isinstance(value, dict) and "food_id" in value and "food_name" in value


def _parse_serving(raw: dict[str, object]) -> CanonicalServing:
    return CanonicalServing(
        serving_id=str(raw.get("serving_id", "")),
        description=str(raw.get("serving_description", "")),
        metric_amount=_optional_str(raw.get("metric_serving_amount")),
        metric_unit=_optional_str(raw.get("metric_serving_unit")),
        number_of_units=_optional_str(raw.get("number_of_units")),
        **{field: _optional_str(raw.get(field)) for field in NUTRIENT_FIELDS},
    )


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def _optional_float(value: str | None) -> float | None:
    if value in (None, ""):
        return None
    return float(value)
