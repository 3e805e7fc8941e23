"""Nutrition domain models for FatSecret lookups."""

from dataclasses import dataclass

NUTRIENT_FIELDS = (
    "calories",
    "protein",
    "carbohydrate",
    "fat",
    "fiber",
    "sugar",
    "sodium",
)


@dataclass(frozen=True)
class CanonicalServing:
    """One serving of a food, with the upstream decimal strings kept verbatim."""

    serving_id: str
    description: str
    metric_amount: str | None = None
    metric_unit: str | None = None
    number_of_units: str | None = None
    calories: str | None = None
    protein: str | None = None
    carbohydrate: str | None = None
    fat: str | None = None
    fiber: str | None = None
    sugar: str | None = None
    sodium: str | None = None

    @property
    def has_metric(self) -> bool:
        """Whether the serving reports a metric amount and unit."""
        return bool(self.metric_amount) and bool(self.metric_unit)

    def amount(self, field: str) -> float:
        """Return a nutrient value as a number, treating blanks as zero."""
        if field not in NUTRIENT_FIELDS:
            raise KeyError(field)
        raw = getattr(self, field)
        if raw in (None, ""):
            return 0.0
        return float(raw)


@dataclass(frozen=True)
class CanonicalFoodDetail:
    """A food detail record normalized from any supported upstream shape."""

    food_id: str
    name: str
    servings: tuple[CanonicalServing, ...]
    brand: str | None = None
    food_type: str | None = None
    food_url: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class ServingOption:
    """A selectable serving choice: a published serving or a bare metric unit."""

    id: str
    label: str
    serving: CanonicalServing
    is_metric_only: bool


@dataclass(frozen=True)
class NutritionFacts:
    """Rounded nutrition values for a chosen serving and quantity."""

    calories: int
    protein: int
    carbohydrate: int
    fat: int
    fiber: int
    sugar: int
    sodium: int


@dataclass(frozen=True)
class NutritionPreview:
    """Scaled nutrition for a serving option and an entered quantity."""

    option: ServingOption
    quantity: float
    multiplier: float
    facts: NutritionFacts


@dataclass(frozen=True)
class DetailResponse:
    """Upstream payload carrying a single food detail object."""

    food: dict[str, object]


@dataclass(frozen=True)
class SearchResultMismatch:
    """Upstream payload shaped like a search result list."""

    raw: dict[str, object]


@dataclass(frozen=True)
class UnknownResponse:
    """Upstream payload matching no known shape."""

    raw: object


ParsedUpstreamResponse = DetailResponse | SearchResultMismatch | UnknownResponse
