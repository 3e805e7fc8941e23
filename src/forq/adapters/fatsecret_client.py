"""FatSecret Platform API client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from forq.adapters.oauth import OAuthSigner
from forq.config import FatSecretCredentials
from forq.domain.errors import FatSecretApiError, UpstreamUnavailableError

_logger = logging.getLogger(__name__)

_FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


class FatSecretClient(Protocol):
    """Interface for FatSecret API interactions."""

    async def search_foods(
        self, search_expression: str, page_number: int = 0, max_results: int = 20
    ) -> dict[str, object]:
        """Search foods and return raw API data."""

    async def get_food(self, food_id: str) -> dict[str, object]:
        """Fetch a food detail and return raw API data."""

    async def autocomplete_foods(
        self, expression: str, max_results: int = 10
    ) -> dict[str, object]:
        """Return autocomplete suggestions for a partial expression."""

    async def search_recipes(
        self, search_expression: str, page_number: int = 0, max_results: int = 20
    ) -> dict[str, object]:
        """Search recipes and return raw API data."""

    async def get_recipe(self, recipe_id: str) -> dict[str, object]:
        """Fetch a recipe detail and return raw API data."""

    async def get_food_categories(self) -> dict[str, object]:
        """Return all food categories."""

    async def get_food_sub_categories(
        self, food_category_id: str | None = None
    ) -> dict[str, object]:
        """Return food sub-categories, optionally for one category."""

    async def get_recipe_types(self) -> dict[str, object]:
        """Return all recipe types."""

    async def find_food_id_for_barcode(self, barcode: str) -> dict[str, object]:
        """Resolve a GTIN-13 barcode to a food id."""


@dataclass
class HttpxFatSecretClient(FatSecretClient):
    """HTTPX-backed FatSecret client signing every call with OAuth 1.0."""

    signer: OAuthSigner
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15.0

    @classmethod
    def create(
        cls,
        credentials: FatSecretCredentials,
        base_url: str,
        timeout_seconds: float = 15.0,
    ) -> "HttpxFatSecretClient":
        """Create a client with a managed httpx session."""
        return cls(
            signer=OAuthSigner(credentials=credentials, base_url=base_url),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search_foods(
        self, search_expression: str, page_number: int = 0, max_results: int = 20
    ) -> dict[str, object]:
        """Search foods by expression."""
        return await self._call(
            "foods.search",
            {
                "search_expression": search_expression,
                "page_number": page_number,
                "max_results": max_results,
            },
        )

    async def get_food(self, food_id: str) -> dict[str, object]:
        """Fetch a food detail by id."""
        return await self._call("food.get", {"food_id": food_id})

    async def autocomplete_foods(
        self, expression: str, max_results: int = 10
    ) -> dict[str, object]:
        """Return autocomplete suggestions (Premier scope)."""
        return await self._call(
            "foods.autocomplete",
            {"expression": expression, "max_results": max_results},
        )

    async def search_recipes(
        self, search_expression: str, page_number: int = 0, max_results: int = 20
    ) -> dict[str, object]:
        """Search recipes by expression."""
        return await self._call(
            "recipes.search",
            {
                "search_expression": search_expression,
                "page_number": page_number,
                "max_results": max_results,
            },
        )

    async def get_recipe(self, recipe_id: str) -> dict[str, object]:
        """Fetch a recipe by id."""
        return await self._call("recipe.get", {"recipe_id": recipe_id})

    async def get_food_categories(self) -> dict[str, object]:
        """Return food categories."""
        return await self._call("food_categories.get", {})

    async def get_food_sub_categories(
        self, food_category_id: str | None = None
    ) -> dict[str, object]:
        """Return food sub-categories."""
        return await self._call(
            "food_sub_categories.get", {"food_category_id": food_category_id}
        )

    async def get_recipe_types(self) -> dict[str, object]:
        """Return recipe types."""
        return await self._call("recipe_types.get", {})

    async def find_food_id_for_barcode(self, barcode: str) -> dict[str, object]:
        """Resolve a barcode to a food id."""
        return await self._call("food.find_id_for_barcode", {"barcode": barcode})

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _call(
        self, api_method: str, api_params: dict[str, object]
    ) -> dict[str, object]:
        """POST one signed call and return the decoded JSON payload."""
        body = self.signer.build_authenticated_request_body(api_method, api_params)
        try:
            response = await self.http_client.post(
                self.signer.base_url,
                content=body,
                headers=_FORM_HEADERS,
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            _logger.error("FatSecret %s transport failure: %s", api_method, exc)
            raise UpstreamUnavailableError(
                f"FatSecret {api_method} request failed: {exc}"
            ) from exc

        if response.is_error:
            _logger.error(
                "FatSecret %s returned HTTP %s", api_method, response.status_code
            )
            raise UpstreamUnavailableError(
                f"FatSecret {api_method} returned HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamUnavailableError(
                f"FatSecret {api_method} returned a non-JSON body",
                status_code=response.status_code,
                body=response.text,
            ) from exc

        error = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(error, dict):
            code = _error_code(error.get("code"))
            message = str(error.get("message", ""))
            _logger.warning("FatSecret %s error %s: %s", api_method, code, message)
            raise FatSecretApiError(code, message)
        return payload


def _error_code(raw: object) -> int | None:
    """Parse a FatSecret error code, which may arrive as a string."""
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None
