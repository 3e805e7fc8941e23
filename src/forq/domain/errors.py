"""Error types shared across services, adapters and the HTTP layer."""


class ConfigurationError(RuntimeError):
    """Required configuration is missing or blank."""


class UpstreamUnavailableError(RuntimeError):
    """The nutrition API could not be reached or answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class FatSecretApiError(RuntimeError):
    """The nutrition API answered with an error envelope."""

    def __init__(self, code: int | None, message: str) -> None:
        super().__init__(f"FatSecret error {code}: {message}")
        self.code = code
        self.message = message


class ResponseShapeError(ValueError):
    """A search-result payload arrived where a single food detail was expected."""

    def __init__(self, raw: dict[str, object]) -> None:
        super().__init__(
            "Received a search result list where a food detail was expected"
        )
        self.raw = raw


class UnknownResponseFormatError(ValueError):
    """The payload does not match any known food response shape."""

    def __init__(self, raw: object) -> None:
        super().__init__("Unknown response format from the nutrition API")
        self.raw = raw


class FoodDetailIncompleteError(LookupError):
    """The food exists upstream but has no serving breakdown to log against."""

    def __init__(self, food: dict[str, object]) -> None:
        super().__init__(
            "This food item does not have detailed serving information available"
        )
        self.food = food


class NotFoundError(LookupError):
    """A local record does not exist."""


class ConflictError(RuntimeError):
    """A local record already exists."""


class ValidationFailedError(ValueError):
    """Request data failed a business rule."""


class AuthenticationError(RuntimeError):
    """Credentials did not match a user."""
