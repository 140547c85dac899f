"""Custom exceptions for the Shopify seeder."""


class ShopifySeederError(Exception):
    """Base exception for all seeder errors."""


class ConfigurationError(ShopifySeederError):
    """Raised when required settings are missing at startup."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            f"Missing required environment variables: {', '.join(missing)}. "
            "Check your .env file."
        )


class ShopifyClientError(ShopifySeederError):
    """Raised for transport failures (network, timeout, unparseable response)."""

    def __init__(self, message: str, cause: object = None, status: int | None = None):
        self.cause = cause
        self.status = status
        super().__init__(message)


class ShopifyGraphQLError(ShopifySeederError):
    """Raised when GraphQL returns root-level errors a caller cannot tolerate."""

    def __init__(self, errors: object):
        self.errors = errors
        if isinstance(errors, str):
            message = errors
        else:
            message = f"GraphQL errors: {errors}"
        super().__init__(message)
