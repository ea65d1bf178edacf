"""Custom exception classes for the application."""


class OffersMonitorException(Exception):
    """Base exception for all Offers Monitor errors."""

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class CatalogUnavailableError(OffersMonitorException):
    """Raised when the app catalog cannot be read."""

    def __init__(self, reason: str):
        super().__init__(f"Catalog unavailable: {reason}")


class DetailsFetchError(OffersMonitorException):
    """Raised when a single app details request fails."""

    def __init__(self, app_id: int, message: str):
        self.app_id = app_id
        super().__init__(f"Details fetch failed for app {app_id}: {message}")


class RateLimitError(DetailsFetchError):
    """Raised when the details endpoint answers 429."""

    def __init__(self, app_id: int):
        super().__init__(app_id, "rate limit exceeded")


class PersistenceError(OffersMonitorException):
    """Raised when discovered offers cannot be stored."""

    def __init__(self, message: str):
        super().__init__(f"Could not persist offers: {message}")
