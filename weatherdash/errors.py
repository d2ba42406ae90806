"""Error taxonomy shared by the provider client, service and HTTP layer."""


class WeatherDashError(Exception):
    """Base class for all weatherdash errors."""


class ValidationError(WeatherDashError):
    """Raised when a required selector or query parameter is missing or bad.

    The message is safe to return to the caller verbatim.
    """


class ProviderError(WeatherDashError):
    """Raised when the upstream weather provider fails or returns garbage."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
