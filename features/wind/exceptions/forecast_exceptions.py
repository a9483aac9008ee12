class ForecastError(Exception):
    """Base exception for wind forecast errors."""
    pass

class ForecastFetchFailed(ForecastError):
    """Raised when a forecast request fails, times out or returns an unusable payload."""
    pass
