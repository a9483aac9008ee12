class StravaError(Exception):
    """Base exception for Strava errors."""
    pass

class StravaAuthError(StravaError):
    """Raised when the authorization code exchange fails."""
    pass

class TokenRefreshError(StravaError):
    """Raised when the refresh-token grant fails."""
    pass

class NotAuthenticatedError(StravaError):
    """Raised when no credential has been stored yet."""
    pass

class StravaRequestError(StravaError):
    """Raised when a Strava API call fails."""
    pass
