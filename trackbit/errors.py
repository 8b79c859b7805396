class TrackbitError(Exception):
    """Base class for errors raised by the service layer."""


class ValidationError(TrackbitError):
    """A required field is missing or malformed. Nothing was written."""


class NotFoundError(TrackbitError):
    """The requested habit, routine, goal or recommendation does not exist."""


class NetworkError(TrackbitError):
    """Storage could not be reached. The session was rolled back."""
