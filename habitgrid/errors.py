class HabitTrackerError(Exception):
    """Base class for errors raised by the tracker core and its persistence layer."""

    status_code = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(HabitTrackerError):
    """Malformed or missing identifiers or dates. Nothing was written."""

    status_code = 400


class NotFoundError(HabitTrackerError):
    status_code = 404


class PersistenceUnavailable(HabitTrackerError):
    """The database could not be reached or rejected the write."""

    status_code = 503
