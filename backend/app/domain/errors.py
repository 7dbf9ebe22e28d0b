class SchedulingError(Exception):
    """Base class for booking and availability failures."""

    retryable = False


class MalformedInputError(SchedulingError):
    """Input could not be interpreted, e.g. a date not in YYYY-MM-DD form."""


class ValidationFailedError(SchedulingError):
    """A booking field violates a domain constraint."""


class SlotConflictError(SchedulingError):
    """Another booking already holds the requested (date, time) slot."""


class BookingNotFoundError(SchedulingError):
    pass


class StoreUnavailableError(SchedulingError):
    """The booking store failed or timed out. Safe to retry with backoff."""

    retryable = True
