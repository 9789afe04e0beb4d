class BookingError(Exception):
    """Base class for errors raised by the search/booking flows."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """Passenger input broke a field rule. Carries the first violated rule only."""

    status_code = 422


class NotFoundError(BookingError):
    status_code = 404


class SoldOutError(BookingError):
    """Train has no seats left; raised before the passenger form is validated."""

    status_code = 409


class PersistenceError(BookingError):
    """The data store rejected a read or write."""

    status_code = 500
