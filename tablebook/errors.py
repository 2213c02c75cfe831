"""Domain errors raised by the booking services"""


class ReservationError(Exception):
    """Base class for booking failures; carries the HTTP status it maps to"""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ReservationError):
    status_code = 400


class NotFound(ReservationError):
    status_code = 404


class CapacityExceeded(ReservationError):
    status_code = 400


class Conflict(ReservationError):
    status_code = 409


class InvalidStatusTransition(ReservationError):
    status_code = 409


class NoTableAvailable(ReservationError):
    """Chat flow found no table that fits the party at the requested time"""
    status_code = 409


class IncompleteState(ReservationError):
    """Chat flow tried to book before party size and time were collected"""
    status_code = 400


class MissingId(ReservationError):
    """Webhook payload carries neither an event id nor a message id"""
    status_code = 400
