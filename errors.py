"""Exceptions raised by the booking relay.

Routes in ``app.py`` map each of these onto an HTTP status.
"""


class BookingError(Exception):
    """Base class for every booking relay failure."""


class ValidationError(BookingError):
    """The booking request is missing a field or carries an invalid value."""


class GatewayError(BookingError):
    """The payment gateway rejected the order or could not be reached."""

    def __init__(self, message, detail=None):
        super().__init__(message)
        self.detail = detail if detail is not None else message


class SignatureError(BookingError):
    """A webhook did not carry a valid signature."""


class NotFoundError(BookingError):
    """No booking is stored under the requested order id."""


class StoreError(BookingError):
    """The bookings file could not be read or written."""
