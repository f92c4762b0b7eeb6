"""
Domain Errors

Errors raised by the domain and application layers. They all describe
caller contract violations: none of them is transient and none should be
retried. Each error carries a stable code that outer layers can map to a
user-facing response.
"""

from enum import Enum


class ErrorCode(Enum):
    """Stable error codes"""
    INVALID_INTERVAL = 'INVALID_INTERVAL'
    INVALID_ARGUMENT = 'INVALID_ARGUMENT'
    INVALID_TRANSITION = 'INVALID_TRANSITION'
    PRICING_NOT_CONFIGURED = 'PRICING_NOT_CONFIGURED'
    SCREEN_NOT_FOUND = 'SCREEN_NOT_FOUND'
    SCREEN_UNAVAILABLE = 'SCREEN_UNAVAILABLE'
    BOOKING_NOT_FOUND = 'BOOKING_NOT_FOUND'
    AVAILABILITY_WINDOW_NOT_FOUND = 'AVAILABILITY_WINDOW_NOT_FOUND'


class DomainError(ValueError):
    """Base domain error with code and user-safe message"""

    code: ErrorCode = ErrorCode.INVALID_ARGUMENT

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"{self.code.value}: {self.message}"


class InvalidInterval(DomainError):
    """Raised when a time interval does not satisfy start < end"""
    code = ErrorCode.INVALID_INTERVAL


class InvalidArgument(DomainError):
    """Raised for unrecognized status strings and malformed values"""
    code = ErrorCode.INVALID_ARGUMENT


class InvalidTransition(DomainError):
    """Raised when a booking lifecycle transition is not permitted"""
    code = ErrorCode.INVALID_TRANSITION

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move booking from {current} to {target}")
        self.current = current
        self.target = target


class PricingNotConfigured(DomainError):
    """Raised when a screen without a rate card has to be priced"""
    code = ErrorCode.PRICING_NOT_CONFIGURED

    def __init__(self, screen_id):
        super().__init__(f"Screen {screen_id} does not have pricing information")
        self.screen_id = screen_id


class ScreenNotFound(DomainError):
    """Raised when a referenced screen does not exist"""
    code = ErrorCode.SCREEN_NOT_FOUND

    def __init__(self, screen_id):
        super().__init__(f"Screen {screen_id} not found")
        self.screen_id = screen_id


class ScreenUnavailable(DomainError):
    """Raised when a booking is requested for a slot the screen cannot take"""
    code = ErrorCode.SCREEN_UNAVAILABLE

    def __init__(self, screen_id, period):
        super().__init__(f"Screen {screen_id} is not available for {period}")
        self.screen_id = screen_id
        self.period = period


class BookingNotFound(DomainError):
    """Raised when a referenced booking does not exist"""
    code = ErrorCode.BOOKING_NOT_FOUND

    def __init__(self, booking_id):
        super().__init__(f"Booking {booking_id} not found")
        self.booking_id = booking_id


class AvailabilityWindowNotFound(DomainError):
    """Raised when removing a window the screen does not own"""
    code = ErrorCode.AVAILABILITY_WINDOW_NOT_FOUND

    def __init__(self, window_id):
        super().__init__(f"Availability window {window_id} not found")
        self.window_id = window_id
