"""Domain Exceptions"""


class ReservationError(Exception):
    """Base error for the reservation engine"""


class ValidationError(ReservationError, ValueError):
    """Malformed input rejected before touching the store"""


class InvalidRangeError(ValidationError):
    """Check-out falls before check-in"""


class NotFoundError(ReservationError):
    """Requested reservation does not exist"""


class CapacityConflictError(ReservationError):
    """No room satisfies the requested criteria"""


class ConcurrencyConflictError(ReservationError):
    """Overlapping reservation detected at commit time"""


class InvalidStateTransitionError(ReservationError):
    """Reservation status does not allow the requested transition"""
