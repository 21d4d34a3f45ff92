"""
Admission error taxonomy.

ValidationError and CapacityExceeded are expected, user-facing outcomes.
ResourceUnavailable is a transient fault: nothing was written, and the
caller may retry the whole submission.
"""


class AllocationError(Exception):
    """Base class for submission admission errors."""
    pass


class ValidationError(AllocationError):
    """Raised when a referenced form, question or option is missing or inconsistent."""
    pass


class CapacityExceeded(AllocationError):
    """Raised when an option has reached its response limit."""
    pass


class ResourceUnavailable(AllocationError):
    """Raised on lock timeout, unreachable storage or transaction conflict."""
    pass
