"""
Tour Errors
===========

Exception types raised by the tour editing core.

Step-level edits on a working copy are permissive (unknown ids are
ignored), so these are only raised where a failure must be reported:
- ValidationError: previewing an empty tour, editing while previewing
- NotFoundError: tour-level update/delete against the store
- StaleSessionError: touching an editor session that already ended
"""


class TourError(Exception):
    """Base class for all tour editing errors."""


class ValidationError(TourError, ValueError):
    """An action was rejected because of the current state or input."""


class NotFoundError(TourError, LookupError):
    """A tour-level operation referenced an id the store does not know."""

    def __init__(self, message="Tour not found", tour_id=None):
        super().__init__(message)
        self.tour_id = tour_id


class StaleSessionError(TourError):
    """An editor session was used after it was saved or cancelled."""


class NotAuthenticatedError(TourError):
    """A catalog operation needed a current user and there was none."""


class OutOfRangeError(TourError, IndexError):
    """The playback cursor has no step to return."""
