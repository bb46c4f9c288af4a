# File: app/core/exceptions.py

"""
Domain errors raised by services and translated to HTTP responses in
``app.main``. Repositories never raise these for zero-row writes; they
return False and leave the decision to the caller.
"""

from fastapi import status


class RoadmapError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class AuthRequired(RoadmapError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated."


class NotFound(RoadmapError):
    # Also used for rows owned by someone else.
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."


class ValidationFailed(RoadmapError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request."


class Conflict(RoadmapError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Already exists."


class BoundaryViolation(RoadmapError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Item cannot be moved further."


class AlreadyFirst(BoundaryViolation):
    default_detail = "Item is already in first position."


class AlreadyLast(BoundaryViolation):
    default_detail = "Item is already in last position."


class InternalInconsistency(RoadmapError):
    """Item positions in a roadmap are no longer dense (1..N)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error."
