"""
Domain errors and the user-facing messages that go with them.
Routes translate these into HTTP responses; reads never raise past the catalog client.
"""
from __future__ import annotations

from fastapi import HTTPException

# ---------------------------------------------------------------------------
# User-facing messages
# ---------------------------------------------------------------------------

MSG_BOOKING_SUCCESS = "Réservation enregistrée"
MSG_BOOKING_FAILURE = "Erreur lors de l’enregistrement"
MSG_BOOKING_DEFAULT_ERROR = "Erreur"
MSG_INVALID_CREDENTIALS = "Invalid credentials"
MSG_AUTH_UNAVAILABLE = "Authentication service unavailable"

STATUS_NOT_FOUND = 404
STATUS_SERVICE_UNAVAILABLE = 503


class BookingError(Exception):
    """The upstream booking endpoint did not accept the request."""

    def __init__(self, message: str = MSG_BOOKING_DEFAULT_ERROR, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthServiceError(Exception):
    """The external auth service could not be reached or answered garbage."""


def bar_not_found(bar_id: str) -> HTTPException:
    return HTTPException(status_code=STATUS_NOT_FOUND, detail=f"Bar {bar_id} not found")


def auth_unavailable() -> HTTPException:
    return HTTPException(status_code=STATUS_SERVICE_UNAVAILABLE, detail=MSG_AUTH_UNAVAILABLE)
