from __future__ import annotations

import logging
from typing import Any, MutableMapping, Protocol

from ..analytics.store import record_event
from ..core.errors import MSG_BOOKING_FAILURE, MSG_BOOKING_SUCCESS, BookingError
from .models import BookingFormInput, BookingFormState, BookingRequest, BookingStatus

logger = logging.getLogger(__name__)

_SESSION_KEY = "bookings"
MAX_STORED_FORMS = 5

_MESSAGES = {
    BookingStatus.success: MSG_BOOKING_SUCCESS,
    BookingStatus.failure: MSG_BOOKING_FAILURE,
}


class BookingSubmitter(Protocol):
    def create_booking(self, request: BookingRequest) -> dict[str, Any]: ...


class BookingForm:
    """
    Booking form for one bar.

    The only transition out of any state is :meth:`submit`, which always
    passes through ``submitting`` and lands on ``success`` or ``failure``.
    A failed form stays failed until submitted again.
    """

    def __init__(self, bar_id: str, state: BookingFormState | None = None) -> None:
        self.bar_id = bar_id
        self.state = state or BookingFormState()

    @property
    def status(self) -> BookingStatus:
        return self.state.status

    def submit(self, fields: BookingFormInput, submitter: BookingSubmitter) -> BookingFormState:
        self.state = BookingFormState(status=BookingStatus.submitting)
        request = BookingRequest(
            bar_id=self.bar_id,
            name=fields.name,
            date=fields.date,
            time=fields.time,
            people=fields.people,
        )
        try:
            submitter.create_booking(request)
        except BookingError as exc:
            logger.warning(
                "Booking for bar %s failed status=%s error=%s",
                self.bar_id,
                exc.status_code,
                exc.message,
            )
            self.state = BookingFormState(
                status=BookingStatus.failure,
                message=MSG_BOOKING_FAILURE,
                error=exc.message,
            )
        else:
            self.state = BookingFormState(
                status=BookingStatus.success,
                message=MSG_BOOKING_SUCCESS,
            )

        record_event("booking", {
            "bar_id": self.bar_id,
            "people": fields.people,
            "status": self.state.status.value,
        })
        return self.state


def load_form(session: MutableMapping[str, Any], bar_id: str) -> BookingForm:
    raw = session.get(_SESSION_KEY, {}).get(bar_id)
    try:
        status = BookingStatus(raw)
    except ValueError:
        return BookingForm(bar_id)
    return BookingForm(bar_id, BookingFormState(status=status, message=_MESSAGES.get(status)))


def save_form(session: MutableMapping[str, Any], form: BookingForm) -> None:
    """
    Keep only the status of the most recently submitted forms.

    The session lives in a signed cookie, so upstream error text stays out
    of it and older forms fall back to idle.
    """
    forms = dict(session.get(_SESSION_KEY, {}))
    forms.pop(form.bar_id, None)
    forms[form.bar_id] = form.status.value
    while len(forms) > MAX_STORED_FORMS:
        del forms[next(iter(forms))]
    session[_SESSION_KEY] = forms
