from __future__ import annotations

import httpx
from fastapi.testclient import TestClient

from tchin.analytics.store import get_events
from tchin.app import app
from tchin.booking.form import MAX_STORED_FORMS, BookingForm, load_form, save_form
from tchin.booking.models import BookingFormInput, BookingFormState, BookingStatus
from tchin.catalog import data_store
from tchin.catalog.client import CatalogClient
from tchin.catalog.config import CatalogConfig
from tchin.core.errors import BookingError

FIELDS = BookingFormInput(name="Camille", date="2025-11-14", time="20:00", people=3)


class RecordingSubmitter:
    """Fake upstream that remembers the form status seen during the call."""

    def __init__(self, form: BookingForm, error: BookingError | None = None) -> None:
        self.form = form
        self.error = error
        self.status_during_call: BookingStatus | None = None
        self.requests = []

    def create_booking(self, request):
        self.status_during_call = self.form.status
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return {"id": "bk1"}


# ── State machine ────────────────────────────────────────────────────────


def test_new_form_is_idle():
    form = BookingForm("1")
    assert form.status == BookingStatus.idle
    assert form.state.message is None


def test_submit_passes_through_submitting_to_success():
    form = BookingForm("1")
    submitter = RecordingSubmitter(form)

    state = form.submit(FIELDS, submitter)

    assert submitter.status_during_call == BookingStatus.submitting
    assert state.status == BookingStatus.success
    assert state.message == "Réservation enregistrée"
    assert submitter.requests[0].bar_id == "1"
    assert submitter.requests[0].people == 3


def test_rejected_submit_ends_in_failure():
    form = BookingForm("1")
    state = form.submit(FIELDS, RecordingSubmitter(form, BookingError("Complet", 409)))

    assert state.status == BookingStatus.failure
    assert state.message == "Erreur lors de l’enregistrement"
    assert state.error == "Complet"


def test_failure_persists_until_resubmitted():
    form = BookingForm("1")
    form.submit(FIELDS, RecordingSubmitter(form, BookingError()))
    assert form.status == BookingStatus.failure

    retry = RecordingSubmitter(form)
    form.submit(FIELDS, retry)
    assert retry.status_during_call == BookingStatus.submitting
    assert form.status == BookingStatus.success


def test_submit_records_booking_event():
    form = BookingForm("2")
    form.submit(FIELDS, RecordingSubmitter(form))
    events = get_events("booking")
    assert len(events) == 1
    assert events[0]["bar_id"] == "2"
    assert events[0]["status"] == "success"


def test_form_status_round_trips_through_session():
    session: dict = {}
    form = BookingForm("1", BookingFormState(status=BookingStatus.failure, message="x", error="y"))
    save_form(session, form)

    restored = load_form(session, "1")
    assert restored.status == BookingStatus.failure
    assert restored.state.message == "Erreur lors de l’enregistrement"
    assert restored.state.error is None
    assert load_form(session, "2").status == BookingStatus.idle


def test_session_keeps_only_recent_forms():
    session: dict = {}
    for i in range(MAX_STORED_FORMS + 3):
        save_form(session, BookingForm(str(i), BookingFormState(status=BookingStatus.success)))
    # Resubmitting an old bar moves it to the most recent slot
    save_form(session, BookingForm("3", BookingFormState(status=BookingStatus.failure)))

    assert len(session["bookings"]) == MAX_STORED_FORMS
    assert list(session["bookings"])[-1] == "3"
    assert load_form(session, "0").status == BookingStatus.idle
    assert load_form(session, "3").status == BookingStatus.failure


def test_garbage_session_entry_reads_as_idle():
    session = {"bookings": {"1": {"status": "failure", "error": "old"}, "2": "bogus"}}
    assert load_form(session, "1").status == BookingStatus.idle
    assert load_form(session, "2").status == BookingStatus.idle


# ── Endpoint ─────────────────────────────────────────────────────────────


def _use_upstream(handler) -> None:
    data_store.set_client(
        CatalogClient(CatalogConfig(base_url="http://upstream.test"), transport=httpx.MockTransport(handler))
    )


def test_booking_endpoint_success_is_reflected_on_detail():
    _use_upstream(lambda request: httpx.Response(201, json={"id": "bk1"}))
    client = TestClient(app)

    assert client.get("/bars/1").json()["booking"]["status"] == "idle"

    resp = client.post("/bars/1/bookings", json=FIELDS.model_dump())
    assert resp.status_code == 200
    assert resp.json()["status"] == "success"

    assert client.get("/bars/1").json()["booking"]["status"] == "success"
    assert client.get("/bars/2").json()["booking"]["status"] == "idle"


def test_booking_endpoint_failure_then_retry():
    responses = iter([
        httpx.Response(400, json={"error": "Date passée"}),
        httpx.Response(200, json={"ok": True}),
    ])
    _use_upstream(lambda request: next(responses))
    client = TestClient(app)

    failed = client.post("/bars/1/bookings", json=FIELDS.model_dump()).json()
    assert failed["status"] == "failure"
    assert failed["error"] == "Date passée"
    assert client.get("/bars/1").json()["booking"]["status"] == "failure"

    retried = client.post("/bars/1/bookings", json=FIELDS.model_dump()).json()
    assert retried["status"] == "success"


def test_booking_endpoint_network_error_is_failure():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    _use_upstream(handler)
    client = TestClient(app)
    resp = client.post("/bars/1/bookings", json=FIELDS.model_dump())
    assert resp.status_code == 200
    assert resp.json()["status"] == "failure"


def test_booking_endpoint_unknown_bar():
    client = TestClient(app)
    resp = client.post("/bars/999/bookings", json=FIELDS.model_dump())
    assert resp.status_code == 404


def test_booking_endpoint_rejects_zero_people():
    client = TestClient(app)
    resp = client.post("/bars/1/bookings", json={"name": "A", "date": "", "time": "", "people": 0})
    assert resp.status_code == 422


def test_long_upstream_error_stays_out_of_session_cookie():
    _use_upstream(lambda request: httpx.Response(400, json={"error": "x" * 3000}))
    client = TestClient(app)

    resp = client.post("/bars/1/bookings", json=FIELDS.model_dump())
    assert resp.json()["status"] == "failure"
    assert resp.json()["error"] == "x" * 3000
    assert len(resp.headers["set-cookie"]) < 4096

    detail = client.get("/bars/1").json()["booking"]
    assert detail["status"] == "failure"
    assert detail["error"] is None


def test_cookie_stays_small_across_many_bars(catalog):
    _use_upstream(lambda request: httpx.Response(500, json={"error": "y" * 500}))
    data_store.set_catalog(catalog.model_copy(update={
        "bars": [catalog.bars[0].model_copy(update={"id": str(i)}) for i in range(40)],
    }))
    client = TestClient(app)
    for i in range(40):
        resp = client.post(f"/bars/{i}/bookings", json=FIELDS.model_dump())
    assert len(resp.headers["set-cookie"]) < 1024
