from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from tchin.app import app
from tchin.navigation.views import (
    BarDetailView,
    BarsView,
    EventsView,
    HomeView,
    NavSection,
    ProfileView,
    current_view,
    nav_section,
    parse_view,
    set_view,
)


@pytest.mark.parametrize(
    "view, section",
    [
        (HomeView(), NavSection.home),
        (BarsView(), NavSection.bars),
        (BarDetailView(bar_id="1"), NavSection.bars),
        (EventsView(), NavSection.events),
        (ProfileView(), NavSection.profile),
    ],
)
def test_nav_section(view, section):
    assert nav_section(view) == section


def test_parse_view_dispatches_on_kind():
    view = parse_view({"kind": "bar", "bar_id": "42"})
    assert isinstance(view, BarDetailView)
    assert view.bar_id == "42"
    assert isinstance(parse_view({"kind": "events"}), EventsView)


def test_parse_view_rejects_unknown_kind_and_missing_id():
    with pytest.raises(ValidationError):
        parse_view({"kind": "admin"})
    with pytest.raises(ValidationError):
        parse_view({"kind": "bar"})


def test_session_defaults_to_home_and_survives_garbage():
    assert isinstance(current_view({}), HomeView)
    assert isinstance(current_view({"view": {"kind": "nope"}}), HomeView)


def test_session_round_trip():
    session: dict = {}
    set_view(session, BarDetailView(bar_id="2"))
    assert current_view(session) == BarDetailView(bar_id="2")


# ── Endpoints ────────────────────────────────────────────────────────────


def test_view_endpoint_starts_at_home():
    client = TestClient(app)
    body = client.get("/view").json()
    assert body["view"] == {"kind": "home"}
    assert body["section"] == "home"


def test_navigate_to_bar_detail():
    client = TestClient(app)
    resp = client.post("/view", json={"view": {"kind": "bar", "bar_id": "1"}})
    assert resp.status_code == 200
    assert resp.json()["section"] == "bars"

    page = client.get("/page").json()
    assert page["view"] == {"kind": "bar", "bar_id": "1"}
    assert page["content"]["bar"]["name"] == "Le Perchoir"
    assert [e["id"] for e in page["content"]["related_events"]] == ["e1", "e3"]


def test_navigate_rejects_bad_view():
    client = TestClient(app)
    assert client.post("/view", json={"view": {"kind": "bar"}}).status_code == 422


def test_home_page_features_first_three_bars():
    client = TestClient(app)
    page = client.get("/page").json()
    assert page["section"] == "home"
    assert [b["name"] for b in page["content"]["featured"]] == ["Le Perchoir", "Sous Sol", "Le Comptoir"]
    assert page["content"]["map_url"] == "/map?scope=home"


def test_bars_page_applies_filters():
    client = TestClient(app)
    client.post("/view", json={"view": {"kind": "bars"}})
    page = client.get("/page", params={"ambiance": "Rooftop"}).json()
    assert [b["name"] for b in page["content"]["results"]] == ["Le Perchoir", "La Canopée"]


def test_events_and_profile_pages():
    client = TestClient(app)
    client.post("/view", json={"view": {"kind": "events"}})
    events = client.get("/page").json()["content"]
    assert [e["title"] for e in events] == ["Soirée DJ", "Dégustation de bières", "Live jazz"]

    client.post("/view", json={"view": {"kind": "profile"}})
    profile = client.get("/page").json()["content"]
    assert len(profile["badges"]) == 3


def test_unknown_bar_detail_renders_no_content():
    client = TestClient(app)
    client.post("/view", json={"view": {"kind": "bar", "bar_id": "999"}})
    page = client.get("/page").json()
    assert page["section"] == "bars"
    assert page["content"] is None
