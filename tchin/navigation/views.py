"""
View state for the browsing session.

The current page is one of a closed set of view models discriminated by
``kind``. Drilling into a bar carries the bar id as a field instead of
encoding it into the view name.
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, MutableMapping, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError


class NavSection(str, Enum):
    home = "home"
    bars = "bars"
    events = "events"
    profile = "profile"


class HomeView(BaseModel):
    kind: Literal["home"] = "home"


class BarsView(BaseModel):
    kind: Literal["bars"] = "bars"


class BarDetailView(BaseModel):
    kind: Literal["bar"] = "bar"
    bar_id: str = Field(..., min_length=1)


class EventsView(BaseModel):
    kind: Literal["events"] = "events"


class ProfileView(BaseModel):
    kind: Literal["profile"] = "profile"


View = Annotated[
    Union[HomeView, BarsView, BarDetailView, EventsView, ProfileView],
    Field(discriminator="kind"),
]

_VIEW = TypeAdapter(View)
_SESSION_KEY = "view"

_SECTIONS: dict[str, NavSection] = {
    "home": NavSection.home,
    "bars": NavSection.bars,
    "bar": NavSection.bars,
    "events": NavSection.events,
    "profile": NavSection.profile,
}


def nav_section(view: View) -> NavSection:
    """Navigation entry highlighted for ``view``; a bar detail lives under bars."""
    return _SECTIONS[view.kind]


def parse_view(raw: Any) -> View:
    return _VIEW.validate_python(raw)


def current_view(session: MutableMapping[str, Any]) -> View:
    raw = session.get(_SESSION_KEY)
    if not raw:
        return HomeView()
    try:
        return parse_view(raw)
    except ValidationError:
        return HomeView()


def set_view(session: MutableMapping[str, Any], view: View) -> View:
    session[_SESSION_KEY] = view.model_dump()
    return view
