from __future__ import annotations

from pydantic import BaseModel, Field

from ..booking.models import BookingFormState
from ..catalog.filters import BarFilter, TagVocabulary
from ..catalog.models import Bar, EventCard
from ..profile.content import ProfileOut
from .views import NavSection, View


class BarListResponse(BaseModel):
    results: list[Bar]
    total: int
    filters: BarFilter
    vocabulary: TagVocabulary


class BarDetailResponse(BaseModel):
    bar: Bar
    accessibility: str
    related_events: list[EventCard] = Field(default_factory=list)
    booking: BookingFormState = Field(default_factory=BookingFormState)


class HomePage(BaseModel):
    title: str = "T’CHIN"
    tagline: str = "Découvre, réserve et vis des expériences dans les meilleurs bars."
    featured: list[Bar] = Field(default_factory=list)
    map_url: str = "/map?scope=home"


class PageResponse(BaseModel):
    view: View
    section: NavSection
    content: HomePage | BarListResponse | BarDetailResponse | list[EventCard] | ProfileOut | None = None
