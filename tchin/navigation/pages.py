from __future__ import annotations

import time
from typing import Any, MutableMapping

from ..analytics.store import record_event
from ..booking.form import load_form
from ..catalog.filters import BarFilter, filter_bars, get_vocabulary
from ..catalog.models import Catalog, EventCard
from ..profile.content import get_profile
from .models import BarDetailResponse, BarListResponse, HomePage, PageResponse
from .views import View, nav_section

HOME_FEATURED_COUNT = 3


def bar_list(catalog: Catalog, bar_filter: BarFilter) -> BarListResponse:
    start_time = time.time()
    results = filter_bars(catalog.bars, bar_filter)

    if not bar_filter.is_identity():
        elapsed_ms = round((time.time() - start_time) * 1000, 3)
        record_event("search", {
            "query": bar_filter.query,
            "ambiances": bar_filter.ambiances,
            "drinks": bar_filter.drinks,
            "only_accessible": bar_filter.only_accessible,
            "results_returned": len(results),
            "response_time_ms": elapsed_ms,
        })

    return BarListResponse(
        results=results,
        total=len(results),
        filters=bar_filter,
        vocabulary=get_vocabulary(catalog.bars),
    )


def bar_detail(
    catalog: Catalog,
    bar_id: str,
    session: MutableMapping[str, Any],
) -> BarDetailResponse | None:
    bar = catalog.find_bar(bar_id)
    if bar is None:
        return None
    return BarDetailResponse(
        bar=bar,
        accessibility=bar.accessibility_summary(),
        related_events=[EventCard.from_event(e) for e in catalog.events_for_bar(bar.id)],
        booking=load_form(session, bar.id).state,
    )


def event_cards(catalog: Catalog) -> list[EventCard]:
    return [EventCard.from_event(e) for e in catalog.events]


def home_page(catalog: Catalog) -> HomePage:
    return HomePage(featured=catalog.bars[:HOME_FEATURED_COUNT])


def render_page(
    view: View,
    catalog: Catalog,
    session: MutableMapping[str, Any],
    bar_filter: BarFilter | None = None,
) -> PageResponse:
    """Build the content for ``view``. An unknown bar id renders no content."""
    if view.kind == "home":
        content: Any = home_page(catalog)
    elif view.kind == "bars":
        content = bar_list(catalog, bar_filter or BarFilter())
    elif view.kind == "bar":
        content = bar_detail(catalog, view.bar_id, session)
    elif view.kind == "events":
        content = event_cards(catalog)
    else:
        content = get_profile()
    return PageResponse(view=view, section=nav_section(view), content=content)
