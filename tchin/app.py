from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import Literal

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .auth.client import get_auth_client
from .auth.dependencies import require_admin, require_user
from .auth.models import LoginRequest
from .booking.form import load_form, save_form
from .booking.models import BookingFormInput, BookingFormState
from .catalog.data_store import get_catalog, get_client, load_catalog
from .catalog.filters import BarFilter, get_vocabulary
from .catalog.models import EventCard
from .core.errors import MSG_INVALID_CREDENTIALS, AuthServiceError, auth_unavailable, bar_not_found
from .maps.renderer import render_map_page
from .navigation.models import BarDetailResponse, BarListResponse, PageResponse
from .navigation.pages import HOME_FEATURED_COUNT, bar_detail, bar_list, event_cards, render_page
from .navigation.views import View, current_view, nav_section, set_view
from .profile.content import ProfileOut, get_profile


@asynccontextmanager
async def lifespan(app: FastAPI):
    await run_in_threadpool(load_catalog)
    yield


app = FastAPI(title="T'CHIN Browsing API", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "tchin-secret-change-in-production"),
)


class NavigateRequest(BaseModel):
    view: View


def bar_filter_params(
    q: str = "",
    ambiance: list[str] = Query(default=[]),
    drink: list[str] = Query(default=[]),
    accessible: bool = False,
) -> BarFilter:
    return BarFilter(query=q, ambiances=ambiance, drinks=drink, only_accessible=accessible)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    catalog = get_catalog()
    vocabulary = get_vocabulary(catalog.bars)
    cities = sorted({b.city for b in catalog.bars if b.city})
    return {"ambiances": vocabulary.ambiances, "drinks": vocabulary.drinks, "cities": cities}


@app.get("/bars", response_model=BarListResponse)
def bars(bar_filter: BarFilter = Depends(bar_filter_params)) -> BarListResponse:
    return bar_list(get_catalog(), bar_filter)


@app.get("/bars/{bar_id}", response_model=BarDetailResponse)
def bar(bar_id: str, request: Request) -> BarDetailResponse:
    detail = bar_detail(get_catalog(), bar_id, request.session)
    if detail is None:
        raise bar_not_found(bar_id)
    return detail


@app.post("/bars/{bar_id}/bookings", response_model=BookingFormState)
def submit_booking(bar_id: str, body: BookingFormInput, request: Request) -> BookingFormState:
    if get_catalog().find_bar(bar_id) is None:
        raise bar_not_found(bar_id)
    form = load_form(request.session, bar_id)
    state = form.submit(body, get_client())
    save_form(request.session, form)
    return state


@app.get("/events", response_model=list[EventCard])
def events() -> list[EventCard]:
    return event_cards(get_catalog())


@app.get("/profile", response_model=ProfileOut)
def profile() -> ProfileOut:
    return get_profile()


@app.get("/map", response_class=HTMLResponse)
def map_page(
    scope: Literal["home", "bars"] = "bars",
    bar_filter: BarFilter = Depends(bar_filter_params),
) -> HTMLResponse:
    catalog = get_catalog()
    if scope == "home":
        shown = catalog.bars[:HOME_FEATURED_COUNT]
    else:
        shown = bar_list(catalog, bar_filter).results
    return HTMLResponse(content=render_map_page(shown))


# ── Navigation ───────────────────────────────────────────────────────────


@app.get("/view")
def get_view(request: Request) -> dict:
    view = current_view(request.session)
    return {"view": view.model_dump(), "section": nav_section(view).value}


@app.post("/view")
def navigate(body: NavigateRequest, request: Request) -> dict:
    view = set_view(request.session, body.view)
    return {"view": view.model_dump(), "section": nav_section(view).value}


@app.get("/page", response_model=PageResponse)
def page(request: Request, bar_filter: BarFilter = Depends(bar_filter_params)) -> PageResponse:
    return render_page(current_view(request.session), get_catalog(), request.session, bar_filter)


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    try:
        user = get_auth_client().authenticate(body.username, body.password)
    except AuthServiceError as exc:
        raise auth_unavailable() from exc
    if not user:
        raise HTTPException(status_code=401, detail=MSG_INVALID_CREDENTIALS)
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.pop("user", None)
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/admin")
def admin(user: dict = Depends(require_admin)) -> dict:
    catalog = get_catalog()
    return {
        "user": user,
        "catalog": {"bars": len(catalog.bars), "events": len(catalog.events)},
    }


@app.post("/admin/catalog/reload")
def reload_catalog(user: dict = Depends(require_admin)) -> dict:
    catalog = load_catalog()
    return {"status": "reloaded", "bars": len(catalog.bars), "events": len(catalog.events)}


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events())
