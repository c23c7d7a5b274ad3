from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BookingStatus(str, Enum):
    idle = "idle"
    submitting = "submitting"
    success = "success"
    failure = "failure"


class BookingFormInput(BaseModel):
    name: str = ""
    date: str = ""
    time: str = ""
    people: int = Field(default=2, ge=1)


class BookingRequest(BaseModel):
    """Outbound body of ``POST /api/bookings``."""

    model_config = ConfigDict(populate_by_name=True)

    bar_id: str = Field(..., alias="barId")
    name: str
    date: str
    time: str
    people: int = Field(..., ge=1)


class BookingFormState(BaseModel):
    status: BookingStatus = BookingStatus.idle
    message: str | None = None
    error: str | None = None
