from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

FREE_ENTRY_LABEL = "Entrée libre"


class MenuItem(BaseModel):
    name: str
    price: float


class Bar(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    city: str = ""
    description: str = ""
    photo: str | None = None
    rating: float | None = None
    price_level: str | None = Field(default=None, alias="priceLevel")
    accessible: bool = False
    ambiances: list[str] = Field(default_factory=list)
    drinks: list[str] = Field(default_factory=list)
    allergens: list[str] = Field(default_factory=list)
    menu: list[MenuItem] = Field(default_factory=list)
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: object) -> object:
        return str(v) if isinstance(v, int) else v

    @field_validator("ambiances", "drinks", "allergens", "menu", mode="before")
    @classmethod
    def _null_as_empty(cls, v: object) -> object:
        return [] if v is None else v

    @field_validator("city", "description", mode="before")
    @classmethod
    def _null_as_blank(cls, v: object) -> object:
        return "" if v is None else v

    @field_validator("accessible", mode="before")
    @classmethod
    def _null_as_false(cls, v: object) -> object:
        return False if v is None else v

    def accessibility_summary(self) -> str:
        label = (
            "Accessible fauteuil roulant"
            if self.accessible
            else "Non accessible fauteuil roulant"
        )
        if self.allergens:
            label += f" · Allergènes: {', '.join(self.allergens)}"
        return label


class BarSummary(BaseModel):
    """The slice of a bar embedded in each event."""

    id: str
    name: str
    photo: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: object) -> object:
        return str(v) if isinstance(v, int) else v


class Event(BaseModel):
    id: str
    title: str
    date: str
    cover: float = 0.0
    bar: BarSummary

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: object) -> object:
        return str(v) if isinstance(v, int) else v

    @field_validator("cover", mode="before")
    @classmethod
    def _null_as_free(cls, v: object) -> object:
        return 0 if v is None else v

    @property
    def is_free(self) -> bool:
        return self.cover == 0

    def cover_label(self) -> str:
        if self.is_free:
            return FREE_ENTRY_LABEL
        amount = f"{self.cover:.2f}".rstrip("0").rstrip(".")
        return f"{amount} €"

    def display_date(self) -> str:
        """Day/month/year rendering of ``date``; the raw value if unparseable."""
        try:
            parsed = datetime.fromisoformat(self.date.replace("Z", "+00:00"))
        except ValueError:
            return self.date
        return parsed.strftime("%d/%m/%Y")


class EventCard(BaseModel):
    id: str
    title: str
    date: str
    display_date: str
    cover: float
    cover_label: str
    bar: BarSummary

    @classmethod
    def from_event(cls, event: Event) -> EventCard:
        return cls(
            id=event.id,
            title=event.title,
            date=event.date,
            display_date=event.display_date(),
            cover=event.cover,
            cover_label=event.cover_label(),
            bar=event.bar,
        )


class Catalog(BaseModel):
    """Snapshot of both upstream collections, as loaded at startup."""

    bars: list[Bar] = Field(default_factory=list)
    events: list[Event] = Field(default_factory=list)

    def find_bar(self, bar_id: str) -> Bar | None:
        for bar in self.bars:
            if bar.id == bar_id:
                return bar
        return None

    def events_for_bar(self, bar_id: str) -> list[Event]:
        return [e for e in self.events if e.bar.id == bar_id]
