from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, Field

from .models import Bar


class BarFilter(BaseModel):
    query: str = ""
    ambiances: list[str] = Field(default_factory=list)
    drinks: list[str] = Field(default_factory=list)
    only_accessible: bool = False

    def is_identity(self) -> bool:
        return not (self.query or self.ambiances or self.drinks or self.only_accessible)


class TagVocabulary(BaseModel):
    ambiances: list[str] = Field(default_factory=list)
    drinks: list[str] = Field(default_factory=list)


def _has_all(required: Sequence[str], present: Sequence[str]) -> bool:
    return all(tag in present for tag in required)


def matches(bar: Bar, bar_filter: BarFilter) -> bool:
    """Return True if ``bar`` passes every clause of ``bar_filter``."""
    if bar_filter.query:
        q = bar_filter.query.lower()
        if q not in bar.name.lower() and q not in bar.city.lower():
            return False
    if not _has_all(bar_filter.ambiances, bar.ambiances):
        return False
    if not _has_all(bar_filter.drinks, bar.drinks):
        return False
    if bar_filter.only_accessible and not bar.accessible:
        return False
    return True


def filter_bars(bars: Sequence[Bar], bar_filter: BarFilter) -> list[Bar]:
    """
    Return the bars passing ``bar_filter``, in input order.

    Clauses are conjunctive. A tag filter requires every selected tag to be
    present on the bar, so a bar without tags fails any non-empty selection.
    """
    return [bar for bar in bars if matches(bar, bar_filter)]


def _union_in_order(groups: list[list[str]]) -> list[str]:
    seen: dict[str, None] = {}
    for tags in groups:
        for tag in tags:
            seen.setdefault(tag, None)
    return list(seen)


def derive_vocabulary(bars: Sequence[Bar]) -> TagVocabulary:
    """Union of all ambiance and drink tags across ``bars``, first-seen order."""
    return TagVocabulary(
        ambiances=_union_in_order([b.ambiances for b in bars]),
        drinks=_union_in_order([b.drinks for b in bars]),
    )


class VocabularyMemo:
    """Caches :func:`derive_vocabulary` for the last collection object seen."""

    def __init__(self) -> None:
        # (source collection, vocabulary), swapped as one reference
        self._entry: tuple[Sequence[Bar], TagVocabulary] | None = None
        self.computations = 0

    def get(self, bars: Sequence[Bar]) -> TagVocabulary:
        entry = self._entry
        if entry is not None and entry[0] is bars:
            return entry[1]
        value = derive_vocabulary(bars)
        self._entry = (bars, value)
        self.computations += 1
        return value

    def clear(self) -> None:
        self._entry = None


_vocabulary_memo = VocabularyMemo()


def get_vocabulary(bars: Sequence[Bar]) -> TagVocabulary:
    return _vocabulary_memo.get(bars)


def clear_vocabulary() -> None:
    _vocabulary_memo.clear()
