from __future__ import annotations

from collections import Counter
from typing import Any


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": name, "count": count} for name, count in counter.most_common(n)]


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    bookings = [e for e in events if e["type"] == "booking"]
    total = len(searches)

    # Top free-text queries
    query_counter: Counter[str] = Counter()
    for s in searches:
        if s.get("query"):
            query_counter[s["query"].lower()] += 1

    # Top selected tags
    ambiance_counter: Counter[str] = Counter()
    drink_counter: Counter[str] = Counter()
    for s in searches:
        for a in s.get("ambiances", []) or []:
            ambiance_counter[a] += 1
        for d in s.get("drinks", []) or []:
            drink_counter[d] += 1

    # Filter usage rates
    filter_counts = {"query": 0, "ambiance": 0, "drink": 0, "accessible": 0}
    for s in searches:
        if s.get("query"):
            filter_counts["query"] += 1
        if s.get("ambiances"):
            filter_counts["ambiance"] += 1
        if s.get("drinks"):
            filter_counts["drink"] += 1
        if s.get("only_accessible"):
            filter_counts["accessible"] += 1
    filter_usage = {
        k: round(v / total * 100, 1) if total else 0.0
        for k, v in filter_counts.items()
    }

    empty_results = sum(1 for s in searches if s.get("results_returned", 0) == 0)

    # Booking outcomes
    succeeded = sum(1 for b in bookings if b.get("status") == "success")
    failed = len(bookings) - succeeded

    return {
        "total_searches": total,
        "empty_result_searches": empty_results,
        "top_queries": _top(query_counter),
        "top_ambiances": _top(ambiance_counter),
        "top_drinks": _top(drink_counter),
        "filter_usage": filter_usage,
        "booking_summary": {
            "total": len(bookings),
            "success": succeeded,
            "failure": failed,
            "success_rate": round(succeeded / len(bookings) * 100, 1) if bookings else 0.0,
        },
    }
