from __future__ import annotations

from .client import CatalogClient
from .models import Catalog

_catalog: Catalog | None = None
_client: CatalogClient | None = None


def get_client() -> CatalogClient:
    """Return the shared upstream client, creating it on first call."""
    global _client
    if _client is None:
        _client = CatalogClient()
    return _client


def set_client(client: CatalogClient | None) -> None:
    global _client
    _client = client


def load_catalog(client: CatalogClient | None = None) -> Catalog:
    """Fetch bars and events independently; either may come back empty."""
    global _catalog
    client = client or get_client()
    bars = client.fetch_bars()
    events = client.fetch_events()
    _catalog = Catalog(bars=bars, events=events)
    return _catalog


def get_catalog() -> Catalog:
    """Return the in-memory catalog, loading it on first call."""
    if _catalog is None:
        return load_catalog()
    return _catalog


def set_catalog(catalog: Catalog | None) -> None:
    global _catalog
    _catalog = catalog
