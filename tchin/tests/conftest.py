from __future__ import annotations

import pytest

from tchin.analytics.store import clear_events
from tchin.catalog import data_store
from tchin.catalog.filters import clear_vocabulary
from tchin.catalog.models import Bar, Catalog
from tchin.tests.sample_data import BARS_JSON, EVENTS_JSON


@pytest.fixture(autouse=True)
def catalog():
    """Every test starts from the sample catalog and an empty usage log."""
    loaded = Catalog.model_validate({"bars": BARS_JSON, "events": EVENTS_JSON})
    data_store.set_catalog(loaded)
    clear_events()
    clear_vocabulary()
    yield loaded
    data_store.set_catalog(None)
    data_store.set_client(None)


@pytest.fixture
def bars(catalog) -> list[Bar]:
    return catalog.bars
