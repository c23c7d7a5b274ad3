from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class CatalogConfig:
    base_url: str = os.getenv("TCHIN_API_BASE_URL", "http://localhost:3000")
    timeout: float = float(os.getenv("TCHIN_API_TIMEOUT", "10.0"))
    bars_path: str = "/api/bars"
    events_path: str = "/api/events"
    bookings_path: str = "/api/bookings"

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"


DEFAULT_CATALOG_CONFIG = CatalogConfig()
