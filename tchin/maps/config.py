from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class MapConfig:
    access_token: str = os.getenv("MAPBOX_TOKEN", "")
    style: str = "mapbox://styles/mapbox/streets-v12"
    gl_js_version: str = "v3.6.0"
    # (longitude, latitude), Paris
    center: tuple[float, float] = (2.3522, 48.8566)
    zoom: float = 11.0
    container_id: str = "map"


DEFAULT_MAP_CONFIG = MapConfig()
