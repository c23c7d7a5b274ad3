from __future__ import annotations

import logging
from collections.abc import Sequence
from types import TracebackType

from jinja2 import Environment, select_autoescape
from pydantic import BaseModel

from ..catalog.models import Bar
from .config import DEFAULT_MAP_CONFIG, MapConfig

logger = logging.getLogger(__name__)

# (longitude, latitude) per city name, used only when a bar has no coordinates
CITY_COORDINATES: dict[str, tuple[float, float]] = {
    "Paris": (2.3522, 48.8566),
    "Lyon": (4.8357, 45.7640),
}

_env = Environment(autoescape=select_autoescape(default_for_string=True))

_PAGE = _env.from_string("""<!DOCTYPE html>
<html lang="fr">
<head>
  <meta charset="utf-8">
  <title>T’CHIN · Carte</title>
  <link href="https://api.mapbox.com/mapbox-gl-js/{{ version }}/mapbox-gl.css" rel="stylesheet">
  <script src="https://api.mapbox.com/mapbox-gl-js/{{ version }}/mapbox-gl.js"></script>
  <style>#{{ container }} { height: 18rem; width: 100%; border-radius: 1rem; }</style>
</head>
<body>
  <div id="{{ container }}"></div>
  <script>
    mapboxgl.accessToken = {{ token|tojson }};
    const map = new mapboxgl.Map({
      container: {{ container|tojson }},
      style: {{ style|tojson }},
      center: {{ center|tojson }},
      zoom: {{ zoom|tojson }}
    });
    const markers = {{ markers|tojson }};
    markers.forEach((m) => {
      const body = document.createElement("div");
      const name = document.createElement("strong");
      name.textContent = m.name;
      body.appendChild(name);
      body.appendChild(document.createElement("br"));
      body.appendChild(document.createTextNode(m.city));
      new mapboxgl.Marker()
        .setLngLat([m.lng, m.lat])
        .setPopup(new mapboxgl.Popup().setDOMContent(body))
        .addTo(map);
    });
    window.addEventListener("pagehide", () => map.remove());
  </script>
</body>
</html>
""")


class Marker(BaseModel):
    bar_id: str
    name: str
    city: str
    lng: float
    lat: float


def resolve_coordinates(bar: Bar) -> tuple[float, float] | None:
    """Upstream coordinates win; then the city table; otherwise unmappable."""
    if bar.longitude is not None and bar.latitude is not None:
        return bar.longitude, bar.latitude
    return CITY_COORDINATES.get(bar.city)


def build_markers(bars: Sequence[Bar]) -> list[Marker]:
    markers: list[Marker] = []
    for bar in bars:
        coords = resolve_coordinates(bar)
        if coords is None:
            logger.info("Bar %s (%s) has no coordinates, left off the map", bar.id, bar.city or "no city")
            continue
        lng, lat = coords
        markers.append(Marker(bar_id=bar.id, name=bar.name, city=bar.city, lng=lng, lat=lat))
    return markers


_live_views: set[int] = set()


def live_map_count() -> int:
    """Number of map views currently mounted."""
    return len(_live_views)


class MapView:
    """
    A map bound to one container.

    A view is mounted once, rendered, then unmounted; it is never updated in
    place. Use it as a context manager so unmount runs on every exit path.
    """

    def __init__(self, bars: Sequence[Bar], config: MapConfig = DEFAULT_MAP_CONFIG) -> None:
        self._bars = list(bars)
        self._config = config
        self.markers: list[Marker] = []
        self.mounted = False

    def mount(self) -> MapView:
        if self.mounted:
            raise RuntimeError("map view is already mounted")
        self.markers = build_markers(self._bars)
        self.mounted = True
        _live_views.add(id(self))
        return self

    def unmount(self) -> None:
        if not self.mounted:
            return
        self.markers = []
        self.mounted = False
        _live_views.discard(id(self))

    def render(self) -> str:
        if not self.mounted:
            raise RuntimeError("map view must be mounted before rendering")
        return _PAGE.render(
            version=self._config.gl_js_version,
            container=self._config.container_id,
            token=self._config.access_token,
            style=self._config.style,
            center=list(self._config.center),
            zoom=self._config.zoom,
            markers=[m.model_dump() for m in self.markers],
        )

    def __enter__(self) -> MapView:
        return self.mount()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.unmount()


def render_map_page(bars: Sequence[Bar], config: MapConfig = DEFAULT_MAP_CONFIG) -> str:
    """Build a fresh map for ``bars`` and return the page HTML."""
    with MapView(bars, config) as view:
        return view.render()
