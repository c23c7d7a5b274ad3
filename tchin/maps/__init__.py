"""
Map page rendering.

Responsibilities:
- Resolve a coordinate for each bar (upstream lat/lng, then a city table).
- Build one marker per mappable bar with a name/city popup.
- Render a Mapbox GL JS page bound to a single container.
"""
