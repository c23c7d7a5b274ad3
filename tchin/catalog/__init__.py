"""
Bar and event catalog.

Responsibilities:
- Fetch the bar and event collections from the upstream API.
- Hold the loaded collections in memory for the lifetime of the process.
- Filter bars by free text, ambiance tags, drink tags and accessibility.
- Derive the tag vocabularies offered as filter pills.
"""
