import re

# Common city names -> coordinates, so frequent lookups skip the network.
CITY_COORDS: dict[str, tuple[float, float]] = {
    "atlanta": (33.749, -84.388),
    "atlanta ga": (33.749, -84.388),
    "atlanta georgia": (33.749, -84.388),
    "sacramento": (38.575764, -121.478851),
    "sacramento ca": (38.575764, -121.478851),
    "san francisco": (37.7749, -122.4194),
    "san francisco ca": (37.7749, -122.4194),
    "los angeles": (34.0522, -118.2437),
    "los angeles ca": (34.0522, -118.2437),
    "new york": (40.7128, -74.006),
    "new york ny": (40.7128, -74.006),
    "new york city": (40.7128, -74.006),
    "nyc": (40.7128, -74.006),
    "chicago": (41.8781, -87.6298),
    "chicago il": (41.8781, -87.6298),
    "miami": (25.7617, -80.1918),
    "miami fl": (25.7617, -80.1918),
    "boston": (42.3601, -71.0589),
    "boston ma": (42.3601, -71.0589),
}


def normalize_city(query: str) -> str:
    """'  Sacramento,  CA ' -> 'sacramento ca'."""
    cleaned = re.sub(r"[.,]", " ", query.lower())
    return " ".join(cleaned.split())


def lookup_city(query: str) -> tuple[float, float] | None:
    if not query:
        return None
    return CITY_COORDS.get(normalize_city(query))
