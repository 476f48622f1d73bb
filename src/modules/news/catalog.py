from dataclasses import dataclass
from types import MappingProxyType

DEFAULT_CATEGORY = "general"

CATEGORY_QUERIES = MappingProxyType({
    "general": "latest news",
    "india": "India news",
    "world": "international world news",
    "business": "business finance economy",
    "technology": "technology AI innovation",
    "sports": "sports cricket football",
    "environment": "climate environment pollution",
    "education": "education schools universities",
    "health": "health medicine healthcare",
    "science": "science research space",
    "economy": "inflation economy GDP",
    "legal": "court law judiciary",
    "culture": "culture arts entertainment",
    "global-politics": "international politics diplomacy",
    "global-finance": "global markets finance",
})


@dataclass(frozen=True)
class City:
    key: str
    name: str
    query: str


CITIES = MappingProxyType({c.key: c for c in [
    City("delhi", "Delhi", "Delhi NCR news"),
    City("mumbai", "Mumbai", "Mumbai news"),
    City("bangalore", "Bangalore", "Bangalore Bengaluru news"),
    City("chennai", "Chennai", "Chennai news"),
    City("kolkata", "Kolkata", "Kolkata news"),
    City("hyderabad", "Hyderabad", "Hyderabad news"),
    City("pune", "Pune", "Pune news"),
    City("ahmedabad", "Ahmedabad", "Ahmedabad news"),
]})


def canonical_key(value: str | None, default: str) -> str:
    if value is None:
        return default
    key = value.strip().lower()
    if not key:
        raise ValueError("Query key must not be blank")
    return key


def resolve_category_query(category: str) -> str:
    return CATEGORY_QUERIES.get(category, category)


def resolve_city(location: str) -> City | None:
    # "new delhi" matches delhi, "pun" matches pune
    for key, city in CITIES.items():
        if key in location or location in key:
            return city
    return None


def resolve_location_query(location: str) -> str:
    city = resolve_city(location)
    if city:
        return city.query
    return f"{location} India local news"
