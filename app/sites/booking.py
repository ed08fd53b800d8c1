import re

from bs4.element import Tag

from app.schemas.hotel import Source
from app.sites.base import SiteStrategy

SEARCH_URL = "https://www.booking.com/searchresults.html"


class BookingSite(SiteStrategy):
    source = Source.booking
    link_pattern = re.compile(r"/hotel/", re.IGNORECASE)
    lat_attrs = ("data-lat", "data-latitude", "data-coords-lat")
    lng_attrs = ("data-lng", "data-longitude", "data-coords-lng")
    policy_selectors = (
        "#hotelPoliciesInc",
        "[data-testid='property-section--policies']",
        "[data-testid='HouseRules-wrapper']",
    )
    search_selectors = ("[data-testid='property-card']", "[data-testid='title-link']")

    def build_search_url(self, lat: float, lng: float, radius_km: float) -> str:
        return f"{SEARCH_URL}?ss=&latitude={lat}&longitude={lng}&radius={round(radius_km)}"

    def _coords_attr(self, element: Tag) -> tuple[float, float] | None:
        # data-coords="lng,lat"
        raw = element.get("data-coords")
        if not raw:
            return None
        parts = raw.split(",")
        if len(parts) != 2:
            return None
        try:
            lng, lat = float(parts[0]), float(parts[1])
        except ValueError:
            return None
        return lat, lng

    def _address(self, anchor: Tag) -> str | None:
        card = anchor.find_parent(attrs={"data-testid": "property-card"})
        if card is None:
            return None
        address = card.find(attrs={"data-testid": "address"})
        if address is None:
            return None
        return " ".join(address.get_text(" ").split()) or None
