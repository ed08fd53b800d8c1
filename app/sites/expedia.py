import re

from app.schemas.hotel import Source
from app.sites.base import SiteStrategy

SEARCH_URL = "https://www.expedia.com/Hotel-Search"


class ExpediaSite(SiteStrategy):
    source = Source.expedia
    link_pattern = re.compile(r"Hotel_Review|Hotel-(?!Search)", re.IGNORECASE)
    policy_selectors = (
        "[data-stid='content-hotel-policies']",
        "#Policies",
        "[data-stid='section-policies']",
    )
    search_selectors = ("[data-stid='lodging-card-responsive']", "[data-stid='open-hotel-information']")

    def build_search_url(self, lat: float, lng: float, radius_km: float) -> str:
        return f"{SEARCH_URL}?lat={lat}&lng={lng}&radius={round(radius_km)}"
