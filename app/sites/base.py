"""Per-site scraping strategy.

A new listing source is added by subclassing ``SiteStrategy``: how to build
its search URL, which anchors on the results page are listings, and which
selectors signal that a rendered page has finished loading.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from urllib.parse import parse_qs, urljoin, urlparse, urlunparse

from bs4 import BeautifulSoup
from bs4.element import Tag

from app.schemas.hotel import ListingSummary, Source

logger = logging.getLogger(__name__)


def canonical_url(base_url: str, href: str) -> str:
    """Absolute URL with query string and fragment removed."""
    try:
        parsed = urlparse(urljoin(base_url, href))
    except ValueError:
        return href.split("?")[0].split("#")[0]
    return urlunparse((parsed.scheme, parsed.netloc, parsed.path, "", "", ""))


def _to_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class SiteStrategy(ABC):
    source: Source
    link_pattern: re.Pattern
    name_attrs: tuple[str, ...] = ("title", "aria-label")
    lat_attrs: tuple[str, ...] = ("data-lat", "data-latitude")
    lng_attrs: tuple[str, ...] = ("data-lng", "data-longitude")
    policy_selectors: tuple[str, ...] = ()
    search_selectors: tuple[str, ...] = ()

    @abstractmethod
    def build_search_url(self, lat: float, lng: float, radius_km: float) -> str:
        ...

    def parse_listings(self, html: str, base_url: str) -> list[ListingSummary]:
        """Listing summaries from a search results page, de-duplicated by canonical URL."""
        soup = BeautifulSoup(html, "html.parser")
        listings: list[ListingSummary] = []
        seen: set[str] = set()

        for anchor in soup.find_all("a", href=True):
            href = anchor["href"]
            if not self.link_pattern.search(href):
                continue
            name = self._listing_name(anchor)
            if not name:
                continue
            url = canonical_url(base_url, href)
            if url in seen:
                continue
            seen.add(url)

            lat, lng = self._coords_from_ancestors(anchor)
            if lat is None or lng is None:
                lat, lng = self._coords_from_query(urljoin(base_url, href))
            listings.append(
                ListingSummary(
                    id=url,
                    name=name,
                    lat=lat,
                    lng=lng,
                    detail_url=url,
                    address=self._address(anchor),
                )
            )

        logger.debug("Parsed %d %s listings from %s", len(listings), self.source, base_url)
        return listings

    def _listing_name(self, anchor: Tag) -> str:
        text = " ".join(anchor.get_text(" ").split())
        if text:
            return text
        for attr in self.name_attrs:
            value = (anchor.get(attr) or "").strip()
            if value:
                return value
        return ""

    def _coords_from_ancestors(self, anchor: Tag) -> tuple[float | None, float | None]:
        for element in (anchor, *anchor.parents):
            if not isinstance(element, Tag):
                continue
            lat = next((_to_float(element.get(a)) for a in self.lat_attrs if element.get(a)), None)
            lng = next((_to_float(element.get(a)) for a in self.lng_attrs if element.get(a)), None)
            if lat is not None and lng is not None:
                return lat, lng
            coords = self._coords_attr(element)
            if coords is not None:
                return coords
        return None, None

    def _coords_attr(self, element: Tag) -> tuple[float, float] | None:
        return None

    def _coords_from_query(self, url: str) -> tuple[float | None, float | None]:
        try:
            query = parse_qs(urlparse(url).query)
        except ValueError:
            return None, None
        lat = _to_float(next(iter(query.get("latitude", [])), None))
        lng = _to_float(next(iter(query.get("longitude", [])), None))
        if lat is None or lng is None:
            return None, None
        return lat, lng

    def _address(self, anchor: Tag) -> str | None:
        return None
