from app.sites.base import SiteStrategy, canonical_url
from app.sites.booking import BookingSite
from app.sites.expedia import ExpediaSite

SITES: dict[str, type[SiteStrategy]] = {
    "booking": BookingSite,
    "expedia": ExpediaSite,
}


def get_site(name: str) -> SiteStrategy:
    """Site strategy instance by source name. Raises ValueError if unknown."""
    try:
        return SITES[name]()
    except KeyError:
        raise ValueError(
            f"No site registered for '{name}'. Available: {', '.join(sorted(SITES))}"
        ) from None


__all__ = ["SITES", "BookingSite", "ExpediaSite", "SiteStrategy", "canonical_url", "get_site"]
