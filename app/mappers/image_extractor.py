from urllib.parse import urljoin

from bs4 import BeautifulSoup

_META_IMAGE_KEYS = frozenset({
    "og:image",
    "og:image:url",
    "og:image:secure_url",
    "twitter:image",
    "twitter:image:src",
})

# Checked in order; lazy loaders park the real URL in data-* attributes.
_IMG_SOURCE_ATTRS = ("src", "data-src", "data-lazy-src", "data-original", "data-srcset", "srcset")


def resolve_url(page_url: str, raw: str) -> str:
    """Absolute URL for raw against page_url; raw unchanged if that fails."""
    try:
        return urljoin(page_url, raw)
    except ValueError:
        return raw


def _img_source(img) -> str | None:
    for attr in _IMG_SOURCE_ATTRS:
        value = (img.get(attr) or "").strip()
        if not value:
            continue
        if attr.endswith("srcset"):
            # "a.jpg 1x, b.jpg 2x" -> "a.jpg"
            value = value.split(",")[0].strip().split(" ")[0]
        if value and not value.startswith("data:"):
            return value
    return None


def extract_image_urls(html: str | BeautifulSoup, page_url: str) -> list[str]:
    """Photo URLs for a detail page.

    Open Graph / Twitter card images first (all of them, de-duplicated, in
    document order); otherwise the first usable <img>.
    """
    soup = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, "html.parser")

    seen: set[str] = set()
    urls: list[str] = []
    for meta in soup.find_all("meta"):
        key = (meta.get("property") or meta.get("name") or "").strip().lower()
        content = (meta.get("content") or "").strip()
        if key not in _META_IMAGE_KEYS or not content:
            continue
        url = resolve_url(page_url, content)
        if url not in seen:
            seen.add(url)
            urls.append(url)
    if urls:
        return urls

    for img in soup.find_all("img"):
        source = _img_source(img)
        if source:
            return [resolve_url(page_url, source)]
    return []
