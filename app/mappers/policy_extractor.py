"""Policy-text discovery over a detail page.

Discovery is an ordered list of named stages. Each stage takes the parsed
page and returns a ``PolicyExtraction`` or ``None``; the first non-``None``
result wins. ``finalize`` then settles the age from the snippet, falling
back to the whole body text.
"""

import json
import logging
import re
from collections.abc import Callable

from bs4 import BeautifulSoup
from bs4.element import Comment, Tag

from app.mappers.age_parser import format_min_age, parse_min_age
from app.mappers.challenge import looks_like_challenge, looks_like_script_payload
from app.schemas.policy import PolicyExtraction

logger = logging.getLogger(__name__)

MIN_SNIPPET_LENGTH = 10
BODY_FALLBACK_MIN_LENGTH = 50
BODY_FALLBACK_LENGTH = 200
RAW_SCRIPT_MIN_LENGTH = 500

_CANDIDATE_TAGS = ("section", "div", "p", "li", "span")
_CANDIDATE_RE = re.compile(r"polic(?:y|ies)|check[- ]?in|house rules", re.IGNORECASE)
_SCRIPT_KEYWORDS_RE = re.compile(r"policy|house rules|fine print|check-?in", re.IGNORECASE)
_NON_CONTENT_PARENTS = frozenset({"script", "style", "noscript", "template", "head", "title"})

PolicyStage = Callable[[BeautifulSoup], PolicyExtraction | None]


def normalize_text(text: str | None) -> str:
    """Collapse runs of whitespace."""
    return " ".join((text or "").split())


def body_text(soup: BeautifulSoup) -> str:
    root = soup.body or soup
    return normalize_text(root.get_text(" "))


def _script_blobs(soup: BeautifulSoup) -> list[str]:
    blobs: list[str] = []
    for script in soup.find_all("script"):
        raw = (script.string or "").strip()
        if not raw:
            continue

        script_type = (script.get("type") or "").lower()
        if "ld+json" in script_type:
            try:
                blobs.append(json.dumps(json.loads(raw), ensure_ascii=False))
            except (json.JSONDecodeError, TypeError):
                logger.debug("Skipping malformed JSON-LD block")
            continue

        # Inline state blobs (__INITIAL_STATE__ style) are often bare JSON
        try:
            blobs.append(json.dumps(json.loads(raw), ensure_ascii=False))
            continue
        except (json.JSONDecodeError, TypeError):
            pass

        if len(raw) > RAW_SCRIPT_MIN_LENGTH and _SCRIPT_KEYWORDS_RE.search(raw):
            blobs.append(raw)
    return blobs


def scan_embedded_json(soup: BeautifulSoup) -> PolicyExtraction | None:
    for blob in _script_blobs(soup):
        age = parse_min_age(blob)
        if age is not None:
            return PolicyExtraction(text=format_min_age(age), min_age=age, stage="embedded_json")
    return None


def _enclosing_candidate(node) -> Tag | None:
    for parent in node.parents:
        if parent.name in _NON_CONTENT_PARENTS:
            return None
        if parent.name in _CANDIDATE_TAGS and len(normalize_text(parent.get_text(" "))) > MIN_SNIPPET_LENGTH:
            return parent
    return None


def scan_dom(soup: BeautifulSoup) -> PolicyExtraction | None:
    """Innermost section/div/p/li/span mentioning policy or check-in.

    Tag order is the preference order; within a tag, document order.
    """
    candidates: list[Tag] = []
    seen: set[int] = set()
    for node in soup.find_all(string=_CANDIDATE_RE):
        if isinstance(node, Comment):
            continue
        element = _enclosing_candidate(node)
        if element is not None and id(element) not in seen:
            seen.add(id(element))
            candidates.append(element)

    for tag_name in _CANDIDATE_TAGS:
        for element in candidates:
            if element.name == tag_name:
                return PolicyExtraction(
                    text=normalize_text(element.get_text(" ")), stage="dom_heuristic"
                )

    text = body_text(soup)
    if len(text) > BODY_FALLBACK_MIN_LENGTH:
        return PolicyExtraction(text=text[:BODY_FALLBACK_LENGTH], stage="body_fallback")
    return None


POLICY_STAGES: tuple[tuple[str, PolicyStage], ...] = (
    ("embedded_json", scan_embedded_json),
    ("dom_heuristic", scan_dom),
)


def run_stages(
    soup: BeautifulSoup,
    stages: tuple[tuple[str, PolicyStage], ...] = POLICY_STAGES,
) -> PolicyExtraction | None:
    for name, stage in stages:
        result = stage(soup)
        if result is not None:
            logger.debug("Policy stage %s matched", name)
            return result
    return None


def needs_render(result: PolicyExtraction | None) -> bool:
    """Whether the extracted snippet is unusable and a rendered page is worth trying."""
    if result is None:
        return True
    if result.min_age is not None:
        return False
    if not result.text:
        return True
    return looks_like_challenge(result.text) or looks_like_script_payload(result.text)


def finalize(result: PolicyExtraction | None, soup: BeautifulSoup | None) -> PolicyExtraction:
    if result is not None and result.min_age is not None:
        return result

    snippet = result.text if result else None
    stage = result.stage if result else None
    age = parse_min_age(snippet)
    if age is None and soup is not None:
        age = parse_min_age(body_text(soup))
        if age is not None:
            stage = "body_text"

    if age is not None:
        return PolicyExtraction(text=format_min_age(age), min_age=age, stage=stage)
    return PolicyExtraction(text=snippet or None, stage=stage)


def extract_policy(html: str | None) -> PolicyExtraction:
    """Run every stage against one page, without any re-fetching."""
    if not html:
        return PolicyExtraction()
    soup = BeautifulSoup(html, "html.parser")
    return finalize(run_stages(soup), soup)
