import json

from bs4 import BeautifulSoup

from app.mappers.challenge import looks_like_challenge, looks_like_script_payload
from app.mappers.policy_extractor import (
    extract_policy,
    finalize,
    needs_render,
    normalize_text,
    run_stages,
    scan_dom,
    scan_embedded_json,
)
from app.schemas.policy import PolicyExtraction


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _page(body: str, head: str = "") -> str:
    return f"<html><head>{head}</head><body>{body}</body></html>"


# --- embedded JSON ---


def test_jsonld_age_found():
    ld = {"@type": "Hotel", "name": "X", "checkinPolicy": "Guests must be 21 years old to check in"}
    head = f'<script type="application/ld+json">{json.dumps(ld)}</script>'
    result = scan_embedded_json(_soup(_page("", head)))
    assert result.min_age == 21
    assert result.text == "Minimum age to check-in: 21"
    assert result.stage == "embedded_json"


def test_bare_json_state_blob():
    state = {"property": {"policies": {"minimumCheckInAge": "Minimum check-in age is 18"}}}
    head = f"<script>{json.dumps(state)}</script>"
    assert scan_embedded_json(_soup(_page("", head))).min_age == 18


def test_long_raw_script_with_keywords():
    filler = "x" * 600
    script = f"window.__DATA__ = {{}}; /* {filler} */ var policy = 'minimum check-in age: 25';"
    html = _page("", f"<script>{script}</script>")
    assert scan_embedded_json(_soup(html)).min_age == 25


def test_short_raw_script_ignored():
    html = _page("", "<script>var policy = 'minimum check-in age: 25';</script>")
    assert scan_embedded_json(_soup(html)) is None


def test_malformed_jsonld_skipped():
    html = _page("", '<script type="application/ld+json">{not json</script>')
    assert scan_embedded_json(_soup(html)) is None


# --- DOM heuristic ---


def test_dom_picks_policy_section():
    html = _page(
        "<div><h2>Amenities</h2><p>Free wifi and parking for guests.</p></div>"
        "<section><h3>Policies</h3><p>Minimum check-in age is 21.</p></section>"
    )
    result = scan_dom(_soup(html))
    assert result.stage == "dom_heuristic"
    assert "Minimum check-in age is 21" in result.text


def test_dom_prefers_innermost_candidate():
    html = _page(
        "<div id='wrapper'><p>Lots of unrelated marketing copy here.</p>"
        "<div class='rules'>Check-in from 3pm, guests must be 18+</div></div>"
    )
    result = scan_dom(_soup(html))
    assert result.text == "Check-in from 3pm, guests must be 18+"


def test_dom_ignores_short_candidates():
    html = _page("<span>Policy</span>" + "<p>" + "Welcome to our lovely hotel by the river. " * 3 + "</p>")
    result = scan_dom(_soup(html))
    assert result.stage == "body_fallback"
    assert len(result.text) <= 200


def test_dom_skips_script_text():
    html = _page("<script>var checkIn = 'check-in policy';</script><p>short</p>")
    assert scan_dom(_soup(html)) is None


def test_dom_body_fallback_truncated():
    body = "<p>" + "word " * 100 + "</p>"
    result = scan_dom(_soup(_page(body)))
    assert result.stage == "body_fallback"
    assert len(result.text) == 200


# --- stages / finalize ---


def test_run_stages_short_circuits_on_json():
    ld = {"description": "Guests must be 25 to check in"}
    head = f'<script type="application/ld+json">{json.dumps(ld)}</script>'
    body = "<section>Check-in policy: guests must be at least 18 years old.</section>"
    result = run_stages(_soup(_page(body, head)))
    assert result.min_age == 25
    assert result.stage == "embedded_json"


def test_finalize_falls_back_to_full_body():
    html = _page(
        "<section>Check-in policy: bring photo ID and a card.</section>"
        "<p>Note: guests must be 21 years old.</p>"
    )
    soup = _soup(html)
    result = finalize(run_stages(soup), soup)
    assert result.min_age == 21
    assert result.text == "Minimum age to check-in: 21"
    assert result.stage == "body_text"


def test_finalize_keeps_snippet_without_age():
    html = _page("<section>Check-in policy: bring photo ID and a card.</section>")
    result = extract_policy(html)
    assert result.min_age is None
    assert result.text == "Check-in policy: bring photo ID and a card."


def test_extract_policy_empty_html():
    assert extract_policy(None) == PolicyExtraction()
    assert extract_policy("") == PolicyExtraction()


def test_needs_render():
    assert needs_render(None)
    assert needs_render(PolicyExtraction(text=""))
    assert needs_render(PolicyExtraction(text="Please verify you are human to continue"))
    assert needs_render(PolicyExtraction(text="function(e){return e} window.foo = 1"))
    assert not needs_render(PolicyExtraction(text="Check-in policy: photo ID"))
    assert not needs_render(PolicyExtraction(text="x", min_age=18))


def test_normalize_text():
    assert normalize_text("  a \n\t b  ") == "a b"
    assert normalize_text(None) == ""


# --- challenge markers ---


def test_challenge_markers():
    assert looks_like_challenge('<script src="/awswaf/challenge.js"></script>')
    assert looks_like_challenge("<title>Just a moment...</title>")
    assert looks_like_challenge("Are you a robot? Please confirm.")
    assert not looks_like_challenge("<title>Riverlake Inn - Sacramento</title>")
    assert not looks_like_challenge(None)


def test_script_payload():
    assert looks_like_script_payload("var a = 1;")
    assert not looks_like_script_payload("Check-in from 3pm")
