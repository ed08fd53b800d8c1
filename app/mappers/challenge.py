import re

# Substrings served by common WAF / bot-management interstitials.
_CHALLENGE_MARKERS = (
    "awswaf",
    "aws-waf-token",
    "challenge-platform",
    "cf_chl_opt",
    "cf-chl-",
    "px-captcha",
    "captcha-delivery.com",
    "_incapsula_resource",
    "distil_r_captcha",
    "verify you're not a robot",
    "verify you are not a robot",
    "verify you are human",
    "are you a robot",
    "robot check",
    "security challenge",
    "unusual traffic from your computer",
)

_CHALLENGE_TITLE_RE = re.compile(
    r"<title[^>]*>[^<]*(?:captcha|challenge|verif|access denied|attention required|just a moment)[^<]*</title>",
    re.IGNORECASE,
)

_SCRIPT_PAYLOAD_RE = re.compile(
    r"function\s*\(|window\.[\w$]+\s*=|document\.(?:cookie|location|write)|\bvar\s+[\w$]+\s*=|=>\s*\{"
)


def looks_like_challenge(text: str | None) -> bool:
    """True when the text carries an anti-bot interstitial signature."""
    if not text:
        return False
    lowered = text.lower()
    if any(marker in lowered for marker in _CHALLENGE_MARKERS):
        return True
    return bool(_CHALLENGE_TITLE_RE.search(text))


def looks_like_script_payload(text: str | None) -> bool:
    """True when extracted 'text' is really inline JavaScript."""
    if not text:
        return False
    return bool(_SCRIPT_PAYLOAD_RE.search(text))
