import re

MIN_PLAUSIBLE_AGE = 16
MAX_PLAUSIBLE_AGE = 30

_NUM = r"(?<!\d)(\d{1,2})(?!\d)"

# Order matters: the first pattern yielding a plausible age wins.
_AGE_PATTERNS = [
    # "minimum check-in age is 18", "minimum age: 21"
    re.compile(rf"minimum\s*(?:check[- ]?in\s*)?age[^0-9]{{0,12}}{_NUM}"),
    re.compile(rf"check[- ]?in\s*age[^0-9]{{0,12}}{_NUM}"),
    # "minimum age to check in is 18"
    re.compile(rf"minimum\s*age\s*(?:to|for)\s*check[- ]?in[^0-9]{{0,12}}{_NUM}"),
    re.compile(rf"check[- ]?in\s*age\s*requirement[^0-9]{{0,12}}{_NUM}"),
    re.compile(rf"minimum\s*guest\s*age[^0-9]{{0,12}}{_NUM}"),
    re.compile(rf"age\s*restriction[^0-9]{{0,12}}{_NUM}"),
    # "guests must be at least 18 years old", "guests are 21 or older"
    re.compile(
        r"guests?\s*(?:must\s*(?:be|are)|have\s*to\s*be|are\s*required\s*to\s*be|are)"
        rf"\s*(?:at\s*least\s*)?{_NUM}(?:\s*years)?\s*(?:or\s*older)?"
    ),
    # "must be 18 years of age", "must be 21+"
    re.compile(
        rf"(?:must\s*(?:be|are)|are)\s*(?:at\s*least\s*)?{_NUM}"
        r"\s*(?:years?\s*(?:of\s*age|old|or\s*older)?|\+\s*(?:years)?|\+)"
    ),
    re.compile(rf"guests?\s*under\s*{_NUM}\s*are\s*not\s*allowed"),
    # bare mentions: "18+", "21 years or older", "21 years of age", "21 years old"
    re.compile(rf"{_NUM}\s*\+\s*(?:years)?"),
    re.compile(rf"{_NUM}\s*years?\s*or\s*older"),
    re.compile(rf"{_NUM}\s*years\s*of\s*age"),
    re.compile(rf"{_NUM}\s*years?\s*old"),
]


def parse_min_age(text: str | None) -> int | None:
    """Extract a minimum check-in age from free text.

    Numbers outside [16, 30] are treated as false positives (street numbers,
    years) and the next pattern is tried.
    """
    if not text:
        return None
    lowered = text.lower()
    for pattern in _AGE_PATTERNS:
        match = pattern.search(lowered)
        if not match:
            continue
        age = int(match.group(1))
        if MIN_PLAUSIBLE_AGE <= age <= MAX_PLAUSIBLE_AGE:
            return age
    return None


def format_min_age(age: int) -> str:
    return f"Minimum age to check-in: {age}"
