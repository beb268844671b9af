"""Text normalization helpers for values scraped from the retail site.

Store locator replies come back shouting ("SHOE ZONE GLOUCESTER") with
phone numbers padded by spaces, and postcodes arrive from users in every
shape imaginable.  These helpers produce the canonical forms used in
records and cache keys.
"""

import re

_WHITESPACE_RE = re.compile(r"\s+")


def title_case_words(text: str) -> str:
    """Lower-case *text* and capitalise the first letter of each space-separated word.

    Unlike ``str.title`` this leaves letters after apostrophes and digits
    alone, so "ST. JOHN'S" becomes "St. John's" and "UNIT 4B" becomes
    "Unit 4b".
    """
    return " ".join(word[:1].upper() + word[1:] for word in text.lower().split(" "))


def strip_whitespace(text: str) -> str:
    """Remove every whitespace character from *text* ("01452 300 000" -> "01452300000")."""
    return _WHITESPACE_RE.sub("", text)


def normalize_postcode(postcode: str | None) -> str:
    """Upper-case a UK postcode and drop its spaces; ``None`` becomes ``""``."""
    if not postcode:
        return ""
    return strip_whitespace(postcode).upper()


def round_coordinate(value: float | None) -> float:
    """Round a latitude/longitude to two decimal places, treating ``None`` as 0."""
    return round(float(value or 0), 2) + 0.0  # -0.0 becomes 0.0
