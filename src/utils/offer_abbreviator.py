"""Short codes for promotional offer titles.

Product pages show offers as image badges whose ``title`` attribute holds
the full name ("Buy One Get One Free").  Clients want something that fits
on a label, so each title is reduced to its initials ("BOGOF").  Prices and
quantities are kept, and the word "for" becomes ``-4-`` so that
"2 For £10" reads as "2-4-10".
"""

import re

_TOKEN_SPLIT_RE = re.compile(r"[^A-Za-z0-9]+")
_LETTERS_RE = re.compile(r"[A-Za-z]")
_WHITESPACE_RE = re.compile(r"\s")


def abbreviate(raw_title: str) -> str:
    """Return the abbreviation for an offer title.

    Single-word titles are returned upper-cased rather than reduced to one
    letter ("Save" stays "SAVE", since "S" would mean nothing).  Longer
    titles keep the first character of every token plus any digits that
    follow it.

    >>> abbreviate("Buy One Get One Free")
    'BOGOF'
    >>> abbreviate("2 For £10")
    '2-4-10'
    """
    title = raw_title.strip()
    if not _WHITESPACE_RE.search(title):
        return title.upper()

    parts: list[str] = []
    for token in _TOKEN_SPLIT_RE.split(title):
        if not token:
            continue
        if token.lower() == "for":
            parts.append("-4-")
        else:
            parts.append(token[0].upper() + _LETTERS_RE.sub("", token[1:]))
    return "".join(parts)
