"""Slug normalization for article URLs."""

import re

from slugify import slugify

# Characters deleted outright rather than turned into separators.
EXCLUDED_CHARACTERS = re.compile(r"[*+~.()'\"!:@]")

# Whatever punctuation survives the excluded set is deleted too; only
# whitespace and hyphens separate words.
STRICT_STRIP = re.compile(r"[^\w\s&-]|_")

REPLACEMENTS = [["&", "and"]]

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def normalize_slug(text: str | None) -> str:
    """Map free-form title or slug text to a lowercase, hyphenated URL token.

    Excluded punctuation and any other non-word character are removed, ``&``
    reads as "and", remaining characters are transliterated to ASCII, runs of
    whitespace and hyphens collapse to a single hyphen and leading or trailing
    hyphens are dropped. Never raises; empty input yields "".
    """
    if not text:
        return ""
    stripped = STRICT_STRIP.sub("", EXCLUDED_CHARACTERS.sub("", text))
    return slugify(stripped, lowercase=True, separator="-", replacements=REPLACEMENTS)


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_PATTERN.match(slug))
