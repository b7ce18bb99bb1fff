"""Heading identifier utilities.

Identifiers double as render anchors and navigation targets, so they must be URL-safe.
"""

from __future__ import annotations

import re
import secrets
import string
from collections.abc import Collection

from unidecode import unidecode

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")
_TOKEN_ALPHABET = string.digits + string.ascii_lowercase


def slugify(text: str) -> str:
    """Normalize text to a lowercase, hyphen-separated ASCII slug.

    Non-ASCII text is transliterated first: accented Latin folds to its base letter
    and CJK becomes pinyin-style syllables. Only text with no letters or digits at
    all (punctuation, emoji) yields an empty slug.

    Examples:
        >>> slugify("Hello World")
        'hello-world'
        >>> slugify("  Café -- Überblick!  ")
        'cafe-uberblick'
        >>> slugify("定义")
        'ding-yi'
    """

    if not text:
        return ""
    folded = unidecode(text)
    return _NON_SLUG_RE.sub("-", folded.lower()).strip("-")


def random_token(length: int = 6) -> str:
    """Return a random base-36 token."""

    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(length))


def allocate_identifier(
    text: str,
    used: Collection[str],
    *,
    prefix: str = "heading",
    token_length: int = 6,
    dedupe: bool = False,
) -> str:
    """Allocate an identifier for a heading.

    Args:
        text: Plain heading text.
        used: Identifiers already allocated in the current pass.
        prefix: Prefix of the random fallback used when the slug is empty.
        token_length: Length of the random part of the fallback.
        dedupe: Append ``-1``, ``-2``... when the slug is already in ``used``. Off by
            default: identical heading texts share one identifier.

    Returns:
        The slug of ``text``, or ``"{prefix}-{token}"`` not present in ``used``.
    """

    slug = slugify(text)
    if slug:
        if not dedupe or slug not in used:
            return slug
        n = 1
        while f"{slug}-{n}" in used:
            n += 1
        return f"{slug}-{n}"

    while True:
        candidate = f"{prefix}-{random_token(token_length)}"
        if candidate not in used:
            return candidate
