"""Text normalization helpers shared by the membership and targeting contexts."""

import hashlib
import re
import unicodedata
from typing import Optional

_NON_WORD_RUN = re.compile(r"[\W_]+")


def slugify(name: str) -> str:
    """
    Convert a display name to a URL-safe slug.

    NFKC-normalizes and lower-cases the name, collapses every run of
    characters that are not Unicode letters or digits into a single hyphen and
    trims hyphens from both ends. Non-Latin scripts are kept as-is.

    A name with no letters or digits at all (e.g. "!!!") gets a short hash of
    the original text, so the slug is never empty and stays stable across calls.

    Args:
        name: Display name (e.g., "Hackathon: Hacktopus")

    Returns:
        Non-empty slug string

    Examples:
        >>> slugify("Badminton Club")
        'badminton-club'
        >>> slugify("Hackathon: Hacktopus")
        'hackathon-hacktopus'
        >>> slugify("한국어 동아리")
        '한국어-동아리'
    """
    normalized = unicodedata.normalize("NFKC", name).lower()
    slug = _NON_WORD_RUN.sub("-", normalized).strip("-")
    if slug:
        return slug
    return hashlib.sha1(name.encode("utf-8")).hexdigest()[:8]


def contains_ignore_case(haystack: str, needle: Optional[str]) -> bool:
    """
    Case-insensitive substring test.

    A missing or empty needle always matches.
    """
    if not needle:
        return True
    return needle.lower() in haystack.lower()
