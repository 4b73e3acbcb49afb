"""
Shared string helpers for artist names and provider responses.
"""
import html
import re
import unicodedata
from typing import Optional

from rapidfuzz.distance import Levenshtein

# Providers whose matched artist is further than this from the query are
# treated as having answered for someone else
NAME_MATCH_THRESHOLD = 0.5

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """NFC-normalize and trim; None becomes an empty string. Case is kept."""
    if text is None:
        return ""
    return unicodedata.normalize('NFC', text).strip()


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace to a single space and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def decode_entities(text: Optional[str]) -> str:
    """Decode HTML entities left in provider payloads ("Simon &amp; Garfunkel")."""
    if not text:
        return ""
    return html.unescape(text)


def name_distance(returned: str, queried: str) -> float:
    """
    Normalized Levenshtein distance between two artist names (0.0 = equal).

    The comparison is exact (case sensitive) on NFC-normalized text.
    """
    return Levenshtein.normalized_distance(
        normalize_text(returned),
        normalize_text(queried),
    )

