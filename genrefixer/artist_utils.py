"""
Artist name permutation helpers.

Tag providers are picky about collaboration formatting ("A feat. B" vs
"A & B" vs "A and B"), and so are the tags in a local library. Querying a
handful of plausible spellings recovers tags that a single exact query
would miss.
"""
import re
from typing import Callable, Iterable, List, Optional, Tuple

from .string_utils import collapse_whitespace

# Applied in order; each one runs over every name collected so far and
# appends its output, so later rules also see earlier rewrites.
_NAME_TRANSFORMS: List[Tuple[str, Callable[[str], str]]] = [
    ("ampersand_to_and", lambda n: n.replace(" & ", " and ")),
    ("featuring_to_ampersand", lambda n: re.sub(
        r"[;/,]| ft | feat\.? | featuring ", " & ", n, flags=re.IGNORECASE)),
    ("and_with_to_ampersand", lambda n: re.sub(
        r" and | with ", " & ", n, flags=re.IGNORECASE)),
    ("versus_to_ampersand", lambda n: re.sub(
        r" vs\.? ", " & ", n, flags=re.IGNORECASE)),
    ("drop_article", lambda n: re.sub(
        r"^the | the ", " ", n, flags=re.IGNORECASE)),
]

# Compilation marker, never a real artist to look up
_AMBIGUOUS = re.compile(r"various", re.IGNORECASE)


def permute_artist_names(names: Iterable[Optional[str]]) -> List[str]:
    """
    Expand artist names into alternate spellings for tag lookups.

    Examples:
        ["Artist feat. Other"] -> ["Artist feat. Other", "Artist & Other"]
        ["Simon & Garfunkel"] -> ["Simon & Garfunkel", "Simon and Garfunkel"]
        ["Various Artists"] -> []

    Args:
        names: Raw names (track artist, album artist, ...); None and blank
            entries are ignored

    Returns:
        Deduplicated variants in generation order, the original names first
    """
    variants = [n for n in names if n]
    if not variants:
        return []

    for _, transform in _NAME_TRANSFORMS:
        variants.extend([transform(n) for n in variants])

    variants = [collapse_whitespace(n) for n in variants]
    variants = list(dict.fromkeys(variants))
    return [n for n in variants if not _AMBIGUOUS.search(n) and len(n) > 1]
