"""
Genre Policy Tables
===================
Fixed policy data used while turning folksonomy tags into canonical genres.

These lists were collected from real Last.fm responses. They are data, not
rules: keep them verbatim and extend them deliberately.

- BACKUP_PATTERNS: low-confidence genres used only when no tag resolves
- PHONETIC_EXCEPTIONS: tags whose phonetic key clashes with a real genre
- REGGAE_PATTERN: substring rule that always wins for reggae-like tags
- NOISE_TAG_PATTERN / MAX_TAG_LENGTH: ingestion filter for raw tags
"""

import re
from typing import FrozenSet, List, Pattern, Tuple


# =============================================================================
# BACKUP PATTERNS - ordered (genre, pattern); first match is recorded
# =============================================================================

BACKUP_PATTERNS: List[Tuple[str, Pattern]] = [
    # Decades 10s-60s ("60s", "1960s") and bare 19xx years
    ("Oldies", re.compile(r"^(?:(?:19)?[1-6]\d[sS]|19\d\d$)")),
    ("Folk", re.compile(r"^folk$", re.IGNORECASE)),
]


# =============================================================================
# PHONETIC EXCEPTIONS - known soundex clashes, never resolved
# =============================================================================

PHONETIC_EXCEPTIONS: FrozenSet[str] = frozenset({
    "rap",       # R&B
    "danish",    # Dance
    "rumba",     # Rnb
    "brooklyn",
    "naija",     # New Age
    "ballad",
})


# =============================================================================
# SPECIAL CASES
# =============================================================================

REGGAE_GENRE = "Reggae"
REGGAE_PATTERN: Pattern = re.compile(r"reggae", re.IGNORECASE)


# =============================================================================
# INGESTION FILTER
# =============================================================================

NOISE_TAG_PATTERN: Pattern = re.compile(r"^all$|2000|spotify", re.IGNORECASE)
MAX_TAG_LENGTH = 40


def is_noise_tag(tag: str) -> bool:
    """Check whether a raw provider tag should be dropped at ingestion."""
    return bool(NOISE_TAG_PATTERN.search(tag)) or len(tag) >= MAX_TAG_LENGTH
