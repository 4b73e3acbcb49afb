"""
Genre Reconciliation
====================
Canonical genre index and the policy tables used to map folksonomy tags to
one canonical genre.
"""

from .index import (
    CanonicalGenreIndex,
    GenreDefinition,
    load_genre_table,
    normalize_tag,
    parse_genre_table,
    phonetic_key,
)
from .vocabulary import (
    BACKUP_PATTERNS,
    PHONETIC_EXCEPTIONS,
    REGGAE_GENRE,
    REGGAE_PATTERN,
    is_noise_tag,
)

__all__ = [
    # Index
    'CanonicalGenreIndex',
    'GenreDefinition',
    'load_genre_table',
    'normalize_tag',
    'parse_genre_table',
    'phonetic_key',
    # Policy
    'BACKUP_PATTERNS',
    'PHONETIC_EXCEPTIONS',
    'REGGAE_GENRE',
    'REGGAE_PATTERN',
    'is_noise_tag',
]
