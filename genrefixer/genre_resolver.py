"""
Genre Resolver
==============
Turns a track's artist names into a tag string and one canonical genre.

1. Expand the names into spelling variants.
2. Collect tags for every variant into one TagSet (order preserved).
3. Walk the tags in order; the first tag that maps to a canonical genre
   wins. Tags matching a backup pattern (decades, bare "folk") only record
   a fallback genre, used when nothing else resolves.

Results are memoized per ordered name tuple for the whole run.
"""
import logging
from dataclasses import dataclass, replace
from typing import FrozenSet, Iterable, List, Optional, Pattern, Sequence, Tuple

from .artist_cache import SessionCache
from .artist_utils import permute_artist_names
from .genre.index import CanonicalGenreIndex
from .genre.vocabulary import (
    BACKUP_PATTERNS,
    PHONETIC_EXCEPTIONS,
    REGGAE_GENRE,
    REGGAE_PATTERN,
)
from .tag_set import TagSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of one artist lookup.

    Attributes:
        genre: Canonical genre, or '' when nothing resolved
        tags: Space-joined tag string for the grouping field
        cached: True when served from the session cache
    """
    genre: str = ''
    tags: str = ''
    cached: bool = False


class GenreResolver:
    """Resolves artist names to a canonical genre and a tag string"""

    def __init__(
        self,
        index: CanonicalGenreIndex,
        tag_source,
        cache: Optional[SessionCache] = None,
        backup_patterns: Sequence[Tuple[str, Pattern]] = BACKUP_PATTERNS,
        exceptions: Iterable[str] = PHONETIC_EXCEPTIONS,
    ):
        """
        Initialize resolver

        Args:
            index: Canonical genre index, shared read-only
            tag_source: Object with find_tags(name) -> list of raw tags
            cache: Session cache owned by the run (a private one if omitted)
            backup_patterns: Ordered (genre, pattern) fallbacks
            exceptions: Tags that never resolve (compared lower-cased)
        """
        self.index = index
        self.tag_source = tag_source
        self.cache = cache if cache is not None else SessionCache()
        self.backup_patterns = list(backup_patterns)
        self.exceptions: FrozenSet[str] = frozenset(e.lower() for e in exceptions)

    def lookup(self, names: Iterable[Optional[str]]) -> ResolutionResult:
        """
        Resolve the genre and tag string for a track's artist names.

        Args:
            names: Ordered names, typically (artist, album artist)

        Returns:
            ResolutionResult; cached=True when no query was needed
        """
        names = tuple(names)
        hit = self.cache.get(names)
        if hit is not None:
            logger.info("  found in local database, skipping query...")
            return replace(hit, cached=True)

        tags = self.collect_tags(names)
        genre = self.find_genre(tags)
        result = ResolutionResult(genre=genre, tags=tags.as_string(), cached=False)
        self.cache.put(names, result)
        return result

    def collect_tags(self, names: Iterable[Optional[str]]) -> TagSet:
        """Query every name variant in order and fold the tags together."""
        tags = TagSet()
        for variant in permute_artist_names(names):
            tags.add(self.tag_source.find_tags(variant))
        return tags

    def find_genre(self, tags: Iterable[str]) -> str:
        """
        Pick the genre for an ordered tag sequence.

        The first tag resolving to a canonical genre wins. Without one, the
        first backup genre recorded along the way is used.
        """
        backups: List[str] = []
        for tag in tags:
            genre = self.tag_to_genre(tag, backups)
            if genre:
                logger.info(f"  Tag: {tag} (matches genre: {genre})")
                return genre
            logger.info(f"  Tag: {tag}")

        if backups:
            logger.debug(f"  No canonical match, using backup {backups[0]}")
            return backups[0]
        return ''

    def tag_to_genre(self, tag: str, backups: Optional[List[str]] = None) -> str:
        """
        Map one tag to a canonical genre.

        Args:
            tag: Raw tag
            backups: List that receives the backup genre when the tag
                matches a backup pattern

        Returns:
            Canonical genre, or '' (always '' for backup-pattern tags)
        """
        for genre, pattern in self.backup_patterns:
            if pattern.search(tag):
                if backups is not None:
                    backups.append(genre)
                    logger.info(f"  (Setting backup to: {backups} for {tag})")
                return ''

        genre = self.index.resolve(tag)
        if tag.strip().lower() in self.exceptions:
            return ''
        if REGGAE_PATTERN.search(tag):
            return REGGAE_GENRE
        return genre
