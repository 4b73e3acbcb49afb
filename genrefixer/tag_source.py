"""
Tag Source
==========
Single entry point for upstream tag data. Combines Last.FM folksonomy tags
with the iTunes Store genre and turns provider failures into empty results,
so one flaky request never aborts a run.
"""
import logging
from typing import Dict, List, Optional

from .errors import UpstreamUnavailable
from .itunes_client import ITunesStoreClient
from .lastfm_client import LastFMClient

logger = logging.getLogger(__name__)

# A first pass with this many tags or fewer is retried with autocorrect on
AUTOCORRECT_RETRY_THRESHOLD = 5


class TagSource:
    """Fetches raw tags for one artist name from the configured providers"""

    def __init__(
        self,
        lastfm: LastFMClient,
        itunes: Optional[ITunesStoreClient] = None,
        retry_threshold: int = AUTOCORRECT_RETRY_THRESHOLD,
    ):
        """
        Initialize tag source

        Args:
            lastfm: Last.FM client
            itunes: Optional iTunes Store client for the fallback genre
            retry_threshold: Retry with autocorrect when the first pass
                returns this many tags or fewer
        """
        self.lastfm = lastfm
        self.itunes = itunes
        self.retry_threshold = retry_threshold
        self._found: Dict[str, List[str]] = {}
        self.queries = 0
        self.failures = 0

    def fetch_tags(self, artist: str, autocorrect: bool = False) -> List[str]:
        """Last.FM tags for an artist; [] on any provider failure."""
        self.queries += 1
        try:
            return self.lastfm.get_top_tags(artist, autocorrect=autocorrect)
        except UpstreamUnavailable as e:
            self.failures += 1
            logger.warning(f"LastFM API Error: {e}")
            return []

    def fetch_fallback_genre(self, artist: str) -> str:
        """iTunes Store genre for an artist; '' when disabled or failing."""
        if self.itunes is None:
            return ''
        self.queries += 1
        try:
            return self.itunes.get_genre(artist)
        except UpstreamUnavailable as e:
            self.failures += 1
            logger.warning(f"iTunes Store API Error: {e}")
            return ''

    def find_tags(self, artist: str) -> List[str]:
        """
        All raw tags for one name variant, memoized for the session.

        Order: Last.FM tags, the store genre, then (when the first pass was
        thin) Last.FM tags with autocorrect. Duplicates are left for the
        caller's TagSet to fold.
        """
        if artist in self._found:
            logger.debug(f'  "{artist}" already queried this session')
            return list(self._found[artist])

        first_pass = self.fetch_tags(artist)
        tags = list(first_pass)
        tags.append(self.fetch_fallback_genre(artist))
        if len(first_pass) <= self.retry_threshold:
            tags.extend(self.fetch_tags(artist, autocorrect=True))

        self._found[artist] = tags
        return list(tags)
