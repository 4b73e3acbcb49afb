"""
iTunes Store Genre Fetcher
==========================
Looks up the store's primary genre for an artist. Used as a single extra
tag next to the Last.FM folksonomy tags.
"""
import requests
import logging
from typing import Any, Dict, Optional

from .errors import NameMismatch, UpstreamUnavailable
from .rate_limiter import RateLimiter
from .string_utils import NAME_MATCH_THRESHOLD, name_distance

logger = logging.getLogger(__name__)


class ITunesStoreClient:
    """Fetches an artist's primary genre from the iTunes Search API"""

    SEARCH_URL = "https://itunes.apple.com/search"

    def __init__(
        self,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        calls_per_second: float = 0.5,
    ):
        """Initialize client"""
        self.timeout = timeout
        self.session = session or requests.Session()
        # Search API allows roughly 20 calls per minute
        self.rate_limiter = RateLimiter(calls_per_second=calls_per_second)

    def _search(self, artist: str) -> Dict[str, Any]:
        params = {
            'attribute': 'artistTerm',
            'term': artist,
            'media': 'music',
            'entity': 'musicArtist',
            'limit': 1,
        }
        self.rate_limiter.wait()
        try:
            response = self.session.get(self.SEARCH_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise UpstreamUnavailable("iTunes Store", str(e)) from e
        except ValueError as e:
            raise UpstreamUnavailable("iTunes Store", f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamUnavailable("iTunes Store", "unexpected response shape")
        return data

    @staticmethod
    def parse_genre(data: Dict[str, Any], artist: str) -> str:
        """
        Extract the primary genre from a search response.

        Raises:
            NameMismatch: the first result is a different artist
        """
        if not data.get('resultCount') or not data.get('results'):
            return ''

        result = data['results'][0]
        returned = result.get('artistName') or ''
        distance = name_distance(returned, artist)
        if distance >= NAME_MATCH_THRESHOLD:
            raise NameMismatch(artist, returned, distance)

        genre = result.get('primaryGenreName') or ''
        if genre:
            logger.info(f'   Found: "{returned}" with genre: {genre}')
        return genre

    def get_genre(self, artist: str) -> str:
        """
        Get the store genre for an artist.

        Args:
            artist: Artist name

        Returns:
            Genre name, or '' when nothing trustworthy was found

        Raises:
            UpstreamUnavailable: network or protocol failure
        """
        logger.info(f'  iTunes Store Query for "{artist}"')
        data = self._search(artist)
        try:
            return self.parse_genre(data, artist)
        except NameMismatch as e:
            logger.debug(f"Ignoring iTunes Store answer: {e}")
            return ''
