"""
Last.FM API Client - Fetches crowd-sourced artist tags
"""
import requests
from typing import List, Dict, Any, Optional
import logging

from .errors import NameMismatch, UpstreamUnavailable
from .genre.vocabulary import is_noise_tag
from .rate_limiter import RateLimiter
from .string_utils import NAME_MATCH_THRESHOLD, decode_entities, name_distance

logger = logging.getLogger(__name__)

# Last.fm error code for an unknown artist; a normal "no tags" answer
ERROR_INVALID_PARAMETERS = 6


class LastFMClient:
    """Client for the Last.FM artist.getTopTags method"""

    BASE_URL = "http://ws.audioscrobbler.com/2.0/"

    def __init__(
        self,
        api_key: str,
        max_tags: int = 20,
        min_scrobs: int = 5,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        calls_per_second: float = 5.0,
    ):
        """
        Initialize Last.FM client

        Args:
            api_key: Last.FM API key
            max_tags: Keep only tags within the first max_tags positions
            min_scrobs: Keep only tags whose count is greater than this
            timeout: Per-request timeout in seconds
            session: Optional requests session (shared or mocked)
            calls_per_second: Rate limit for this client
        """
        self.api_key = api_key
        self.max_tags = max_tags
        self.min_scrobs = min_scrobs
        self.timeout = timeout
        self.session = session or requests.Session()

        # Last.FM ToS allows 5 requests per second
        self.rate_limiter = RateLimiter(calls_per_second=calls_per_second)

        logger.debug(f"Initialized Last.FM client (max_tags={max_tags}, min_scrobs={min_scrobs})")

    def _make_request(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Make a request to Last.FM API

        Args:
            method: API method name
            params: Additional parameters

        Returns:
            Decoded JSON response

        Raises:
            UpstreamUnavailable: network, HTTP or decode failure
        """
        request_params = {
            'method': method,
            'api_key': self.api_key,
            'format': 'json',
            **params
        }

        self.rate_limiter.wait()
        try:
            response = self.session.get(self.BASE_URL, params=request_params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise UpstreamUnavailable("Last.FM", str(e)) from e
        except ValueError as e:
            raise UpstreamUnavailable("Last.FM", f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamUnavailable("Last.FM", "unexpected response shape")
        return data

    def parse_top_tags(self, data: Dict[str, Any], artist: str) -> List[str]:
        """
        Extract usable tag names from an artist.getTopTags response.

        Tags are assumed to arrive sorted by count. A tag is kept when it
        sits within the first max_tags positions, its count exceeds
        min_scrobs, and it is not noise.

        Args:
            data: Decoded response
            artist: Artist name that was queried

        Returns:
            Tag names in response order

        Raises:
            NameMismatch: the response is for a different artist
        """
        toptags = data.get('toptags') or {}
        returned = decode_entities((toptags.get('@attr') or {}).get('artist', ''))
        distance = name_distance(returned, artist)
        if distance >= NAME_MATCH_THRESHOLD:
            raise NameMismatch(artist, returned, distance)

        entries = toptags.get('tag') or []
        if not isinstance(entries, list):
            entries = [entries]

        tags = []
        for position, entry in enumerate(entries, 1):
            if position > self.max_tags:
                break
            name = (entry.get('name') or '').strip()
            try:
                count = int(entry.get('count') or 0)
            except (TypeError, ValueError):
                count = 0
            if not name or count <= self.min_scrobs:
                continue
            if is_noise_tag(name):
                continue
            tags.append(name)

        logger.info(f'   Found: "{returned}" with {len(tags)} tags ...')
        if tags:
            logger.info(f"    tags: {', '.join(tags)}")
        return tags

    def get_top_tags(self, artist: str, autocorrect: bool = False) -> List[str]:
        """
        Get filtered top tags for an artist.

        Args:
            artist: Artist name
            autocorrect: Let Last.FM substitute a corrected artist name

        Returns:
            Tag names; empty when the artist is unknown or mismatched

        Raises:
            UpstreamUnavailable: network or protocol failure
        """
        logger.info(f'  LastFM Query for "{artist}" autocorrect={int(autocorrect)}')
        data = self._make_request('artist.gettoptags', {
            'artist': artist,
            'autocorrect': int(autocorrect),
        })

        if 'error' in data:
            if data.get('error') == ERROR_INVALID_PARAMETERS:
                logger.debug(f"Last.FM has no artist {artist!r}: {data.get('message')}")
                return []
            raise UpstreamUnavailable("Last.FM", f"error {data.get('error')}: {data.get('message')}")

        try:
            return self.parse_top_tags(data, artist)
        except NameMismatch as e:
            logger.debug(f"Ignoring Last.FM answer: {e}")
            return []
