"""
Genre Fixer run
===============
Walks the library selection in order, resolves each track's artists and
writes the tag string to grouping (and optionally the genre).
"""
import logging
from dataclasses import dataclass

from .genre_resolver import GenreResolver
from .library import LibraryDriver, Track, TrackAccessError

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Per-run track counters"""
    tagged: int = 0
    skipped: int = 0
    identical: int = 0

    def count(self, outcome: str) -> None:
        setattr(self, outcome, getattr(self, outcome) + 1)

    def log(self) -> None:
        logger.info("Done!")
        logger.info(f"Tags Found: {self.tagged}")
        logger.info(f"Skipped: {self.skipped}")
        logger.info(f"Identical: {self.identical}")


class GenreFixer:
    """Drives one tagging run over a library selection"""

    def __init__(
        self,
        resolver: GenreResolver,
        library: LibraryDriver,
        set_genre: bool = True,
    ):
        self.resolver = resolver
        self.library = library
        self.set_genre = set_genre
        self.summary = RunSummary()

    @property
    def tagged(self) -> int:
        return self.summary.tagged

    @property
    def skipped(self) -> int:
        return self.summary.skipped

    @property
    def identical(self) -> int:
        return self.summary.identical

    def process_track(self, track: Track) -> str:
        """
        Resolve and tag one track.

        Returns:
            'tagged', 'identical' (same artists as an earlier track) or 'skipped'
        """
        artist = track.artist
        album_artist = track.album_artist
        logger.info(f'======== Looking for "{artist}" or "{album_artist}" ========')

        result = self.resolver.lookup((artist, album_artist))
        if not result.tags:
            logger.info("  No tags found")
            return 'skipped'

        logger.info(f'  Tagging as "{result.tags}"')
        track.set_grouping(result.tags)
        if self.set_genre and result.genre:
            logger.info(f'  Setting genre to "{result.genre}"')
            track.set_genre(result.genre)

        return 'identical' if result.cached else 'tagged'

    def start(self) -> RunSummary:
        """Process the whole selection and log the summary"""
        try:
            for track in self.library.selection():
                try:
                    outcome = self.process_track(track)
                except TrackAccessError as e:
                    logger.warning(f"  Skipping {track.label or 'track'}: {e}")
                    outcome = 'skipped'
                self.summary.count(outcome)
        finally:
            self.summary.log()
        return self.summary
