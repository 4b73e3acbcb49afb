"""
Artist Result Cache - In-memory resolution results for one run
"""
import logging
from typing import Any, Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)


class SessionCache:
    """
    Memoizes results per ordered tuple of artist names.

    Two lookups with the same names in the same order share an entry.
    Nothing expires and nothing is written to disk; the cache lives as long
    as the run that owns it.
    """

    def __init__(self):
        self._entries: Dict[Tuple[str, ...], Any] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key_for(names: Iterable[Optional[str]]) -> Tuple[str, ...]:
        """Content key for a name tuple (None is stored as '')."""
        return tuple(name or '' for name in names)

    def get(self, names: Iterable[Optional[str]]) -> Optional[Any]:
        """
        Get a cached result

        Args:
            names: Ordered artist names

        Returns:
            Cached result, or None if not cached
        """
        key = self.key_for(names)
        result = self._entries.get(key)

        if result is None:
            self.misses += 1
            logger.debug(f"Cache MISS: {key}")
            return None

        self.hits += 1
        logger.debug(f"Cache HIT: {key}")
        return result

    def put(self, names: Iterable[Optional[str]], result: Any) -> None:
        """Store a result for an ordered name tuple."""
        self._entries[self.key_for(names)] = result

    def __contains__(self, names: Iterable[Optional[str]]) -> bool:
        return self.key_for(names) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about the cache"""
        return {
            "entries": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
        }
