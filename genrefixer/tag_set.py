"""
Ordered, case-insensitive collection of raw tags gathered for one artist.
"""
from typing import Iterable, Iterator, List, Optional, Set


class TagSet:
    """
    Accumulates tags from several queries.

    Deduplication is case-insensitive on the trimmed tag; the first-seen
    casing and insertion order are kept. Empty tags are dropped.
    """

    def __init__(self, tags: Optional[Iterable[str]] = None):
        self._seen: Set[str] = set()
        self._tags: List[str] = []
        if tags:
            self.add(tags)

    def add(self, tags: Optional[Iterable[str]]) -> None:
        """Add tags, skipping blanks and case-insensitive duplicates."""
        if not tags:
            return
        for raw in tags:
            if raw is None:
                continue
            tag = raw.strip()
            if not tag:
                continue
            key = tag.lower()
            if key in self._seen:
                continue
            self._seen.add(key)
            self._tags.append(tag)

    def as_string(self) -> str:
        """Space-joined tags, as written to the grouping field."""
        return " ".join(self._tags)

    def as_list(self) -> List[str]:
        return list(self._tags)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tags))

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and tag.strip().lower() in self._seen

    def __str__(self) -> str:
        return self.as_string()

    def __repr__(self) -> str:
        return f"TagSet({self._tags!r})"
